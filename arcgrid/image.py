"""Grid image type shared by all image operations."""

from __future__ import annotations

from dataclasses import dataclass, field

MAXSIDE = 100
MAXAREA = 40 * 40
MAXPIXELS = 40 * 40 * 5


@dataclass(frozen=True)
class Point:
    """An integer (x, y) pair used for positions and sizes."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: int) -> Point:
        return Point(self.x * k, self.y * k)


@dataclass
class Image:
    """A positioned rectangular grid of colour values, stored row-major."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    mask: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.mask and self.w * self.h > 0:
            self.mask = [0] * (self.w * self.h)
        if len(self.mask) != max(self.w * self.h, 0):
            raise ValueError("mask length does not match image size")

    @property
    def p(self) -> Point:
        return Point(self.x, self.y)

    @p.setter
    def p(self, value: Point) -> None:
        self.x, self.y = value.x, value.y

    @property
    def sz(self) -> Point:
        return Point(self.w, self.h)

    def _index(self, key: tuple[int, int]) -> int:
        row, col = key
        if not (0 <= row < self.h and 0 <= col < self.w):
            raise IndexError(f"cell {key} outside {self.w}x{self.h} image")
        return row * self.w + col

    def __getitem__(self, key: tuple[int, int]) -> int:
        return self.mask[self._index(key)]

    def __setitem__(self, key: tuple[int, int], value: int) -> None:
        self.mask[self._index(key)] = value

    def safe(self, row: int, col: int) -> int:
        """Return the cell value, or 0 outside the image."""
        if 0 <= row < self.h and 0 <= col < self.w:
            return self.mask[row * self.w + col]
        return 0

    def copy(self) -> Image:
        return Image(self.x, self.y, self.w, self.h, list(self.mask))

    def area(self) -> int:
        return self.w * self.h


def bad_image() -> Image:
    """The empty image used to signal an operation that has no result."""
    return Image()
"""Compact lookup structures for search graphs."""

from __future__ import annotations


class TinyHashMap:
    """Map from hash keys to node indices that keeps the first value stored."""

    def __init__(self) -> None:
        self._data: dict[int, int] = {}

    def insert(self, key: int, value: int) -> tuple[int, bool]:
        """Store value under key if absent; return the stored value and whether it was new."""
        existing = self._data.get(key)
        if existing is not None:
            return existing, False
        self._data[key] = value
        return value, True

    def __len__(self) -> int:
        return len(self._data)


class TinyChildren:
    """Children of a graph node, indexed by the function that produced them."""

    NONE = -2

    def __init__(self) -> None:
        self._children: dict[int, int] = {}

    @staticmethod
    def _check(fi: int) -> None:
        if fi < 0:
            raise ValueError("function index must be non-negative")

    def add(self, fi: int, to: int) -> None:
        """Record that function fi leads to node to (-1 when it failed)."""
        self._check(fi)
        self._children[fi] = to

    def get(self, fi: int) -> int:
        """The child reached by fi, or NONE if fi has not been applied."""
        self._check(fi)
        return self._children.get(fi, self.NONE)

    def fi(self, fi: int) -> int:
        """fi itself if it has been applied, otherwise NONE."""
        return fi if fi in self._children else self.NONE

    def items(self) -> list[tuple[int, int]]:
        """All (function, child) pairs in function order."""
        return sorted(self._children.items())
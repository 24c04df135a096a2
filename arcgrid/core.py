"""Basic measurements and constructors for images."""

from __future__ import annotations

from arcgrid.image import Image, Point


def col_mask(img: Image) -> int:
    """Bit mask of the colours present in the image."""
    mask = 0
    for c in img.mask:
        mask |= 1 << c
    return mask


def count_cols(img: Image, include0: bool = False) -> int:
    mask = col_mask(img)
    if not include0:
        mask &= ~1
    return bin(mask).count("1")


def count(img: Image) -> int:
    """Number of non-zero cells."""
    return sum(1 for c in img.mask if c > 0)


def full(sz: Point, filling: int = 1, p: Point = Point(0, 0)) -> Image:
    return Image(p.x, p.y, sz.x, sz.y, [filling] * max(sz.x * sz.y, 0))


def empty(sz: Point, p: Point = Point(0, 0)) -> Image:
    return full(sz, 0, p)


def is_rectangle(img: Image) -> bool:
    return count(img) == img.w * img.h


def count_components(img: Image) -> int:
    """Number of 8-connected components of non-zero cells."""
    seen = [c == 0 for c in img.mask]
    components = 0
    for start in range(len(seen)):
        if seen[start]:
            continue
        components += 1
        seen[start] = True
        stack = [divmod(start, img.w)]
        while stack:
            r, c = stack.pop()
            for nr in (r - 1, r, r + 1):
                for nc in (c - 1, c, c + 1):
                    if 0 <= nr < img.h and 0 <= nc < img.w:
                        k = nr * img.w + nc
                        if not seen[k]:
                            seen[k] = True
                            stack.append((nr, nc))
    return components


def majority_col(img: Image, include0: bool = False) -> int:
    """Most frequent colour; ties go to the lowest colour."""
    cnt = [0] * 10
    for c in img.mask:
        if 0 <= c < 10:
            cnt[c] += 1
    if not include0:
        cnt[0] = 0
    best = 0
    for c in range(1, 10):
        if cnt[c] > cnt[best]:
            best = c
    return best


def sub_image(img: Image, p: Point, sz: Point) -> Image:
    if not (p.x >= 0 and p.y >= 0 and p.x + sz.x <= img.w
            and p.y + sz.y <= img.h and sz.x >= 0 and sz.y >= 0):
        raise ValueError("sub-image lies outside the image")
    mask = [img[i + p.y, j + p.x] for i in range(sz.y) for j in range(sz.x)]
    return Image(img.x + p.x, img.y + p.y, sz.x, sz.y, mask)


def split_cols(img: Image, include0: bool = False) -> list[tuple[Image, int]]:
    """One binary image per colour present, paired with that colour."""
    mask = col_mask(img)
    result = []
    for c in range(0 if include0 else 1, 10):
        if mask >> c & 1:
            s = img.copy()
            s.mask = [1 if v == c else 0 for v in img.mask]
            result.append((s, c))
    return result
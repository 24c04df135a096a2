"""Splitting images into pieces and choosing among them."""

from __future__ import annotations

from typing import Callable, Iterable

from arcgrid import core
from arcgrid.image import Image, Point, bad_image
from arcgrid.transforms import compose, compress, col, filter_col, interior, to_origin

_NEIGHBOURS = tuple((dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1))


def pick_max_by(v: list[Image], key: Callable[[Image], int]) -> Image:
    """The first image with the largest key, or the bad image if v is empty."""
    if not v:
        return bad_image()
    best, best_score = v[0], key(v[0])
    for img in v[1:]:
        score = key(img)
        if score > best_score:
            best, best_score = img, score
    return best


def _holes(img: Image) -> int:
    comp = compress(img)
    return comp.area() - core.count(comp)


_CRITERIA: dict[int, Callable[[Image], int]] = {
    0: lambda img: core.count(img),
    1: lambda img: -core.count(img),
    2: lambda img: img.w * img.h,
    3: lambda img: -img.w * img.h,
    4: lambda img: core.count_cols(img),
    5: lambda img: -img.y,
    6: lambda img: img.y,
    7: lambda img: core.count_components(img),
    8: _holes,
    9: lambda img: -_holes(img),
    10: lambda img: core.count(interior(img)),
    11: lambda img: -core.count(interior(img)),
    12: lambda img: -img.x,
    13: lambda img: img.x,
}


def max_criterion(img: Image, id: int) -> int:
    """Score of img under one of the 14 selection criteria."""
    try:
        criterion = _CRITERIA[id]
    except KeyError:
        raise ValueError("criterion id must be in 0..13") from None
    return criterion(img)


def pick_max(v: list[Image], id: int) -> Image:
    if id not in _CRITERIA:
        raise ValueError("criterion id must be in 0..13")
    return pick_max_by(v, lambda img: max_criterion(img, id))


def cut(img: Image, mask: Image | None = None) -> list[Image]:
    """8-connected pieces of img lying outside the non-zero cells of mask.

    Without a mask, the separator colour is chosen by heuristic_cut.
    """
    if mask is None:
        mask = heuristic_cut(img)
    d = img.p - mask.p
    done = [False] * (img.w * img.h)

    def open_cell(r: int, c: int) -> bool:
        return (0 <= r < img.h and 0 <= c < img.w
                and not mask.safe(r + d.y, c + d.x) and not done[r * img.w + c])

    pieces = []
    for i in range(img.h):
        for j in range(img.w):
            if not open_cell(i, j):
                continue
            toadd = core.empty(img.sz, img.p)
            done[i * img.w + j] = True
            stack = [(i, j)]
            while stack:
                r, c = stack.pop()
                toadd[r, c] = img[r, c] + 1
                for dr, dc in _NEIGHBOURS:
                    nr, nc = r + dr, c + dc
                    if open_cell(nr, nc):
                        done[nr * img.w + nc] = True
                        stack.append((nr, nc))
            piece = compress(toadd)
            piece.mask = [max(0, v - 1) for v in piece.mask]
            pieces.append(piece)
    return pieces


def split_cols(img: Image, include0: bool = False) -> list[Image]:
    """One image per colour present, keeping only that colour."""
    mask = core.col_mask(img)
    result = []
    for c in range(0 if include0 else 1, 10):
        if mask >> c & 1:
            s = img.copy()
            s.mask = [c if v == c else 0 for v in img.mask]
            result.append(s)
    return result


def compose_all(imgs: Iterable[Image], id: int = 0) -> Image:
    """Fold compose over the images, or the bad image if there are none."""
    imgs = list(imgs)
    if not imgs:
        return bad_image()
    ret = imgs[0]
    for img in imgs[1:]:
        ret = compose(ret, img, id)
    return ret


def _regular_line(flags: list[int]) -> list[int]:
    n = len(flags)
    for w in range(1, n):
        period = w + 1
        if n % period == w:
            s = w
        elif n % period == 1:
            s = 0
        else:
            continue
        if all(f == (i % period == s) for i, f in enumerate(flags)):
            return flags
    return [0] * n


def get_regular(img: Image) -> Image:
    """Mark single-colour rows and columns that form a regular grid."""
    row = [int(all(img[i, j] == img[i, 0] for j in range(img.w))) for i in range(img.h)]
    column = [int(all(img[i, j] == img[0, j] for i in range(img.h))) for j in range(img.w)]
    row = _regular_line(row)
    column = _regular_line(column)
    ret = img.copy()
    ret.mask = [1 if row[i] or column[j] else 0
                for i in range(img.h) for j in range(img.w)]
    return ret


def cut_pick_max(a: Image, id: int, mask: Image | None = None) -> Image:
    return pick_max(cut(a, mask), id)


def regular_cut_pick_max(a: Image, id: int) -> Image:
    return pick_max(cut(a, get_regular(a)), id)


def split_pick_max(a: Image, id: int, include0: bool = False) -> Image:
    return pick_max(split_cols(a, include0), id)


def cut_compose(a: Image, b: Image, id: int) -> Image:
    return compose_all((to_origin(img) for img in cut(a, b)), id)


def regular_cut_compose(a: Image, id: int) -> Image:
    return compose_all((to_origin(img) for img in cut(a, get_regular(a))), id)


def split_compose(a: Image, id: int, include0: bool = False) -> Image:
    return compose_all((to_origin(compress(img)) for img in split_cols(a, include0)), id)


def cut_index(a: Image, ind: int, mask: Image | None = None) -> Image:
    pieces = cut(a, mask)
    if not 0 <= ind < len(pieces):
        return bad_image()
    return pieces[ind]


def _pick_maxes(v: list[Image], key: Callable[[Image], int], invert: bool) -> list[Image]:
    if not v:
        return []
    scores = [key(img) for img in v]
    top = max(scores)
    return [img for img, s in zip(v, scores) if (s == top) != invert]


def pick_maxes(v: list[Image], id: int) -> list[Image]:
    """All images attaining the largest criterion score."""
    if id not in _CRITERIA:
        raise ValueError("criterion id must be in 0..13")
    return _pick_maxes(v, lambda img: max_criterion(img, id), False)


def pick_not_maxes(v: list[Image], id: int) -> list[Image]:
    """All images not attaining the largest criterion score."""
    if id not in _CRITERIA:
        raise ValueError("criterion id must be in 0..13")
    return _pick_maxes(v, lambda img: max_criterion(img, id), True)


def cut_pick_maxes(a: Image, id: int, mask: Image | None = None) -> Image:
    return compose_all(pick_maxes(cut(a, mask), id), 0)


def split_pick_maxes(a: Image, id: int) -> Image:
    return compose_all(pick_maxes(split_cols(a), id), 0)


def _flood(img: Image, colour: int, start: tuple[int, int], done: list[bool]) -> None:
    stack = [start]
    while stack:
        r, c = stack.pop()
        if not (0 <= r < img.h and 0 <= c < img.w):
            continue
        k = r * img.w + c
        if img[r, c] != colour or done[k]:
            continue
        done[k] = True
        stack.extend((r + dr, c + dc) for dr, dc in _NEIGHBOURS)


def _region(img: Image, colour: int, start: tuple[int, int],
            done: list[bool]) -> tuple[int, bool]:
    """Size of a non-separator region and whether it avoids the edge-connected separator."""
    cnt, contained = 0, True
    stack = [start]
    while stack:
        r, c = stack.pop()
        if not (0 <= r < img.h and 0 <= c < img.w):
            continue
        k = r * img.w + c
        if img[r, c] == colour:
            if done[k]:
                contained = False
            continue
        if done[k]:
            continue
        cnt += 1
        done[k] = True
        stack.extend((r + dr, c + dc) for dr, dc in _NEIGHBOURS)
    return cnt, contained


def heuristic_cut(img: Image) -> Image:
    """Pick a separator colour that cuts img into at least two side-by-side pieces."""
    ret = core.majority_col(img, True)
    ret_score = -1
    present = core.col_mask(img)
    for colour in range(10):
        if not present >> colour & 1:
            continue
        done = [False] * (img.w * img.h)
        top = bot = left = right = False
        for i in range(img.h):
            for j in range(img.w):
                if img[i, j] != colour:
                    continue
                top |= i == 0
                left |= j == 0
                bot |= i == img.h - 1
                right |= j == img.w - 1
                on_edge = i in (0, img.h - 1) or j in (0, img.w - 1)
                if on_edge and not done[i * img.w + j]:
                    _flood(img, colour, (i, j), done)
        if not ((top and bot) or (left and right)):
            continue
        score, components, nocontained = 10 ** 9, 0, True
        for i in range(img.h):
            for j in range(img.w):
                if done[i * img.w + j] or img[i, j] == colour:
                    continue
                cnt, contained = _region(img, colour, (i, j), done)
                components += 1
                score = min(score, cnt)
                if contained:
                    nocontained = False
        if components >= 2 and nocontained and score > ret_score:
            ret_score = score
            ret = colour
    return filter_col(img, ret)


def repeat(a: Image, b: Image, pad: int = 0) -> Image:
    """Tile a over the area of b, with pad blank cells between copies."""
    if a.area() <= 0 or b.area() <= 0:
        return bad_image()
    ret = core.empty(b.sz, b.p)
    period_w, period_h = a.w + pad, a.h + pad
    for i in range(ret.h):
        ai = (b.y - a.y + i) % period_h
        if ai >= a.h:
            continue
        for j in range(ret.w):
            aj = (b.x - a.x + j) % period_w
            if aj < a.w:
                ret[i, j] = a[ai, aj]
    return ret


def _mirror_index(k: int, size: int, period: int) -> int:
    if k < size:
        return k
    if period <= k < period + size:
        return period + size - 1 - k
    return -1


def mirror(a: Image, b: Image, pad: int = 0) -> Image:
    """Tile a over the area of b, reflecting alternate copies."""
    if a.area() <= 0 or b.area() <= 0:
        return bad_image()
    ret = core.empty(b.sz, b.p)
    period_w, period_h = a.w + pad, a.h + pad
    for i in range(ret.h):
        y = _mirror_index((b.y - a.y + i) % (2 * period_h), a.h, period_h)
        if y == -1:
            continue
        for j in range(ret.w):
            x = _mirror_index((b.x - a.x + j) % (2 * period_w), a.w, period_w)
            if x != -1:
                ret[i, j] = a[y, x]
    return ret


def maj_col(img: Image) -> Image:
    """A single cell of the image's majority colour."""
    return col(core.majority_col(img))


__all__ = [
    "Point",
    "pick_max_by",
    "max_criterion",
    "pick_max",
    "cut",
    "split_cols",
    "compose_all",
    "get_regular",
    "cut_pick_max",
    "regular_cut_pick_max",
    "split_pick_max",
    "cut_compose",
    "regular_cut_compose",
    "split_compose",
    "cut_index",
    "pick_maxes",
    "pick_not_maxes",
    "cut_pick_maxes",
    "split_pick_maxes",
    "heuristic_cut",
    "repeat",
    "mirror",
    "maj_col",
]
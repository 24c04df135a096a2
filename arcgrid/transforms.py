"""Single-image and pairwise grid transformations."""

from __future__ import annotations

from typing import Callable

from arcgrid import core
from arcgrid.image import MAXAREA, MAXSIDE, Image, Point, bad_image


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def col(id: int) -> Image:
    if not 0 <= id < 10:
        raise ValueError("colour must be in 0..9")
    return core.full(Point(1, 1), id)


def pos(dx: int, dy: int) -> Image:
    return core.full(Point(1, 1), 1, Point(dx, dy))


def square(id: int) -> Image:
    if id < 1:
        raise ValueError("square side must be positive")
    return core.full(Point(id, id))


def line(orient: int, id: int) -> Image:
    if id < 1:
        raise ValueError("line length must be positive")
    return core.full(Point(1, id) if orient else Point(id, 1))


def get_pos(img: Image) -> Image:
    return core.full(Point(1, 1), core.majority_col(img), img.p)


def get_size(img: Image) -> Image:
    return core.full(img.sz, core.majority_col(img))


def hull(img: Image) -> Image:
    return core.full(img.sz, core.majority_col(img), img.p)


def to_origin(img: Image) -> Image:
    ret = img.copy()
    ret.p = Point(0, 0)
    return ret


def get_w(img: Image, id: int) -> Image:
    return core.full(Point(img.w, img.w if id else 1), core.majority_col(img))


def get_h(img: Image, id: int) -> Image:
    return core.full(Point(img.h if id else 1, img.h), core.majority_col(img))


def hull0(img: Image) -> Image:
    return core.full(img.sz, 0, img.p)


def get_size0(img: Image) -> Image:
    return core.full(img.sz, 0)


def move(img: Image, p: Image) -> Image:
    ret = img.copy()
    ret.x += p.x
    ret.y += p.y
    return ret


def filter_palette(img: Image, palette: Image) -> Image:
    pal = core.col_mask(palette)
    ret = img.copy()
    ret.mask = [c if pal >> c & 1 else 0 for c in img.mask]
    return ret


def filter_col(img: Image, id: int) -> Image:
    if not 0 <= id < 10:
        raise ValueError("colour must be in 0..9")
    if id == 0:
        return invert(img)
    return filter_palette(img, col(id))


def broadcast(col: Image, shape: Image, include0: bool = True) -> Image:
    """Scale the colour pattern of col to the size of shape."""
    if col.area() == 0 or shape.area() == 0:
        return bad_image()
    ret = shape.copy()
    if shape.w % col.w == 0 and shape.h % col.h == 0:
        dh, dw = shape.h // col.h, shape.w // col.w
        for i in range(shape.h):
            for j in range(shape.w):
                ret[i, j] = col[i // dh, j // dw]
        return ret

    fh, fw = col.h / shape.h, col.w / shape.w
    eps = 1e-9
    w0 = [0.0] * 10
    for c in col.mask:
        w0[c] += 1e-6
    tot = fh * fw
    default = 0 if include0 else 1
    for i in range(shape.h):
        for j in range(shape.w):
            weight = list(w0)
            r0, r1 = i * fh + eps, (i + 1) * fh - eps
            c0, c1 = j * fw + eps, (j + 1) * fw - eps
            guess = default
            y = int(r0)
            while y < r1:
                wy = min(y + 1.0, r1) - max(float(y), r0)
                x = int(c0)
                while x < c1:
                    wx = min(x + 1.0, c1) - max(float(x), c0)
                    c = col[y, x]
                    weight[c] += wx * wy
                    guess = c
                    x += 1
                y += 1
            if weight[guess] * 2 > tot:
                ret[i, j] = guess
                continue
            maj = default
            for c in range(1, 10):
                if weight[c] > weight[maj]:
                    maj = c
            ret[i, j] = maj
    return ret


def col_shape(shape: Image, id: int) -> Image:
    if not 0 <= id < 10:
        raise ValueError("colour must be in 0..9")
    ret = shape.copy()
    ret.mask = [id if c else 0 for c in shape.mask]
    return ret


def col_shape_image(col: Image, shape: Image) -> Image:
    if shape.area() == 0 or col.area() == 0:
        return bad_image()
    ret = broadcast(col, get_size(shape))
    ret.p = shape.p
    ret.mask = [v if s else 0 for v, s in zip(ret.mask, shape.mask)]
    return ret


def compress(img: Image, bg: Image | None = None) -> Image:
    """Crop to the bounding box of cells not in the background palette."""
    bgmask = core.col_mask(bg if bg is not None else col(0))
    cells = [(i, j) for i in range(img.h) for j in range(img.w)
             if not bgmask >> img[i, j] & 1]
    if not cells:
        return bad_image()
    ymi = min(i for i, _ in cells)
    yma = max(i for i, _ in cells)
    xmi = min(j for _, j in cells)
    xma = max(j for _, j in cells)
    return core.sub_image(img, Point(xmi, ymi), Point(xma - xmi + 1, yma - ymi + 1))


def embed(img: Image, shape: Image) -> Image:
    """Place img on the canvas of shape, cropping or padding with 0."""
    d = shape.p - img.p
    mask = [img.safe(i + d.y, j + d.x) for i in range(shape.h) for j in range(shape.w)]
    return Image(shape.x, shape.y, shape.w, shape.h, mask)


def compose_with(a: Image, b: Image, f: Callable[[int, int], int],
                 overlap_only: int) -> Image:
    """Combine two images cell by cell on a canvas chosen by overlap_only."""
    if overlap_only == 1:
        p = Point(max(a.x, b.x), max(a.y, b.y))
        ra, rb = a.p + a.sz, b.p + b.sz
        sz = Point(min(ra.x, rb.x), min(ra.y, rb.y)) - p
        if sz.x <= 0 or sz.y <= 0:
            return bad_image()
    elif overlap_only == 0:
        p = Point(min(a.x, b.x), min(a.y, b.y))
        ra, rb = a.p + a.sz, b.p + b.sz
        sz = Point(max(ra.x, rb.x), max(ra.y, rb.y)) - p
    elif overlap_only == 2:
        p, sz = a.p, a.sz
    else:
        raise ValueError("overlap_only must be 0, 1 or 2")
    if sz.x > MAXSIDE or sz.y > MAXSIDE or sz.x * sz.y > MAXAREA:
        return bad_image()
    da, db = p - a.p, p - b.p
    mask = [f(a.safe(i + da.y, j + da.x), b.safe(i + db.y, j + db.x))
            for i in range(sz.y) for j in range(sz.x)]
    return Image(p.x, p.y, sz.x, sz.y, mask)


def _over(x: int, y: int) -> int:
    return y if y else x


_COMPOSE_MODES = {
    0: (_over, 0),
    1: (_over, 1),
    2: (lambda x, y: x if y else 0, 1),
    3: (_over, 2),
    4: (lambda x, y: 0 if y else x, 2),
}


def compose(a: Image, b: Image, id: int = 0) -> Image:
    try:
        f, overlap = _COMPOSE_MODES[id]
    except KeyError:
        raise ValueError("compose id must be in 0..4") from None
    return compose_with(a, b, f, overlap)


def _outer(a: Image, b: Image, cell: Callable[[int, int], int]) -> Image:
    if (a.w * b.w > MAXSIDE or a.h * b.h > MAXSIDE
            or a.w * b.w * a.h * b.h > MAXAREA):
        return bad_image()
    ret = core.empty(Point(a.w * b.w, a.h * b.h),
                     Point(a.x * b.w + b.x, a.y * b.h + b.y))
    for i in range(a.h):
        for j in range(a.w):
            for k in range(b.h):
                for l in range(b.w):
                    ret[i * b.h + k, j * b.w + l] = cell(a[i, j], b[k, l])
    return ret


def outer_product_is(a: Image, b: Image) -> Image:
    return _outer(a, b, lambda x, y: x * (1 if y else 0))


def outer_product_si(a: Image, b: Image) -> Image:
    return _outer(a, b, lambda x, y: (1 if x > 0 else 0) * y)


def fill(a: Image) -> Image:
    """Fill enclosed holes with the majority colour."""
    ret = core.full(a.sz, core.majority_col(a), a.p)
    stack = []
    for i in range(a.h):
        for j in range(a.w):
            if (i in (0, a.h - 1) or j in (0, a.w - 1)) and not a[i, j]:
                stack.append((i, j))
                ret[i, j] = 0
    while stack:
        r, c = stack.pop()
        for nr, nc in ((r, c + 1), (r, c - 1), (r + 1, c), (r - 1, c)):
            if 0 <= nr < a.h and 0 <= nc < a.w and not a[nr, nc] and ret[nr, nc]:
                stack.append((nr, nc))
                ret[nr, nc] = 0
    return ret


def interior(a: Image) -> Image:
    return compose_with(fill(a), a, lambda x, y: 0 if y else x, 0)


def border(a: Image) -> Image:
    """Cells of a reachable from the outside through 8-connected background."""
    ret = core.empty(a.sz, a.p)
    stack = []
    for i in range(a.h):
        for j in range(a.w):
            if i in (0, a.h - 1) or j in (0, a.w - 1):
                if not a[i, j]:
                    stack.append((i, j))
                ret[i, j] = 1
    while stack:
        r, c = stack.pop()
        for nr in (r - 1, r, r + 1):
            for nc in (c - 1, c, c + 1):
                if 0 <= nr < a.h and 0 <= nc < a.w and not ret[nr, nc]:
                    ret[nr, nc] = 1
                    if not a[nr, nc]:
                        stack.append((nr, nc))
    ret.mask = [r * v for r, v in zip(ret.mask, a.mask)]
    return ret


def _align_coord(apos: int, asz: int, bpos: int, bsz: int, id: int) -> int:
    if id == 0:
        return bpos - asz
    if id == 1:
        return bpos
    if id == 2:
        return bpos + _cdiv(bsz - asz, 2)
    if id == 3:
        return bpos + bsz - asz
    if id == 4:
        return bpos + bsz
    return apos


def align_x(a: Image, b: Image, id: int) -> Image:
    if not 0 <= id < 5:
        raise ValueError("align id must be in 0..4")
    ret = a.copy()
    ret.x = _align_coord(a.x, a.w, b.x, b.w, id)
    return ret


def align_y(a: Image, b: Image, id: int) -> Image:
    if not 0 <= id < 5:
        raise ValueError("align id must be in 0..4")
    ret = a.copy()
    ret.y = _align_coord(a.y, a.h, b.y, b.h, id)
    return ret


def align(a: Image, b: Image, idx: int, idy: int) -> Image:
    """Align a to b; id 5 leaves that axis unchanged."""
    if not (0 <= idx < 6 and 0 <= idy < 6):
        raise ValueError("align ids must be in 0..5")
    ret = a.copy()
    ret.x = _align_coord(a.x, a.w, b.x, b.w, idx)
    ret.y = _align_coord(a.y, a.h, b.y, b.h, idy)
    return ret


def align_match(a: Image, b: Image) -> Image:
    """Move a so its best-matching single-colour part overlays the same part of b."""
    ret = a.copy()
    match_size = 0
    for c in range(1, 10):
        ca = compress(filter_col(a, c))
        cb = compress(filter_col(b, c))
        if ca.mask == cb.mask:
            cnt = core.count(ca)
            if cnt > match_size:
                match_size = cnt
                ret.p = a.p + cb.p - ca.p
    return ret if match_size else bad_image()


def replace_cols(base: Image, cols: Image) -> Image:
    """Recolour each same-colour component of base by the majority colour under it in cols."""
    ret = base.copy()
    done = [False] * len(base.mask)
    d = base.p - cols.p
    for i in range(base.h):
        for j in range(base.w):
            acol = base[i, j]
            if done[i * base.w + j] or not acol:
                continue
            cnt = [0] * 10
            path = []
            done[i * base.w + j] = True
            stack = [(i, j)]
            while stack:
                r, c = stack.pop()
                cnt[cols.safe(r + d.y, c + d.x)] += 1
                path.append((r, c))
                for nr in (r - 1, r, r + 1):
                    for nc in (c - 1, c, c + 1):
                        if (0 <= nr < base.h and 0 <= nc < base.w
                                and base[nr, nc] == acol and not done[nr * base.w + nc]):
                            done[nr * base.w + nc] = True
                            stack.append((nr, nc))
            maj = max([(0, 0)] + [(cnt[c], -c) for c in range(1, 10)])
            for r, c in path:
                ret[r, c] = -maj[1]
    return ret


def center(img: Image) -> Image:
    sz = Point((img.w + 1) % 2 + 1, (img.h + 1) % 2 + 1)
    off = img.sz - sz
    return core.full(sz, 1, img.p + Point(_cdiv(off.x, 2), _cdiv(off.y, 2)))


def transform(img: Image, a00: int, a01: int, a10: int, a11: int) -> Image:
    """Apply an integer 2x2 matrix about the image centre."""
    if img.area() == 0:
        return img.copy()
    c = center(img)
    off = Point(1 - c.w, 1 - c.h) + (img.p - c.p) * 2

    def t(p: Point) -> Point:
        p = p * 2 + off
        p = Point(a00 * p.x + a01 * p.y, a10 * p.x + a11 * p.y) - off
        return Point(p.x >> 1, p.y >> 1)

    corners = [t(Point(0, 0)), t(Point(img.w - 1, 0)),
               t(Point(0, img.h - 1)), t(Point(img.w - 1, img.h - 1))]
    lo = Point(min(q.x for q in corners), min(q.y for q in corners))
    hi = Point(max(q.x for q in corners), max(q.y for q in corners))
    ret = core.empty(hi - lo + Point(1, 1), img.p)
    for i in range(img.h):
        for j in range(img.w):
            go = t(Point(j, i)) - lo
            ret[go.y, go.x] = img[i, j]
    return ret


def mirror_heuristic(img: Image) -> int:
    """1 to flip vertically, 0 to flip horizontally, judged by centre of mass."""
    cnt = sumx = sumy = 0
    for i in range(img.h):
        for j in range(img.w):
            if img[i, j]:
                cnt += 1
                sumx += j
                sumy += i
    return int(abs(sumx * 2 - (img.w - 1) * cnt) < abs(sumy * 2 - (img.h - 1) * cnt))


_RIGID = {
    1: (0, 1, -1, 0),
    2: (-1, 0, 0, -1),
    3: (0, -1, 1, 0),
    4: (-1, 0, 0, 1),
    5: (1, 0, 0, -1),
    6: (0, 1, 1, 0),
    7: (0, -1, -1, 0),
}


def rigid(img: Image, id: int) -> Image:
    """One of the eight rotations/reflections, or 8 for a heuristic mirror."""
    if id == 0:
        return img.copy()
    if id == 8:
        return rigid(img, 4 + mirror_heuristic(img))
    if id not in _RIGID:
        raise ValueError("rigid id must be in 0..8")
    return transform(img, *_RIGID[id])


def invert(img: Image) -> Image:
    ret = img.copy()
    if img.area() == 0:
        return ret
    mask = core.col_mask(img)
    colour = next((c for c in range(1, 10) if mask >> c & 1), 1)
    ret.mask = [0 if v else colour for v in img.mask]
    return ret


def interior2(a: Image) -> Image:
    return compose(a, invert(border(a)), 2)


def count(img: Image, id: int, out_type: int) -> Image:
    """A block of the majority colour sized by a measurement of img."""
    measures = {
        0: lambda: core.count(img),
        1: lambda: core.count_cols(img),
        2: lambda: core.count_components(img),
        3: lambda: img.w,
        4: lambda: img.h,
        5: lambda: max(img.w, img.h),
        6: lambda: min(img.w, img.h),
    }
    if id not in measures or out_type not in (0, 1, 2):
        raise ValueError("invalid count id or output type")
    num = measures[id]()
    sz = [Point(num, num), Point(num, 1), Point(1, num)][out_type]
    if max(sz.x, sz.y) > MAXSIDE or sz.x * sz.y > MAXAREA:
        return bad_image()
    return core.full(sz, core.majority_col(img))


def my_stack(a: Image, b: Image, orient: int) -> Image:
    if not 0 <= orient <= 3:
        raise ValueError("orient must be in 0..3")
    b = b.copy()
    b.p = a.p
    if orient == 0:
        b.x += a.w
    elif orient == 1:
        b.y += a.h
    elif orient == 2:
        b.x += a.w
        b.y += a.h
    else:
        c = a.copy()
        c.y += b.h
        b.x += a.w
        return compose(c, b)
    return compose(a, b)


def wrap(line: Image, area: Image) -> Image:
    """Lay line out in rows that wrap within the size of area."""
    if line.area() == 0 or area.area() == 0:
        return bad_image()
    ans = core.empty(area.sz)
    for i in range(line.h):
        for j in range(line.w):
            x, y = j, i
            x += y // area.h * line.w
            y %= area.h
            y += x // area.w * line.h
            x %= area.w
            if 0 <= x < ans.w and 0 <= y < ans.h:
                ans[y, x] = line[i, j]
    return ans


_SMEAR_MASKS = (1, 2, 4, 8, 3, 12, 15)


def smear(base: Image, room: Image, id: int) -> Image:
    """Extend colours of base along rows/columns while inside room."""
    if not 0 <= id < 7:
        raise ValueError("smear id must be in 0..6")
    mask = _SMEAR_MASKS[id]
    d = room.p - base.p
    ret = embed(base, hull(room))

    def sweep(cells):
        c = 0
        for i, j in cells:
            if not room[i, j]:
                c = 0
            elif base.safe(i + d.y, j + d.x):
                c = base[i + d.y, j + d.x]
            if c:
                ret[i, j] = c

    rows, cols = range(ret.h), range(ret.w)
    if mask & 1:
        for i in rows:
            sweep((i, j) for j in cols)
    if mask >> 1 & 1:
        for i in rows:
            sweep((i, j) for j in reversed(cols))
    if mask >> 2 & 1:
        for j in cols:
            sweep((i, j) for i in rows)
    if mask >> 3 & 1:
        for j in cols:
            sweep((i, j) for i in reversed(rows))
    return ret


def extend(img: Image, room: Image) -> Image:
    """Fill room by clamping coordinates into img."""
    if img.area() == 0:
        return bad_image()
    ret = room.copy()
    for i in range(ret.h):
        for j in range(ret.w):
            p = Point(j, i) + room.p - img.p
            px = min(max(p.x, 0), img.w - 1)
            py = min(max(p.y, 0), img.h - 1)
            ret[i, j] = img[py, px]
    return ret
import pytest
from hypothesis import given, strategies as st

from arcgrid import core
from arcgrid.image import Image
from arcgrid.selection import (
    compose_all,
    cut,
    cut_compose,
    cut_index,
    cut_pick_max,
    cut_pick_maxes,
    get_regular,
    heuristic_cut,
    maj_col,
    max_criterion,
    mirror,
    pick_max,
    pick_max_by,
    pick_maxes,
    pick_not_maxes,
    regular_cut_compose,
    regular_cut_pick_max,
    repeat,
    split_cols,
    split_compose,
    split_pick_max,
    split_pick_maxes,
)
from arcgrid.transforms import filter_col


def grid_image():
    # 5x5 image split into four 2x2 quadrants by a line of colour 5.
    rows = [
        [1, 2, 5, 3, 4],
        [2, 1, 5, 4, 3],
        [5, 5, 5, 5, 5],
        [6, 7, 5, 8, 8],
        [7, 6, 5, 8, 9],
    ]
    return Image(0, 0, 5, 5, [v for r in rows for v in r])


images = st.integers(1, 4).flatmap(
    lambda w: st.integers(1, 4).flatmap(
        lambda h: st.lists(st.integers(0, 9), min_size=w * h, max_size=w * h).map(
            lambda m: Image(0, 0, w, h, m))))


def test_pick_max_by_first_of_ties():
    a = Image(0, 0, 1, 1, [1])
    b = Image(3, 0, 1, 1, [1])
    c = Image(1, 0, 1, 1, [1])
    assert pick_max_by([a, b, c], lambda img: img.x) is b
    assert pick_max_by([a, c], lambda img: 0) is a


def test_pick_max_empty_gives_bad_image():
    assert pick_max([], 0).area() == 0


def test_max_criterion_values():
    img = Image(4, 2, 3, 1, [1, 0, 2])
    assert max_criterion(img, 0) == core.count(img)
    assert max_criterion(img, 2) == 3
    assert max_criterion(img, 13) == 4
    assert max_criterion(img, 5) == -2


def test_max_criterion_invalid():
    with pytest.raises(ValueError):
        max_criterion(Image(0, 0, 1, 1, [1]), 14)


def test_cut_without_separator_returns_whole_image():
    img = Image(2, 3, 2, 2, [0, 1, 2, 0])
    pieces = cut(img, Image())
    assert pieces == [img]


def test_cut_with_mask_splits_line():
    img = Image(0, 0, 3, 1, [4, 9, 6])
    mask = Image(0, 0, 3, 1, [0, 1, 0])
    pieces = cut(img, mask)
    assert [(p.x, p.w, p.mask) for p in pieces] == [(0, 1, [4]), (2, 1, [6])]


def test_heuristic_cut_picks_grid_line():
    img = grid_image()
    assert heuristic_cut(img) == filter_col(img, 5)


def test_cut_default_uses_heuristic():
    pieces = cut(grid_image())
    assert len(pieces) == 4
    assert all(p.sz.x == 2 and p.sz.y == 2 for p in pieces)
    assert {(p.x, p.y) for p in pieces} == {(0, 0), (3, 0), (0, 3), (3, 3)}


def test_cut_index_and_out_of_range():
    img = grid_image()
    assert cut_index(img, 0) == cut(img)[0]
    assert cut_index(img, 4).area() == 0
    assert cut_index(img, -1).area() == 0


def test_cut_pick_max_by_colour_count():
    img = grid_image()
    best = cut_pick_max(img, 4)
    assert best.x == 0 and best.y == 0
    assert cut_pick_max(img, 13, filter_col(img, 5)).x == 3


def test_cut_pick_maxes_composes_ties():
    img = grid_image()
    result = cut_pick_maxes(img, 12)
    assert result.x == 0
    assert result.h == 5


def test_get_regular_marks_grid():
    reg = get_regular(grid_image())
    assert all(reg[2, j] == 1 for j in range(5))
    assert all(reg[i, 2] == 1 for i in range(5))
    assert reg[0, 0] == 0
    assert core.count(reg) == 9


def test_regular_cut_pick_max_and_compose():
    img = grid_image()
    piece = regular_cut_pick_max(img, 6)
    assert piece.y == 3
    composed = regular_cut_compose(img, 0)
    assert composed.x == 0 and composed.w == 2 and composed.h == 2


def test_cut_compose_puts_pieces_at_origin():
    img = grid_image()
    composed = cut_compose(img, filter_col(img, 5), 0)
    assert composed.sz.x == 2 and composed.sz.y == 2
    assert composed.p.x == 0 and composed.p.y == 0


def test_split_cols_keeps_colour():
    img = Image(0, 0, 3, 1, [2, 0, 7])
    parts = split_cols(img)
    assert [p.mask for p in parts] == [[2, 0, 0], [0, 0, 7]]
    assert len(split_cols(img, True)) == 3


@given(images)
def test_split_cols_partitions(img):
    parts = split_cols(img)
    total = [sum(vals) for vals in zip(*(p.mask for p in parts))] if parts else [0] * len(img.mask)
    assert total == img.mask
    assert all(core.count_cols(p) == 1 for p in parts)


def test_split_compose_origin():
    img = Image(0, 0, 3, 1, [1, 0, 2])
    out = split_compose(img, 0)
    assert out.p.x == 0 and out.w == 1
    assert out.mask == [2]


def test_compose_all():
    assert compose_all([]).area() == 0
    a = Image(0, 0, 2, 1, [1, 0])
    b = Image(0, 0, 2, 1, [0, 3])
    assert compose_all([a]) == a
    assert compose_all([a, b]).mask == [1, 3]


@given(st.lists(images, max_size=6), st.integers(0, 13))
def test_pick_maxes_partition(v, id):
    maxes = pick_maxes(v, id)
    others = pick_not_maxes(v, id)
    assert len(maxes) + len(others) == len(v)
    if v:
        assert maxes
        top = max(max_criterion(img, id) for img in v)
        assert all(max_criterion(img, id) == top for img in maxes)
        assert all(max_criterion(img, id) < top for img in others)


@given(images, st.integers(0, 2))
def test_repeat_tiles(a, pad):
    b = Image(0, 0, a.w * 3, a.h * 2)
    out = repeat(a, b, pad)
    assert out.sz == b.sz
    for i in range(out.h):
        for j in range(out.w):
            ai, aj = i % (a.h + pad), j % (a.w + pad)
            want = a[ai, aj] if ai < a.h and aj < a.w else 0
            assert out[i, j] == want


def test_repeat_and_mirror_reject_empty():
    a = Image(0, 0, 1, 1, [1])
    assert repeat(Image(), a).area() == 0
    assert mirror(a, Image()).area() == 0


@given(images)
def test_mirror_reflects(a):
    b = Image(0, 0, a.w * 2, a.h * 2)
    out = mirror(a, b)
    for i in range(a.h):
        for j in range(a.w):
            assert out[i, j] == a[i, j]
            assert out[i, 2 * a.w - 1 - j] == a[i, j]
            assert out[2 * a.h - 1 - i, j] == a[i, j]


def test_maj_col():
    out = maj_col(Image(0, 0, 3, 1, [2, 2, 3]))
    assert out.mask == [2]
    assert (out.w, out.h) == (1, 1)
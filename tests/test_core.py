import pytest
from hypothesis import given, strategies as st

from arcgrid import core
from arcgrid.image import Image, Point

grids = st.integers(1, 5).flatmap(
    lambda w: st.integers(1, 5).flatmap(
        lambda h: st.lists(st.integers(0, 9), min_size=w * h, max_size=w * h).map(
            lambda m: Image(0, 0, w, h, m))))


def test_col_mask_and_counts():
    img = Image(w=3, h=1, mask=[0, 2, 2])
    assert core.col_mask(img) == (1 | 1 << 2)
    assert core.count_cols(img) == 1
    assert core.count_cols(img, True) == 2
    assert core.count(img) == 2


def test_full_and_empty():
    f = core.full(Point(2, 3), 5, Point(1, 1))
    assert f.mask == [5] * 6 and f.p == Point(1, 1)
    assert core.count(core.empty(Point(2, 2))) == 0
    assert core.is_rectangle(core.full(Point(2, 2)))


def test_count_components_diagonal_connected():
    img = Image(w=3, h=3, mask=[1, 0, 0, 0, 1, 0, 0, 0, 1])
    assert core.count_components(img) == 1
    img2 = Image(w=3, h=1, mask=[1, 0, 1])
    assert core.count_components(img2) == 2


def test_majority_col_ties_low():
    img = Image(w=4, h=1, mask=[3, 3, 2, 2])
    assert core.majority_col(img) == 2
    assert core.majority_col(core.empty(Point(2, 2))) == 0


def test_sub_image_and_error():
    img = Image(x=1, y=1, w=3, h=2, mask=[1, 2, 3, 4, 5, 6])
    s = core.sub_image(img, Point(1, 0), Point(2, 2))
    assert s.mask == [2, 3, 5, 6]
    assert s.p == Point(2, 1)
    with pytest.raises(ValueError):
        core.sub_image(img, Point(2, 0), Point(2, 2))


@given(grids)
def test_split_cols_covers_nonzero(img):
    parts = core.split_cols(img)
    total = [0] * len(img.mask)
    for s, c in parts:
        for k, v in enumerate(s.mask):
            if v:
                total[k] += 1
                assert img.mask[k] == c
    assert total == [1 if v else 0 for v in img.mask]
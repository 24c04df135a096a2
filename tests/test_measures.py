import pytest
from hypothesis import given, strategies as st

from arcgrid import core, transforms
from arcgrid.image import Image, Point
from arcgrid.measures import count_each, hull_each, orient_input, rc_diff


@st.composite
def grids(draw):
    w = draw(st.integers(1, 6))
    h = draw(st.integers(1, 6))
    mask = draw(st.lists(st.integers(0, 3), min_size=w * h, max_size=w * h))
    x = draw(st.integers(-3, 3))
    y = draw(st.integers(-3, 3))
    return Image(x, y, w, h, mask)


def test_rc_diff_empty_image_is_zero():
    assert rc_diff(Image()) == 0


def test_rc_diff_all_background_is_zero():
    assert rc_diff(core.empty(Point(4, 3))) == 0


def test_rc_diff_square_full_is_zero():
    assert rc_diff(core.full(Point(3, 3), 2)) == 0


def test_rc_diff_single_full_row():
    img = Image(0, 0, 3, 3, [1, 1, 1, 0, 0, 0, 0, 0, 0])
    assert rc_diff(img) == 1


def test_rc_diff_single_full_column():
    img = Image(0, 0, 3, 3, [0, 1, 0, 0, 1, 0, 0, 1, 0])
    assert rc_diff(img) == -1


@given(grids())
def test_rc_diff_negates_under_transpose(img):
    assert rc_diff(transforms.rigid(img, 6)) == -rc_diff(img)


@given(grids())
def test_orient_input_result_is_nonnegative(img):
    assert rc_diff(orient_input(img)) >= 0


@given(grids())
def test_orient_input_keeps_cell_count(img):
    out = orient_input(img)
    assert core.count(out) == core.count(img)
    assert out.area() == img.area()


def test_orient_input_keeps_row_oriented_image():
    img = Image(1, 2, 3, 3, [1, 1, 1, 0, 0, 0, 0, 0, 0])
    assert orient_input(img) == img


def test_orient_input_transposes_column_image():
    img = Image(0, 0, 3, 3, [0, 1, 0, 0, 1, 0, 0, 1, 0])
    out = orient_input(img)
    assert out.mask == [0, 0, 0, 1, 1, 1, 0, 0, 0]


def test_orient_input_does_not_alias_input():
    img = Image(0, 0, 2, 1, [1, 1])
    out = orient_input(img)
    out[0, 0] = 5
    assert img[0, 0] == 1


@given(st.lists(grids(), max_size=4))
def test_hull_each_gives_solid_blocks_in_place(images):
    hulls = hull_each(images)
    assert len(hulls) == len(images)
    for src, hl in zip(images, hulls):
        assert hl.p == src.p
        assert hl.sz == src.sz
        assert set(hl.mask) <= {core.majority_col(src)}


def test_hull_each_empty():
    assert hull_each([]) == []


@given(st.lists(grids(), max_size=4), st.integers(0, 6), st.integers(0, 2))
def test_count_each_matches_single_count(images, id, out_type):
    result = count_each(images, id, out_type)
    assert result == [transforms.count(img, id, out_type) for img in images]


def test_count_each_width_as_row():
    img = Image(0, 0, 4, 2, [1] * 8)
    (out,) = count_each([img], 3, 1)
    assert out.sz == Point(4, 1)
    assert out.mask == [1, 1, 1, 1]


def test_count_each_rejects_bad_id():
    with pytest.raises(ValueError):
        count_each([core.full(Point(1, 1))], 7, 0)


def test_count_each_rejects_bad_out_type():
    with pytest.raises(ValueError):
        count_each([core.full(Point(1, 1))], 0, 3)
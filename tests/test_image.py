import pytest

from arcgrid.image import Image, Point, bad_image


def make():
    return Image(x=1, y=2, w=3, h=2, mask=[1, 2, 3, 4, 5, 6])


def test_indexing_row_major():
    img = make()
    assert img[0, 2] == 3
    assert img[1, 0] == 4


def test_setitem_and_copy_independent():
    img = make()
    other = img.copy()
    other[0, 0] = 9
    assert img[0, 0] == 1
    assert other[0, 0] == 9
    assert other.p == img.p


def test_safe_out_of_bounds_is_zero():
    img = make()
    assert img.safe(-1, 0) == 0
    assert img.safe(0, 3) == 0
    assert img.safe(1, 2) == 6


def test_getitem_out_of_bounds_raises():
    with pytest.raises(IndexError):
        make()[2, 0]


def test_area_and_points():
    img = make()
    assert img.area() == 6
    assert img.sz == Point(3, 2)
    assert img.p + Point(1, 1) == Point(2, 3)
    assert Point(4, 6) - Point(1, 2) == Point(3, 4)


def test_bad_image_is_empty():
    b = bad_image()
    assert b.area() == 0
    assert b.mask == []


def test_mask_length_mismatch_raises():
    with pytest.raises(ValueError):
        Image(w=2, h=2, mask=[1])
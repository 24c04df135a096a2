"""Whole-image measures and list-wise helpers built on the image operations."""

from __future__ import annotations

from typing import Iterable

from arcgrid import transforms
from arcgrid.image import Image


def rc_diff(img: Image) -> int:
    """Count rows with no background minus columns with no background."""
    full_rows = sum(
        1 for i in range(img.h) if all(img[i, j] for j in range(img.w))
    )
    full_cols = sum(
        1 for j in range(img.w) if all(img[i, j] for i in range(img.h))
    )
    return full_rows - full_cols


def orient_input(img: Image) -> Image:
    """Transpose img if it has more full columns than full rows."""
    return img.copy() if rc_diff(img) >= 0 else transforms.rigid(img, 6)


def hull_each(images: Iterable[Image]) -> list[Image]:
    """Apply hull to every image."""
    return [transforms.hull(img) for img in images]


def count_each(images: Iterable[Image], id: int, out_type: int) -> list[Image]:
    """Apply the counting block operation to every image."""
    return [transforms.count(img, id, out_type) for img in images]
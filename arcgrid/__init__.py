"""Colour-grid images, operations on them, piece selection, outer-product deduction and size guessing."""

__version__ = "0.1.0"
__all__ = ["image", "core", "transforms", "selection", "deduce", "sizes", "tiny", "measures"]
"""Row-major multi-dimensional grids over a flat buffer."""

from dyarr.src.core import (
    BufferView,
    DenseGrid,
    GridError,
    GridIndexError,
    ShapeError,
    iter_indices,
    offset_of_valid,
    shape_product,
    signed_offset,
)

__all__ = [
    "DenseGrid",
    "BufferView",
    "GridError",
    "GridIndexError",
    "ShapeError",
    "iter_indices",
    "offset_of_valid",
    "shape_product",
    "signed_offset",
]

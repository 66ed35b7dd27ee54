"""Core grid data structures and offset computation."""

from .errors import GridError, GridIndexError, ShapeError
from .offsets import (
    iter_indices,
    offset_of_valid,
    shape_product,
    signed_offset,
    try_offset_of_valid,
)
from .dense_grid import BufferView, DenseGrid
from .grid_proxy import grid_from_numpy, grid_to_numpy

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
    "try_offset_of_valid",
    "grid_from_numpy",
    "grid_to_numpy",
]

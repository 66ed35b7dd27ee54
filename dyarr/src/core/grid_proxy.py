import numpy as np
from collections.abc import Sequence
from typing import Any, Optional, Type

from dyarr.src.utils.logger import get_logger

logger = get_logger(__name__)


def _object_array(data, dtype: Optional[Any] = None) -> np.ndarray:
    flat = np.empty(len(data), dtype=object)
    for i, value in enumerate(data):
        flat[i] = value
    if dtype is not None and np.dtype(dtype) != np.dtype(object):
        logger.warning("elements are sequences; ignoring dtype %s", dtype)
    return flat


def _is_sequence(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim > 0
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def grid_to_numpy(grid, dtype: Optional[Any] = None) -> np.ndarray:
    """Return ``grid`` as an ``np.ndarray`` with the grid's shape.

    Cells holding sequences are stored as opaque objects, one per cell.
    """
    data = grid.to_list()
    if any(_is_sequence(value) for value in data):
        flat = _object_array(data, dtype)
    else:
        flat = np.array(data, dtype=dtype)
    return flat.reshape(grid.shape)


def grid_from_numpy(array: Any, cls: Optional[Type] = None):
    """Return a grid built from ``array`` flattened in C order."""
    if cls is None:
        from dyarr.src.core.dense_grid import DenseGrid

        cls = DenseGrid
    arr = np.asarray(array)
    logger.debug("building grid from ndarray of shape %s", arr.shape)
    return cls(arr.ravel(order="C").tolist(), arr.shape)


__all__ = ["grid_to_numpy", "grid_from_numpy"]

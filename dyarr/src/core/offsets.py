"""Row-major offset computation over a shape.

Two algorithms are provided. :func:`offset_of_valid` is the strict one used
by element access: it wants exactly one non-negative coordinate per
dimension. :func:`signed_offset` is the tolerant one: it accepts fewer
coordinates than the rank (leading dimensions count as zero) and negative
coordinates, and it returns the raw, possibly negative, accumulated offset
without wrapping it into the buffer.
"""

from __future__ import annotations

import operator
import sys
from itertools import product
from typing import Iterator, Optional, Sequence, Tuple

from dyarr.src.core.errors import GridIndexError, ShapeError
from dyarr.src.utils import config_loader
from dyarr.src.utils.logger import get_logger

logger = get_logger(__name__)

Shape = Tuple[int, ...]


def normalize_shape(shape: Sequence[int]) -> Shape:
    """Return ``shape`` as a tuple of non-negative ints or raise ``ShapeError``."""
    if isinstance(shape, (str, bytes)):
        raise ShapeError(f"shape {shape!r} is not a sequence of dimension lengths")
    try:
        sizes = list(shape)
    except TypeError:
        raise ShapeError(f"shape {shape!r} is not a sequence of dimension lengths") from None
    dims = []
    for size in sizes:
        if isinstance(size, bool):
            raise ShapeError(f"dimension length {size!r} is not an integer")
        try:
            size = operator.index(size)
        except TypeError:
            raise ShapeError(f"dimension length {size!r} is not an integer") from None
        if size < 0:
            raise ShapeError(f"dimension length {size} is negative")
        dims.append(size)
    return tuple(dims)


def shape_product(shape: Sequence[int]) -> int:
    """Return the number of cells addressed by ``shape`` (1 for rank 0)."""
    total = 1
    for size in shape:
        total *= size
    return total


def _as_index(index) -> int:
    if isinstance(index, bool):
        raise GridIndexError(f"index {index!r} is not an integer")
    try:
        return operator.index(index)
    except TypeError:
        raise GridIndexError(f"index {index!r} is not an integer") from None


def offset_of_valid(shape: Sequence[int], indices: Sequence[int]) -> int:
    """Return the buffer offset of ``indices`` in a grid of ``shape``.

    Every dimension must be given and every coordinate must lie in
    ``[0, size)``; otherwise :class:`GridIndexError` is raised.

    >>> offset_of_valid((3, 4, 5), (2, 1, 3))
    48
    """
    if len(indices) != len(shape):
        raise GridIndexError(
            f"bad length of indices: got {len(indices)}, grid rank is {len(shape)}"
        )
    stride = 1
    offset = 0
    for size, index in zip(reversed(shape), reversed(indices)):
        index = _as_index(index)
        if index < 0 or index >= size:
            raise GridIndexError(f"index {index} out of bound [0, {size})")
        offset += index * stride
        stride *= size
    if config_loader.TRACE_OFFSETS:
        logger.debug("offset_of_valid %s in %s -> %d", tuple(indices), tuple(shape), offset)
    return offset


def try_offset_of_valid(shape: Sequence[int], indices: Sequence[int]) -> Optional[int]:
    """Return :func:`offset_of_valid` or ``None`` if the indices are rejected."""
    try:
        return offset_of_valid(shape, indices)
    except GridIndexError as exc:
        logger.debug("rejected indices %s: %s", tuple(indices), exc.reason)
        return None


def signed_offset(shape: Sequence[int], indices: Sequence[int]) -> int:
    """Return the signed offset of ``indices`` relative to the grid origin.

    ``indices`` address the trailing dimensions of ``shape``. Each coordinate
    must satisfy ``-size < i < size``. Negative coordinates are not wrapped,
    so the result can be negative.

    >>> signed_offset((3, 4, 5), (-1, -3))
    -8
    """
    if len(indices) > len(shape):
        raise GridIndexError(
            f"too many indices: got {len(indices)}, grid rank is {len(shape)}"
        )
    stride = 1
    offset = 0
    for size, index in zip(reversed(shape), reversed(indices)):
        if size > sys.maxsize:
            raise GridIndexError(f"dimension length {size} is too big to process")
        index = _as_index(index)
        if index >= size or index <= -size:
            raise GridIndexError(
                f"index {index} should be in range ({-size}, {size})"
            )
        offset += index * stride
        stride *= size
    if config_loader.TRACE_OFFSETS:
        logger.debug("signed offset %s in %s -> %d", tuple(indices), tuple(shape), offset)
    return offset


def iter_indices(shape: Sequence[int]) -> Iterator[Shape]:
    """Yield every valid coordinate tuple of ``shape`` in row-major order."""
    return product(*(range(size) for size in shape))


__all__ = [
    "Shape",
    "normalize_shape",
    "shape_product",
    "offset_of_valid",
    "try_offset_of_valid",
    "signed_offset",
    "iter_indices",
]

"""Dense row-major grid over a flat buffer."""

from __future__ import annotations

import copy
from collections.abc import Sequence as SequenceABC
from typing import Any, Generic, Iterable, Iterator, List, Optional, Sequence, Tuple, TypeVar

from dyarr.src.core.errors import GridError, GridIndexError, ShapeError
from dyarr.src.core.offsets import (
    Shape,
    iter_indices,
    normalize_shape,
    offset_of_valid,
    shape_product,
    signed_offset,
    try_offset_of_valid,
)
from dyarr.src.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_IMMUTABLE_FILL = (int, float, complex, str, bytes, bool, type(None), frozenset)


class BufferView(SequenceABC, Generic[T]):
    """Read-only view over a grid buffer."""

    __slots__ = ("_data",)

    def __init__(self, data: List[T]):
        self._data = data

    def __getitem__(self, item):
        if isinstance(item, slice):
            return tuple(self._data[item])
        return self._data[item]

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BufferView):
            return self._data == other._data
        if isinstance(other, (list, tuple)):
            return list(self._data) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"BufferView({self._data!r})"


class DenseGrid(Generic[T]):
    """Multi-dimensional array stored as one flat list in row-major order.

    The last dimension varies fastest. ``grid[i, j, k]`` and
    ``grid[[i, j, k]]`` read a cell and raise :class:`GridIndexError` when the
    coordinates are invalid; :meth:`get` is the non-raising counterpart.
    """

    __slots__ = ("_data", "_shape")

    def __init__(self, buffer: Iterable[T], shape: Sequence[int]):
        dims = normalize_shape(shape)
        data = list(buffer)
        expected = shape_product(dims)
        if expected != len(data):
            logger.debug("rejected buffer of length %d for shape %s", len(data), dims)
            raise ShapeError(
                f"data length not matching dimensions: buffer has {len(data)} "
                f"elements, shape {dims} needs {expected}"
            )
        self._data: Optional[List[T]] = data
        self._shape: Shape = dims

    # Construction ---------------------------------------------------------

    @classmethod
    def from_raw(cls, buffer: Iterable[T], shape: Sequence[int]) -> "DenseGrid[T]":
        """Return a grid over ``buffer`` or raise ``ShapeError`` on a length mismatch."""
        return cls(buffer, shape)

    @classmethod
    def filled(cls, value: T, shape: Sequence[int]) -> "DenseGrid[T]":
        """Return a grid of ``shape`` with every cell set to a copy of ``value``."""
        dims = normalize_shape(shape)
        count = shape_product(dims)
        if isinstance(value, _IMMUTABLE_FILL):
            data = [value] * count
        else:
            data = [copy.copy(value) for _ in range(count)]
        grid = cls.__new__(cls)
        grid._data = data
        grid._shape = dims
        return grid

    @classmethod
    def from_numpy(cls, array) -> "DenseGrid[Any]":
        """Return a grid holding the elements of ``array`` in C order."""
        from dyarr.src.core.grid_proxy import grid_from_numpy

        return grid_from_numpy(array, cls)

    # Raw access -----------------------------------------------------------

    def _live(self) -> List[T]:
        data = self._data
        if data is None:
            raise GridError("grid has been consumed")
        if len(data) != shape_product(self._shape):
            raise GridError(
                f"buffer length changed to {len(data)}, shape {self._shape} "
                f"needs {shape_product(self._shape)}"
            )
        return data

    def take_buffer(self) -> List[T]:
        """Return the owned buffer and leave the grid consumed."""
        data = self._live()
        self._data = None
        return data

    into_buffer = take_buffer

    def buffer_ref(self) -> BufferView[T]:
        """Return a read-only view of the flat buffer."""
        return BufferView(self._live())

    def buffer_mut(self) -> List[T]:
        """Return the flat buffer itself. Its length must not be changed."""
        return self._live()

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def rank(self) -> int:
        return len(self._shape)

    @property
    def size(self) -> int:
        return len(self._live())

    def to_list(self) -> List[T]:
        """Return a shallow copy of the flat buffer."""
        return list(self._live())

    def to_numpy(self, dtype=None):
        """Return the contents as an ``numpy.ndarray`` of this grid's shape."""
        from dyarr.src.core.grid_proxy import grid_to_numpy

        return grid_to_numpy(self, dtype=dtype)

    # Offsets --------------------------------------------------------------

    def offset_of_valid(self, indices: Sequence[int]) -> int:
        """Return the buffer offset of a full, in-bounds coordinate tuple."""
        return offset_of_valid(self._shape, tuple(indices))

    def try_offset_of_valid(self, indices: Sequence[int]) -> Optional[int]:
        return try_offset_of_valid(self._shape, tuple(indices))

    def offset(self, indices: Sequence[int]) -> int:
        """Return the signed offset of ``indices``; may be negative.

        Fewer indices than the rank address the trailing dimensions.
        """
        return signed_offset(self._shape, tuple(indices))

    # Element access -------------------------------------------------------

    def _key_offset(self, key) -> int:
        if isinstance(key, slice) or (
            isinstance(key, tuple) and any(isinstance(k, slice) for k in key)
        ):
            raise TypeError("DenseGrid does not support slicing")
        if isinstance(key, tuple):
            indices: Tuple[Any, ...] = key
        elif isinstance(key, SequenceABC) and not isinstance(key, (str, bytes)):
            indices = tuple(key)
        elif getattr(key, "ndim", 0) == 1:
            # 1-d numpy coordinate array
            indices = tuple(key.tolist())
        else:
            indices = (key,)
        return offset_of_valid(self._shape, indices)

    def __getitem__(self, key) -> T:
        data = self._live()
        return data[self._key_offset(key)]

    def __setitem__(self, key, value: T) -> None:
        data = self._live()
        data[self._key_offset(key)] = value

    def get(self, indices: Sequence[int], default: Optional[T] = None) -> Optional[T]:
        """Return the value at ``indices`` or ``default`` if they are invalid."""
        data = self._live()
        try:
            return data[self._key_offset(indices)]
        except GridIndexError:
            return default

    def indices(self) -> Iterator[Shape]:
        """Yield every coordinate tuple in buffer order."""
        return iter_indices(self._shape)

    def items(self) -> Iterator[Tuple[Shape, T]]:
        """Yield ``(coordinates, value)`` pairs in buffer order."""
        return zip(self.indices(), self._live())

    # Protocols ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._live())

    def __iter__(self) -> Iterator[T]:
        """Iterate over the flat buffer in row-major order."""
        return iter(self._live())

    def __contains__(self, value: object) -> bool:
        return value in self._live()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseGrid):
            return NotImplemented
        if self._data is None or other._data is None:
            return self is other
        return self._shape == other._shape and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "DenseGrid[T]":
        """Return an independent grid with the same shape and contents."""
        return type(self)(self._live(), self._shape)

    __copy__ = copy

    def __deepcopy__(self, memo) -> "DenseGrid[T]":
        return type(self)(copy.deepcopy(self._live(), memo), self._shape)

    def __repr__(self) -> str:
        if self._data is None:
            return f"DenseGrid(shape={self._shape}, consumed)"
        return f"DenseGrid(shape={self._shape})"


__all__ = ["DenseGrid", "BufferView"]

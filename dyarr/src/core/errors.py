"""Exception types raised for shape and index inconsistencies."""

from __future__ import annotations


class GridError(Exception):
    """Base error for shape or index inconsistencies."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return self.reason


class ShapeError(GridError, ValueError):
    """Raised when a buffer length does not match the requested shape."""


class GridIndexError(GridError, IndexError):
    """Raised when coordinates do not address a cell of the grid."""


__all__ = ["GridError", "ShapeError", "GridIndexError"]

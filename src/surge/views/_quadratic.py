"""
Quadratic References

Concrete non-owning 2-D views. One axis is contiguous; consecutive runs
along it are ``stride`` elements apart, so a view can address a
sub-block of a larger matrix.

Example:
    >>> import numpy as np
    >>> buf = np.arange(12, dtype=np.float64)
    >>> m = QuadraticReference(buf, rows=3, columns=3, stride=4)
    >>> m.row(1).tolist()
    [4.0, 5.0, 6.0]
    >>> m.column(2).tolist()
    [2.0, 6.0, 10.0]
"""

from __future__ import annotations

import operator
from typing import Optional

import numpy as np

from .._dtypes import ensure_buffer
from .._kernel.utils import grid_fits
from ..error import InvalidArgumentError, StrideError, IndexOutOfBoundsError
from ._base import Arrangement, QuadraticType, MutableQuadraticType
from ._linear import LinearReference, MutableLinearReference

__all__ = ['QuadraticReference', 'MutableQuadraticReference']


def _validate(base, rows, columns, stride, arrangement, offset):
    rows = operator.index(rows)
    columns = operator.index(columns)
    offset = operator.index(offset)
    arrangement = Arrangement(arrangement)
    if rows < 0 or columns < 0:
        raise InvalidArgumentError(f"Negative shape ({rows}, {columns})")
    run_length, run_count = (
        (columns, rows) if arrangement == Arrangement.ROW_MAJOR else (rows, columns)
    )
    if stride is None:
        stride = max(1, run_length)
    stride = operator.index(stride)
    if stride < max(1, run_length):
        raise StrideError(
            f"Stride {stride} shorter than contiguous run of {run_length} elements"
        )
    if offset < 0 or not grid_fits(base, offset, run_count, run_length, stride):
        raise IndexOutOfBoundsError(
            f"{rows}x{columns} view (offset={offset}, stride={stride}) "
            f"exceeds buffer of {base.shape[0]} elements"
        )
    return rows, columns, stride, arrangement, offset


class _QuadraticFields:
    """Shared storage and accessors for the concrete quadratic views."""

    __slots__ = ()

    @property
    def base(self) -> np.ndarray:
        return self._base

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def arrangement(self) -> Arrangement:
        return self._arrangement


class QuadraticReference(_QuadraticFields, QuadraticType):
    """
    Read-only 2-D view.

    Args:
        base: 1-D contiguous float32/float64 buffer.
        rows, columns: Logical shape.
        stride: Distance between consecutive runs; defaults to the run
            length (packed storage). Must be at least the run length.
        arrangement: ROW_MAJOR (default) or COLUMN_MAJOR.
        offset: Physical index of element (0, 0).
    """

    _linear_type = LinearReference

    def __init__(
        self,
        base: np.ndarray,
        rows: int,
        columns: int,
        stride: Optional[int] = None,
        arrangement: Arrangement = Arrangement.ROW_MAJOR,
        offset: int = 0,
    ):
        self._base = ensure_buffer(base)
        (self._rows, self._columns, self._stride,
         self._arrangement, self._offset) = _validate(
            self._base, rows, columns, stride, arrangement, offset)


class MutableQuadraticReference(_QuadraticFields, MutableQuadraticType):
    """Writable 2-D view; rows and columns derived from it are writable too."""

    _linear_type = MutableLinearReference

    def __init__(
        self,
        base: np.ndarray,
        rows: int,
        columns: int,
        stride: Optional[int] = None,
        arrangement: Arrangement = Arrangement.ROW_MAJOR,
        offset: int = 0,
    ):
        self._base = ensure_buffer(base, writeable=True)
        (self._rows, self._columns, self._stride,
         self._arrangement, self._offset) = _validate(
            self._base, rows, columns, stride, arrangement, offset)

    def as_readonly(self) -> QuadraticReference:
        return QuadraticReference(self._base, self._rows, self._columns,
                                  self._stride, self._arrangement, self._offset)

"""
Surge Matrix - Owning 2-D Container

A Matrix owns a packed buffer (stride equals the run length) and is a
mutable quadratic view over it.

Usage:
    m = Matrix.from_rows([[1, 2], [3, 4]])
    m[0, 1]                 # -> 2.0
    m.column(1) += 1        # writes through to m
    m.T                     # transposed copy
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .._kernel import vector as kernel_vector
from ..error import InvalidArgumentError
from ._array import aligned_empty, DTypeLike
from ._base import Arrangement, QuadraticType, MutableQuadraticType
from ._linear import MutableLinearReference
from ._quadratic import MutableQuadraticReference

__all__ = ['Matrix']


class Matrix(MutableQuadraticType):
    """
    Owning dense matrix.

    Args:
        rows, columns: Shape.
        elements: Optional flat sequence of ``rows * columns`` values in
            storage order (row by row for ROW_MAJOR).
        arrangement: ROW_MAJOR (default) or COLUMN_MAJOR.
        dtype: Element type; defaults to ``config.default_dtype``.
    """

    _linear_type = MutableLinearReference

    def __init__(
        self,
        rows: int,
        columns: int,
        elements: Optional[Sequence[float]] = None,
        arrangement: Arrangement = Arrangement.ROW_MAJOR,
        dtype: DTypeLike = None,
    ):
        if rows < 0 or columns < 0:
            raise InvalidArgumentError(f"Negative shape ({rows}, {columns})")
        self._rows = int(rows)
        self._columns = int(columns)
        self._arrangement = Arrangement(arrangement)
        self._base = aligned_empty(self._rows * self._columns, dtype)
        if elements is None:
            self._base.fill(0)
        else:
            self.elements.assign(elements)

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def zeros(cls, rows: int, columns: int, dtype: DTypeLike = None,
              arrangement: Arrangement = Arrangement.ROW_MAJOR) -> "Matrix":
        return cls(rows, columns, arrangement=arrangement, dtype=dtype)

    @classmethod
    def identity(cls, n: int, dtype: DTypeLike = None,
                 arrangement: Arrangement = Arrangement.ROW_MAJOR) -> "Matrix":
        m = cls(n, n, arrangement=arrangement, dtype=dtype)
        m.diagonal().fill(1)
        return m

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]], dtype: DTypeLike = None,
                  arrangement: Arrangement = Arrangement.ROW_MAJOR) -> "Matrix":
        """
        Build a matrix from nested row lists.

        Raises:
            InvalidArgumentError: If the rows have different lengths.
        """
        rows = [list(r) for r in rows]
        n_cols = len(rows[0]) if rows else 0
        if any(len(r) != n_cols for r in rows):
            raise InvalidArgumentError("All rows must have the same length")
        m = cls(len(rows), n_cols, arrangement=arrangement, dtype=dtype)
        for i, values in enumerate(rows):
            m.row(i).assign(values)
        return m

    @classmethod
    def from_numpy(cls, array: np.ndarray,
                   arrangement: Arrangement = Arrangement.ROW_MAJOR) -> "Matrix":
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidArgumentError(f"Expected 2-D array, got ndim={array.ndim}")
        m = cls(array.shape[0], array.shape[1], arrangement=arrangement, dtype=array.dtype)
        m.to_numpy()[...] = array
        return m

    @classmethod
    def copy_of(cls, view: QuadraticType) -> "Matrix":
        """Packed copy of any quadratic view, keeping its arrangement and type."""
        m = cls(view.rows, view.columns, arrangement=view.arrangement, dtype=view.dtype)
        for src, dst in zip(view.major_runs(), m.major_runs()):
            kernel_vector.vcopy(src.base, src.start, src.step,
                                dst.base, dst.start, dst.step, src.count)
        return m

    # =========================================================================
    # View Protocol
    # =========================================================================

    @property
    def base(self) -> np.ndarray:
        return self._base

    @property
    def offset(self) -> int:
        return 0

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def stride(self) -> int:
        return max(1, self.run_length)

    @property
    def arrangement(self) -> Arrangement:
        return self._arrangement

    # =========================================================================
    # Container Methods
    # =========================================================================

    @property
    def elements(self) -> MutableLinearReference:
        """All elements in storage order as one contiguous view."""
        return MutableLinearReference(self._base, 0, self._base.shape[0], 1)

    def diagonal(self) -> MutableLinearReference:
        n = min(self._rows, self._columns)
        return MutableLinearReference(self._base, 0, n, self.stride + 1)

    def view(self) -> MutableQuadraticReference:
        return MutableQuadraticReference(self._base, self._rows, self._columns,
                                         self.stride, self._arrangement)

    def copy(self) -> "Matrix":
        return Matrix.copy_of(self)

    def fill(self, value) -> None:
        self._base.fill(value)

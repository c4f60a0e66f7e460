"""
View Base Classes

Abstract base classes for the Surge view type system. A view is a
non-owning descriptor over a flat numpy buffer: it never allocates,
copies or frees the buffer, it only computes physical offsets into it.

Type Hierarchy:

    LinearType (ABC)                  # readable strided sequence
    └── MutableLinearType (ABC)       # writable strided sequence
        ├── MutableLinearReference
        └── ValueArray                # owning container
    LinearType
    └── LinearReference

    QuadraticType (ABC)               # readable 2-D grid
    └── MutableQuadraticType (ABC)    # writable 2-D grid
        ├── MutableQuadraticReference
        └── Matrix                    # owning container
    QuadraticType
    └── QuadraticReference

Addressing:

    Linear:     physical(i)    = start + i * step,  0 <= i < count
    Quadratic:  physical(i, j) = offset + i * stride + j   (ROW_MAJOR)
                physical(i, j) = offset + j * stride + i   (COLUMN_MAJOR)

Lifetime:
    A view keeps a reference to its buffer but does not manage it. Two
    mutable views over overlapping ranges alias each other; writing
    through both from different threads without external
    synchronization is undefined.
"""

from __future__ import annotations

import numbers
import operator
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from .._config import config
from .._kernel import vector as kernel_vector
from .._kernel.utils import span, grid
from ..error import IndexOutOfBoundsError, DimensionMismatchError, require

__all__ = [
    'Arrangement',
    'ROW_MAJOR',
    'COLUMN_MAJOR',
    'LinearType',
    'MutableLinearType',
    'QuadraticType',
    'MutableQuadraticType',
]


class Arrangement(IntEnum):
    """Layout of a 2-D view. Values are the CBLAS order flags."""
    ROW_MAJOR = 101
    COLUMN_MAJOR = 102


ROW_MAJOR = Arrangement.ROW_MAJOR
COLUMN_MAJOR = Arrangement.COLUMN_MAJOR


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_index(index, count: int) -> int:
    index = operator.index(index)
    if config.check.bounds and not 0 <= index < count:
        raise IndexOutOfBoundsError(f"Index {index} out of bounds [0, {count})")
    return index


def _check_target_range(key: slice, count: int) -> None:
    # Assignment never clamps: explicit bounds must lie within [0, count]
    for bound in (key.start, key.stop):
        if bound is not None:
            bound = operator.index(bound)
            require(0 <= bound <= count,
                    f"Target range bound {bound} outside of [0, {count}]",
                    IndexOutOfBoundsError)


def _split_key(key) -> Tuple[int, int]:
    require(isinstance(key, tuple) and len(key) == 2,
            f"Matrix index must be a (row, column) pair, got {key!r}")
    return key


# =============================================================================
# Linear (1-D) Views
# =============================================================================

class LinearType(ABC):
    """
    Readable strided sequence.

    Required Properties (subclasses must implement):
        base: Flat numpy buffer the view reads from
        start: Physical offset of logical element 0
        end: start + count
        step: Physical distance between consecutive elements (non-zero)

    Required Methods:
        _derive(start, end, step): Same kind of view over the same buffer
    """

    # Defer numpy binary operators to the reflected methods below
    __array_ufunc__ = None

    @property
    @abstractmethod
    def base(self) -> np.ndarray:
        ...

    @property
    @abstractmethod
    def start(self) -> int:
        ...

    @property
    @abstractmethod
    def end(self) -> int:
        ...

    @property
    @abstractmethod
    def step(self) -> int:
        ...

    @abstractmethod
    def _derive(self, start: int, end: int, step: int) -> "LinearType":
        ...

    # =========================================================================
    # Derived Properties
    # =========================================================================

    @property
    def count(self) -> int:
        """Number of logical elements."""
        return self.end - self.start

    @property
    def dtype(self) -> np.dtype:
        return self.base.dtype

    @property
    def is_contiguous(self) -> bool:
        return self.step == 1

    def physical_index(self, index: int) -> int:
        """Physical offset of logical ``index`` in ``base``."""
        return self.start + index * self.step

    def __len__(self) -> int:
        return self.count

    # =========================================================================
    # Element Access
    # =========================================================================

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.subview_for(index)
        index = _check_index(index, self.count)
        return self.base[self.physical_index(index)]

    def __iter__(self) -> Iterator:
        base = self.base
        for i in range(self.count):
            yield base[self.start + i * self.step]

    def subview(self, lo: int, hi: int) -> "LinearType":
        """
        View of logical elements ``[lo, hi)`` over the same buffer.

        Raises:
            IndexOutOfBoundsError: If the range leaves ``[0, count]``.
        """
        if not 0 <= lo <= hi <= self.count:
            raise IndexOutOfBoundsError(
                f"Range [{lo}, {hi}) outside of [0, {self.count})"
            )
        start = self.physical_index(lo)
        return self._derive(start, start + (hi - lo), self.step)

    def subview_for(self, key: slice) -> "LinearType":
        """View selected by a Python slice; the slice step multiplies ``step``."""
        selected = range(self.count)[key]
        start = self.physical_index(selected.start) if len(selected) else self.start
        return self._derive(start, start + len(selected), self.step * selected.step)

    def to_numpy(self) -> np.ndarray:
        """Strided numpy view aliasing the buffer (read-only for this class)."""
        view = span(self.base, self.start, self.step, self.count)
        view.flags.writeable = False
        return view

    def tolist(self) -> List:
        return [float(x) for x in self]

    # =========================================================================
    # Comparison
    # =========================================================================

    def __eq__(self, other) -> bool:
        if isinstance(other, LinearType):
            if other.count != self.count:
                return False
            return all(a == b for a, b in zip(self, other))
        if isinstance(other, (list, tuple)):
            return len(other) == self.count and all(a == b for a, b in zip(self, other))
        return NotImplemented

    def __repr__(self) -> str:
        values = self.tolist()
        if len(values) > 6:
            values = values[:3] + ['...'] + values[-3:]
        return (
            f"{type(self).__name__}({values}, start={self.start}, "
            f"step={self.step}, dtype={self.dtype})"
        )

    # =========================================================================
    # Operators (delegate to surge.math)
    # =========================================================================

    def __add__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            return arithmetic.add(self, other)
        if _is_scalar(other):
            return arithmetic.add_scalar(self, other)
        return NotImplemented

    def __radd__(self, other):
        if _is_scalar(other):
            from ..math import arithmetic
            return arithmetic.add_scalar(self, other)
        return NotImplemented

    def __sub__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            return arithmetic.sub(self, other)
        if _is_scalar(other):
            return arithmetic.sub_scalar(self, other)
        return NotImplemented

    def __rsub__(self, other):
        if _is_scalar(other):
            from ..math import arithmetic
            return arithmetic.scalar_sub(other, self)
        return NotImplemented

    def __neg__(self):
        from ..math import arithmetic
        return arithmetic.scalar_sub(0.0, self)

    def __mul__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            return arithmetic.mul(self, other)
        if _is_scalar(other):
            return arithmetic.mul_scalar(self, other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            from ..math import arithmetic
            return arithmetic.mul_scalar(self, other)
        return NotImplemented

    def __truediv__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            return arithmetic.div(self, other)
        if _is_scalar(other):
            return arithmetic.div_scalar(self, other)
        return NotImplemented

    def __rtruediv__(self, other):
        if _is_scalar(other):
            from ..math import arithmetic
            return arithmetic.scalar_div(other, self)
        return NotImplemented

    def __mod__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType) or _is_scalar(other):
            return arithmetic.mod(self, other)
        return NotImplemented

    def __matmul__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            return arithmetic.dot(self, other)
        return NotImplemented


class MutableLinearType(LinearType):
    """
    Writable strided sequence.

    Reads and writes share ``physical_index``, so a write at logical index
    ``i`` is observed by the next read at ``i`` through any view aliasing
    the same physical offset.
    """

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            _check_target_range(index, self.count)
            self.subview_for(index).assign(value)
            return
        index = _check_index(index, self.count)
        self.base[self.physical_index(index)] = value

    def assign(self, values) -> None:
        """
        Write ``values`` element by element into this view.

        Args:
            values: A linear view or a sequence with exactly ``count`` items.

        Raises:
            DimensionMismatchError: If the lengths differ.
        """
        if isinstance(values, LinearType):
            if values.count != self.count:
                raise DimensionMismatchError(
                    f"Cannot assign {values.count} elements to a view of {self.count}"
                )
            kernel_vector.vcopy(values.base, values.start, values.step,
                                self.base, self.start, self.step, self.count)
            return
        values = np.asarray(values, dtype=self.dtype)
        if values.ndim == 0:
            kernel_vector.vfill(values, self.base, self.start, self.step, self.count)
            return
        if values.shape != (self.count,):
            raise DimensionMismatchError(
                f"Cannot assign {values.shape[0]} elements to a view of {self.count}"
            )
        span(self.base, self.start, self.step, self.count)[...] = values

    def fill(self, value) -> None:
        kernel_vector.vfill(value, self.base, self.start, self.step, self.count)

    def to_numpy(self) -> np.ndarray:
        """Writable strided numpy view aliasing the buffer."""
        return span(self.base, self.start, self.step, self.count)

    # =========================================================================
    # In-place Operators
    # =========================================================================

    def __iadd__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            arithmetic.add_in_place(self, other)
        elif _is_scalar(other):
            arithmetic.add_scalar_in_place(self, other)
        else:
            return NotImplemented
        return self

    def __isub__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            arithmetic.sub_in_place(self, other)
        elif _is_scalar(other):
            arithmetic.sub_scalar_in_place(self, other)
        else:
            return NotImplemented
        return self

    def __imul__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            arithmetic.mul_in_place(self, other)
        elif _is_scalar(other):
            arithmetic.mul_scalar_in_place(self, other)
        else:
            return NotImplemented
        return self

    def __itruediv__(self, other):
        from ..math import arithmetic
        if isinstance(other, LinearType):
            arithmetic.div_in_place(self, other)
        elif _is_scalar(other):
            arithmetic.div_scalar_in_place(self, other)
        else:
            return NotImplemented
        return self


# =============================================================================
# Quadratic (2-D) Views
# =============================================================================

class QuadraticType(ABC):
    """
    Readable 2-D grid with one contiguous axis.

    Required Properties (subclasses must implement):
        base: Flat numpy buffer
        offset: Physical offset of element (0, 0)
        rows, columns: Logical shape
        stride: Physical distance between consecutive major-axis runs
        arrangement: ROW_MAJOR (rows contiguous) or COLUMN_MAJOR

    Row and column views are derived on demand and alias ``base``.
    """

    __array_ufunc__ = None

    # Linear view class returned by row()/column()
    _linear_type: type = None

    @property
    @abstractmethod
    def base(self) -> np.ndarray:
        ...

    @property
    @abstractmethod
    def offset(self) -> int:
        ...

    @property
    @abstractmethod
    def rows(self) -> int:
        ...

    @property
    @abstractmethod
    def columns(self) -> int:
        ...

    @property
    @abstractmethod
    def stride(self) -> int:
        ...

    @property
    @abstractmethod
    def arrangement(self) -> Arrangement:
        ...

    # =========================================================================
    # Derived Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.columns)

    @property
    def dtype(self) -> np.dtype:
        return self.base.dtype

    @property
    def size(self) -> int:
        return self.rows * self.columns

    @property
    def is_row_major(self) -> bool:
        return self.arrangement == Arrangement.ROW_MAJOR

    @property
    def run_length(self) -> int:
        """Elements per contiguous run (columns if row-major)."""
        return self.columns if self.is_row_major else self.rows

    @property
    def run_count(self) -> int:
        """Number of contiguous runs (rows if row-major)."""
        return self.rows if self.is_row_major else self.columns

    @property
    def is_contiguous(self) -> bool:
        """Whether runs are packed back to back (stride == run_length)."""
        return self.stride == self.run_length

    def physical_index(self, row: int, column: int) -> int:
        if self.is_row_major:
            return self.offset + row * self.stride + column
        return self.offset + column * self.stride + row

    # =========================================================================
    # Row / Column Views
    # =========================================================================

    def row(self, index: int) -> LinearType:
        """
        Linear view of row ``index``.

        Contiguous (step 1) for ROW_MAJOR, stepping by ``stride`` otherwise.
        """
        index = operator.index(index)
        if not 0 <= index < self.rows:
            raise IndexOutOfBoundsError(f"Row {index} out of bounds [0, {self.rows})")
        if self.is_row_major:
            return self._linear(self.offset + index * self.stride, self.columns, 1)
        return self._linear(self.offset + index, self.columns, self.stride)

    def column(self, index: int) -> LinearType:
        """
        Linear view of column ``index``.

        Contiguous (step 1) for COLUMN_MAJOR, stepping by ``stride`` otherwise.
        """
        index = operator.index(index)
        if not 0 <= index < self.columns:
            raise IndexOutOfBoundsError(f"Column {index} out of bounds [0, {self.columns})")
        if self.is_row_major:
            return self._linear(self.offset + index, self.rows, self.stride)
        return self._linear(self.offset + index * self.stride, self.rows, 1)

    def _linear(self, start: int, count: int, step: int) -> LinearType:
        return self._linear_type(self.base, start, start + count, step)

    def major_runs(self) -> Iterator[LinearType]:
        """Iterate over the contiguous runs (rows if row-major, else columns)."""
        accessor = self.row if self.is_row_major else self.column
        for i in range(self.run_count):
            yield accessor(i)

    def rows_iter(self) -> Iterator[LinearType]:
        for i in range(self.rows):
            yield self.row(i)

    def columns_iter(self) -> Iterator[LinearType]:
        for j in range(self.columns):
            yield self.column(j)

    # =========================================================================
    # Element Access
    # =========================================================================

    def __getitem__(self, key):
        row, column = _split_key(key)
        row = _check_index(row, self.rows)
        column = _check_index(column, self.columns)
        return self.base[self.physical_index(row, column)]

    def to_numpy(self) -> np.ndarray:
        """2-D numpy view aliasing the buffer (read-only for this class)."""
        return grid(self.base, self.offset, self.rows, self.columns, self.stride,
                    column_major=not self.is_row_major)

    def tolist(self) -> List[List[float]]:
        return [[float(self[i, j]) for j in range(self.columns)] for i in range(self.rows)]

    # =========================================================================
    # Comparison
    # =========================================================================

    def __eq__(self, other) -> bool:
        if isinstance(other, QuadraticType):
            if other.shape != self.shape:
                return False
            return all(
                self[i, j] == other[i, j]
                for i in range(self.rows)
                for j in range(self.columns)
            )
        if isinstance(other, (list, tuple)):
            return self.tolist() == [list(r) for r in other]
        return NotImplemented

    def __repr__(self) -> str:
        order = "row" if self.is_row_major else "column"
        return (
            f"{type(self).__name__}({self.tolist()}, {order}-major, "
            f"stride={self.stride}, dtype={self.dtype})"
        )

    # =========================================================================
    # Operators (delegate to surge.math.linalg)
    # =========================================================================

    @property
    def T(self):
        from ..math import linalg
        return linalg.transpose(self)

    def __add__(self, other):
        from ..math import linalg
        if isinstance(other, QuadraticType):
            return linalg.add(self, other)
        return NotImplemented

    def __sub__(self, other):
        from ..math import linalg
        if isinstance(other, QuadraticType):
            return linalg.sub(self, other)
        return NotImplemented

    def __mul__(self, other):
        from ..math import linalg
        if isinstance(other, QuadraticType):
            return linalg.multiply(self, other)
        if _is_scalar(other):
            return linalg.scale(other, self)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            from ..math import linalg
            return linalg.scale(other, self)
        return NotImplemented

    def __matmul__(self, other):
        from ..math import linalg
        if isinstance(other, QuadraticType):
            return linalg.multiply(self, other)
        return NotImplemented


class MutableQuadraticType(QuadraticType):
    """Writable 2-D grid."""

    def __setitem__(self, key, value):
        row, column = _split_key(key)
        row = _check_index(row, self.rows)
        column = _check_index(column, self.columns)
        self.base[self.physical_index(row, column)] = value

    def to_numpy(self) -> np.ndarray:
        """Writable 2-D numpy view aliasing the buffer."""
        return grid(self.base, self.offset, self.rows, self.columns, self.stride,
                    column_major=not self.is_row_major, writeable=True)

    def __iadd__(self, other):
        from ..math import linalg
        if isinstance(other, QuadraticType):
            linalg.add_in_place(self, other)
            return self
        return NotImplemented

    def __isub__(self, other):
        from ..math import linalg
        if isinstance(other, QuadraticType):
            linalg.sub_in_place(self, other)
            return self
        return NotImplemented

    def __imul__(self, other):
        from ..math import linalg
        if isinstance(other, QuadraticType):
            linalg.multiply_in_place(self, other)
        elif _is_scalar(other):
            linalg.scale_in_place(self, other)
        else:
            return NotImplemented
        return self

"""
Complex Interleaved Views

Complex values are stored as interleaved (real, imaginary) pairs in a
plain float buffer: ``[re0, im0, re1, im1, ...]``. A ComplexArraySlice
addresses complex element ``i`` at physical offsets ``2 * p`` and
``2 * p + 1`` where ``p = start + i * step``.

The ``reals`` and ``imags`` projections are ordinary mutable linear
views with step ``2 * step``. They cover the even and odd offsets
respectively, so writing one never touches the other.

Example:
    >>> c = ComplexArray.from_list([1 + 2j, 3 + 4j])
    >>> c.reals.tolist()
    [1.0, 3.0]
    >>> c.imags += 1
    >>> c[1]
    (3+5j)
"""

from __future__ import annotations

import operator
from typing import Iterable, Iterator, List

import numpy as np

from .._dtypes import ensure_buffer
from .._kernel.utils import span, span_fits
from .._config import config
from ..error import (
    DimensionMismatchError,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    StrideError,
)
from ._array import aligned_empty, DTypeLike
from ._base import _check_target_range
from ._linear import MutableLinearReference

__all__ = ['ComplexArraySlice', 'ComplexArray']


class ComplexArraySlice:
    """
    Mutable strided view over complex elements of an interleaved buffer.

    Args:
        base: Interleaved float32/float64 buffer (even length).
        start: Complex index of logical element 0.
        end: start + count.
        step: Complex-element step, non-zero.
    """

    __array_ufunc__ = None

    def __init__(self, base: np.ndarray, start: int, end: int, step: int = 1):
        base = ensure_buffer(base, writeable=True)
        if base.shape[0] % 2:
            raise InvalidArgumentError(
                f"Interleaved buffer needs an even length, got {base.shape[0]}"
            )
        start, end, step = operator.index(start), operator.index(end), operator.index(step)
        if step == 0:
            raise StrideError("Slice step must be non-zero")
        if end < start:
            raise InvalidArgumentError(f"Slice end ({end}) precedes start ({start})")
        if not span_fits(base, 2 * start, 2 * step, end - start) or \
                not span_fits(base, 2 * start + 1, 2 * step, end - start):
            raise IndexOutOfBoundsError(
                f"Complex slice (start={start}, count={end - start}, step={step}) "
                f"exceeds buffer of {base.shape[0] // 2} complex elements"
            )
        self._base = base
        self._start = start
        self._end = end
        self._step = step

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def base(self) -> np.ndarray:
        return self._base

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def step(self) -> int:
        return self._step

    @property
    def count(self) -> int:
        return self._end - self._start

    @property
    def dtype(self) -> np.dtype:
        return self._base.dtype

    def __len__(self) -> int:
        return self.count

    def _physical(self, index: int) -> int:
        return 2 * (self._start + index * self._step)

    def _check(self, index) -> int:
        index = operator.index(index)
        if config.check.bounds and not 0 <= index < self.count:
            raise IndexOutOfBoundsError(f"Index {index} out of bounds [0, {self.count})")
        return index

    # =========================================================================
    # Projections
    # =========================================================================

    @property
    def reals(self) -> MutableLinearReference:
        """Real parts: physical start ``2*start``, step ``2*step``."""
        first = 2 * self._start
        return MutableLinearReference(self._base, first, first + self.count, 2 * self._step)

    @reals.setter
    def reals(self, values) -> None:
        self._assign_projection(self.reals, values)

    @property
    def imags(self) -> MutableLinearReference:
        """Imaginary parts: physical start ``2*start + 1``, step ``2*step``."""
        first = 2 * self._start + 1
        return MutableLinearReference(self._base, first, first + self.count, 2 * self._step)

    @imags.setter
    def imags(self, values) -> None:
        self._assign_projection(self.imags, values)

    def _assign_projection(self, projection: MutableLinearReference, values) -> None:
        # `c.reals += 1` rebinds the property to the same (already updated) view
        if isinstance(values, MutableLinearReference) and values.base is self._base \
                and values.start == projection.start and values.step == projection.step \
                and values.count == projection.count:
            return
        if len(values) != projection.count:
            raise DimensionMismatchError(
                f"Cannot assign {len(values)} values to a projection of {projection.count}"
            )
        projection.assign(values)

    # =========================================================================
    # Element Access
    # =========================================================================

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._subslice_for(index)
        p = self._physical(self._check(index))
        return complex(self._base[p], self._base[p + 1])

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            _check_target_range(index, self.count)
            self._subslice_for(index).assign(value)
            return
        p = self._physical(self._check(index))
        value = complex(value)
        self._base[p] = value.real
        self._base[p + 1] = value.imag

    def __iter__(self) -> Iterator[complex]:
        base = self._base
        for i in range(self.count):
            p = self._physical(i)
            yield complex(base[p], base[p + 1])

    def slice(self, lo: int = 0, hi: int = None) -> "ComplexArraySlice":
        """
        Slice over logical elements ``[lo, hi)``.

        Raises:
            IndexOutOfBoundsError: If the range is not within ``[0, count]``.
        """
        if hi is None:
            hi = self.count
        if not 0 <= lo <= hi <= self.count:
            raise IndexOutOfBoundsError(f"Range [{lo}, {hi}) outside of [0, {self.count})")
        first = self._start + lo * self._step
        return ComplexArraySlice(self._base, first, first + (hi - lo), self._step)

    def _subslice_for(self, key: slice) -> "ComplexArraySlice":
        selected = range(self.count)[key]
        first = self._start + selected.start * self._step if len(selected) else self._start
        return ComplexArraySlice(self._base, first, first + len(selected),
                                 self._step * selected.step)

    def assign(self, values: Iterable[complex]) -> None:
        """
        Write exactly ``count`` complex values, in order.

        Raises:
            DimensionMismatchError: If the number of values differs.
        """
        values = list(values)
        if len(values) != self.count:
            raise DimensionMismatchError(
                f"Cannot assign {len(values)} values to a slice of {self.count}"
            )
        for i, value in enumerate(values):
            self[i] = value

    # =========================================================================
    # Conversion / Comparison
    # =========================================================================

    def to_numpy(self) -> np.ndarray:
        """Complex numpy view aliasing the interleaved buffer."""
        complex_dtype = np.complex64 if self.dtype == np.float32 else np.complex128
        return span(self._base.view(complex_dtype), self._start, self._step, self.count)

    def tolist(self) -> List[complex]:
        return list(self)

    def __eq__(self, other) -> bool:
        if isinstance(other, ComplexArraySlice):
            return other.count == self.count and all(a == b for a, b in zip(self, other))
        if isinstance(other, (list, tuple)):
            return len(other) == self.count and all(a == b for a, b in zip(self, other))
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tolist()}, dtype={self.dtype})"


class ComplexArray(ComplexArraySlice):
    """
    Owning interleaved complex array.

    Holds ``2 * count`` reals. Indexing returns Python ``complex``; slicing
    returns a ComplexArraySlice over the same storage.
    """

    def __init__(self, count: int = 0, dtype: DTypeLike = None):
        buffer = aligned_empty(2 * count, dtype)
        buffer.fill(0)
        super().__init__(buffer, 0, count, 1)

    @classmethod
    def from_list(cls, values: Iterable[complex], dtype: DTypeLike = None) -> "ComplexArray":
        values = [complex(v) for v in values]
        arr = cls(len(values), dtype)
        arr.reals.assign([v.real for v in values])
        arr.imags.assign([v.imag for v in values])
        return arr

    @classmethod
    def from_parts(cls, reals, imags, dtype: DTypeLike = None) -> "ComplexArray":
        """Build from separate real and imaginary sequences of equal length."""
        if len(reals) != len(imags):
            raise DimensionMismatchError(
                f"Real and imaginary parts differ in length: {len(reals)} vs {len(imags)}"
            )
        arr = cls(len(reals), dtype)
        arr.reals = reals
        arr.imags = imags
        return arr

    def copy(self) -> "ComplexArray":
        return ComplexArray.from_list(self, dtype=self.dtype)

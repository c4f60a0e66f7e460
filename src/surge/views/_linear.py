"""
Linear References

Concrete non-owning 1-D views over a caller-supplied numpy buffer.

Example:
    >>> import numpy as np
    >>> buf = np.arange(10, dtype=np.float64)
    >>> evens = LinearReference(buf, start=0, end=5, step=2)
    >>> evens.tolist()
    [0.0, 2.0, 4.0, 6.0, 8.0]
"""

from __future__ import annotations

import operator

import numpy as np

from .._dtypes import ensure_buffer
from .._kernel.utils import span_fits
from ..error import StrideError, IndexOutOfBoundsError, require
from ._base import LinearType, MutableLinearType

__all__ = ['LinearReference', 'MutableLinearReference']


def _validate(base: np.ndarray, start, end, step):
    start = operator.index(start)
    end = operator.index(end)
    step = operator.index(step)
    require(step != 0, "View step must be non-zero", StrideError)
    require(end >= start, f"View end ({end}) precedes start ({start})")
    if not span_fits(base, start, step, end - start):
        raise IndexOutOfBoundsError(
            f"View (start={start}, count={end - start}, step={step}) "
            f"exceeds buffer of {base.shape[0]} elements"
        )
    return start, end, step


class LinearReference(LinearType):
    """
    Read-only strided view.

    Args:
        base: 1-D contiguous float32/float64 buffer.
        start: Physical offset of logical element 0.
        end: start + count.
        step: Physical distance between elements, non-zero (may be negative).

    Raises:
        StrideError: If step is 0.
        IndexOutOfBoundsError: If any addressed element lies outside ``base``.
    """

    __slots__ = ('_base', '_start', '_end', '_step')

    def __init__(self, base: np.ndarray, start: int, end: int, step: int = 1):
        self._base = ensure_buffer(base)
        self._start, self._end, self._step = _validate(self._base, start, end, step)

    @classmethod
    def over(cls, base: np.ndarray) -> "LinearReference":
        """View covering the whole buffer with unit step."""
        return cls(base, 0, base.shape[0], 1)

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

    def _derive(self, start: int, end: int, step: int) -> "LinearReference":
        return LinearReference(self._base, start, end, step)


class MutableLinearReference(MutableLinearType):
    """
    Writable strided view.

    Same addressing as :class:`LinearReference`; the buffer must be
    writeable.
    """

    __slots__ = ('_base', '_start', '_end', '_step')

    def __init__(self, base: np.ndarray, start: int, end: int, step: int = 1):
        self._base = ensure_buffer(base, writeable=True)
        self._start, self._end, self._step = _validate(self._base, start, end, step)

    @classmethod
    def over(cls, base: np.ndarray) -> "MutableLinearReference":
        return cls(base, 0, base.shape[0], 1)

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

    def _derive(self, start: int, end: int, step: int) -> "MutableLinearReference":
        return MutableLinearReference(self._base, start, end, step)

    def as_readonly(self) -> LinearReference:
        return LinearReference(self._base, self._start, self._end, self._step)

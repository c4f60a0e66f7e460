"""
Surge ValueArray - Owning 1-D Container

A ValueArray owns a contiguous, aligned buffer and is itself a mutable
linear view with start 0 and step 1, so it can be passed anywhere a view
is accepted. Slicing it yields a MutableLinearReference over the same
buffer.

Usage:
    arr = ValueArray.zeros(100)        # 100 float64 zeros
    arr[0] = 1.5                       # Set value
    arr[::2]                           # Every other element, no copy
    arr.to_numpy()                     # numpy view of the storage
"""

from __future__ import annotations

from typing import Iterable, List, Union

import numpy as np

from .._config import config
from .._dtypes import DType, to_numpy_dtype
from .._kernel import vector as kernel_vector
from ..error import InvalidArgumentError
from ._base import LinearType, MutableLinearType
from ._linear import MutableLinearReference
from ._quadratic import MutableQuadraticReference

__all__ = ['ValueArray', 'aligned_empty']


DTypeLike = Union[str, DType, np.dtype, type, None]


def _resolve_dtype(dtype: DTypeLike) -> np.dtype:
    return to_numpy_dtype(config.default_dtype if dtype is None else dtype)


def aligned_empty(size: int, dtype: DTypeLike = None) -> np.ndarray:
    """
    Allocate an uninitialized 1-D buffer aligned to ``config.memory.alignment``.

    The buffer is carved out of a slightly larger byte array; numpy keeps
    the byte array alive through the returned view's ``base``.
    """
    if size < 0:
        raise InvalidArgumentError(f"Size must be non-negative, got {size}")
    dtype = _resolve_dtype(dtype)
    alignment = config.memory.alignment
    nbytes = size * dtype.itemsize
    raw = np.empty(nbytes + alignment, dtype=np.uint8)
    shift = (-raw.ctypes.data) % alignment
    return raw[shift:shift + nbytes].view(dtype)


class ValueArray(MutableLinearType):
    """
    Owning contiguous array of float32 or float64 values.

    Attributes:
        base: The owned numpy buffer (exactly ``count`` elements).
    """

    __slots__ = ('_base',)

    def __init__(self, size: int = 0, dtype: DTypeLike = None):
        """
        Allocate ``size`` zero-initialized elements.

        Args:
            size: Number of elements.
            dtype: Element type; defaults to ``config.default_dtype``.
        """
        self._base = aligned_empty(size, dtype)
        self._base.fill(0)

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def zeros(cls, size: int, dtype: DTypeLike = None) -> "ValueArray":
        return cls(size, dtype)

    @classmethod
    def repeated(cls, value: float, size: int, dtype: DTypeLike = None) -> "ValueArray":
        """Array of ``size`` copies of ``value``."""
        arr = cls(size, dtype)
        arr.fill(value)
        return arr

    @classmethod
    def from_list(cls, values: Iterable[float], dtype: DTypeLike = None) -> "ValueArray":
        values = np.asarray(list(values), dtype=_resolve_dtype(dtype))
        arr = cls(values.shape[0], values.dtype)
        arr._base[...] = values
        return arr

    @classmethod
    def from_view(cls, view: LinearType) -> "ValueArray":
        """Contiguous copy of any linear view, same element type."""
        arr = cls(view.count, view.dtype)
        kernel_vector.vcopy(view.base, view.start, view.step, arr._base, 0, 1, view.count)
        return arr

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "ValueArray":
        """Copy a 1-D numpy array into a new aligned ValueArray."""
        array = np.asarray(array)
        if array.ndim != 1:
            raise InvalidArgumentError(f"Expected 1-D array, got ndim={array.ndim}")
        arr = cls(array.shape[0], array.dtype)
        arr._base[...] = array
        return arr

    # =========================================================================
    # View Protocol
    # =========================================================================

    @property
    def base(self) -> np.ndarray:
        return self._base

    @property
    def start(self) -> int:
        return 0

    @property
    def end(self) -> int:
        return self._base.shape[0]

    @property
    def step(self) -> int:
        return 1

    def _derive(self, start: int, end: int, step: int) -> MutableLinearReference:
        return MutableLinearReference(self._base, start, end, step)

    # =========================================================================
    # Container Methods
    # =========================================================================

    @property
    def nbytes(self) -> int:
        return self._base.nbytes

    @property
    def data_ptr(self) -> int:
        """Address of the first element."""
        return self._base.ctypes.data

    def __bool__(self) -> bool:
        return self.count > 0

    def copy(self) -> "ValueArray":
        return ValueArray.from_view(self)

    def view(self) -> MutableLinearReference:
        """Mutable reference covering the whole array."""
        return MutableLinearReference(self._base, 0, self.count, 1)

    def tolist(self) -> List[float]:
        return self._base.tolist()

    def to_row_matrix(self) -> MutableQuadraticReference:
        """1 x n matrix view over this array's storage (no copy)."""
        return MutableQuadraticReference(self._base, 1, self.count)

    def to_column_matrix(self) -> MutableQuadraticReference:
        """n x 1 matrix view over this array's storage (no copy)."""
        return MutableQuadraticReference(self._base, self.count, 1)

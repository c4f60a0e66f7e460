"""
Data Type Definitions

Element types accepted by views and kernels, plus buffer validation.
"""

from enum import Enum
from typing import Union

import numpy as np

from .error import TypeMismatchError, InvalidArgumentError

__all__ = [
    'DType', 'float32', 'float64',
    'normalize_dtype', 'to_numpy_dtype', 'precision_of',
    'ensure_buffer', 'ensure_same_dtype',
]


class DType(Enum):
    """
    Surge element type enumeration.

    Example:
        >>> from surge import DType, ValueArray
        >>> arr = ValueArray.zeros(100, dtype=DType.float32)
        >>>
        >>> # Or use module-level constants
        >>> import surge
        >>> arr = ValueArray.zeros(100, dtype=surge.float32)
    """

    float32 = 'float32'
    float64 = 'float64'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"


# =============================================================================
# Module-Level Constants (For Clean Syntax)
# =============================================================================

float32 = DType.float32
float64 = DType.float64


_PRECISION = {
    'float32': 'f32',
    'float64': 'f64',
}


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType, np.dtype, type]) -> str:
    """
    Normalize dtype to its string name.

    Example:
        >>> normalize_dtype(DType.float32)
        'float32'
        >>> normalize_dtype(np.float64)
        'float64'
    """
    if isinstance(dtype, DType):
        name = dtype.value
    elif isinstance(dtype, str):
        name = dtype
    else:
        try:
            name = np.dtype(dtype).name
        except TypeError:
            raise TypeMismatchError(f"dtype must be str, DType or numpy dtype, got {type(dtype)}")

    if name not in _PRECISION:
        raise TypeMismatchError(
            f"Unsupported dtype: {name}. Supported: {list(_PRECISION)}"
        )
    return name


def to_numpy_dtype(dtype: Union[str, DType, np.dtype, type]) -> np.dtype:
    return np.dtype(normalize_dtype(dtype))


def precision_of(dtype: Union[str, DType, np.dtype, type]) -> str:
    """Kernel precision tag ('f32' or 'f64') for an element type."""
    return _PRECISION[normalize_dtype(dtype)]


def ensure_buffer(buffer, writeable: bool = False) -> np.ndarray:
    """
    Validate a raw buffer handed to a view.

    A buffer is a one-dimensional C-contiguous numpy array of a supported
    floating point type. It is returned unchanged: views never copy.

    Raises:
        TypeMismatchError: Not an ndarray, or unsupported element type.
        InvalidArgumentError: Not 1-D, not contiguous, or read-only when
            a writeable buffer is required.
    """
    if not isinstance(buffer, np.ndarray):
        raise TypeMismatchError(
            f"View buffer must be a numpy.ndarray, got {type(buffer).__name__}"
        )
    normalize_dtype(buffer.dtype)
    if buffer.ndim != 1:
        raise InvalidArgumentError(f"View buffer must be 1-D, got ndim={buffer.ndim}")
    if not buffer.flags.c_contiguous:
        raise InvalidArgumentError("View buffer must be contiguous")
    if writeable and not buffer.flags.writeable:
        raise InvalidArgumentError("Mutable view requires a writeable buffer")
    return buffer


def ensure_same_dtype(*buffers: np.ndarray) -> np.dtype:
    """Return the shared dtype of ``buffers`` or raise TypeMismatchError."""
    dtype = buffers[0].dtype
    for buf in buffers[1:]:
        if buf.dtype != dtype:
            raise TypeMismatchError(
                f"Operands have different element types: {dtype} and {buf.dtype}"
            )
    return dtype

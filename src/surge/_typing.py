"""
Surge Type Definitions and Input Coercion.

This module provides type aliases and conversion helpers so the math
functions accept more than view objects:

    - Surge views and containers (returned as-is, never copied)
    - NumPy arrays (1-D contiguous arrays are wrapped without a copy)
    - Python sequences (copied into an owning container)

Example:
    >>> from surge._typing import LinearInput, ensure_linear
    >>>
    >>> def my_func(x: LinearInput) -> float:
    ...     view = ensure_linear(x)
    ...     return view.count
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Sequence, Union

import numpy as np

from ._dtypes import normalize_dtype
from .error import TypeMismatchError

if TYPE_CHECKING:
    from .views import LinearType, QuadraticType, ValueArray, Matrix


# =============================================================================
# Type Aliases
# =============================================================================

# 1-D inputs
LinearInput = Union[
    "LinearType",
    "np.ndarray",
    Sequence[float],
    List[float],
]

# 2-D inputs
QuadraticInput = Union[
    "QuadraticType",
    "np.ndarray",
    Sequence[Sequence[float]],
    List[List[float]],
]

Scalar = Union[int, float, "np.floating"]


# =============================================================================
# Detection
# =============================================================================

def is_numpy_array(obj: Any) -> bool:
    return isinstance(obj, np.ndarray)


def _is_supported_numpy(arr: np.ndarray) -> bool:
    try:
        normalize_dtype(arr.dtype)
    except TypeMismatchError:
        return False
    return True


# =============================================================================
# Conversion
# =============================================================================

def ensure_linear(vec: LinearInput, dtype=None) -> "LinearType":
    """Convert any 1-D input to a linear view.

    Args:
        vec: View, numpy array or sequence.
        dtype: Element type used when the input has to be copied.

    Returns:
        The view itself, a LinearReference over a contiguous numpy array,
        or a freshly allocated ValueArray.

    Raises:
        TypeMismatchError: If the input cannot be interpreted as a vector.
    """
    from .views import LinearType, LinearReference, ValueArray

    if isinstance(vec, LinearType):
        return vec
    if is_numpy_array(vec):
        if vec.ndim != 1:
            raise TypeMismatchError(f"Expected a 1-D array, got ndim={vec.ndim}")
        wrappable = vec.flags.c_contiguous and _is_supported_numpy(vec)
        if wrappable and (dtype is None or vec.dtype == dtype):
            return LinearReference.over(vec)
        return ValueArray.from_list(vec.tolist(), dtype=dtype or _numpy_dtype_or_default(vec))
    if isinstance(vec, (list, tuple)):
        return ValueArray.from_list(vec, dtype=dtype)
    raise TypeMismatchError(f"Cannot use {type(vec).__name__} as a vector")


def ensure_quadratic(mat: QuadraticInput, dtype=None) -> "QuadraticType":
    """Convert any 2-D input to a quadratic view.

    A C-contiguous 2-D numpy array is wrapped row-major and an
    F-contiguous one column-major, both without a copy.
    """
    from .views import QuadraticType, QuadraticReference, Matrix, Arrangement

    if isinstance(mat, QuadraticType):
        return mat
    if is_numpy_array(mat):
        if mat.ndim != 2:
            raise TypeMismatchError(f"Expected a 2-D array, got ndim={mat.ndim}")
        if dtype is None and _is_supported_numpy(mat):
            rows, cols = mat.shape
            if mat.flags.c_contiguous:
                return QuadraticReference(mat.reshape(-1), rows, cols)
            if mat.flags.f_contiguous:
                return QuadraticReference(mat.reshape(-1, order='F'), rows, cols,
                                          arrangement=Arrangement.COLUMN_MAJOR)
        return Matrix.from_rows(mat.tolist(), dtype=dtype or _numpy_dtype_or_default(mat))
    if isinstance(mat, (list, tuple)):
        return Matrix.from_rows(mat, dtype=dtype)
    raise TypeMismatchError(f"Cannot use {type(mat).__name__} as a matrix")


def _numpy_dtype_or_default(arr: np.ndarray):
    return arr.dtype if _is_supported_numpy(arr) else None


__all__ = [
    'LinearInput',
    'QuadraticInput',
    'Scalar',
    'is_numpy_array',
    'ensure_linear',
    'ensure_quadratic',
]

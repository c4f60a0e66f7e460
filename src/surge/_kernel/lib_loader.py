"""Kernel library loader for Surge.

Resolves the BLAS/LAPACK routines used by the vector and matrix kernels
for one element precision, and caches the result. The routines come from
the BLAS/LAPACK build scipy links against, so any portable implementation
(OpenBLAS, MKL, Accelerate, reference) sits behind the same interface.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
from scipy.linalg import get_blas_funcs, get_lapack_funcs


__all__ = ['KernelLibrary', 'get_lib', 'lib_for', 'LibraryNotFoundError']

logger = logging.getLogger("surge.kernel")


class LibraryNotFoundError(Exception):
    """Raised when the BLAS/LAPACK routines for a precision cannot be resolved."""
    pass


@dataclass(frozen=True)
class KernelLibrary:
    """Routine table for one precision.

    Attributes:
        precision: 'f32' or 'f64'.
        dtype: numpy element type the routines operate on.
        dot, axpy, scal, copy, gemm: BLAS routines.
        getrf, getri: LAPACK routines.
    """
    precision: str
    dtype: np.dtype
    dot: Any
    axpy: Any
    scal: Any
    copy: Any
    gemm: Any
    getrf: Any
    getri: Any


_BLAS_NAMES = ('dot', 'axpy', 'scal', 'copy', 'gemm')
_LAPACK_NAMES = ('getrf', 'getri')
_DTYPES = {'f32': np.dtype(np.float32), 'f64': np.dtype(np.float64)}

# Global library cache
_lib_cache = {}


def get_lib(precision: Optional[str] = None) -> KernelLibrary:
    """Get the kernel routine table with lazy initialization.

    Args:
        precision: 'f32' or 'f64', or None for the configured default.

    Returns:
        Cached KernelLibrary.

    Raises:
        ValueError: If precision is not recognised.
        LibraryNotFoundError: If scipy cannot provide the routines.

    Example:
        >>> lib = get_lib('f64')
        >>> lib.gemm.typecode
        'd'
    """
    if precision is None:
        from .._config import config
        precision = config.kernel.precision

    if precision not in _DTYPES:
        raise ValueError(f"Invalid precision: {precision}. Must be 'f32' or 'f64'")

    if precision in _lib_cache:
        return _lib_cache[precision]

    dtype = _DTYPES[precision]
    try:
        blas = get_blas_funcs(_BLAS_NAMES, dtype=dtype)
        lapack = get_lapack_funcs(_LAPACK_NAMES, dtype=dtype)
    except (ValueError, AttributeError) as e:
        raise LibraryNotFoundError(f"Cannot resolve {precision} BLAS/LAPACK routines: {e}")

    lib = KernelLibrary(precision, dtype, *blas, *lapack)
    logger.debug("Loaded %s kernels (typecode %r)", precision, blas[0].typecode)
    _lib_cache[precision] = lib
    return lib


def lib_for(buffer: np.ndarray) -> KernelLibrary:
    """Kernel library matching the element type of ``buffer``."""
    if buffer.dtype == _DTYPES['f32']:
        return get_lib('f32')
    return get_lib('f64')

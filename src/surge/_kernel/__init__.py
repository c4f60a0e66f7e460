"""Surge Private Kernel Bindings (_kernel).

This is a private package with the low-level routines the generic
arithmetic layer dispatches to.

Architecture:
    - lib_loader resolves BLAS/LAPACK routines per precision ('f32'/'f64')
    - vector: strided elementwise ops, reductions and BLAS level-1
    - matrix: multiply-accumulate, LU factorization/inversion, transpose
    - Arguments are raw (buffer, offset, increment/ld, count) tuples;
      no view objects cross this boundary

Design Principles:
    - Pure routine wrappers without high-level logic
    - Kernels never validate shapes against each other; callers do
    - Matrix routines return status codes, callers turn them into
      exceptions with ``check_error``

Usage (Internal only):
    >>> from surge._kernel import vector
    >>> vector.vadd(a, 0, 1, b, 0, 1, out, 0, 1, n)
"""

from . import lib_loader
from . import types
from . import utils
from . import vector
from . import matrix

__all__ = [
    'lib_loader',
    'types',
    'utils',
    'vector',
    'matrix',
]

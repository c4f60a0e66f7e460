"""
Matrix Kernels

Low-level dense matrix routines with a CBLAS-style calling convention:
every matrix operand is ``(buffer, offset, ld)`` plus the logical sizes,
and an order flag says whether runs of ``ld`` separate rows (ROW_MAJOR)
or columns (COLUMN_MAJOR). Every routine returns a Surge status code.

scipy's BLAS/LAPACK wrappers are column-major. Row-major requests are
answered by the usual identity: a row-major matrix read as column-major
is its transpose, so C = op(A) op(B) becomes C^T = op(B)^T op(A)^T.
"""

import logging

import numpy as np

from ..error import SURGE_OK, SURGE_ERROR_INVALID_ARGUMENT
from .lib_loader import get_lib, lib_for
from ._lazy_init import lazy_kernel
from .types import ROW_MAJOR, COLUMN_MAJOR, NO_TRANS, TRANS, lapack_status
from .utils import grid, grid_fits

__all__ = ['gemm', 'getrf', 'getri', 'mtrans']

logger = logging.getLogger("surge.kernel")


def _init_signatures():
    """Resolve the level-3 and LAPACK routines of both precisions."""
    for precision in ('f32', 'f64'):
        get_lib(precision)
    logger.debug("Matrix kernels ready")


# Resolve routines eagerly; kernels retry lazily on first call
try:
    _init_signatures()
except Exception as e:
    import warnings
    warnings.warn(f"Surge kernels not ready: {e}")


# =============================================================================
# Multiply-Accumulate
# =============================================================================

@lazy_kernel
def gemm(order, trans_a, trans_b, m, n, k, alpha,
         a, a_off, lda, b, b_off, ldb, beta, c, c_off, ldc):
    """
    General matrix multiply-accumulate: C = alpha * op(A) * op(B) + beta * C

    Args:
        order: ROW_MAJOR or COLUMN_MAJOR, applies to all three operands.
        trans_a: NO_TRANS or TRANS for A.
        trans_b: NO_TRANS or TRANS for B.
        m: Rows of op(A) and C.
        n: Columns of op(B) and C.
        k: Columns of op(A), rows of op(B).
        alpha: Scalar multiplier for op(A) * op(B).
        a, a_off, lda: Storage of A.
        b, b_off, ldb: Storage of B.
        beta: Scalar multiplier for C.
        c, c_off, ldc: Storage of C - modified in-place.

    Returns:
        Status code (SURGE_OK on success).
    """
    if order not in (ROW_MAJOR, COLUMN_MAJOR):
        return SURGE_ERROR_INVALID_ARGUMENT
    if trans_a not in (NO_TRANS, TRANS) or trans_b not in (NO_TRANS, TRANS):
        return SURGE_ERROR_INVALID_ARGUMENT

    if order == ROW_MAJOR:
        return _gemm_column_major(trans_b, trans_a, n, m, k, alpha,
                                  b, b_off, ldb, a, a_off, lda, beta, c, c_off, ldc)
    return _gemm_column_major(trans_a, trans_b, m, n, k, alpha,
                              a, a_off, lda, b, b_off, ldb, beta, c, c_off, ldc)


def _gemm_column_major(trans_a, trans_b, m, n, k, alpha,
                       a, a_off, lda, b, b_off, ldb, beta, c, c_off, ldc):
    # Stored shapes (column-major) of A and B before op() is applied
    a_rows, a_cols = (m, k) if trans_a == NO_TRANS else (k, m)
    b_rows, b_cols = (k, n) if trans_b == NO_TRANS else (n, k)

    if not (grid_fits(a, a_off, a_cols, a_rows, lda)
            and grid_fits(b, b_off, b_cols, b_rows, ldb)
            and grid_fits(c, c_off, n, m, ldc)):
        return SURGE_ERROR_INVALID_ARGUMENT

    if m == 0 or n == 0:
        return SURGE_OK

    c_grid = grid(c, c_off, m, n, ldc, column_major=True, writeable=True)
    if k == 0:
        c_grid *= c.dtype.type(beta)
        return SURGE_OK

    a_grid = grid(a, a_off, a_rows, a_cols, lda, column_major=True)
    b_grid = grid(b, b_off, b_rows, b_cols, ldb, column_major=True)

    result = lib_for(c).gemm(
        alpha, a_grid, b_grid,
        beta=beta, c=c_grid,
        trans_a=int(trans_a == TRANS),
        trans_b=int(trans_b == TRANS),
        overwrite_c=True,
    )
    if result is not c_grid:
        c_grid[...] = result
    return SURGE_OK


# =============================================================================
# LU Factorization / Inversion
# =============================================================================

@lazy_kernel
def getrf(n, a, a_off, lda):
    """
    LU factorization with partial pivoting of an n x n matrix, in place.

    The matrix is read column-major; a row-major matrix is factored as its
    transpose, which is what ``getri`` expects back.

    Returns:
        Tuple of (pivots, status). ``status`` is SURGE_ERROR_SINGULAR_MATRIX
        when U has an exactly zero diagonal entry.
    """
    if not grid_fits(a, a_off, n, n, lda):
        return None, SURGE_ERROR_INVALID_ARGUMENT
    if n == 0:
        return np.zeros(0, dtype=np.int32), SURGE_OK

    a_grid = grid(a, a_off, n, n, lda, column_major=True, writeable=True)
    lu, piv, info = lib_for(a).getrf(a_grid, overwrite_a=True)
    if lu is not a_grid:
        a_grid[...] = lu
    return piv, lapack_status(int(info))


@lazy_kernel
def getri(n, a, a_off, lda, piv):
    """
    Inverse of an n x n matrix from its ``getrf`` factors, in place.

    Returns:
        Status code.
    """
    if not grid_fits(a, a_off, n, n, lda) or piv is None:
        return SURGE_ERROR_INVALID_ARGUMENT
    if n == 0:
        return SURGE_OK

    a_grid = grid(a, a_off, n, n, lda, column_major=True, writeable=True)
    inv, info = lib_for(a).getri(a_grid, piv, overwrite_lu=True)
    if inv is not a_grid:
        a_grid[...] = inv
    return lapack_status(int(info))


# =============================================================================
# Transpose
# =============================================================================

def mtrans(order, m, n, a, a_off, lda, out, out_off, ldo):
    """
    Out-of-place transpose: out (n x m) = A^T, A is m x n.

    Both operands use the same ``order``; element (i, j) of A lands at
    (j, i) of out regardless of which axis is contiguous.

    Returns:
        Status code.
    """
    if order not in (ROW_MAJOR, COLUMN_MAJOR):
        return SURGE_ERROR_INVALID_ARGUMENT
    column_major = order == COLUMN_MAJOR
    a_major, a_minor = (n, m) if column_major else (m, n)
    if not (grid_fits(a, a_off, a_major, a_minor, lda)
            and grid_fits(out, out_off, a_minor, a_major, ldo)):
        return SURGE_ERROR_INVALID_ARGUMENT
    if m == 0 or n == 0:
        return SURGE_OK

    src = grid(a, a_off, m, n, lda, column_major=column_major)
    dst = grid(out, out_off, n, m, ldo, column_major=column_major, writeable=True)
    dst[...] = src.T
    return SURGE_OK

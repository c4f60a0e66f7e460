"""Kernel constants and status handling.

CBLAS-style order/transpose flags shared by the matrix kernels, and the
mapping from LAPACK ``info`` values to Surge status codes.
"""

from ..error import (
    SURGE_OK,
    SURGE_ERROR_INVALID_ARGUMENT,
    SURGE_ERROR_SINGULAR_MATRIX,
    check_error,
)


__all__ = [
    'ROW_MAJOR', 'COLUMN_MAJOR', 'NO_TRANS', 'TRANS',
    'lapack_status', 'check_error',
]


# =============================================================================
# Order / Transpose Flags
# =============================================================================

# Values match CBLAS_ORDER and CBLAS_TRANSPOSE
ROW_MAJOR = 101
COLUMN_MAJOR = 102
NO_TRANS = 111
TRANS = 112


def lapack_status(info: int) -> int:
    """Translate a LAPACK ``info`` value into a Surge status code.

    Args:
        info: 0 on success, -i for an illegal i-th argument, +i when
            U(i, i) is exactly zero.

    Returns:
        Surge status code.
    """
    if info == 0:
        return SURGE_OK
    if info < 0:
        return SURGE_ERROR_INVALID_ARGUMENT
    return SURGE_ERROR_SINGULAR_MATRIX

"""
Dense Linear Algebra on Quadratic Views.

Functions accept any quadratic view (or anything ``ensure_quadratic``
understands) in either arrangement and call ``surge._kernel.matrix``.

Arrangement handling:
    The kernel takes one order flag for all operands, the order of the
    output. An input stored in the other arrangement is, read in the
    output's order, the transpose of itself, so it is handed to the
    kernel with TRANS instead of being rearranged.

Aliasing:
    ``multiply_accumulate`` requires that ``c`` shares no elements with
    ``a`` or ``b``. ``multiply_in_place`` takes care of this by copying
    its left operand first.
"""

from __future__ import annotations

import logging

import numpy as np

from .._dtypes import ensure_same_dtype
from .._kernel import matrix as km
from .._kernel.types import NO_TRANS, TRANS, check_error
from .._typing import QuadraticInput, Scalar, ensure_quadratic
from ..error import DimensionMismatchError, TypeMismatchError, SURGE_OK
from ..views import Matrix, MutableQuadraticType, QuadraticType
from . import arithmetic

__all__ = [
    'multiply_accumulate',
    'multiply',
    'multiply_in_place',
    'invert',
    'transpose',
    'add',
    'sub',
    'add_in_place',
    'sub_in_place',
    'scale',
    'scale_in_place',
]

logger = logging.getLogger("surge.linalg")


def _mutable(view) -> MutableQuadraticType:
    if not isinstance(view, MutableQuadraticType):
        raise TypeMismatchError(
            f"In-place operation needs a mutable matrix, got {type(view).__name__}"
        )
    return view


def _require_same_shape(lhs: QuadraticType, rhs: QuadraticType, op: str) -> None:
    if lhs.shape != rhs.shape:
        raise DimensionMismatchError(f"{op}: shapes differ, {lhs.shape} vs {rhs.shape}")


# =============================================================================
# Products
# =============================================================================

def multiply_accumulate(
    alpha: Scalar,
    a: QuadraticInput,
    b: QuadraticInput,
    beta: Scalar,
    c: MutableQuadraticType,
) -> None:
    """
    In-place ``c = alpha * a @ b + beta * c``.

    Args:
        alpha: Multiplier for the product.
        a: Left operand (m x k).
        b: Right operand (k x n).
        beta: Multiplier for the existing contents of ``c``.
        c: Output (m x n), mutable. Must not alias ``a`` or ``b``.

    Raises:
        DimensionMismatchError: If ``a.columns != b.rows``, ``a.rows != c.rows``
            or ``b.columns != c.columns`` (each with its own message).
        TypeMismatchError: If the element types differ.
    """
    c = _mutable(c)
    a = ensure_quadratic(a, dtype=c.dtype if not isinstance(a, QuadraticType) else None)
    b = ensure_quadratic(b, dtype=c.dtype if not isinstance(b, QuadraticType) else None)
    ensure_same_dtype(a.base, b.base, c.base)

    if a.columns != b.rows:
        raise DimensionMismatchError(
            f"Inner dimensions differ: a has {a.columns} columns, b has {b.rows} rows"
        )
    if a.rows != c.rows:
        raise DimensionMismatchError(
            f"Row count differs: a has {a.rows} rows, c has {c.rows}"
        )
    if b.columns != c.columns:
        raise DimensionMismatchError(
            f"Column count differs: b has {b.columns} columns, c has {c.columns}"
        )

    trans_a = NO_TRANS if a.arrangement == c.arrangement else TRANS
    trans_b = NO_TRANS if b.arrangement == c.arrangement else TRANS
    logger.debug(
        "gemm %dx%dx%d order=%s trans_a=%d trans_b=%d",
        c.rows, c.columns, a.columns, c.arrangement.name, trans_a, trans_b,
    )
    status = km.gemm(
        int(c.arrangement), trans_a, trans_b,
        c.rows, c.columns, a.columns,
        alpha,
        a.base, a.offset, a.stride,
        b.base, b.offset, b.stride,
        beta,
        c.base, c.offset, c.stride,
    )
    check_error(status, "multiply_accumulate")


def multiply(a: QuadraticInput, b: QuadraticInput) -> Matrix:
    """
    Matrix product ``a @ b`` as a new Matrix in ``a``'s arrangement.

    Raises:
        DimensionMismatchError: If ``a.columns != b.rows``.
    """
    a = ensure_quadratic(a)
    b = ensure_quadratic(b, dtype=None if isinstance(b, QuadraticType) else a.dtype)
    if a.columns != b.rows:
        raise DimensionMismatchError(
            f"Inner dimensions differ: a has {a.columns} columns, b has {b.rows} rows"
        )
    result = Matrix(a.rows, b.columns, arrangement=a.arrangement, dtype=a.dtype)
    multiply_accumulate(1.0, a, b, 0.0, result)
    return result


def multiply_in_place(lhs: MutableQuadraticType, rhs: QuadraticInput) -> None:
    """
    Replace ``lhs`` with ``lhs @ rhs``.

    ``lhs`` is copied first since it cannot be both input and output of
    the kernel; ``rhs`` is copied too when it shares storage with ``lhs``.

    Raises:
        DimensionMismatchError: If ``rhs`` is not ``lhs.columns`` square.
    """
    lhs = _mutable(lhs)
    rhs = ensure_quadratic(rhs)
    if rhs.rows != lhs.columns or rhs.columns != lhs.columns:
        raise DimensionMismatchError(
            f"In-place multiply needs a {lhs.columns}x{lhs.columns} right operand, "
            f"got {rhs.rows}x{rhs.columns}"
        )
    snapshot = Matrix.copy_of(lhs)
    if np.may_share_memory(rhs.base, lhs.base):
        rhs = Matrix.copy_of(rhs)
    multiply_accumulate(1.0, snapshot, rhs, 0.0, lhs)


# =============================================================================
# Inversion / Transpose
# =============================================================================

def invert(a: QuadraticInput) -> Matrix:
    """
    Inverse of a square matrix.

    The input is copied, then LU-factorized and inverted in place.

    Raises:
        DimensionMismatchError: If ``a`` is not square.
        SingularMatrixError: If the factorization finds an exactly zero pivot.
    """
    a = ensure_quadratic(a)
    if a.rows != a.columns:
        raise DimensionMismatchError(f"Cannot invert a non-square {a.rows}x{a.columns} matrix")

    result = Matrix.copy_of(a)
    n = result.rows
    piv, status = km.getrf(n, result.base, result.offset, result.stride)
    if status != SURGE_OK:
        logger.debug("getrf failed for %dx%d matrix (status %d)", n, n, status)
        check_error(status, "invert: LU factorization")
    status = km.getri(n, result.base, result.offset, result.stride, piv)
    if status != SURGE_OK:
        logger.debug("getri failed for %dx%d matrix (status %d)", n, n, status)
        check_error(status, "invert: inversion from LU factors")
    return result


def transpose(a: QuadraticInput) -> Matrix:
    """New ``columns x rows`` Matrix with ``out[j, i] == a[i, j]``, same arrangement."""
    a = ensure_quadratic(a)
    result = Matrix(a.columns, a.rows, arrangement=a.arrangement, dtype=a.dtype)
    status = km.mtrans(
        int(a.arrangement), a.rows, a.columns,
        a.base, a.offset, a.stride,
        result.base, result.offset, result.stride,
    )
    check_error(status, "transpose")
    return result


# =============================================================================
# Elementwise Matrix Arithmetic
# =============================================================================

def _paired_runs(lhs: QuadraticType, rhs: QuadraticType):
    # lhs runs paired with the rhs row/column holding the same positions
    if lhs.is_row_major:
        return zip(lhs.rows_iter(), rhs.rows_iter())
    return zip(lhs.columns_iter(), rhs.columns_iter())


def add_in_place(lhs: MutableQuadraticType, rhs: QuadraticInput) -> None:
    """
    ``lhs[i, j] += rhs[i, j]``.

    Raises:
        DimensionMismatchError: If the shapes differ.
    """
    lhs = _mutable(lhs)
    rhs = ensure_quadratic(rhs)
    _require_same_shape(lhs, rhs, "add_in_place")
    for dst, src in _paired_runs(lhs, rhs):
        arithmetic.add_in_place(dst, src)


def sub_in_place(lhs: MutableQuadraticType, rhs: QuadraticInput) -> None:
    """
    ``lhs[i, j] -= rhs[i, j]``.

    Raises:
        DimensionMismatchError: If the shapes differ.
    """
    lhs = _mutable(lhs)
    rhs = ensure_quadratic(rhs)
    _require_same_shape(lhs, rhs, "sub_in_place")
    for dst, src in _paired_runs(lhs, rhs):
        arithmetic.sub_in_place(dst, src)


def add(lhs: QuadraticInput, rhs: QuadraticInput) -> Matrix:
    lhs = ensure_quadratic(lhs)
    rhs = ensure_quadratic(rhs)
    _require_same_shape(lhs, rhs, "add")
    result = Matrix.copy_of(lhs)
    add_in_place(result, rhs)
    return result


def sub(lhs: QuadraticInput, rhs: QuadraticInput) -> Matrix:
    lhs = ensure_quadratic(lhs)
    rhs = ensure_quadratic(rhs)
    _require_same_shape(lhs, rhs, "sub")
    result = Matrix.copy_of(lhs)
    sub_in_place(result, rhs)
    return result


def scale_in_place(m: MutableQuadraticType, scalar: Scalar) -> None:
    """Multiply every element of ``m`` by ``scalar``."""
    for run in _mutable(m).major_runs():
        arithmetic.mul_scalar_in_place(run, scalar)


def scale(scalar: Scalar, m: QuadraticInput) -> Matrix:
    result = Matrix.copy_of(ensure_quadratic(m))
    scale_in_place(result, scalar)
    return result

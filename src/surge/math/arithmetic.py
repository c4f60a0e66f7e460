"""
Elementwise Arithmetic on Linear Views.

Every function accepts any readable linear view (or anything
``ensure_linear`` understands) and routes the actual math to
``surge._kernel.vector``. Functions that return a result allocate exactly
one fresh ValueArray; ``*_in_place`` variants write into their first
operand, which must be a mutable view.

Length rules:
    - Binary ops (add, sub, mul, div, mod, remainder) return
      ``min(lhs.count, rhs.count)`` elements.
    - ``add_in_place`` requires ``lhs.count >= rhs.count``; the other
      in-place ops work over the shorter of the two.
    - ``dot`` requires equal counts.
    - ``mod``, ``remainder`` and ``sqrt`` require unit step operands.

Example:
    >>> from surge import ValueArray
    >>> from surge.math import arithmetic
    >>> x = ValueArray.from_list([1, 2, 3, 4])
    >>> arithmetic.add_scalar(x, 5).tolist()
    [6.0, 7.0, 8.0, 9.0]
"""

from __future__ import annotations

import numbers
from typing import Union

from .._dtypes import ensure_same_dtype
from .._kernel import vector as kv
from .._typing import LinearInput, Scalar, ensure_linear
from ..error import DimensionMismatchError, StrideError, TypeMismatchError
from ..views import LinearType, MutableLinearType, ValueArray

__all__ = [
    # view (op) view
    'add', 'sub', 'mul', 'div',
    'add_in_place', 'sub_in_place', 'mul_in_place', 'div_in_place',
    # view (op) scalar
    'add_scalar', 'sub_scalar', 'mul_scalar', 'div_scalar',
    'scalar_sub', 'scalar_div',
    'add_scalar_in_place', 'sub_scalar_in_place',
    'mul_scalar_in_place', 'div_scalar_in_place',
    # unit-stride functions
    'mod', 'remainder', 'sqrt',
    # products
    'dot',
]


# =============================================================================
# Helpers
# =============================================================================

def _operands(lhs, rhs):
    lhs = ensure_linear(lhs)
    rhs = ensure_linear(rhs, dtype=lhs.dtype)
    ensure_same_dtype(lhs.base, rhs.base)
    return lhs, rhs


def _mutable(view) -> MutableLinearType:
    if not isinstance(view, MutableLinearType):
        raise TypeMismatchError(
            f"In-place operation needs a mutable view, got {type(view).__name__}"
        )
    return view


def _require_unit_step(*views: LinearType) -> None:
    for view in views:
        if view.step != 1:
            raise StrideError(f"Operation requires step 1, got step {view.step}")


def _args(view: LinearType):
    return view.base, view.start, view.step


# =============================================================================
# View (op) View
# =============================================================================

def add(lhs: LinearInput, rhs: LinearInput) -> ValueArray:
    """Elementwise ``lhs[i] + rhs[i]`` over the shorter operand."""
    lhs, rhs = _operands(lhs, rhs)
    n = min(lhs.count, rhs.count)
    out = ValueArray(n, lhs.dtype)
    kv.vadd(*_args(lhs), *_args(rhs), out.base, 0, 1, n)
    return out


def sub(lhs: LinearInput, rhs: LinearInput) -> ValueArray:
    """Elementwise ``lhs[i] - rhs[i]`` over the shorter operand."""
    lhs, rhs = _operands(lhs, rhs)
    n = min(lhs.count, rhs.count)
    out = ValueArray(n, lhs.dtype)
    kv.vsub(*_args(lhs), *_args(rhs), out.base, 0, 1, n)
    return out


def mul(lhs: LinearInput, rhs: LinearInput) -> ValueArray:
    """Elementwise ``lhs[i] * rhs[i]`` over the shorter operand."""
    lhs, rhs = _operands(lhs, rhs)
    n = min(lhs.count, rhs.count)
    out = ValueArray(n, lhs.dtype)
    kv.vmul(*_args(lhs), *_args(rhs), out.base, 0, 1, n)
    return out


def div(lhs: LinearInput, rhs: LinearInput) -> ValueArray:
    """Elementwise ``lhs[i] / rhs[i]`` over the shorter operand (IEEE division)."""
    lhs, rhs = _operands(lhs, rhs)
    n = min(lhs.count, rhs.count)
    out = ValueArray(n, lhs.dtype)
    kv.vdiv(*_args(lhs), *_args(rhs), out.base, 0, 1, n)
    return out


def add_in_place(lhs: MutableLinearType, rhs: LinearInput) -> None:
    """
    ``lhs[i] += rhs[i]`` for every element of ``rhs``.

    Raises:
        DimensionMismatchError: If ``lhs`` is shorter than ``rhs``.
    """
    lhs, rhs = _operands(_mutable(lhs), rhs)
    if lhs.count < rhs.count:
        raise DimensionMismatchError(
            f"In-place add needs lhs.count >= rhs.count, got {lhs.count} < {rhs.count}"
        )
    kv.axpy(1.0, *_args(rhs), *_args(lhs), rhs.count)


def sub_in_place(lhs: MutableLinearType, rhs: LinearInput) -> None:
    """``lhs[i] -= rhs[i]`` over the shorter operand."""
    lhs, rhs = _operands(_mutable(lhs), rhs)
    kv.axpy(-1.0, *_args(rhs), *_args(lhs), min(lhs.count, rhs.count))


def mul_in_place(lhs: MutableLinearType, rhs: LinearInput) -> None:
    """``lhs[i] *= rhs[i]`` over the shorter operand."""
    lhs, rhs = _operands(_mutable(lhs), rhs)
    kv.vmul(*_args(lhs), *_args(rhs), *_args(lhs), min(lhs.count, rhs.count))


def div_in_place(lhs: MutableLinearType, rhs: LinearInput) -> None:
    """``lhs[i] /= rhs[i]`` over the shorter operand."""
    lhs, rhs = _operands(_mutable(lhs), rhs)
    kv.vdiv(*_args(lhs), *_args(rhs), *_args(lhs), min(lhs.count, rhs.count))


# =============================================================================
# View (op) Scalar
# =============================================================================

def add_scalar(lhs: LinearInput, scalar: Scalar) -> ValueArray:
    lhs = ensure_linear(lhs)
    out = ValueArray(lhs.count, lhs.dtype)
    kv.vsadd(*_args(lhs), scalar, out.base, 0, 1, lhs.count)
    return out


def sub_scalar(lhs: LinearInput, scalar: Scalar) -> ValueArray:
    lhs = ensure_linear(lhs)
    out = ValueArray(lhs.count, lhs.dtype)
    kv.vsadd(*_args(lhs), -scalar, out.base, 0, 1, lhs.count)
    return out


def scalar_sub(scalar: Scalar, rhs: LinearInput) -> ValueArray:
    """``scalar - rhs[i]``, computed as ``rhs[i] * -1 + scalar``."""
    rhs = ensure_linear(rhs)
    out = ValueArray(rhs.count, rhs.dtype)
    kv.vsmsa(*_args(rhs), -1.0, scalar, out.base, 0, 1, rhs.count)
    return out


def mul_scalar(lhs: LinearInput, scalar: Scalar) -> ValueArray:
    lhs = ensure_linear(lhs)
    out = ValueArray(lhs.count, lhs.dtype)
    kv.vsmul(*_args(lhs), scalar, out.base, 0, 1, lhs.count)
    return out


def div_scalar(lhs: LinearInput, scalar: Scalar) -> ValueArray:
    lhs = ensure_linear(lhs)
    out = ValueArray(lhs.count, lhs.dtype)
    kv.vsdiv(*_args(lhs), scalar, out.base, 0, 1, lhs.count)
    return out


def scalar_div(scalar: Scalar, rhs: LinearInput) -> ValueArray:
    """``scalar / rhs[i]``."""
    rhs = ensure_linear(rhs)
    out = ValueArray(rhs.count, rhs.dtype)
    kv.svdiv(scalar, *_args(rhs), out.base, 0, 1, rhs.count)
    return out


def add_scalar_in_place(lhs: MutableLinearType, scalar: Scalar) -> None:
    lhs = _mutable(lhs)
    kv.vsadd(*_args(lhs), scalar, *_args(lhs), lhs.count)


def sub_scalar_in_place(lhs: MutableLinearType, scalar: Scalar) -> None:
    lhs = _mutable(lhs)
    kv.vsadd(*_args(lhs), -scalar, *_args(lhs), lhs.count)


def mul_scalar_in_place(lhs: MutableLinearType, scalar: Scalar) -> None:
    lhs = _mutable(lhs)
    kv.scal(scalar, *_args(lhs), lhs.count)


def div_scalar_in_place(lhs: MutableLinearType, scalar: Scalar) -> None:
    lhs = _mutable(lhs)
    kv.vsdiv(*_args(lhs), scalar, *_args(lhs), lhs.count)


# =============================================================================
# Unit-Stride Functions
# =============================================================================

def mod(lhs: LinearInput, rhs: Union[LinearInput, Scalar]) -> ValueArray:
    """
    Truncated modulo (``fmod``): the result takes the sign of ``lhs``.

    Args:
        lhs: Dividends, step 1.
        rhs: Divisors (step 1 view) or a scalar divisor.

    Raises:
        StrideError: If any operand view has a step other than 1.
    """
    if isinstance(rhs, numbers.Real):
        lhs = ensure_linear(lhs)
        _require_unit_step(lhs)
        out = ValueArray(lhs.count, lhs.dtype)
        kv.vsfmod(lhs.base, lhs.start, rhs, out.base, 0, lhs.count)
        return out
    lhs, rhs = _operands(lhs, rhs)
    _require_unit_step(lhs, rhs)
    n = min(lhs.count, rhs.count)
    out = ValueArray(n, lhs.dtype)
    kv.vfmod(lhs.base, lhs.start, rhs.base, rhs.start, out.base, 0, n)
    return out


def remainder(lhs: LinearInput, rhs: LinearInput) -> ValueArray:
    """
    IEEE remainder ``lhs - rint(lhs / rhs) * rhs``.

    Raises:
        StrideError: If either operand has a step other than 1.
    """
    lhs, rhs = _operands(lhs, rhs)
    _require_unit_step(lhs, rhs)
    n = min(lhs.count, rhs.count)
    out = ValueArray(n, lhs.dtype)
    kv.vremainder(lhs.base, lhs.start, rhs.base, rhs.start, out.base, 0, n)
    return out


def sqrt(view: LinearInput) -> ValueArray:
    """
    Elementwise square root; negative inputs give nan.

    Raises:
        StrideError: If the view has a step other than 1.
    """
    view = ensure_linear(view)
    _require_unit_step(view)
    out = ValueArray(view.count, view.dtype)
    kv.vsqrt(view.base, view.start, out.base, 0, view.count)
    return out


# =============================================================================
# Products
# =============================================================================

def dot(lhs: LinearInput, rhs: LinearInput) -> float:
    """
    Inner product ``sum(lhs[i] * rhs[i])``.

    Raises:
        DimensionMismatchError: If the counts differ.
    """
    lhs, rhs = _operands(lhs, rhs)
    if lhs.count != rhs.count:
        raise DimensionMismatchError(
            f"dot needs equal lengths, got {lhs.count} and {rhs.count}"
        )
    return kv.dot(*_args(lhs), *_args(rhs), lhs.count)

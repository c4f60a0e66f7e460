"""
Reductions over Linear Views.

Each function takes one linear view (any step, including negative) and
returns a Python float computed by ``surge._kernel.vector``.

Empty views:
    - sum -> 0.0
    - max -> -inf, min -> +inf
    - mean, mean_of_absolute, mean_of_squares, root_mean_square,
      standard_deviation -> nan
"""

from __future__ import annotations

import math
from collections import namedtuple
from typing import Optional

import numpy as np

from .._config import config
from .._kernel import vector as kv
from .._typing import LinearInput, ensure_linear, ensure_quadratic
from ..error import DimensionMismatchError
from ..views import LinearType, QuadraticType
from . import arithmetic

__all__ = [
    'sum', 'max', 'min',
    'mean', 'mean_of_absolute', 'mean_of_squares',
    'root_mean_square', 'standard_deviation',
    'Regression', 'linear_regression',
    'allclose',
]


Regression = namedtuple('Regression', ['slope', 'intercept'])


def _args(view: LinearType):
    return view.base, view.start, view.step, view.count


# =============================================================================
# Basic Reductions
# =============================================================================

def sum(view: LinearInput) -> float:
    return kv.sve(*_args(ensure_linear(view)))


def max(view: LinearInput) -> float:
    return kv.maxv(*_args(ensure_linear(view)))


def min(view: LinearInput) -> float:
    return kv.minv(*_args(ensure_linear(view)))


def mean(view: LinearInput) -> float:
    return kv.meanv(*_args(ensure_linear(view)))


def mean_of_absolute(view: LinearInput) -> float:
    """Mean of ``|x[i]|``."""
    return kv.meamgv(*_args(ensure_linear(view)))


def mean_of_squares(view: LinearInput) -> float:
    """Mean of ``x[i] ** 2``."""
    return kv.measqv(*_args(ensure_linear(view)))


def root_mean_square(view: LinearInput) -> float:
    return kv.rmsqv(*_args(ensure_linear(view)))


def standard_deviation(view: LinearInput) -> float:
    """
    Population standard deviation.

    Two passes: the first computes the mean, the second the mean of
    squared deviations from it. One temporary of ``count`` elements holds
    the deviations.
    """
    view = ensure_linear(view)
    if view.count == 0:
        return float('nan')
    deviations = arithmetic.sub_scalar(view, mean(view))
    return math.sqrt(mean_of_squares(deviations))


# =============================================================================
# Regression
# =============================================================================

def linear_regression(x: LinearInput, y: LinearInput) -> Regression:
    """
    Least-squares line through ``(x[i], y[i])``.

    slope     = (mean(x) * mean(y) - mean(x * y)) / (mean(x) ** 2 - mean(x ** 2))
    intercept = mean(y) - slope * mean(x)

    Returns:
        Regression(slope, intercept). Both are nan when all ``x`` are equal.

    Raises:
        DimensionMismatchError: If ``x`` and ``y`` differ in length.
    """
    x = ensure_linear(x)
    y = ensure_linear(y, dtype=x.dtype)
    if x.count != y.count:
        raise DimensionMismatchError(
            f"Regression needs equal lengths, got {x.count} and {y.count}"
        )
    mean_x = mean(x)
    mean_y = mean(y)
    mean_xy = mean(arithmetic.mul(x, y))
    mean_x2 = mean_of_squares(x)

    denominator = mean_x * mean_x - mean_x2
    if denominator == 0:
        slope = float('nan')
    else:
        slope = (mean_x * mean_y - mean_xy) / denominator
    return Regression(slope, mean_y - slope * mean_x)


# =============================================================================
# Comparison
# =============================================================================

def allclose(lhs, rhs, rtol: Optional[float] = None, atol: Optional[float] = None) -> bool:
    """
    Whether two views hold the same values within tolerance.

    Works for linear and quadratic views (quadratic views are compared by
    logical position). Tolerances default to ``config.compute``.
    """
    rtol = config.compute.rtol if rtol is None else rtol
    atol = config.compute.atol if atol is None else atol
    if isinstance(lhs, QuadraticType) or isinstance(rhs, QuadraticType):
        a = ensure_quadratic(lhs).to_numpy()
        b = ensure_quadratic(rhs).to_numpy()
    else:
        a = ensure_linear(lhs).to_numpy()
        b = ensure_linear(rhs).to_numpy()
    if a.shape != b.shape:
        return False
    return bool(np.allclose(a, b, rtol=rtol, atol=atol))

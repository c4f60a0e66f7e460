"""
Surge Math

Operations written once against the view contracts and routed to the
kernel layer for the operands' element type.

Submodules:
    arithmetic: elementwise vector ops, scalar variants, mod/remainder/sqrt, dot
    reductions: sum, extrema, means, standard deviation, linear regression
    linalg: matrix products, inversion, transpose, elementwise matrix ops

Usage:
    >>> from surge import Matrix
    >>> from surge.math import linalg
    >>> a = Matrix.from_rows([[1, 2], [3, 4]])
    >>> linalg.multiply(a, a).tolist()
    [[7.0, 10.0], [15.0, 22.0]]
"""

from . import arithmetic
from . import reductions
from . import linalg

from .arithmetic import (
    add, sub, mul, div,
    add_in_place, sub_in_place, mul_in_place, div_in_place,
    add_scalar, sub_scalar, mul_scalar, div_scalar,
    scalar_sub, scalar_div,
    add_scalar_in_place, sub_scalar_in_place,
    mul_scalar_in_place, div_scalar_in_place,
    mod, remainder, sqrt, dot,
)
from .reductions import (
    mean, mean_of_absolute, mean_of_squares,
    root_mean_square, standard_deviation,
    Regression, linear_regression, allclose,
)
from .linalg import (
    multiply_accumulate, multiply, multiply_in_place,
    invert, transpose, scale, scale_in_place,
)

__all__ = [
    'arithmetic',
    'reductions',
    'linalg',
    # arithmetic
    'add', 'sub', 'mul', 'div',
    'add_in_place', 'sub_in_place', 'mul_in_place', 'div_in_place',
    'add_scalar', 'sub_scalar', 'mul_scalar', 'div_scalar',
    'scalar_sub', 'scalar_div',
    'add_scalar_in_place', 'sub_scalar_in_place',
    'mul_scalar_in_place', 'div_scalar_in_place',
    'mod', 'remainder', 'sqrt', 'dot',
    # reductions (sum/max/min stay under reductions.* to keep builtins)
    'mean', 'mean_of_absolute', 'mean_of_squares',
    'root_mean_square', 'standard_deviation',
    'Regression', 'linear_regression', 'allclose',
    # linalg
    'multiply_accumulate', 'multiply', 'multiply_in_place',
    'invert', 'transpose', 'scale', 'scale_in_place',
]

"""
Surge Views

Non-owning strided views over flat numpy buffers, plus the owning
containers that allocate those buffers.

Linear (1-D):
    - LinearReference / MutableLinearReference: (base, start, end, step)
    - ValueArray: owning contiguous array

Quadratic (2-D):
    - QuadraticReference / MutableQuadraticReference:
      (base, offset, rows, columns, stride, arrangement)
    - Matrix: owning packed matrix

Complex:
    - ComplexArraySlice: view over interleaved (re, im) pairs
    - ComplexArray: owning interleaved array
"""

from ._base import (
    Arrangement,
    ROW_MAJOR,
    COLUMN_MAJOR,
    LinearType,
    MutableLinearType,
    QuadraticType,
    MutableQuadraticType,
)
from ._linear import LinearReference, MutableLinearReference
from ._quadratic import QuadraticReference, MutableQuadraticReference
from ._array import ValueArray
from ._matrix import Matrix
from ._complex import ComplexArraySlice, ComplexArray

__all__ = [
    'Arrangement',
    'ROW_MAJOR',
    'COLUMN_MAJOR',
    'LinearType',
    'MutableLinearType',
    'QuadraticType',
    'MutableQuadraticType',
    'LinearReference',
    'MutableLinearReference',
    'QuadraticReference',
    'MutableQuadraticReference',
    'ValueArray',
    'Matrix',
    'ComplexArraySlice',
    'ComplexArray',
]

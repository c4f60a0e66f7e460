"""
Surge - Strided Views and Accelerated Arithmetic

Non-owning views over flat numeric buffers, and arithmetic defined once
against those views and dispatched to BLAS/LAPACK-backed kernels.

Views:
    LinearReference / MutableLinearReference: 1-D (base, start, end, step)
    QuadraticReference / MutableQuadraticReference: 2-D with row or
        column arrangement and a run stride
    ComplexArraySlice: interleaved complex data with reals/imags projections

Containers:
    ValueArray, Matrix, ComplexArray: own their (aligned) buffers

Math:
    surge.math.arithmetic, surge.math.reductions, surge.math.linalg

Usage:
    >>> import surge
    >>> m = surge.Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
    >>> (m.column(1) + m.row(1)).tolist()
    [6.0, 10.0, 14.0]

    >>> a = surge.Matrix.from_rows([[2, 6], [-2, 4]])
    >>> surge.allclose(surge.invert(a), [[0.2, -0.3], [0.1, 0.1]])
    True

    # Disable per-access index checks in a hot loop
    >>> with surge.config.local(check=surge.CheckConfig(bounds=False)):
    ...     total = sum(m.row(0))
"""

__version__ = "0.1.0"

from ._config import (
    config,
    get_config,
    set_bounds_check,
    set_blas,
    CheckConfig,
    KernelConfig,
    MemoryConfig,
    ComputeConfig,
    SurgeConfig,
)
from ._dtypes import DType, float32, float64
from .error import (
    SurgeError,
    ContractViolation,
    InvalidArgumentError,
    DimensionMismatchError,
    StrideError,
    IndexOutOfBoundsError,
    TypeMismatchError,
    NumericalError,
    SingularMatrixError,
)
from .views import (
    Arrangement,
    ROW_MAJOR,
    COLUMN_MAJOR,
    LinearType,
    MutableLinearType,
    QuadraticType,
    MutableQuadraticType,
    LinearReference,
    MutableLinearReference,
    QuadraticReference,
    MutableQuadraticReference,
    ValueArray,
    Matrix,
    ComplexArraySlice,
    ComplexArray,
)
from . import math
from .math import (
    dot,
    mod,
    remainder,
    sqrt,
    linear_regression,
    Regression,
    allclose,
    multiply,
    multiply_accumulate,
    invert,
    transpose,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "config",
    "get_config",
    "set_bounds_check",
    "set_blas",
    "CheckConfig",
    "KernelConfig",
    "MemoryConfig",
    "ComputeConfig",
    "SurgeConfig",
    # Types
    "DType",
    "float32",
    "float64",
    # Errors
    "SurgeError",
    "ContractViolation",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "StrideError",
    "IndexOutOfBoundsError",
    "TypeMismatchError",
    "NumericalError",
    "SingularMatrixError",
    # Views
    "Arrangement",
    "ROW_MAJOR",
    "COLUMN_MAJOR",
    "LinearType",
    "MutableLinearType",
    "QuadraticType",
    "MutableQuadraticType",
    "LinearReference",
    "MutableLinearReference",
    "QuadraticReference",
    "MutableQuadraticReference",
    # Containers
    "ValueArray",
    "Matrix",
    "ComplexArraySlice",
    "ComplexArray",
    # Math
    "math",
    "dot",
    "mod",
    "remainder",
    "sqrt",
    "linear_regression",
    "Regression",
    "allclose",
    "multiply",
    "multiply_accumulate",
    "invert",
    "transpose",
]

"""
Pytest configuration and shared fixtures for Surge tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import surge
from surge import (
    Matrix,
    ValueArray,
    ComplexArray,
    MutableLinearReference,
    MutableQuadraticReference,
    COLUMN_MAJOR,
)


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts from (and leaves behind) the default configuration."""
    surge.config.reset()
    yield
    surge.config.reset()


@pytest.fixture(params=[True, False], ids=["blas", "numpy"])
def blas_routing(request):
    """Run a test with level-1 BLAS routing on and off."""
    surge.set_blas(request.param)
    return request.param


@pytest.fixture(params=["float32", "float64"])
def dtype(request):
    return request.param


# =============================================================================
# Vectors
# =============================================================================

@pytest.fixture
def vector_1234():
    """ValueArray [1, 2, 3, 4]."""
    return ValueArray.from_list([1.0, 2.0, 3.0, 4.0])


@pytest.fixture
def strided_buffer():
    """float64 buffer 0..11 and a writable view of its even offsets.

    buffer: [0, 1, 2, ..., 11]
    view:   [0, 2, 4, 6, 8, 10]
    """
    buf = np.arange(12, dtype=np.float64)
    return buf, MutableLinearReference(buf, 0, 6, 2)


# =============================================================================
# Matrices
# =============================================================================

@pytest.fixture
def matrix_3x3():
    """Row-major [[1, 2, 3], [4, 5, 6], [7, 8, 9]]."""
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


@pytest.fixture
def matrix_a():
    """A = [[1, 2], [3, 4]]."""
    return Matrix.from_rows([[1, 2], [3, 4]])


@pytest.fixture
def matrix_b():
    """B = [[2, 3], [4, 5]]."""
    return Matrix.from_rows([[2, 3], [4, 5]])


@pytest.fixture
def column_major_a():
    """A = [[1, 2], [3, 4]] stored column by column: [1, 3, 2, 4]."""
    return Matrix(2, 2, elements=[1, 3, 2, 4], arrangement=COLUMN_MAJOR)


@pytest.fixture
def padded_block():
    """2x3 row-major block inside a 2x4 buffer (stride 4).

    buffer: [1, 2, 3, -1, 4, 5, 6, -1]
    block:  [[1, 2, 3], [4, 5, 6]]
    """
    buf = np.array([1, 2, 3, -1, 4, 5, 6, -1], dtype=np.float64)
    return buf, MutableQuadraticReference(buf, 2, 3, stride=4)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


# =============================================================================
# Complex
# =============================================================================

@pytest.fixture
def complex_values():
    """ComplexArray [1+2j, 3+4j, 5+6j, 7+8j]."""
    return ComplexArray.from_list([1 + 2j, 3 + 4j, 5 + 6j, 7 + 8j])

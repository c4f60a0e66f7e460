"""
Error handling for Surge.

Error codes follow the status convention of the kernel layer: 0 means
success, anything else identifies the failure class. Two families of
exceptions are raised:

    - ContractViolation: the caller broke a precondition (shape, stride,
      index or element type). These signal programming errors and are
      never caught inside the library.
    - NumericalError: the computation itself failed (for example a
      singular matrix during inversion). Callers may catch these.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

# Success
SURGE_OK = 0

# General errors (1-9)
SURGE_ERROR_UNKNOWN = 1
SURGE_ERROR_INTERNAL = 2

# Argument errors (10-19)
SURGE_ERROR_INVALID_ARGUMENT = 10
SURGE_ERROR_DIMENSION_MISMATCH = 11
SURGE_ERROR_STRIDE = 12
SURGE_ERROR_INDEX_OUT_OF_BOUNDS = 14

# Type errors (20-29)
SURGE_ERROR_TYPE_MISMATCH = 21

# Numerical errors (50-59)
SURGE_ERROR_NUMERICAL_ERROR = 50
SURGE_ERROR_SINGULAR_MATRIX = 55


_ERROR_MESSAGES = {
    SURGE_OK: "Success",
    SURGE_ERROR_UNKNOWN: "Unknown error",
    SURGE_ERROR_INTERNAL: "Internal error",
    SURGE_ERROR_INVALID_ARGUMENT: "Invalid argument",
    SURGE_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    SURGE_ERROR_STRIDE: "Unsupported stride",
    SURGE_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    SURGE_ERROR_TYPE_MISMATCH: "Type mismatch",
    SURGE_ERROR_NUMERICAL_ERROR: "Numerical error",
    SURGE_ERROR_SINGULAR_MATRIX: "Matrix not invertible",
}


# =============================================================================
# Exception Classes
# =============================================================================

class SurgeError(Exception):
    """
    Base exception for all Surge errors.

    Attributes:
        code: Numeric error code (one of the SURGE_ERROR_* constants).
        message: Human readable description.
    """

    code = SURGE_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is not None:
            self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(self.code, f"Unknown error (code={self.code})")
        self.message = message
        super().__init__(f"Surge Error {self.code}: {message}")

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "SurgeError":
        """Create the exception matching ``code`` with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        exc_type = _CODE_TO_EXCEPTION.get(code, cls)
        return exc_type(msg, code=code)


class ContractViolation(SurgeError):
    """A precondition of the called operation does not hold."""

    code = SURGE_ERROR_INVALID_ARGUMENT


class InvalidArgumentError(ContractViolation, ValueError):
    code = SURGE_ERROR_INVALID_ARGUMENT


class DimensionMismatchError(ContractViolation, ValueError):
    """Operand counts, rows or columns are not compatible."""

    code = SURGE_ERROR_DIMENSION_MISMATCH


class StrideError(ContractViolation, ValueError):
    """A zero step, or a non-unit step passed to a unit-stride kernel."""

    code = SURGE_ERROR_STRIDE


class IndexOutOfBoundsError(ContractViolation, IndexError):
    code = SURGE_ERROR_INDEX_OUT_OF_BOUNDS


class TypeMismatchError(ContractViolation, TypeError):
    """Operands do not share an element type, or the type is unsupported."""

    code = SURGE_ERROR_TYPE_MISMATCH


class NumericalError(SurgeError):
    """The kernel reported a numerical failure."""

    code = SURGE_ERROR_NUMERICAL_ERROR


class SingularMatrixError(NumericalError):
    """LU factorization found an exactly zero pivot."""

    code = SURGE_ERROR_SINGULAR_MATRIX


_CODE_TO_EXCEPTION = {
    SURGE_ERROR_INVALID_ARGUMENT: InvalidArgumentError,
    SURGE_ERROR_DIMENSION_MISMATCH: DimensionMismatchError,
    SURGE_ERROR_STRIDE: StrideError,
    SURGE_ERROR_INDEX_OUT_OF_BOUNDS: IndexOutOfBoundsError,
    SURGE_ERROR_TYPE_MISMATCH: TypeMismatchError,
    SURGE_ERROR_NUMERICAL_ERROR: NumericalError,
    SURGE_ERROR_SINGULAR_MATRIX: SingularMatrixError,
}


# =============================================================================
# Error Checking Functions
# =============================================================================

def check_error(code: int, context: str = "") -> None:
    """
    Check a kernel status code and raise if it is not OK.

    Args:
        code: Status returned by a kernel routine.
        context: Optional operation name for the message.

    Raises:
        SurgeError: The subclass registered for ``code``.
    """
    if code == SURGE_OK:
        return
    raise SurgeError.from_code(code, context)


def require(condition: bool, message: str, exc_type: type = InvalidArgumentError) -> None:
    """Raise ``exc_type(message)`` unless ``condition`` holds."""
    if not condition:
        raise exc_type(message)


__all__ = [
    "SURGE_OK",
    "SURGE_ERROR_UNKNOWN",
    "SURGE_ERROR_INTERNAL",
    "SURGE_ERROR_INVALID_ARGUMENT",
    "SURGE_ERROR_DIMENSION_MISMATCH",
    "SURGE_ERROR_STRIDE",
    "SURGE_ERROR_INDEX_OUT_OF_BOUNDS",
    "SURGE_ERROR_TYPE_MISMATCH",
    "SURGE_ERROR_NUMERICAL_ERROR",
    "SURGE_ERROR_SINGULAR_MATRIX",
    "SurgeError",
    "ContractViolation",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "StrideError",
    "IndexOutOfBoundsError",
    "TypeMismatchError",
    "NumericalError",
    "SingularMatrixError",
    "check_error",
    "require",
]

"""
Tests for error codes and the exception hierarchy.
"""

import pytest

from surge.error import (
    SURGE_OK,
    SURGE_ERROR_DIMENSION_MISMATCH,
    SURGE_ERROR_INDEX_OUT_OF_BOUNDS,
    SURGE_ERROR_SINGULAR_MATRIX,
    SurgeError,
    ContractViolation,
    InvalidArgumentError,
    DimensionMismatchError,
    StrideError,
    IndexOutOfBoundsError,
    TypeMismatchError,
    NumericalError,
    SingularMatrixError,
    check_error,
    require,
)


class TestHierarchy:

    @pytest.mark.parametrize("exc_type,builtin", [
        (InvalidArgumentError, ValueError),
        (DimensionMismatchError, ValueError),
        (StrideError, ValueError),
        (IndexOutOfBoundsError, IndexError),
        (TypeMismatchError, TypeError),
    ])
    def test_contract_violations(self, exc_type, builtin):
        assert issubclass(exc_type, ContractViolation)
        assert issubclass(exc_type, builtin)

    def test_numerical_errors_are_not_contract_violations(self):
        assert issubclass(SingularMatrixError, NumericalError)
        assert not issubclass(NumericalError, ContractViolation)
        assert issubclass(NumericalError, SurgeError)

    def test_message_and_code(self):
        err = DimensionMismatchError("rows differ")

        assert err.code == SURGE_ERROR_DIMENSION_MISMATCH
        assert err.message == "rows differ"
        assert "rows differ" in str(err)

    def test_default_message(self):
        assert SingularMatrixError().message == "Matrix not invertible"


class TestFromCode:

    def test_known_code(self):
        err = SurgeError.from_code(SURGE_ERROR_INDEX_OUT_OF_BOUNDS, "row")

        assert isinstance(err, IndexOutOfBoundsError)
        assert err.message.startswith("row: ")

    def test_unknown_code(self):
        err = SurgeError.from_code(999)

        assert type(err) is SurgeError
        assert err.code == 999


class TestCheckError:

    def test_ok_passes(self):
        check_error(SURGE_OK)

    def test_singular(self):
        with pytest.raises(SingularMatrixError, match="getrf"):
            check_error(SURGE_ERROR_SINGULAR_MATRIX, "getrf")


class TestRequire:

    def test_holds(self):
        require(True, "unused")

    def test_default_type(self):
        with pytest.raises(InvalidArgumentError, match="bad"):
            require(False, "bad")

    def test_custom_type(self):
        with pytest.raises(StrideError):
            require(False, "zero step", StrideError)

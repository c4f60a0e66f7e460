"""
Tests for element types and buffer validation.
"""

import pytest
import numpy as np

import surge
from surge._dtypes import (
    DType,
    normalize_dtype,
    to_numpy_dtype,
    precision_of,
    ensure_buffer,
    ensure_same_dtype,
)
from surge import InvalidArgumentError, TypeMismatchError, ValueArray


class TestNormalize:

    @pytest.mark.parametrize("given", [DType.float32, 'float32', np.float32, np.dtype('float32')])
    def test_float32_spellings(self, given):
        assert normalize_dtype(given) == 'float32'

    def test_module_constants(self):
        assert surge.float64 is DType.float64
        assert str(surge.float32) == 'float32'

    @pytest.mark.parametrize("given", ['int32', np.int64, 'complex128'])
    def test_unsupported(self, given):
        with pytest.raises(TypeMismatchError):
            normalize_dtype(given)

    def test_not_a_dtype(self):
        with pytest.raises(TypeMismatchError):
            normalize_dtype(object())

    def test_numpy_and_precision(self):
        assert to_numpy_dtype(DType.float64) == np.float64
        assert precision_of('float32') == 'f32'
        assert precision_of(np.float64) == 'f64'


class TestBuffers:

    def test_valid_buffer_returned_unchanged(self):
        buf = np.zeros(4)

        assert ensure_buffer(buf) is buf

    def test_rejects_non_array(self):
        with pytest.raises(TypeMismatchError):
            ensure_buffer([1.0, 2.0])

    def test_rejects_integer_buffer(self):
        with pytest.raises(TypeMismatchError):
            ensure_buffer(np.zeros(4, dtype=np.int32))

    def test_rejects_two_dimensional(self):
        with pytest.raises(InvalidArgumentError):
            ensure_buffer(np.zeros((2, 2)))

    def test_rejects_non_contiguous(self):
        with pytest.raises(InvalidArgumentError):
            ensure_buffer(np.zeros(8)[::2])

    def test_writeable_required(self):
        buf = np.zeros(4)
        buf.flags.writeable = False

        assert ensure_buffer(buf) is buf
        with pytest.raises(InvalidArgumentError):
            ensure_buffer(buf, writeable=True)

    def test_same_dtype(self):
        assert ensure_same_dtype(np.zeros(1), np.zeros(2)) == np.float64
        with pytest.raises(TypeMismatchError):
            ensure_same_dtype(np.zeros(1), np.zeros(1, dtype=np.float32))


class TestDefaultDtype:

    def test_follows_configured_precision(self):
        surge.config.kernel = surge.KernelConfig(precision='f32')

        assert ValueArray(3).dtype == np.float32

    def test_explicit_dtype_wins(self):
        assert ValueArray(3, dtype='float32').dtype == np.float32
        assert ValueArray(3, dtype=surge.float64).dtype == np.float64

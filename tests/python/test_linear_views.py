"""
Tests for 1-D views and the ValueArray container.
"""

import pytest
import numpy as np

import surge
from surge import (
    LinearReference,
    MutableLinearReference,
    ValueArray,
    IndexOutOfBoundsError,
    StrideError,
    DimensionMismatchError,
    InvalidArgumentError,
    TypeMismatchError,
)


class TestLinearReference:
    """Addressing and construction of read-only views."""

    def test_physical_offsets(self):
        buf = np.arange(10, dtype=np.float64)
        view = LinearReference(buf, 1, 4, 3)

        assert view.count == 3
        assert len(view) == 3
        assert view.tolist() == [1.0, 4.0, 7.0]
        assert view.physical_index(2) == 7

    def test_negative_step(self):
        buf = np.arange(6, dtype=np.float64)
        view = LinearReference(buf, 5, 8, -2)

        assert view.tolist() == [5.0, 3.0, 1.0]

    def test_over_whole_buffer(self):
        buf = np.arange(4, dtype=np.float32)
        view = LinearReference.over(buf)

        assert view.count == 4
        assert view.dtype == np.float32

    def test_empty_view(self):
        buf = np.arange(4, dtype=np.float64)
        view = LinearReference(buf, 2, 2, 1)

        assert view.count == 0
        assert view.tolist() == []

    def test_zero_step_rejected(self):
        buf = np.zeros(4)
        with pytest.raises(StrideError):
            LinearReference(buf, 0, 2, 0)

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidArgumentError):
            LinearReference(np.zeros(4), 3, 1, 1)

    def test_extent_outside_buffer_rejected(self):
        with pytest.raises(IndexOutOfBoundsError):
            LinearReference(np.zeros(4), 0, 3, 2)

    def test_non_numpy_buffer_rejected(self):
        with pytest.raises(TypeMismatchError):
            LinearReference([1.0, 2.0], 0, 2, 1)

    def test_integer_buffer_rejected(self):
        with pytest.raises(TypeMismatchError):
            LinearReference(np.arange(4), 0, 4, 1)

    def test_index_out_of_range(self):
        view = LinearReference(np.zeros(4), 0, 4, 1)
        with pytest.raises(IndexOutOfBoundsError):
            view[4]
        with pytest.raises(IndexOutOfBoundsError):
            view[-1]

    def test_read_only_numpy_view(self):
        buf = np.arange(4, dtype=np.float64)
        arr = LinearReference(buf, 0, 4, 1).to_numpy()

        assert not arr.flags.writeable
        assert np.shares_memory(arr, buf)


class TestMutableLinearReference:
    """Writes through views and aliasing."""

    def test_write_visible_in_buffer(self, strided_buffer):
        buf, view = strided_buffer
        view[1] = 100.0

        assert buf[2] == 100.0
        assert view[1] == 100.0

    def test_aliasing_views_observe_writes(self):
        buf = np.zeros(8, dtype=np.float64)
        evens = MutableLinearReference(buf, 0, 4, 2)
        everything = MutableLinearReference(buf, 0, 8, 1)

        evens[3] = 7.0
        assert everything[6] == 7.0

        everything[4] = -1.0
        assert evens[2] == -1.0

    def test_requires_writeable_buffer(self):
        buf = np.zeros(4)
        buf.flags.writeable = False
        with pytest.raises(InvalidArgumentError):
            MutableLinearReference(buf, 0, 4, 1)

    def test_fill(self, strided_buffer):
        buf, view = strided_buffer
        view.fill(3.0)

        assert buf.tolist() == [3, 1, 3, 3, 3, 5, 3, 7, 3, 9, 3, 11]

    def test_assign_sequence(self, strided_buffer):
        buf, view = strided_buffer
        view.assign([10, 20, 30, 40, 50, 60])

        assert buf[::2].tolist() == [10, 20, 30, 40, 50, 60]
        assert buf[1::2].tolist() == [1, 3, 5, 7, 9, 11]

    def test_assign_wrong_length(self, strided_buffer):
        _, view = strided_buffer
        with pytest.raises(DimensionMismatchError):
            view.assign([1, 2, 3])

    def test_numpy_view_is_writable(self, strided_buffer):
        buf, view = strided_buffer
        view.to_numpy()[0] = 42.0

        assert buf[0] == 42.0


class TestSlicing:
    """Sub-views over the same buffer."""

    def test_slice_is_view(self, strided_buffer):
        buf, view = strided_buffer
        sub = view[1:4]

        assert isinstance(sub, MutableLinearReference)
        assert sub.tolist() == [2.0, 4.0, 6.0]
        sub[0] = -5.0
        assert buf[2] == -5.0

    def test_slice_step_multiplies(self, strided_buffer):
        _, view = strided_buffer
        sub = view[::2]

        assert sub.step == 4
        assert sub.tolist() == [0.0, 4.0, 8.0]

    def test_reverse_slice(self, strided_buffer):
        _, view = strided_buffer

        assert view[::-1].tolist() == [10.0, 8.0, 6.0, 4.0, 2.0, 0.0]

    def test_slice_is_clamped(self, strided_buffer):
        _, view = strided_buffer

        assert view[4:100].tolist() == [8.0, 10.0]

    def test_slice_of_readonly_stays_readonly(self):
        view = LinearReference(np.arange(5, dtype=np.float64), 0, 5, 1)

        assert isinstance(view[1:3], LinearReference)

    def test_subview_bounds(self, strided_buffer):
        _, view = strided_buffer

        assert view.subview(2, 4).tolist() == [4.0, 6.0]
        with pytest.raises(IndexOutOfBoundsError):
            view.subview(3, 7)

    def test_slice_assignment(self, strided_buffer):
        buf, view = strided_buffer
        view[0:2] = [-1, -2]

        assert buf[0] == -1 and buf[2] == -2
        with pytest.raises(DimensionMismatchError):
            view[0:2] = [1, 2, 3]

    def test_slice_assignment_beyond_receiver(self, vector_1234):
        with pytest.raises(IndexOutOfBoundsError):
            vector_1234[2:10] = [9, 9]
        with pytest.raises(IndexOutOfBoundsError):
            vector_1234[-2:] = [9, 9]

        assert vector_1234.tolist() == [1, 2, 3, 4]
        assert vector_1234[2:10].tolist() == [3, 4]

    def test_full_slice_assignment(self, vector_1234):
        vector_1234[:] = [4, 3, 2, 1]
        vector_1234[4:4] = []

        assert vector_1234.tolist() == [4, 3, 2, 1]


class TestEquality:

    def test_equal_views(self):
        a = ValueArray.from_list([1, 2, 3])
        buf = np.array([1, 9, 2, 9, 3, 9], dtype=np.float64)
        b = LinearReference(buf, 0, 3, 2)

        assert a == b
        assert a == [1, 2, 3]

    def test_different_lengths(self):
        assert ValueArray.from_list([1, 2]) != ValueArray.from_list([1, 2, 3])

    def test_different_values(self):
        assert ValueArray.from_list([1, 2]) != ValueArray.from_list([1, 3])


class TestValueArray:

    def test_zeros(self):
        arr = ValueArray.zeros(5)

        assert arr.count == 5
        assert arr.tolist() == [0.0] * 5
        assert arr.dtype == np.float64

    def test_default_dtype_follows_precision(self):
        with surge.config.local(kernel=surge.KernelConfig(precision='f32')):
            arr = ValueArray(3)
        assert arr.dtype == np.float32

    def test_alignment(self):
        arr = ValueArray(17)

        assert arr.data_ptr % surge.config.memory.alignment == 0

    def test_repeated(self):
        assert ValueArray.repeated(2.5, 3).tolist() == [2.5, 2.5, 2.5]

    def test_from_view_copies(self, strided_buffer):
        buf, view = strided_buffer
        arr = ValueArray.from_view(view)
        buf[0] = 100.0

        assert arr.tolist() == [0.0, 2.0, 4.0, 6.0, 8.0, 10.0]
        assert arr.step == 1

    def test_from_numpy(self):
        arr = ValueArray.from_numpy(np.array([1, 2, 3], dtype=np.float32))

        assert arr.dtype == np.float32
        assert arr.tolist() == [1.0, 2.0, 3.0]

    def test_copy_is_independent(self, vector_1234):
        clone = vector_1234.copy()
        clone[0] = 9.0

        assert vector_1234[0] == 1.0

    def test_slice_returns_reference(self, vector_1234):
        sub = vector_1234[1:3]
        sub[0] = 20.0

        assert isinstance(sub, MutableLinearReference)
        assert vector_1234.tolist() == [1.0, 20.0, 3.0, 4.0]

    def test_iteration(self, vector_1234):
        assert [float(x) for x in vector_1234] == [1.0, 2.0, 3.0, 4.0]

    def test_unsupported_dtype(self):
        with pytest.raises(TypeMismatchError):
            ValueArray(3, dtype='int32')

    def test_row_and_column_matrix_share_storage(self, vector_1234):
        row = vector_1234.to_row_matrix()
        column = vector_1234.to_column_matrix()

        assert row.shape == (1, 4)
        assert column.shape == (4, 1)
        row[0, 2] = 30.0
        assert column[2, 0] == 30.0
        assert vector_1234[2] == 30.0


class TestBoundsCheckConfig:

    def test_disabled_checks_skip_range_test(self):
        buf = np.arange(6, dtype=np.float64)
        view = LinearReference(buf, 0, 3, 1)

        with surge.config.local(check=surge.CheckConfig(bounds=False)):
            # Reads the physical element behind the logical range
            assert view[3] == 3.0

        with pytest.raises(IndexOutOfBoundsError):
            view[3]

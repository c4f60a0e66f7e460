"""
Tests for reductions, regression and tolerance comparison.
"""

import math

import pytest
import numpy as np

from surge import ValueArray, Matrix, DimensionMismatchError
from surge.math import reductions


class TestBasicReductions:

    def test_values(self, vector_1234):
        assert reductions.sum(vector_1234) == 10.0
        assert reductions.max(vector_1234) == 4.0
        assert reductions.min(vector_1234) == 1.0
        assert reductions.mean(vector_1234) == 2.5

    def test_magnitude_and_squares(self):
        x = ValueArray.from_list([-1, 2, -3, 4])

        assert reductions.mean_of_absolute(x) == 2.5
        assert reductions.mean_of_squares(x) == 7.5
        assert reductions.root_mean_square(x) == pytest.approx(math.sqrt(7.5))

    def test_strided_view(self, strided_buffer):
        _, view = strided_buffer

        assert reductions.sum(view) == 30.0
        assert reductions.max(view[::-1]) == 10.0

    def test_matrix_column(self, matrix_3x3):
        assert reductions.sum(matrix_3x3.column(2)) == 18.0

    def test_empty(self):
        empty = ValueArray(0)

        assert reductions.sum(empty) == 0.0
        assert reductions.max(empty) == -math.inf
        assert reductions.min(empty) == math.inf
        assert math.isnan(reductions.mean(empty))
        assert math.isnan(reductions.standard_deviation(empty))

    def test_float32_input(self):
        x = ValueArray.from_list([0.5, 1.5], dtype='float32')

        assert reductions.mean(x) == pytest.approx(1.0)


class TestStandardDeviation:

    def test_population_deviation(self):
        x = ValueArray.from_list([2, 4, 4, 4, 5, 5, 7, 9])

        assert reductions.standard_deviation(x) == pytest.approx(2.0)

    def test_matches_numpy(self, rng):
        data = rng.standard_normal(50) * 3 + 10

        assert reductions.standard_deviation(data) == pytest.approx(np.std(data))

    def test_constant(self):
        assert reductions.standard_deviation([3.0, 3.0, 3.0]) == 0.0


class TestLinearRegression:

    def test_exact_line(self):
        x = ValueArray.from_list([0, 1, 2, 3])
        y = ValueArray.from_list([1, 3, 5, 7])
        fit = reductions.linear_regression(x, y)

        assert fit.slope == pytest.approx(2.0)
        assert fit.intercept == pytest.approx(1.0)

    def test_matches_polyfit(self, rng):
        x = rng.uniform(0, 10, 30)
        y = 0.5 * x - 2 + rng.normal(0, 0.1, 30)
        slope, intercept = reductions.linear_regression(x, y)
        expected_slope, expected_intercept = np.polyfit(x, y, 1)

        assert slope == pytest.approx(expected_slope, rel=1e-6)
        assert intercept == pytest.approx(expected_intercept, rel=1e-6)

    def test_unequal_lengths(self):
        with pytest.raises(DimensionMismatchError):
            reductions.linear_regression([1, 2, 3], [1, 2])

    def test_degenerate_x(self):
        fit = reductions.linear_regression([1, 1, 1], [1, 2, 3])

        assert math.isnan(fit.slope)


class TestAllClose:

    def test_vectors(self, vector_1234):
        assert reductions.allclose(vector_1234, [1, 2, 3, 4 + 1e-9])
        assert not reductions.allclose(vector_1234, [1, 2, 3, 4.1])
        assert not reductions.allclose(vector_1234, [1, 2, 3])

    def test_matrices(self, matrix_a, column_major_a):
        assert reductions.allclose(matrix_a, column_major_a)
        assert reductions.allclose(matrix_a, [[1, 2], [3, 4]])
        assert not reductions.allclose(matrix_a, Matrix.identity(2))

    def test_explicit_tolerance(self, vector_1234):
        assert reductions.allclose(vector_1234, [1, 2, 3, 4.1], atol=0.2)

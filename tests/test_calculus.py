"""
Tests for the numerical calculus helpers.
"""

import math

import pytest

from exprcalc.calculus import derivative, find_extremum, find_root, integrate, limit
from exprcalc.errors import (
    ConvergenceError,
    DivisionByZeroError,
    LimitNotFoundError,
    UnknownFunctionOrConstantError,
)


class TestDerivative:
    """Test central-difference derivatives."""

    def test_polynomial(self):
        assert derivative("x^3", 2) == pytest.approx(12, abs=1e-5)

    def test_trigonometric(self):
        assert derivative("sin(x)", 0) == pytest.approx(1, abs=1e-8)

    def test_unary_minus_on_variable(self):
        assert derivative("-x^2", 3) == pytest.approx(-6, abs=1e-5)

    def test_custom_step(self):
        assert derivative("x^2", 1, step=1e-3) == pytest.approx(2, abs=1e-9)

    def test_evaluation_errors_propagate(self):
        with pytest.raises(UnknownFunctionOrConstantError):
            derivative("y^2", 1)

    def test_non_positive_step_rejected(self):
        with pytest.raises(ValueError):
            derivative("x^2", 1, step=0)


class TestIntegrate:
    """Test Simpson's rule integration."""

    def test_polynomial(self):
        assert integrate("x^2", 0, 3) == pytest.approx(9, abs=1e-9)

    def test_reversed_bounds(self):
        assert integrate("x^2", 3, 0) == pytest.approx(-9, abs=1e-9)

    def test_empty_interval(self):
        assert integrate("x", 1, 1) == 0

    def test_sine(self):
        assert integrate("sin(x)", 0, math.pi) == pytest.approx(2, abs=1e-8)

    def test_odd_interval_count_is_rounded_up(self):
        assert integrate("x^3", 0, 2, intervals=3) == pytest.approx(4, abs=1e-12)

    def test_too_few_intervals(self):
        with pytest.raises(ValueError):
            integrate("x", 0, 1, intervals=1)
        with pytest.raises(ValueError):
            integrate("x", 0, 1, intervals=0)

    def test_singularity_raises(self):
        with pytest.raises(DivisionByZeroError):
            integrate("1 / x", 0, 1)


class TestFindRoot:
    """Test Newton's method."""

    def test_square_root_of_two(self):
        assert find_root("x^2 - 2", 1) == pytest.approx(math.sqrt(2), abs=1e-8)

    def test_linear(self):
        assert find_root("x - 3") == pytest.approx(3, abs=1e-9)

    def test_vanishing_derivative(self):
        with pytest.raises(ConvergenceError):
            find_root("x^2 + 1", 0)

    def test_iteration_budget(self):
        with pytest.raises(ConvergenceError):
            find_root("x^2 + 1", 0.5, max_iterations=3)


class TestLimit:
    """Test limits."""

    def test_defined_point(self):
        assert limit("x^2", 3) == 9

    def test_removable_singularity(self):
        assert limit("sin(x) / x", 0) == pytest.approx(1, abs=1e-6)

    def test_removable_singularity_off_origin(self):
        assert limit("(x^2 - 1) / (x - 1)", 1) == pytest.approx(2, abs=1e-6)

    def test_one_sided(self):
        assert limit("sqrt(x) / sqrt(x)", 0) == pytest.approx(1)

    def test_divergent(self):
        with pytest.raises(LimitNotFoundError):
            limit("1 / x", 0)

    def test_jump(self):
        with pytest.raises(LimitNotFoundError):
            limit("abs(x) / x", 0)


class TestFindExtremum:
    """Test golden-section search."""

    def test_minimum(self):
        x, value = find_extremum("(x - 1)^2", -5, 5)
        assert x == pytest.approx(1, abs=1e-4)
        assert value == pytest.approx(0, abs=1e-8)

    def test_maximum(self):
        x, value = find_extremum("-(x - 2)^2 + 3", 0, 5, kind="max")
        assert x == pytest.approx(2, abs=1e-4)
        assert value == pytest.approx(3, abs=1e-8)

    def test_swapped_bounds(self):
        x, _ = find_extremum("(x - 1)^2", 5, -5)
        assert x == pytest.approx(1, abs=1e-4)

    def test_invalid_kind(self):
        with pytest.raises(ValueError):
            find_extremum("x^2", -1, 1, kind="median")

    def test_non_positive_tolerance_rejected(self):
        with pytest.raises(ValueError):
            find_extremum("x^2", -1, 1, tolerance=0.0)
        with pytest.raises(ValueError):
            find_root("x - 1", tolerance=0)
        with pytest.raises(ValueError):
            find_root("x - 1", max_iterations=0)
        with pytest.raises(ValueError):
            limit("x", 0, step=0.0)

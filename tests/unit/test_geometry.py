"""Tests for the pure geometry helpers."""

import math

import pytest
from hypothesis import given, strategies as st

from forcegraph.geometry import Point, damp, dist, force_direction, logistic

finite = st.floats(min_value=-1e4, max_value=1e4, allow_nan=False, allow_infinity=False)


class TestDist:

    def test_pythagorean_distance(self):
        assert dist(Point(0, 0), Point(3, 4)) == 5

    def test_symmetric(self):
        assert dist(Point(1, 2), Point(-4, 7)) == dist(Point(-4, 7), Point(1, 2))


class TestForceDirection:

    def test_splits_along_line(self):
        x, y = force_direction(Point(0, 0), Point(3, 4), 5)
        assert x == pytest.approx(3)
        assert y == pytest.approx(4)

    def test_negative_force_points_back(self):
        x, y = force_direction(Point(0, 0), Point(3, 4), -5)
        assert x == pytest.approx(-3)
        assert y == pytest.approx(-4)

    def test_each_quadrant(self):
        x, y = force_direction(Point(10, 10), Point(7, 14), 5)
        assert x == pytest.approx(-3)
        assert y == pytest.approx(4)

    def test_vertical_line(self):
        assert force_direction(Point(0, 0), Point(0, -2), 1.5) == (0.0, -1.5)

    def test_horizontal_line(self):
        assert force_direction(Point(5, 1), Point(-5, 1), 2) == (-2.0, 0.0)

    def test_coincident_points_give_no_force(self):
        """Zero separation must not produce NaN."""
        assert force_direction(Point(4, 4), Point(4, 4), 100) == (0.0, 0.0)

    @given(finite, finite, finite, finite, st.floats(min_value=-100, max_value=100))
    def test_magnitude_preserved(self, x1, y1, x2, y2, force):
        x, y = force_direction(Point(x1, y1), Point(x2, y2), force)
        assert math.isfinite(x) and math.isfinite(y)
        if (x1, y1) != (x2, y2):
            assert math.hypot(x, y) == pytest.approx(abs(force), rel=1e-9, abs=1e-9)


class TestDamp:

    def test_fractional_attenuation(self):
        assert damp(10, 0.01) == pytest.approx(9.9)
        assert damp(-10, 0.01) == pytest.approx(-9.9)

    def test_zero_stays_zero(self):
        assert damp(0.0, 0.01) == 0.0

    def test_full_damping_floors_at_zero(self):
        assert damp(3.0, 1.0) == 0.0

    @given(st.floats(min_value=-1e6, max_value=1e6), st.floats(min_value=0, max_value=0.99))
    def test_never_grows_or_flips(self, force, damping):
        damped = damp(force, damping)
        assert abs(damped) <= abs(force)
        assert damped * force >= 0


class TestLogistic:

    def test_bounds(self):
        assert logistic(-100, 2, 8) == pytest.approx(2)
        assert logistic(100, 2, 8) == pytest.approx(8)
        assert logistic(0, 2, 8) == pytest.approx(5)

    def test_decreasing_curve(self):
        assert logistic(-50, 30, 1) == pytest.approx(30)
        assert logistic(50, 30, 1) == pytest.approx(1)

    def test_no_overflow(self):
        assert logistic(-1e6, 1, 2, steepness=10) == 1

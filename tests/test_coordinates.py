"""Tests for DDDmm.mmmm and knot conversions."""

import pytest

from dashcam_gps.processing.coordinates import KNOTS_TO_MPS, dms_to_deg, speed_mps


class TestDmsToDeg:
    def test_zero(self):
        assert dms_to_deg(0.0, False) == 0.0

    def test_whole_degrees_and_minutes(self):
        assert dms_to_deg(4730.0, False) == 47.5

    def test_inverted(self):
        assert dms_to_deg(4730.0, True) == -47.5

    def test_three_digit_degrees(self):
        assert dms_to_deg(12015.0, False) == pytest.approx(120.25)

    def test_fractional_minutes(self):
        assert dms_to_deg(5212.345, False) == pytest.approx(52 + 12.345 / 60)

    def test_minutes_only(self):
        assert dms_to_deg(30.0, True) == pytest.approx(-0.5)


class TestSpeedMps:
    def test_one_knot(self):
        assert speed_mps(1.0) == 0.514444

    def test_constant_is_not_exact_nautical_mile(self):
        assert KNOTS_TO_MPS == 0.514444
        assert KNOTS_TO_MPS != 1852 / 3600

    def test_zero(self):
        assert speed_mps(0.0) == 0.0

    def test_scales_linearly(self):
        assert speed_mps(20.0) == pytest.approx(10.28888)

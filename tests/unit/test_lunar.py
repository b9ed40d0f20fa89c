"""
Unit tests for SKYPATH lunar position.
"""

import math

import pytest

from services.ephemeris.lunar import lunar_coordinates, lunar_position
from services.ephemeris.timebase import to_days
from tests.conftest import FAIRBANKS_INSTANT, FULL_MOON_2021_01_28


class TestLunarCoordinates:
    """Tests for geocentric lunar RA/Dec."""

    def test_declination_bounded(self):
        """Obliquity plus the maximum ecliptic latitude bounds the declination."""
        start = to_days(FULL_MOON_2021_01_28)
        limit = 23.4397 + 5.128
        for step in range(0, 19 * 366 * 4):
            dec = math.degrees(lunar_coordinates(start + step / 4).declination)
            assert abs(dec) <= limit + 1e-9

    def test_full_moon_opposite_sun(self):
        """At full moon the Moon's RA is about 180° from the Sun's."""
        from services.ephemeris.solar import solar_coordinates

        days = to_days(FULL_MOON_2021_01_28)
        moon_ra = math.degrees(lunar_coordinates(days).right_ascension)
        sun_ra = math.degrees(solar_coordinates(days).right_ascension)
        separation = abs((moon_ra - sun_ra) % 360.0 - 180.0)
        assert separation < 10.0

    def test_moves_eastward_about_13_degrees_per_day(self):
        days = to_days(FULL_MOON_2021_01_28)
        today = math.degrees(lunar_coordinates(days).right_ascension)
        tomorrow = math.degrees(lunar_coordinates(days + 1).right_ascension)
        motion = (tomorrow - today) % 360.0
        assert 9.0 < motion < 18.0


class TestLunarPosition:
    """Tests for lunar altitude/azimuth."""

    def test_full_moon_culminates_near_local_midnight(self):
        """Longitude 71°E, latitude 40°N: the January 2021 full moon is near the meridian."""
        pos = lunar_position(FULL_MOON_2021_01_28, 40.0, 71.0)
        assert pos.altitude_degrees > 60.0
        assert abs(pos.azimuth_degrees - 180.0) < 30.0

    def test_full_moon_below_horizon_on_far_side(self):
        """Half a world away the same full moon is under the horizon."""
        pos = lunar_position(FULL_MOON_2021_01_28, 40.0, -109.0)
        assert pos.altitude_degrees < 0.0
        assert not pos.is_visible

    def test_ranges(self, sample_sites, sample_instants):
        """Altitude in [-90, 90] and azimuth in [0, 360) everywhere."""
        for site in sample_sites:
            for instant in sample_instants:
                for offset in range(0, 86400 * 3, 5 * 3600):
                    pos = lunar_position(instant + offset, site.latitude, site.longitude)
                    assert -90.0 <= pos.altitude_degrees <= 90.0
                    assert 0.0 <= pos.azimuth_degrees < 360.0

    def test_repeat_calls_identical(self, fairbanks):
        first = lunar_position(FULL_MOON_2021_01_28, fairbanks.latitude, fairbanks.longitude)
        second = lunar_position(FULL_MOON_2021_01_28, fairbanks.latitude, fairbanks.longitude)
        assert first == second

    @pytest.mark.parametrize("latitude", [89.9, -89.9])
    def test_near_polar_latitudes_finite(self, latitude):
        pos = lunar_position(FULL_MOON_2021_01_28, latitude, 0.0)
        assert math.isfinite(pos.altitude_degrees)
        assert math.isfinite(pos.azimuth_degrees)


class TestFrozenValues:
    """Exact outputs pinned as regression values."""

    def test_fairbanks_2021_07_01(self, fairbanks):
        pos = lunar_position(FAIRBANKS_INSTANT, fairbanks.latitude, fairbanks.longitude)
        assert pos.altitude_degrees == pytest.approx(-21.142287052, abs=1e-6)
        assert pos.azimuth_degrees == pytest.approx(306.505380234, abs=1e-6)

    def test_full_moon_2021_01_28(self):
        pos = lunar_position(FULL_MOON_2021_01_28, 40.0, 71.0)
        assert pos.altitude_degrees == pytest.approx(72.145983665, abs=1e-6)
        assert pos.azimuth_degrees == pytest.approx(168.645594214, abs=1e-6)

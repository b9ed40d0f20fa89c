"""
Unit tests for SKYPATH reference ephemeris.

Deviation arithmetic and load failures run offline. The comparisons against
JPL DE440 need the kernel (downloaded on first use) and run only when
SKYPATH_REFERENCE_TESTS=1.
"""

import os

import pytest

from services.ephemeris import skyfield_service
from services.ephemeris.skyfield_service import (
    ReferenceEphemeris,
    phase_deviation,
    position_deviation,
)
from skypath.exceptions import EphemerisError
from skypath.types import Body, GeoLocation, HorizontalPosition
from tests.conftest import FAIRBANKS_INSTANT, FULL_MOON_2021_01_28, NEW_MOON_2016_11_29


# =============================================================================
# Fakes
# =============================================================================

class FailingLoader:
    """Loader whose downloads always fail."""

    def __init__(self, directory):
        self.directory = directory

    def timescale(self):
        raise OSError("network unreachable")

    def __call__(self, filename):
        raise OSError("network unreachable")


class StubLoader:
    """Loader returning placeholder objects without touching the network."""

    requested = []

    def __init__(self, directory):
        self.directory = directory

    def timescale(self):
        return object()

    def __call__(self, filename):
        StubLoader.requested.append(filename)
        return {"earth": object(), "sun": object(), "moon": object()}


# =============================================================================
# Deviation Arithmetic
# =============================================================================

class TestPositionDeviation:
    """Tests for model-minus-reference position differences."""

    def test_simple_difference(self):
        deviation = position_deviation(
            Body.SUN,
            HorizontalPosition(30.5, 120.0),
            HorizontalPosition(30.0, 121.5),
        )
        assert deviation.altitude_error == pytest.approx(0.5)
        assert deviation.azimuth_error == pytest.approx(-1.5)
        assert deviation.body is Body.SUN

    def test_azimuth_error_wraps_through_north(self):
        deviation = position_deviation(
            Body.MOON,
            HorizontalPosition(10.0, 359.0),
            HorizontalPosition(10.0, 1.0),
        )
        assert deviation.azimuth_error == pytest.approx(-2.0)

    def test_azimuth_error_range(self):
        deviation = position_deviation(
            Body.MOON,
            HorizontalPosition(0.0, 0.0),
            HorizontalPosition(0.0, 180.0),
        )
        assert -180.0 <= deviation.azimuth_error < 180.0


class TestPhaseDeviation:
    """Tests for phase differences across the new-moon wrap."""

    def test_simple_difference(self):
        assert phase_deviation(0.52, 0.50) == pytest.approx(0.02)

    def test_wraps_at_new_moon(self):
        assert phase_deviation(0.01, 0.99) == pytest.approx(0.02)
        assert phase_deviation(0.99, 0.01) == pytest.approx(-0.02)


# =============================================================================
# Loading
# =============================================================================

class TestReferenceLoading:
    """Tests for kernel loading without network access."""

    def test_starts_uninitialized(self, tmp_path):
        reference = ReferenceEphemeris(tmp_path)
        assert reference.initialized is False
        assert reference.ephemeris_file == "de440s.bsp"

    def test_load_failure_raises_ephemeris_error(self, tmp_path, monkeypatch):
        monkeypatch.setattr(skyfield_service, "Loader", FailingLoader)
        reference = ReferenceEphemeris(tmp_path / "kernels")

        with pytest.raises(EphemerisError) as exc_info:
            reference.initialize()

        assert exc_info.value.ephemeris_file == "de440s.bsp"
        assert "network unreachable" in str(exc_info.value)
        assert reference.initialized is False
        assert (tmp_path / "kernels").is_dir()

    def test_query_loads_on_demand(self, tmp_path, monkeypatch):
        monkeypatch.setattr(skyfield_service, "Loader", FailingLoader)
        reference = ReferenceEphemeris(tmp_path)

        with pytest.raises(EphemerisError):
            reference.moon_phase(FULL_MOON_2021_01_28)

    def test_initialize_with_stub_loader(self, tmp_path, monkeypatch):
        monkeypatch.setattr(skyfield_service, "Loader", StubLoader)
        StubLoader.requested.clear()

        reference = skyfield_service.create_reference(tmp_path, "de421.bsp")

        assert reference.initialized is True
        assert StubLoader.requested == ["de421.bsp"]

    def test_create_reference_default_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(skyfield_service, "Loader", StubLoader)
        StubLoader.requested.clear()

        skyfield_service.create_reference(tmp_path)

        assert StubLoader.requested == ["de440s.bsp"]


# =============================================================================
# Comparison Against DE440
# =============================================================================

@pytest.mark.reference
@pytest.mark.skipif(
    os.environ.get("SKYPATH_REFERENCE_TESTS") != "1",
    reason="set SKYPATH_REFERENCE_TESTS=1 to download and compare against DE440",
)
class TestAgainstReference:
    """Analytic model accuracy measured against JPL DE440."""

    @pytest.fixture(scope="class")
    def reference(self, tmp_path_factory):
        data_dir = os.environ.get("SKYPATH_REFERENCE_DATA") or tmp_path_factory.mktemp("kernels")
        return skyfield_service.create_reference(data_dir)

    def test_sun_within_a_degree(self, reference, fairbanks):
        comparison = reference.compare(FAIRBANKS_INSTANT, fairbanks)
        assert abs(comparison.sun.altitude_error) < 1.0
        assert abs(comparison.sun.azimuth_error) < 2.0

    def test_moon_within_a_few_degrees(self, reference):
        site = GeoLocation(40.0, 71.0)
        comparison = reference.compare(FULL_MOON_2021_01_28, site)
        assert abs(comparison.moon.altitude_error) < 4.0
        assert abs(comparison.moon.azimuth_error) < 8.0

    @pytest.mark.parametrize("instant", [NEW_MOON_2016_11_29, FULL_MOON_2021_01_28])
    def test_phase_close(self, reference, instant):
        comparison = reference.compare(instant, GeoLocation(0.0, 0.0))
        assert abs(comparison.phase_error) < 0.03

    def test_reference_phase_at_full_moon(self, reference):
        assert reference.moon_phase(FULL_MOON_2021_01_28) == pytest.approx(0.5, abs=0.002)

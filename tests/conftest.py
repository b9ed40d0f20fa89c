"""
Pytest Fixtures for SKYPATH Testing.

Provides reference sites and instants shared by the ephemeris tests, and
isolation of configuration discovery from the developer's machine.
"""

import pytest

from skypath.types import GeoLocation


# =============================================================================
# Instants (Unix seconds, UTC)
# =============================================================================

J2000_MIDNIGHT = 946684800          # 2000-01-01T00:00:00Z
FAIRBANKS_INSTANT = 1625097600      # 2021-07-01T00:00:00Z
TROMSO_SOLAR_MIDNIGHT = 1624229040  # 2021-06-20T22:44:00Z
NEW_MOON_2016_11_29 = 1480421965    # 2016-11-29T12:19:25Z
FULL_MOON_2021_01_28 = 1611861360   # 2021-01-28T19:16:00Z


# =============================================================================
# Site Fixtures
# =============================================================================

@pytest.fixture
def fairbanks() -> GeoLocation:
    """Fairbanks, Alaska."""
    return GeoLocation(latitude=64.8, longitude=-147.0, name="Fairbanks")


@pytest.fixture
def tromso() -> GeoLocation:
    """Tromsø, Norway (midnight sun in June)."""
    return GeoLocation(latitude=69.65, longitude=18.96, name="Tromsø")


@pytest.fixture
def new_york() -> GeoLocation:
    """New York City."""
    return GeoLocation(latitude=40.7, longitude=-74.0, name="New York")


@pytest.fixture
def sample_sites() -> list[GeoLocation]:
    """Sites spread over both hemispheres, including near-polar latitudes."""
    return [
        GeoLocation(0.0, 0.0),
        GeoLocation(51.4769, -0.0005),
        GeoLocation(-33.87, 151.21),
        GeoLocation(64.8, -147.0),
        GeoLocation(-77.85, 166.67),
        GeoLocation(89.9, 45.0),
        GeoLocation(-89.9, -120.0),
        GeoLocation(19.82, -155.47),
    ]


@pytest.fixture
def sample_instants() -> list[int]:
    """Instants spread over several decades around J2000."""
    return [
        J2000_MIDNIGHT,
        0,
        -86400 * 365 * 20,
        FAIRBANKS_INSTANT,
        NEW_MOON_2016_11_29,
        FULL_MOON_2021_01_28,
        1893456000,  # 2030-01-01
        2524608000,  # 2050-01-01
    ]


# =============================================================================
# Environment Isolation
# =============================================================================

@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """
    Run with no discoverable config file and no SKYPATH_* overrides.

    Yields the temporary working directory.
    """
    import os

    for name in list(os.environ):
        if name.startswith("SKYPATH_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    yield tmp_path

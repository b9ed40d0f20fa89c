"""
SKYPATH Solar Position

Low-precision analytic model of the Sun's apparent position:
mean anomaly -> equation of center -> ecliptic longitude -> RA/Dec ->
altitude/azimuth. Accurate to a few arcminutes over several centuries
around J2000, which is far below what a sky-path display can resolve.
"""

import math

from skypath.types import (
    DayFraction,
    Degrees,
    EquatorialCoordinates,
    HorizontalPosition,
    Instant,
    Radians,
    TwilightPhase,
)

from .coordinates import equatorial_from_ecliptic, horizontal_position
from .timebase import to_days

# Mean anomaly at J2000.0 and its daily motion, degrees
MEAN_ANOMALY_AT_EPOCH = 357.5291
MEAN_ANOMALY_RATE = 0.98560028

# Perihelion of the Earth, degrees
PERIHELION = math.radians(102.9372)


def solar_mean_anomaly(days: DayFraction) -> Radians:
    return math.radians(MEAN_ANOMALY_AT_EPOCH + MEAN_ANOMALY_RATE * days)


def equation_of_center(mean_anomaly: Radians) -> Radians:
    return math.radians(
        1.9148 * math.sin(mean_anomaly)
        + 0.02 * math.sin(2 * mean_anomaly)
        + 0.0003 * math.sin(3 * mean_anomaly)
    )


def ecliptic_longitude(mean_anomaly: Radians) -> Radians:
    """Geocentric ecliptic longitude of the Sun (not reduced to 0..2pi)."""
    return mean_anomaly + equation_of_center(mean_anomaly) + PERIHELION + math.pi


def solar_coordinates(days: DayFraction) -> EquatorialCoordinates:
    """Solar RA/Dec; the Sun's ecliptic latitude is taken as zero."""
    longitude = ecliptic_longitude(solar_mean_anomaly(days))
    return equatorial_from_ecliptic(longitude, 0.0)


def solar_position(instant: Instant, latitude: Degrees, longitude: Degrees) -> HorizontalPosition:
    """
    Get altitude/azimuth of the Sun.

    Args:
        instant: Unix seconds, UTC
        latitude: Observer latitude in degrees (callers clamp away from +/-90)
        longitude: Observer longitude in degrees, east positive

    Returns:
        HorizontalPosition with altitude and north-referenced azimuth
    """
    days = to_days(instant)
    return horizontal_position(solar_coordinates(days), days, latitude, longitude)


def twilight_phase(sun_altitude: Degrees) -> TwilightPhase:
    """
    Determine twilight phase from the Sun's altitude.

    Returns:
        TwilightPhase enum value
    """
    if sun_altitude > 0:
        return TwilightPhase.DAY
    elif sun_altitude > -6:
        return TwilightPhase.CIVIL
    elif sun_altitude > -12:
        return TwilightPhase.NAUTICAL
    elif sun_altitude > -18:
        return TwilightPhase.ASTRONOMICAL
    else:
        return TwilightPhase.NIGHT

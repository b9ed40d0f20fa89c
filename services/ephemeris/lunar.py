"""
SKYPATH Lunar Position

Keeps only the largest periodic terms of the lunar theory: the equation of
center in longitude and the main term in latitude. Errors are around a
degree, dominated by the omitted evection and variation terms.
"""

import math

from skypath.types import (
    DayFraction,
    Degrees,
    EquatorialCoordinates,
    HorizontalPosition,
    Instant,
)

from .coordinates import equatorial_from_ecliptic, horizontal_position
from .timebase import to_days

# (value at J2000.0, daily motion) in degrees
MEAN_LONGITUDE = (218.316, 13.176396)
MEAN_ANOMALY = (134.963, 13.064993)
MEAN_DISTANCE = (93.272, 13.229350)

LONGITUDE_AMPLITUDE = math.radians(6.289)
LATITUDE_AMPLITUDE = math.radians(5.128)


def _mean_element(element: tuple[float, float], days: DayFraction) -> float:
    at_epoch, rate = element
    return math.radians(at_epoch + rate * days)


def lunar_coordinates(days: DayFraction) -> EquatorialCoordinates:
    """Geocentric lunar RA/Dec."""
    mean_longitude = _mean_element(MEAN_LONGITUDE, days)
    mean_anomaly = _mean_element(MEAN_ANOMALY, days)
    mean_distance = _mean_element(MEAN_DISTANCE, days)

    longitude = mean_longitude + LONGITUDE_AMPLITUDE * math.sin(mean_anomaly)
    latitude = LATITUDE_AMPLITUDE * math.sin(mean_distance)

    return equatorial_from_ecliptic(longitude, latitude)


def lunar_position(instant: Instant, latitude: Degrees, longitude: Degrees) -> HorizontalPosition:
    """
    Get altitude/azimuth of the Moon.

    Args:
        instant: Unix seconds, UTC
        latitude: Observer latitude in degrees (callers clamp away from +/-90)
        longitude: Observer longitude in degrees, east positive

    Returns:
        HorizontalPosition with altitude and north-referenced azimuth
    """
    days = to_days(instant)
    return horizontal_position(lunar_coordinates(days), days, latitude, longitude)

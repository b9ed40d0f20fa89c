"""
SKYPATH Coordinate Transforms

Ecliptic -> equatorial -> horizontal conversions shared by the solar and
lunar models. All angles are radians except the HorizontalPosition result,
which is reported in degrees with a north-referenced azimuth.

Reference: the low-precision formulas popularized by suncalc
(https://github.com/mourner/suncalc), which follow
https://aa.quae.nl/en/reken/hemelpositie.html.
"""

import math

from skypath.constants import OBLIQUITY
from skypath.types import (
    DayFraction,
    Degrees,
    EquatorialCoordinates,
    HorizontalPosition,
    Radians,
)

from .timebase import normalize_degrees

# Greenwich sidereal angle at J2000.0 and its daily rate, degrees
SIDEREAL_ANGLE_AT_EPOCH = 280.16
SIDEREAL_RATE = 360.9856235


def _asin(x: float) -> Radians:
    """Arcsine with the argument clamped against rounding just past +/-1."""
    return math.asin(max(-1.0, min(1.0, x)))


def right_ascension(longitude: Radians, latitude: Radians) -> Radians:
    """Right ascension from ecliptic longitude/latitude."""
    return math.atan2(
        math.sin(longitude) * math.cos(OBLIQUITY) - math.tan(latitude) * math.sin(OBLIQUITY),
        math.cos(longitude),
    )


def declination(longitude: Radians, latitude: Radians) -> Radians:
    """Declination from ecliptic longitude/latitude."""
    return _asin(
        math.sin(latitude) * math.cos(OBLIQUITY)
        + math.cos(latitude) * math.sin(OBLIQUITY) * math.sin(longitude)
    )


def equatorial_from_ecliptic(longitude: Radians, latitude: Radians) -> EquatorialCoordinates:
    """Convert ecliptic coordinates to equatorial coordinates."""
    return EquatorialCoordinates(
        right_ascension=right_ascension(longitude, latitude),
        declination=declination(longitude, latitude),
    )


def sidereal_time(days: DayFraction, west_longitude: Radians) -> Radians:
    """Local sidereal angle; west_longitude is the negated observer longitude."""
    return math.radians(SIDEREAL_ANGLE_AT_EPOCH + SIDEREAL_RATE * days) - west_longitude


def altitude(hour_angle: Radians, latitude: Radians, dec: Radians) -> Radians:
    return _asin(
        math.sin(latitude) * math.sin(dec)
        + math.cos(latitude) * math.cos(dec) * math.cos(hour_angle)
    )


def azimuth(hour_angle: Radians, latitude: Radians, dec: Radians) -> Radians:
    """Azimuth measured from south, positive toward west."""
    return math.atan2(
        math.sin(hour_angle),
        math.cos(hour_angle) * math.sin(latitude) - math.tan(dec) * math.cos(latitude),
    )


def horizontal_position(
    coords: EquatorialCoordinates,
    days: DayFraction,
    latitude: Degrees,
    longitude: Degrees,
) -> HorizontalPosition:
    """Project equatorial coordinates onto the observer's horizon.

    Args:
        coords: Body right ascension/declination at `days`
        days: Days since J2000.0
        latitude: Observer latitude in degrees (not exactly +/-90)
        longitude: Observer longitude in degrees, east positive

    Returns:
        HorizontalPosition with the azimuth rotated 180° to a compass bearing
    """
    phi = math.radians(latitude)
    west_longitude = math.radians(-longitude)
    hour_angle = sidereal_time(days, west_longitude) - coords.right_ascension

    alt = altitude(hour_angle, phi, coords.declination)
    az = azimuth(hour_angle, phi, coords.declination)

    return HorizontalPosition(
        altitude_degrees=math.degrees(alt),
        azimuth_degrees=normalize_degrees(math.degrees(az) + 180.0),
    )

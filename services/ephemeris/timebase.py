"""
SKYPATH Time and Angle Primitives

Converts Unix instants to days since J2000.0 and normalizes angles.
Everything downstream in the ephemeris pipeline is expressed in these units.
clamp_latitude is defined beside GeoLocation in skypath.types.
"""

from datetime import datetime, timezone

from skypath.constants import (
    DEGREES_PER_CIRCLE,
    J2000_EPOCH_SECONDS,
    J2000_NOON_OFFSET_DAYS,
    SECONDS_PER_DAY,
)
from skypath.types import DayFraction, Degrees, Instant, clamp_latitude  # noqa: F401


def to_days(instant: Instant) -> DayFraction:
    """Days since J2000.0 (2000-01-01T12:00:00Z) for a Unix instant."""
    return (instant - J2000_EPOCH_SECONDS) / SECONDS_PER_DAY - J2000_NOON_OFFSET_DAYS


def instant_from_datetime(dt: datetime) -> float:
    """Unix seconds for a datetime; naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def datetime_from_instant(instant: Instant) -> datetime:
    """UTC datetime for a Unix instant."""
    return datetime.fromtimestamp(instant, tz=timezone.utc)


def normalize_degrees(angle: Degrees) -> Degrees:
    """Reduce an angle to [0, 360).

    Python's modulo floors toward negative infinity, so -10 maps to 350.
    A tiny negative input can round up to exactly 360.0; that maps to 0.
    """
    result = angle % DEGREES_PER_CIRCLE
    if result >= DEGREES_PER_CIRCLE:
        return 0.0
    return result


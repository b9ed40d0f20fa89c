"""
SKYPATH Ephemeris Service

Provides Sun and Moon positions, lunar phase and hourly daily tracks from a
closed-form analytic model. The Skyfield reference in skyfield_service is
imported separately so the model has no data-file dependency.
"""

from .timebase import (
    to_days,
    instant_from_datetime,
    datetime_from_instant,
    normalize_degrees,
    clamp_latitude,
)
from .coordinates import equatorial_from_ecliptic, horizontal_position
from .solar import solar_position, solar_coordinates, twilight_phase
from .lunar import lunar_position, lunar_coordinates
from .phase import lunar_phase, illuminated_fraction, moon_age_days, phase_name
from .daily_track import DailyTrack, build_daily_track, local_midnight

__all__ = [
    "to_days",
    "instant_from_datetime",
    "datetime_from_instant",
    "normalize_degrees",
    "clamp_latitude",
    "equatorial_from_ecliptic",
    "horizontal_position",
    "solar_position",
    "solar_coordinates",
    "twilight_phase",
    "lunar_position",
    "lunar_coordinates",
    "lunar_phase",
    "illuminated_fraction",
    "moon_age_days",
    "phase_name",
    "DailyTrack",
    "build_daily_track",
    "local_midnight",
]

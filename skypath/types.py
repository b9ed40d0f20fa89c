"""
SKYPATH Shared Type Definitions

Value types passed between the ephemeris pipeline, the daily track builder
and the command-line front end. Every type here is immutable: positions are
recomputed for each instant rather than updated in place.

Types are organized by category:
    - Basic aliases (angles, instants)
    - Location types
    - Coordinate types (equatorial and horizontal)
    - Classification enums (twilight, moon phase)

Usage:
    from skypath.types import GeoLocation, HorizontalPosition
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import TypeAlias, Union

from skypath.constants import DEFAULT_POLAR_LATITUDE_LIMIT


# =============================================================================
# Basic Type Aliases
# =============================================================================

Degrees: TypeAlias = float
Radians: TypeAlias = float

# Seconds since the Unix epoch, UTC
Instant: TypeAlias = Union[int, float]

# Days since J2000.0
DayFraction: TypeAlias = float

# 0 = new moon, 0.5 = full moon
MoonPhaseFraction: TypeAlias = float


# =============================================================================
# Location Types
# =============================================================================

def clamp_latitude(latitude: Degrees, limit: Degrees = DEFAULT_POLAR_LATITUDE_LIMIT) -> Degrees:
    """Limit a latitude to +/-limit, away from the poles."""
    return max(-limit, min(limit, latitude))


@dataclass(frozen=True)
class GeoLocation:
    """Observer location on Earth.

    The ephemeris functions do not validate these values; the configuration
    layer does. Exact polar latitudes are undefined for the horizontal
    transform, use clamped() before computing positions there.

    Attributes:
        latitude: Latitude in decimal degrees (north positive)
        longitude: Longitude in decimal degrees (east positive)
        name: Human-readable location name
    """
    latitude: Degrees
    longitude: Degrees
    name: str = "Observer"

    def clamped(self, limit: Degrees = DEFAULT_POLAR_LATITUDE_LIMIT) -> "GeoLocation":
        """Return a copy with latitude limited to +/-limit."""
        latitude = clamp_latitude(self.latitude, limit)
        if latitude == self.latitude:
            return self
        return replace(self, latitude=latitude)


# =============================================================================
# Coordinate Types
# =============================================================================

@dataclass(frozen=True)
class EquatorialCoordinates:
    """Equatorial coordinates of a body.

    Attributes:
        right_ascension: Right ascension in radians (-pi to pi)
        declination: Declination in radians (-pi/2 to pi/2)
    """
    right_ascension: Radians
    declination: Radians


@dataclass(frozen=True)
class HorizontalPosition:
    """Altitude/Azimuth position."""
    altitude_degrees: Degrees  # Degrees above horizon (-90 to +90)
    azimuth_degrees: Degrees   # Degrees from North, toward East (0-360)

    @property
    def is_visible(self) -> bool:
        """Check if body is above horizon."""
        return self.altitude_degrees > 0

    @property
    def compass_direction(self) -> str:
        """Get compass direction string."""
        directions = ["N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
                      "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"]
        index = round(self.azimuth_degrees / 22.5) % 16
        return directions[index]


# =============================================================================
# Classification Enums
# =============================================================================

class Body(Enum):
    """Bodies tracked by the ephemeris pipeline."""
    SUN = "sun"
    MOON = "moon"


class TwilightPhase(Enum):
    """Twilight phases."""
    DAY = "day"                      # Sun > 0°
    CIVIL = "civil"                  # Sun -6° to 0°
    NAUTICAL = "nautical"            # Sun -12° to -6°
    ASTRONOMICAL = "astronomical"    # Sun -18° to -12°
    NIGHT = "night"                  # Sun < -18°


class MoonPhaseName(Enum):
    """Named lunar phases."""
    NEW = "new"
    WAXING_CRESCENT = "waxing crescent"
    FIRST_QUARTER = "first quarter"
    WAXING_GIBBOUS = "waxing gibbous"
    FULL = "full"
    WANING_GIBBOUS = "waning gibbous"
    LAST_QUARTER = "last quarter"
    WANING_CRESCENT = "waning crescent"

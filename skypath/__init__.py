"""
SKYPATH - Sun and Moon Sky Path Engine

Computes where the Sun and Moon stand in the sky for an observer and an
instant, the Moon's phase, and hourly daily tracks of both bodies.

Architecture:
    - Pure analytic ephemeris in services.ephemeris (no data files, no I/O)
    - Skyfield/JPL reference used only to validate the analytic model
    - YAML configuration with environment overrides

License: CC BY-NC-SA 4.0
"""

# Core constants (import commonly used constants for convenience)
from skypath.constants import (
    SKYPATH_VERSION,
    SKYPATH_NAME,
)

__version__ = SKYPATH_VERSION
__license__ = "CC BY-NC-SA 4.0"

# Version tuple for programmatic comparison
VERSION_INFO = tuple(int(part) for part in SKYPATH_VERSION.split("."))

# Core exceptions (import base class for convenience)
from skypath.exceptions import SkypathError

# Core types (import commonly used types for convenience)
from skypath.types import (
    GeoLocation,
    HorizontalPosition,
    EquatorialCoordinates,
    TwilightPhase,
    MoonPhaseName,
)

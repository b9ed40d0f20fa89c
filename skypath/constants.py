"""
SKYPATH Constants

Named constants shared by the ephemeris pipeline and the application layer.
Astronomical coefficients that belong to a single formula live beside that
formula; only values used across modules are collected here.
"""

import math

SKYPATH_NAME = "SKYPATH"
SKYPATH_VERSION = "0.1.0"

# =============================================================================
# Time
# =============================================================================

# 2000-01-01T00:00:00Z as Unix seconds
J2000_EPOCH_SECONDS = 946684800
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600

# Day fractions are counted from J2000.0 (noon), half a day after the epoch above
J2000_NOON_OFFSET_DAYS = 0.5

# =============================================================================
# Angles
# =============================================================================

DEGREES_PER_CIRCLE = 360.0
TWO_PI = 2.0 * math.pi

# Obliquity of the ecliptic (Earth's axial tilt), degrees
OBLIQUITY_DEGREES = 23.4397
OBLIQUITY = math.radians(OBLIQUITY_DEGREES)

# Exact +/-90 makes cos(latitude) vanish in the horizontal transform
DEFAULT_POLAR_LATITUDE_LIMIT = 89.9

# =============================================================================
# Moon
# =============================================================================

SYNODIC_MONTH_DAYS = 29.5305882

# =============================================================================
# Daily track
# =============================================================================

# Hours 0 through 24 inclusive
TRACK_SAMPLE_COUNT = 25

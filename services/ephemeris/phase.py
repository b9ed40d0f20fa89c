"""
SKYPATH Lunar Phase

The phase fraction is the Moon's right ascension ahead of the Sun's, as a
fraction of a full turn. No reference new-moon epoch is involved.
"""

import math

from skypath.constants import SYNODIC_MONTH_DAYS, TWO_PI
from skypath.types import Instant, MoonPhaseFraction, MoonPhaseName

from .lunar import lunar_coordinates
from .solar import solar_coordinates
from .timebase import to_days

# Upper bounds (exclusive) of each named phase, in phase fraction
_PHASE_NAME_BOUNDS = (
    (1 / 16, MoonPhaseName.NEW),
    (3 / 16, MoonPhaseName.WAXING_CRESCENT),
    (5 / 16, MoonPhaseName.FIRST_QUARTER),
    (7 / 16, MoonPhaseName.WAXING_GIBBOUS),
    (9 / 16, MoonPhaseName.FULL),
    (11 / 16, MoonPhaseName.WANING_GIBBOUS),
    (13 / 16, MoonPhaseName.LAST_QUARTER),
    (15 / 16, MoonPhaseName.WANING_CRESCENT),
)


def lunar_phase(instant: Instant) -> MoonPhaseFraction:
    """
    Get moon phase as a fraction of the synodic cycle.

    Returns:
        Float in [0, 1): 0.0 new, 0.25 first quarter, 0.5 full, 0.75 last quarter
    """
    days = to_days(instant)
    angle = lunar_coordinates(days).right_ascension - solar_coordinates(days).right_ascension
    if angle < 0:
        angle += TWO_PI

    fraction = (angle / TWO_PI) % 1.0
    # Same rounding edge as normalize_degrees
    return fraction if fraction < 1.0 else 0.0


def illuminated_fraction(phase: MoonPhaseFraction) -> float:
    """Fraction of the lunar disc lit, 0.0 (new) to 1.0 (full)."""
    return (1 - math.cos(TWO_PI * phase)) / 2


def moon_age_days(phase: MoonPhaseFraction) -> float:
    """Days since the last new moon implied by a phase fraction."""
    return phase * SYNODIC_MONTH_DAYS


def phase_name(phase: MoonPhaseFraction) -> MoonPhaseName:
    for upper, name in _PHASE_NAME_BOUNDS:
        if phase < upper:
            return name
    return MoonPhaseName.NEW

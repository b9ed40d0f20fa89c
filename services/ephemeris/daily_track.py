"""
SKYPATH Daily Track Builder

Samples the solar and lunar positions and the lunar phase once per hour
across one local civil day. The 25 samples cover hour 0 through hour 24
inclusive, so interpolation anywhere in the day (23:59 included) always has
a bracketing pair.

The track is rebuilt whenever the day or the location changes; it is never
updated in place.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from typing import Optional, Union

import numpy as np

from skypath.constants import DEGREES_PER_CIRCLE, SECONDS_PER_HOUR, TRACK_SAMPLE_COUNT
from skypath.logging_config import get_logger, log_timing
from skypath.types import (
    Body,
    Degrees,
    GeoLocation,
    HorizontalPosition,
    MoonPhaseFraction,
)

from .lunar import lunar_position
from .phase import lunar_phase
from .solar import solar_position
from .timebase import normalize_degrees

logger = get_logger(__name__)

TRACK_HOURS = TRACK_SAMPLE_COUNT - 1


@dataclass(frozen=True)
class DailyTrack:
    """Hourly sun/moon samples for one local day at one location."""
    location: GeoLocation
    midnight: datetime                          # Local midnight, timezone-aware
    solar: tuple[HorizontalPosition, ...]
    lunar: tuple[HorizontalPosition, ...]
    lunar_phase: tuple[MoonPhaseFraction, ...]

    @property
    def start_instant(self) -> float:
        """Unix seconds of hour 0."""
        return self.midnight.timestamp()

    def instant_at(self, hour: float) -> float:
        """Unix seconds for an hour offset from local midnight."""
        return self.start_instant + hour * SECONDS_PER_HOUR

    def samples(self, body: Body) -> tuple[HorizontalPosition, ...]:
        return self.solar if body is Body.SUN else self.lunar

    def altitudes(self, body: Body) -> np.ndarray:
        """Altitudes in degrees for hours 0..24."""
        return np.array([p.altitude_degrees for p in self.samples(body)], dtype=float)

    def azimuths(self, body: Body) -> np.ndarray:
        """Azimuths in degrees for hours 0..24."""
        return np.array([p.azimuth_degrees for p in self.samples(body)], dtype=float)

    def position_at(self, body: Body, hour: float) -> HorizontalPosition:
        """
        Linearly interpolate a body's position between hourly samples.

        Azimuth is unwrapped first so a pass through north does not
        interpolate the long way round.

        Args:
            body: Sun or Moon
            hour: Hours since local midnight, clamped to [0, 24]

        Returns:
            Interpolated HorizontalPosition
        """
        hours = _sample_hours()
        hour = min(max(hour, 0.0), float(TRACK_HOURS))

        altitude = float(np.interp(hour, hours, self.altitudes(body)))
        unwrapped = np.unwrap(self.azimuths(body), period=DEGREES_PER_CIRCLE)
        azimuth = normalize_degrees(float(np.interp(hour, hours, unwrapped)))

        return HorizontalPosition(altitude_degrees=altitude, azimuth_degrees=azimuth)

    def phase_at(self, hour: float) -> MoonPhaseFraction:
        """Interpolated lunar phase fraction, continuous across the 1 -> 0 wrap."""
        hours = _sample_hours()
        hour = min(max(hour, 0.0), float(TRACK_HOURS))

        unwrapped = np.unwrap(np.array(self.lunar_phase, dtype=float), period=1.0)
        fraction = float(np.interp(hour, hours, unwrapped)) % 1.0
        return fraction if fraction < 1.0 else 0.0


def _sample_hours() -> np.ndarray:
    return np.arange(TRACK_SAMPLE_COUNT, dtype=float)


def local_midnight(day: Union[date, datetime], tz: Optional[tzinfo] = None) -> datetime:
    """
    Resolve a date or datetime to midnight of its local civil day.

    An aware datetime is first converted to `tz` when one is given. A naive
    datetime or a plain date is read in `tz`, defaulting to UTC.
    """
    if isinstance(day, datetime):
        if day.tzinfo is None:
            zone = tz or timezone.utc
            local = day.replace(tzinfo=zone)
        else:
            zone = tz or day.tzinfo
            local = day.astimezone(zone)
        day = local.date()
    else:
        zone = tz or timezone.utc

    return datetime.combine(day, time(0, 0, 0), tzinfo=zone)


def build_daily_track(
    day: Union[date, datetime],
    latitude: Degrees,
    longitude: Degrees,
    tz: Optional[tzinfo] = None,
) -> DailyTrack:
    """
    Build the 25-sample sun/moon track for a local civil day.

    Samples are exactly one hour apart in absolute time starting at local
    midnight, so a daylight-saving transition shifts the wall-clock labels
    but never the spacing.

    Args:
        day: Any date or datetime within the wanted day
        latitude: Observer latitude in degrees (callers clamp away from +/-90)
        longitude: Observer longitude in degrees, east positive
        tz: Civil timezone of the day (see local_midnight)

    Returns:
        DailyTrack with 25 solar, lunar and phase samples
    """
    midnight = local_midnight(day, tz)
    start = midnight.timestamp()

    with log_timing(logger, "build_daily_track"):
        instants = [start + h * SECONDS_PER_HOUR for h in range(TRACK_SAMPLE_COUNT)]
        solar = tuple(solar_position(t, latitude, longitude) for t in instants)
        lunar = tuple(lunar_position(t, latitude, longitude) for t in instants)
        phases = tuple(lunar_phase(t) for t in instants)

    logger.debug(
        f"Daily track for {midnight.date().isoformat()} at "
        f"{latitude:+.4f}, {longitude:+.4f}"
    )

    return DailyTrack(
        location=GeoLocation(latitude=latitude, longitude=longitude),
        midnight=midnight,
        solar=solar,
        lunar=lunar,
        lunar_phase=phases,
    )

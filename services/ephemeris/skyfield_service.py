"""
SKYPATH Reference Ephemeris
Skyfield-based cross-check of the analytic model

The analytic sun/moon model trades precision for zero data dependencies.
This module evaluates the same quantities with the Skyfield library and the
JPL DE440 ephemeris so the model's error can be measured for any instant and
site:
- Sun and Moon altitude/azimuth (topocentric, no refraction)
- Moon phase fraction
- Deviation of the analytic model from the reference

The kernel file is downloaded on first use into the configured data
directory.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from skyfield import almanac
from skyfield.api import Loader, wgs84
from skyfield.errors import EphemerisRangeError

from skypath.exceptions import EphemerisError
from skypath.logging_config import get_logger, log_timing
from skypath.types import Body, GeoLocation, HorizontalPosition, Instant, MoonPhaseFraction

from .lunar import lunar_position
from .phase import lunar_phase
from .solar import solar_position
from .timebase import datetime_from_instant

logger = get_logger(__name__)


@dataclass(frozen=True)
class PositionDeviation:
    """Analytic model minus reference, for one body."""
    body: Body
    model: HorizontalPosition
    reference: HorizontalPosition
    altitude_error: float  # Degrees
    azimuth_error: float   # Degrees, wrapped to [-180, 180)


@dataclass(frozen=True)
class ReferenceComparison:
    """Model-vs-reference deviations at one instant and site."""
    instant: Instant
    location: GeoLocation
    sun: PositionDeviation
    moon: PositionDeviation
    model_phase: MoonPhaseFraction
    reference_phase: MoonPhaseFraction
    phase_error: float  # Fraction of a cycle, wrapped to [-0.5, 0.5)


def position_deviation(
    body: Body,
    model: HorizontalPosition,
    reference: HorizontalPosition,
) -> PositionDeviation:
    """Compare two positions; azimuth error takes the short way round."""
    azimuth_error = (model.azimuth_degrees - reference.azimuth_degrees + 180.0) % 360.0 - 180.0
    return PositionDeviation(
        body=body,
        model=model,
        reference=reference,
        altitude_error=model.altitude_degrees - reference.altitude_degrees,
        azimuth_error=azimuth_error,
    )


def phase_deviation(model: MoonPhaseFraction, reference: MoonPhaseFraction) -> float:
    """Phase difference across the new-moon wrap, in [-0.5, 0.5)."""
    return (model - reference + 0.5) % 1.0 - 0.5


class ReferenceEphemeris:
    """
    Skyfield-backed ephemeris used to validate the analytic model.

    Unlike the analytic model, positions here are topocentric: the Moon's
    parallax (up to about 1°) is included, so part of the lunar altitude
    deviation is expected.
    """

    BODY_NAMES = {
        Body.SUN: "sun",
        Body.MOON: "moon",
    }

    def __init__(
        self,
        data_dir: Union[str, Path],
        ephemeris_file: str = "de440s.bsp",
    ):
        """
        Initialize the reference ephemeris.

        Args:
            data_dir: Directory holding (or receiving) the kernel file
            ephemeris_file: JPL kernel name; de440s covers 1849-2150
        """
        self.data_dir = Path(data_dir)
        self.ephemeris_file = ephemeris_file
        self._ts = None
        self._eph = None
        self._earth = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Load ephemeris data (downloads on first run)."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        loader = Loader(str(self.data_dir))

        with log_timing(logger, "load_reference_ephemeris", warn_threshold_sec=10.0):
            try:
                self._ts = loader.timescale()
                self._eph = loader(self.ephemeris_file)
            except (OSError, ValueError) as e:
                raise EphemerisError(
                    f"Cannot load reference ephemeris: {e}",
                    ephemeris_file=self.ephemeris_file,
                ) from e

        self._earth = self._eph["earth"]
        self._initialized = True
        logger.info(f"Reference ephemeris {self.ephemeris_file} loaded from {self.data_dir}")

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()

    def _get_time(self, instant: Instant):
        """Get Skyfield time object."""
        return self._ts.from_datetime(datetime_from_instant(instant))

    def body_position(
        self,
        body: Body,
        instant: Instant,
        location: GeoLocation,
    ) -> HorizontalPosition:
        """
        Get altitude/azimuth of the Sun or Moon from the reference.

        Args:
            body: Body to locate
            instant: Unix seconds, UTC
            location: Observer site

        Returns:
            HorizontalPosition with alt/az
        """
        self._ensure_initialized()
        t = self._get_time(instant)

        observer = self._earth + wgs84.latlon(location.latitude, location.longitude)
        target = self._eph[self.BODY_NAMES[body]]

        try:
            apparent = observer.at(t).observe(target).apparent()
        except EphemerisRangeError as e:
            raise EphemerisError(
                f"Instant {instant} outside reference coverage",
                ephemeris_file=self.ephemeris_file,
                body=body.value,
            ) from e

        alt, az, _ = apparent.altaz()

        return HorizontalPosition(
            altitude_degrees=alt.degrees,
            azimuth_degrees=az.degrees % 360.0,
        )

    def moon_phase(self, instant: Instant) -> MoonPhaseFraction:
        """
        Get moon phase from the difference of ecliptic longitudes.

        Returns:
            Float in [0, 1): 0.0 new, 0.5 full
        """
        self._ensure_initialized()
        t = self._get_time(instant)

        try:
            angle = almanac.moon_phase(self._eph, t)
        except EphemerisRangeError as e:
            raise EphemerisError(
                f"Instant {instant} outside reference coverage",
                ephemeris_file=self.ephemeris_file,
                body=Body.MOON.value,
            ) from e

        return (angle.degrees / 360.0) % 1.0

    def compare(self, instant: Instant, location: GeoLocation) -> ReferenceComparison:
        """
        Measure the analytic model against the reference.

        Args:
            instant: Unix seconds, UTC
            location: Observer site

        Returns:
            ReferenceComparison for sun, moon and phase
        """
        lat, lng = location.latitude, location.longitude

        sun = position_deviation(
            Body.SUN,
            solar_position(instant, lat, lng),
            self.body_position(Body.SUN, instant, location),
        )
        moon = position_deviation(
            Body.MOON,
            lunar_position(instant, lat, lng),
            self.body_position(Body.MOON, instant, location),
        )

        model_phase = lunar_phase(instant)
        reference_phase = self.moon_phase(instant)

        comparison = ReferenceComparison(
            instant=instant,
            location=location,
            sun=sun,
            moon=moon,
            model_phase=model_phase,
            reference_phase=reference_phase,
            phase_error=phase_deviation(model_phase, reference_phase),
        )
        logger.debug(
            f"Model deviation at {instant}: sun alt {sun.altitude_error:+.3f}°, "
            f"moon alt {moon.altitude_error:+.3f}°, phase {comparison.phase_error:+.4f}"
        )
        return comparison


def create_reference(
    data_dir: Union[str, Path],
    ephemeris_file: Optional[str] = None,
) -> ReferenceEphemeris:
    """Create and load a reference ephemeris."""
    reference = ReferenceEphemeris(data_dir, ephemeris_file or "de440s.bsp")
    reference.initialize()
    return reference

"""
SKYPATH Application Entry Point

Prints where the Sun and Moon are for a site and instant, the Moon's phase,
and optionally the hourly daily track and the model's deviation from the
Skyfield reference.

Usage:
    skypath                                   # Now, at the configured site
    skypath --at 2021-07-01T00:00:00Z --latitude 64.8 --longitude -147.0
    skypath --at 1625097600 --track           # Unix seconds, with daily table
    skypath --compare                         # Check against JPL DE440

Entry Points:
    - CLI: `skypath` command (via pyproject.toml)
    - Direct: `python -m skypath.main`
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from datetime import datetime, timezone
from typing import Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from skypath import __version__
from skypath.config import SkypathConfig, load_config
from skypath.constants import SKYPATH_NAME
from skypath.exceptions import ConfigurationError, SkypathError
from skypath.logging_config import get_logger, log_exception, setup_logging
from skypath.types import Body, GeoLocation, Instant

from services.ephemeris import (
    DailyTrack,
    build_daily_track,
    datetime_from_instant,
    illuminated_fraction,
    instant_from_datetime,
    lunar_phase,
    lunar_position,
    moon_age_days,
    phase_name,
    solar_position,
    twilight_phase,
)
from services.ephemeris.skyfield_service import ReferenceComparison, create_reference

__all__ = ["main", "create_parser", "parse_instant"]

# Module logger
logger = get_logger(__name__)


# =============================================================================
# Argument Parser
# =============================================================================


def parse_instant(value: str) -> float:
    """Parse Unix seconds (fractions allowed) or an ISO-8601 timestamp (naive means UTC)."""
    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if math.isfinite(seconds):
            return seconds

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return instant_from_datetime(datetime.fromisoformat(text))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected Unix seconds or ISO-8601 time, got {value!r}"
        ) from None


def _bounded(limit: float, label: str):
    def check(value: str) -> float:
        number = float(value)
        if not -limit <= number <= limit:
            raise argparse.ArgumentTypeError(f"{label} must be within ±{limit:g}")
        return number
    return check


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="skypath",
        description=f"{SKYPATH_NAME}: Sun and Moon altitude, azimuth and lunar phase",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Configuration
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file (default: auto-discover)",
    )

    # Logging
    parser.add_argument(
        "-l",
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set logging level (overrides config file)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Path to log file (default: stderr only)",
    )

    # Site and time
    parser.add_argument(
        "--latitude",
        type=_bounded(90.0, "latitude"),
        help="Observer latitude in degrees (overrides config)",
    )
    parser.add_argument(
        "--longitude",
        type=_bounded(180.0, "longitude"),
        help="Observer longitude in degrees, east positive (overrides config)",
    )
    parser.add_argument(
        "--at",
        type=parse_instant,
        metavar="TIME",
        help="Unix seconds or ISO-8601 time (default: now)",
    )

    # Output
    parser.add_argument(
        "--track",
        action="store_true",
        help="Print the hourly sun/moon table for the local day",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Compare against the Skyfield reference (downloads JPL data once)",
    )

    return parser


# =============================================================================
# Output
# =============================================================================


def resolve_location(args: argparse.Namespace, config: SkypathConfig) -> GeoLocation:
    """Site from config with command-line overrides, clamped off the poles."""
    site = config.site.location()
    location = GeoLocation(
        latitude=args.latitude if args.latitude is not None else site.latitude,
        longitude=args.longitude if args.longitude is not None else site.longitude,
        name=site.name if args.latitude is None and args.longitude is None else "Observer",
    )
    clamped = location.clamped(config.ephemeris.polar_latitude_limit)
    if clamped.latitude != location.latitude:
        logger.warning(
            f"Latitude {location.latitude:+.4f} clamped to {clamped.latitude:+.4f}"
        )
    return clamped


def format_report(instant: Instant, location: GeoLocation, zone: ZoneInfo) -> str:
    """Current sun/moon summary."""
    lat, lng = location.latitude, location.longitude
    sun = solar_position(instant, lat, lng)
    moon = lunar_position(instant, lat, lng)
    phase = lunar_phase(instant)
    local = datetime_from_instant(instant).astimezone(zone)

    lines = [
        f"Site: {location.name} ({lat:+.4f}°, {lng:+.4f}°)",
        f"Time: {local.isoformat()} ({instant:.0f})",
        "",
        f"  Sun   alt {sun.altitude_degrees:+6.1f}°  az {sun.azimuth_degrees:5.1f}° "
        f"{sun.compass_direction:<3}  ({twilight_phase(sun.altitude_degrees).value})",
        f"  Moon  alt {moon.altitude_degrees:+6.1f}°  az {moon.azimuth_degrees:5.1f}° "
        f"{moon.compass_direction:<3}  ({'visible' if moon.is_visible else 'below horizon'})",
        "",
        f"  Moon phase {phase:.3f} ({phase_name(phase).value}), "
        f"{illuminated_fraction(phase) * 100:.0f}% illuminated, "
        f"age {moon_age_days(phase):.1f} days",
    ]
    return "\n".join(lines)


def format_track(track: DailyTrack) -> str:
    """Hourly table of a daily track."""
    lines = [
        f"Daily track for {track.midnight.date().isoformat()} ({track.midnight.tzname()})",
        " Hour   Sun alt   Sun az  Moon alt  Moon az  Phase",
    ]
    for hour in range(len(track.solar)):
        sun = track.solar[hour]
        moon = track.lunar[hour]
        lines.append(
            f"  {hour:2d}   {sun.altitude_degrees:+6.1f}   {sun.azimuth_degrees:6.1f}"
            f"   {moon.altitude_degrees:+6.1f}   {moon.azimuth_degrees:6.1f}"
            f"  {track.lunar_phase[hour]:.3f}"
        )
    return "\n".join(lines)


def format_comparison(comparison: ReferenceComparison) -> str:
    """Model deviation from the reference ephemeris."""
    lines = ["Deviation from reference (model - DE440):"]
    for deviation in (comparison.sun, comparison.moon):
        lines.append(
            f"  {deviation.body.value.capitalize():<5} alt {deviation.altitude_error:+.3f}°  "
            f"az {deviation.azimuth_error:+.3f}°"
        )
    lines.append(
        f"  Phase {comparison.phase_error:+.4f} "
        f"(model {comparison.model_phase:.4f}, reference {comparison.reference_phase:.4f})"
    )
    return "\n".join(lines)


def _site_zone(config: SkypathConfig) -> ZoneInfo:
    try:
        return ZoneInfo(config.site.timezone)
    except ZoneInfoNotFoundError as e:
        raise ConfigurationError(
            f"Unknown timezone: {config.site.timezone}", config_key="site.timezone"
        ) from e


def run(args: argparse.Namespace, config: SkypathConfig) -> int:
    """Compute and print everything requested on the command line."""
    location = resolve_location(args, config)
    zone = _site_zone(config)
    instant = args.at if args.at is not None else time.time()

    print(format_report(instant, location, zone))

    if args.track:
        local = datetime_from_instant(instant).astimezone(zone)
        track = build_daily_track(local, location.latitude, location.longitude)
        print()
        print(format_track(track))

    if args.compare:
        reference = create_reference(
            config.ephemeris.data_dir, config.ephemeris.reference_file
        )
        print()
        print(format_comparison(reference.compare(instant, location)))

    return 0


# =============================================================================
# Main Entry Point
# =============================================================================


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the SKYPATH command.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Basic setup before config is loaded
    setup_logging(log_level=args.log_level or "INFO", log_file=args.log_file)

    try:
        logger.debug(f"Loading configuration from: {args.config or 'auto-discover'}")
        config = load_config(args.config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    # Apply logging from config if not overridden
    if args.log_level is None or (args.log_file is None and config.log_file):
        setup_logging(
            log_level=args.log_level or config.log_level,
            log_file=args.log_file or config.log_file,
        )

    try:
        return run(args, config)
    except SkypathError as e:
        log_exception(logger, "SKYPATH error", e, include_traceback=False)
        return 1


if __name__ == "__main__":
    sys.exit(main())

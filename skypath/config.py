"""
SKYPATH Configuration

Loads observer site and ephemeris settings from YAML, validates them with
pydantic and applies environment variable overrides.

Resolution order (later wins):
    1. Model defaults
    2. First YAML file found (explicit path, or see get_config_paths())
    3. Environment variables named SKYPATH_<SECTION>_<KEY>,
       e.g. SKYPATH_SITE_LATITUDE=42.5

Usage:
    from skypath.config import load_config

    config = load_config()
    location = config.site.location()
"""

import os
import re
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from skypath.constants import DEFAULT_POLAR_LATITUDE_LIMIT
from skypath.exceptions import ConfigurationError
from skypath.logging_config import get_logger
from skypath.types import GeoLocation

__all__ = [
    "SiteConfig",
    "EphemerisConfig",
    "SkypathConfig",
    "get_config_paths",
    "load_config",
]

logger = get_logger(__name__)

ENV_PREFIX = "SKYPATH_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# IANA names are Area/Location; UTC and GMT are the accepted bare names
_TIMEZONE_PATTERN = re.compile(r"^(UTC|GMT|[A-Za-z_]+(/[A-Za-z0-9_+\-]+)+)$")


# =============================================================================
# Section Models
# =============================================================================

class SiteConfig(BaseModel):
    """Observer site."""

    latitude: float = Field(default=51.4769, ge=-90.0, le=90.0)
    longitude: float = Field(default=-0.0005, ge=-180.0, le=180.0)
    timezone: str = "Europe/London"
    name: str = "Royal Observatory Greenwich"

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if not _TIMEZONE_PATTERN.match(value):
            raise ValueError(f"timezone must be an IANA name like 'Area/City', got {value!r}")
        return value

    def location(self) -> GeoLocation:
        """Site as a GeoLocation value."""
        return GeoLocation(latitude=self.latitude, longitude=self.longitude, name=self.name)


class EphemerisConfig(BaseModel):
    """Ephemeris computation and reference data settings."""

    # Latitudes are clamped to +/- this value before computing positions
    polar_latitude_limit: float = Field(
        default=DEFAULT_POLAR_LATITUDE_LIMIT, ge=80.0, lt=90.0
    )
    reference_file: str = "de440s.bsp"
    data_dir: str = str(Path.home() / ".skypath" / "data")


class SkypathConfig(BaseModel):
    """Top-level SKYPATH configuration."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    ephemeris: EphemerisConfig = Field(default_factory=EphemerisConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None


# =============================================================================
# Loading
# =============================================================================

def get_config_paths() -> list[Path]:
    """Candidate configuration files, in search order."""
    return [
        Path("./skypath.yaml"),
        Path.home() / ".skypath" / "config.yaml",
        Path("/etc/skypath/config.yaml"),
    ]


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", config_file=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Invalid YAML: top level must be a mapping", config_file=str(path)
        )
    return data


def _coerce_env_value(raw: str, annotation: Any) -> Any:
    """Convert an environment string to the type of the target field."""
    if annotation is bool:
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"not a boolean: {raw!r}")
    if annotation is int:
        return int(raw)
    if annotation is float:
        return float(raw)
    return raw


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay SKYPATH_<SECTION>_<KEY> variables onto the raw config mapping."""
    for section_name, section_field in SkypathConfig.model_fields.items():
        section_model = section_field.annotation
        if not (isinstance(section_model, type) and issubclass(section_model, BaseModel)):
            env_name = f"{ENV_PREFIX}{section_name.upper()}"
            if env_name in os.environ:
                data[section_name] = os.environ[env_name]
            continue

        for key, field in section_model.model_fields.items():
            env_name = f"{ENV_PREFIX}{section_name.upper()}_{key.upper()}"
            if env_name not in os.environ:
                continue
            try:
                value = _coerce_env_value(os.environ[env_name], field.annotation)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid environment override: {e}", config_key=env_name
                ) from e
            section = data.setdefault(section_name, {})
            if not isinstance(section, dict):
                raise ConfigurationError(
                    f"Section '{section_name}' must be a mapping", config_key=section_name
                )
            section[key] = value
            logger.debug(f"Config override from environment: {env_name}")
    return data


def load_config(path: Optional[str | Path] = None) -> SkypathConfig:
    """Load, override and validate the SKYPATH configuration.

    Args:
        path: Explicit YAML file. When omitted the paths from
              get_config_paths() are searched and defaults are used if
              none exists.

    Returns:
        Validated SkypathConfig

    Raises:
        ConfigurationError: File missing, invalid YAML, or validation failed
    """
    data: dict[str, Any] = {}
    source: Optional[Path] = None

    if path is not None:
        source = Path(path)
        if not source.is_file():
            raise ConfigurationError(
                f"Configuration file not found: {source}", config_file=str(source)
            )
    else:
        source = next((p for p in get_config_paths() if p.is_file()), None)

    if source is not None:
        data = _read_yaml(source)
        logger.debug(f"Loaded configuration from {source}")

    data = _apply_env_overrides(data)

    try:
        return SkypathConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}",
            config_file=str(source) if source else None,
        ) from e

"""
SKYPATH Custom Exceptions

The ephemeris functions themselves are total over finite inputs and raise
nothing; these exceptions belong to the layers around them (configuration
loading and the reference ephemeris).

Exception Hierarchy:
    SkypathError (base)
    ├── ConfigurationError
    └── EphemerisError
"""

from typing import Any, Optional


class SkypathError(Exception):
    """Base exception for all SKYPATH errors.

    All SKYPATH-specific exceptions inherit from this class, allowing
    callers to catch all SKYPATH errors with a single except clause.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(SkypathError):
    """Error in configuration file or settings.

    Raised when configuration validation fails, the file is missing,
    or its contents are not valid YAML.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
    ) -> None:
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


# =============================================================================
# Ephemeris Errors
# =============================================================================

class EphemerisError(SkypathError):
    """Reference ephemeris data could not be loaded or evaluated.

    Raised by the Skyfield-backed reference when the JPL kernel is missing
    and cannot be downloaded, or when it does not cover the requested time.
    """

    def __init__(
        self,
        message: str,
        ephemeris_file: Optional[str] = None,
        body: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if ephemeris_file:
            details["ephemeris_file"] = ephemeris_file
        if body:
            details["body"] = body
        super().__init__(message, details)
        self.ephemeris_file = ephemeris_file
        self.body = body

"""
SKYPATH Logging Configuration

Provides centralized logging configuration for SKYPATH with support for:
- Console output
- Rotating file handlers with size limits
- Per-service log level configuration
- Exception and timing helpers

Usage:
    from skypath.logging_config import setup_logging, get_logger

    # Initialize logging at application startup
    setup_logging(log_level="INFO", log_file="skypath.log")

    # Get a logger for your module
    logger = get_logger(__name__)
    logger.info("Daily track built", extra={"samples": 25})
"""

import logging
import sys
import time
import traceback
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterator, Optional

# Module-level constants
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5

ROOT_LOGGER_NAME = "skypath"

# Log level mapping for per-service configuration
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str | Path] = None,
) -> None:
    """Configure logging for the SKYPATH application.

    Sets up the skypath logger with a console handler and an optional
    rotating file handler. Safe to call again; existing handlers are replaced.

    Args:
        log_level: Default logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If provided, enables file logging
                  with rotation.

    Example:
        setup_logging(log_level="DEBUG", log_file="/var/log/skypath.log")
    """
    level = LOG_LEVELS.get(log_level.upper(), logging.INFO)
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Close before clearing so file handles are released on re-initialization
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    # Console goes to stderr; stdout carries the command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=DEFAULT_MAX_BYTES,
            backupCount=DEFAULT_BACKUP_COUNT,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module or service.

    Returns a child logger under the skypath namespace for consistent
    configuration inheritance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured logger instance

    Example:
        logger = get_logger(__name__)
        logger.debug("Sampling lunar track")
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_service_level(service_name: str, level: str) -> None:
    """Set log level for a specific service.

    Args:
        service_name: Name of the service package (e.g., "ephemeris")
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Example:
        set_service_level("ephemeris", "DEBUG")
    """
    logger_name = f"{ROOT_LOGGER_NAME}.services.{service_name}"
    logger = logging.getLogger(logger_name)
    logger.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    level: int = logging.ERROR,
    include_traceback: bool = True,
) -> None:
    """Log an exception with its type and, optionally, its traceback.

    The traceback is attached as ``extra["traceback"]`` rather than appended
    to the message so the console line stays short.

    Args:
        logger: Logger to write to
        message: Context describing what failed
        exc: The exception instance
        level: Logging level (default ERROR)
        include_traceback: Attach the formatted traceback to the record
    """
    extra = {"exception_type": type(exc).__name__}
    if include_traceback:
        extra["traceback"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    logger.log(level, f"{message}: {type(exc).__name__}: {exc}", extra=extra)


@contextmanager
def log_timing(
    logger: logging.Logger,
    operation: str,
    level: int = logging.DEBUG,
    warn_threshold_sec: Optional[float] = None,
) -> Iterator[None]:
    """Log the start and duration of an operation.

    Args:
        logger: Logger to write to
        operation: Operation name included in messages and extra data
        level: Level for the start/completion records
        warn_threshold_sec: Emit a warning when the operation takes longer

    Example:
        with log_timing(logger, "load_ephemeris", warn_threshold_sec=5.0):
            service.initialize()
    """
    logger.log(level, f"{operation} started", extra={"operation": operation})
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.log(
            level,
            f"{operation} completed in {elapsed:.3f}s",
            extra={"operation": operation, "elapsed_seconds": elapsed},
        )
        if warn_threshold_sec is not None and elapsed > warn_threshold_sec:
            logger.warning(
                f"{operation} exceeded threshold: {elapsed:.3f}s > {warn_threshold_sec:.3f}s"
            )

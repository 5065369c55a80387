"""
Logging utilities for riveripam.

All modules log through loguru. ``get_logger`` returns a logger bound to the
calling module's name so the subsystem shows up in every record, and
``configure_logging`` installs the sinks once at agent startup.

Usage:
    from riveripam.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Checking local routes for conflicts...")
"""

import sys

from loguru import logger as _logger

from riveripam.models.enums import LogLevel

# Level names understood by loguru for each configured verbosity
_LEVEL_MAP = {
    LogLevel.FULL: "TRACE",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARNING",
}

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[subsys]}</cyan> | "
    "<level>{message}</level>"
)


def get_logger(name: str):
    """Return a loguru logger bound to ``name`` as its subsystem."""
    return _logger.bind(subsys=name)


def configure_logging(level: LogLevel = LogLevel.INFO, log_file: str = "") -> None:
    """
    Install stderr (and optionally file) sinks at the given verbosity.

    Existing sinks are removed, so calling this twice does not duplicate output.

    Args:
        level: Verbosity level from configuration.
        log_file: Optional path of a log file; empty disables file logging.
    """
    loguru_level = _LEVEL_MAP.get(LogLevel(level), "INFO")

    _logger.remove()
    _logger.configure(extra={"subsys": "riveripam"})
    _logger.add(
        sys.stderr,
        level=loguru_level,
        format=_FORMAT,
        backtrace=level == LogLevel.FULL,
        diagnose=level == LogLevel.FULL,
    )

    if log_file:
        _logger.add(
            log_file,
            level=loguru_level,
            format=_FORMAT,
            rotation="10 MB",
            retention=3,
        )


"""Timer configuration classes.

This module provides the pydantic models describing the settings file:
logging options and the debug switch that turns on timer leak tracking.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def _check_level(level: str) -> str:
    """Return ``level`` upper-cased, or raise if logging does not know it."""
    name = level.upper()
    if name not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level '{level}'")
    return name


class LoggingConfig(BaseModel):
    """Configuration settings for the logging system.

    Defines the root log level, optional file output, console output and
    per-logger level overrides. Level names are case-insensitive and are
    stored upper-cased.
    """

    log_level: str = "INFO"
    log_file: Optional[str] = None
    disable_console_logging: bool = False
    loggers: Optional[dict[str, str]] = None

    @field_validator("log_level")
    def check_log_level(cls, log_level):
        return _check_level(log_level)

    @field_validator("loggers")
    def check_logger_levels(cls, loggers):
        if loggers is None:
            return loggers
        return {name: _check_level(level) for name, level in loggers.items()}


class TimerConfig(BaseModel):
    """Main configuration class for the ticker library.

    ``debug`` installs the process-wide timer leak tracker so that repeating
    timers which are never stopped can be reported.
    """

    debug: bool = False
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

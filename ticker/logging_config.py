"""Logging configuration for the ticker library.

This module applies a LoggingConfig to the standard logging system so that
applications embedding timers get consistent log output.
"""

import logging
import os

from ticker.config.timer_config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


def configure_logging(logging_config: LoggingConfig):
    """Configure logging based on the provided logging configuration.

    Replaces any handlers installed by an earlier call.

    Args:
        logging_config: Configuration object containing logging settings.
    """
    log_level = logging.getLevelName(logging_config.log_level.upper())
    handlers = []

    if logging_config.log_file:
        log_file = logging_config.log_file.strip()

        # Convert relative path to absolute path
        if not os.path.isabs(log_file):
            log_file = os.path.join(os.getcwd(), log_file)

        log_dir = os.path.dirname(log_file)
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        handlers.append(logging.FileHandler(log_file))

    if not logging_config.disable_console_logging:
        handlers.append(logging.StreamHandler())

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    for logger_name, level in (logging_config.loggers or {}).items():
        logging.getLogger(logger_name).setLevel(level.upper())

"""Apply a loaded configuration to the running process."""

import logging
from typing import Optional

from ticker.config.config_manager import ConfigManager
from ticker.config.timer_config import TimerConfig
from ticker.leak_tracker import disable_leak_tracking, enable_leak_tracking
from ticker.logging_config import configure_logging

logger = logging.getLogger(__name__)


def apply_config(config: TimerConfig):
    """Configure logging and switch timer leak tracking on or off.

    Only timers created after this call are affected by the leak tracking
    switch.

    Args:
        config: Validated configuration
    """
    configure_logging(config.logging)

    if config.debug:
        enable_leak_tracking()
    else:
        disable_leak_tracking()

    logger.debug(f"Applied configuration (debug={config.debug})")


def load_and_apply(config_path: Optional[str] = None) -> TimerConfig:
    """Load the configuration file and apply it.

    Args:
        config_path: Path to the YAML file (default: config.yaml)

    Returns:
        The applied TimerConfig
    """
    manager = ConfigManager(config_path) if config_path else ConfigManager()
    config = manager.load_config()
    apply_config(config)
    return config

"""
Configuration manager for the ticker library.

This module loads the YAML settings file, substitutes environment variables
and validates the result against the TimerConfig model.
"""

import logging
import os
import re
from typing import Any

import yaml
from pydantic import ValidationError

from ticker.config.timer_config import TimerConfig

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        super().__init__(f"Configuration validation error at '{path}': {message}")


class ConfigManager:
    """
    Loads and validates the ticker configuration file.

    Supports ``${VAR_NAME}`` and ``${VAR_NAME:default}`` placeholders in any
    string value.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = config_path

    def load_config(self) -> TimerConfig:
        """
        Load configuration from file.

        An empty file yields the default configuration.

        Returns:
            Validated TimerConfig

        Raises:
            FileNotFoundError: If the configuration file does not exist
            ConfigValidationError: If the file is not valid YAML or does not
                match the TimerConfig schema
        """
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in config file '{self.config_path}': {e}")
            raise ConfigValidationError(
                f"Invalid YAML in config file: {e}", self.config_path
            )

        if not isinstance(config_data, dict):
            raise ConfigValidationError(
                "Top level of the config file must be a mapping", self.config_path
            )

        config_data = self._substitute_env_vars(config_data)

        try:
            config = TimerConfig(**config_data)
        except ValidationError as e:
            logger.error(f"Error validating configuration: {e}")
            raise ConfigValidationError(str(e), self.config_path)

        logger.info(f"Configuration loaded from: {self.config_path}")
        return config

    def _substitute_env_vars(self, config: Any) -> Any:
        """
        Recursively substitute environment variables in configuration.

        Supports ${VAR_NAME} and ${VAR_NAME:default_value} syntax.
        """
        if isinstance(config, dict):
            return {
                key: self._substitute_env_vars(value) for key, value in config.items()
            }
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str):
            pattern = r"\$\{([^}]+)\}"

            def replace_env_var(match):
                var_spec = match.group(1)
                if ":" in var_spec:
                    var_name, default_value = var_spec.split(":", 1)
                else:
                    var_name, default_value = var_spec, ""

                return os.getenv(var_name, default_value)

            return re.sub(pattern, replace_env_var, config)
        else:
            return config

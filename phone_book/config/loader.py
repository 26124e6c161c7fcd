"""
Configuration loader module for the phone book.

Provides YAML-based configuration file loading with support for:
- Loading configuration from default or custom paths
- Graceful handling of missing configuration files
- Validation of known keys, their types and ranges
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from phone_book.utils.paths import resolve_config_dir

# Default configuration file name
DEFAULT_CONFIG_FILE = "config.yaml"

logger = logging.getLogger(__name__)

# Known configuration keys and their expected types
VALID_KEYS: dict[str, type[Any] | tuple[type[Any], ...]] = {
    "phone_book_file": str,
    "verbose": bool,
    "log_dir": str,
    "log_retention_count": int,
    "fuzzy_threshold": (int, float),
    "fuzzy_limit": int,
}


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


class ConfigLoader:
    """
    YAML configuration file loader.

    Attributes:
        config_path: Path of the configuration file

    Usage:
        config = ConfigLoader().load_and_validate()

        # Load from specific file
        config = ConfigLoader("/path/to/config.yaml").load_and_validate()
    """

    def __init__(self, config_path: Path | str | None = None):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path of the configuration file. Defaults to
                        config.yaml in the resolved configuration directory
                        (~/.phone-book/ or $PHONE_BOOK_CONFIG_DIR)
        """
        if config_path is None:
            self.config_path = resolve_config_dir() / DEFAULT_CONFIG_FILE
        else:
            self.config_path = Path(config_path).expanduser()

    def load(self) -> dict[str, Any]:
        """
        Load configuration from the configuration file.

        Returns an empty dict if the file doesn't exist, allowing
        graceful operation with CLI defaults.

        Returns:
            Dictionary containing configuration values, or empty dict if file
            doesn't exist

        Raises:
            ConfigError: If the configuration file exists but cannot be parsed
        """
        path = self.config_path

        if not path.exists():
            logger.debug(f"Configuration file not found: {path}")
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML configuration file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file: {e}") from e

        if config is None:
            logger.debug(f"Configuration file is empty: {path}")
            return {}

        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must contain a YAML dictionary, "
                f"got {type(config).__name__}"
            )

        logger.debug(f"Loaded configuration from {path}")
        return config

    def validate(self, config: dict[str, Any]) -> None:
        """
        Validate configuration structure and values.

        Unknown keys are ignored.

        Args:
            config: Configuration dictionary to validate

        Raises:
            ConfigError: If configuration is invalid
        """
        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration must be a dictionary, got {type(config).__name__}"
            )

        for key, value in config.items():
            if key not in VALID_KEYS:
                continue
            expected_type = VALID_KEYS[key]
            # bool is a subclass of int; reject it for numeric options
            is_bool_for_number = isinstance(value, bool) and expected_type is not bool
            if is_bool_for_number or not isinstance(value, expected_type):
                if isinstance(expected_type, tuple):
                    type_name = " or ".join(t.__name__ for t in expected_type)
                else:
                    type_name = expected_type.__name__
                raise ConfigError(
                    f"Invalid type for '{key}': expected {type_name}, "
                    f"got {type(value).__name__}"
                )

        if "fuzzy_threshold" in config:
            threshold = config["fuzzy_threshold"]
            if not (0.0 <= threshold <= 1.0):
                raise ConfigError(
                    f"fuzzy_threshold must be between 0.0 and 1.0, got {threshold}"
                )

        if "fuzzy_limit" in config and config["fuzzy_limit"] < 1:
            raise ConfigError(
                f"fuzzy_limit must be >= 1, got {config['fuzzy_limit']}"
            )

        if "log_retention_count" in config and config["log_retention_count"] < 0:
            raise ConfigError(
                f"log_retention_count must be >= 0, "
                f"got {config['log_retention_count']}"
            )

    def load_and_validate(self) -> dict[str, Any]:
        """
        Load configuration and validate it.

        Returns:
            Validated configuration dictionary

        Raises:
            ConfigError: If configuration cannot be loaded or is invalid
        """
        config = self.load()
        if config:
            self.validate(config)
        return config

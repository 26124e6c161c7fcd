"""
Configuration file generator for the phone book.

Provides functionality to generate a default configuration file with
every available option documented and commented out.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def generate_default_config() -> str:
    """
    Generate default YAML configuration with all options documented.

    Returns:
        String containing YAML configuration with comments
    """
    return """# Phone Book Configuration
# ========================
#
# This file sets default options for phone-book.
# CLI arguments and environment variables always override these values.
#
# To use this configuration:
#   1. Save as ~/.phone-book/config.yaml (or pass --config-file)
#   2. Uncomment and modify options as needed
#   3. Run phone-book commands normally

# Book File
# ---------

# Location of the contacts file used by every command
# Overridden by --file or the PHONE_BOOK_FILE environment variable
# Default: phone_book.json in the current directory
# phone_book_file: ~/contacts/phone_book.json


# Logging Options
# ---------------

# Enable verbose output with detailed logging
# Default: false
# verbose: true

# Directory for log files. File logging is off unless this is set
# log_dir: ~/.phone-book/logs

# Number of daily log files to keep (0 keeps all)
# Default: 10
# log_retention_count: 10


# Search Options
# --------------

# Minimum similarity (0.0 to 1.0) for 'search fuzzy' results
# Default: 0.7
# fuzzy_threshold: 0.7

# Maximum number of 'search fuzzy' results
# Default: 10
# fuzzy_limit: 10
"""


def save_config_file(
    config_path: Path, overwrite: bool = False
) -> tuple[bool, str | None]:
    """
    Save default configuration file to specified path.

    Creates parent directories if they don't exist and saves
    the configuration with owner-only permissions.

    Args:
        config_path: Path where the config file should be saved
        overwrite: If True, overwrite existing file. If False, fail if file exists.

    Returns:
        Tuple of (success: bool, error_message: Optional[str])
    """
    try:
        config_path = config_path.expanduser().resolve()

        if config_path.exists() and not overwrite:
            return (
                False,
                f"Configuration file already exists: {config_path}\n"
                "Use --force to overwrite.",
            )

        config_path.parent.mkdir(parents=True, mode=0o700, exist_ok=True)

        config_path.write_text(generate_default_config(), encoding="utf-8")
        config_path.chmod(0o600)

        logger.info(f"Created configuration file: {config_path}")
        return (True, None)

    except OSError as e:
        error_msg = f"Failed to create configuration file: {e}"
        logger.error(error_msg)
        return (False, error_msg)

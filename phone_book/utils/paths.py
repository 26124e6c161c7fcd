"""
Path utilities for configuration directory resolution.

Provides consistent path resolution for the phone-book configuration
directory across all modules.
"""

from __future__ import annotations

import os
from pathlib import Path

# Default configuration directory
DEFAULT_CONFIG_DIR = Path.home() / ".phone-book"

# Environment variable for overriding config directory
CONFIG_DIR_ENV_VAR = "PHONE_BOOK_CONFIG_DIR"

# Book file used when neither the CLI, environment nor config names one
DEFAULT_BOOK_FILE = "phone_book.json"


def resolve_config_dir(config_dir: Path | str | None = None) -> Path:
    """
    Resolve the configuration directory path.

    Priority:
        1. Explicit config_dir parameter (if provided)
        2. PHONE_BOOK_CONFIG_DIR environment variable
        3. Default directory (~/.phone-book)

    Args:
        config_dir: Optional explicit configuration directory path.
                   Can be a Path object or string.

    Returns:
        Resolved Path to the configuration directory (expanduser and resolve applied)
    """
    if config_dir is not None:
        return Path(config_dir).expanduser().resolve()

    env_dir = os.environ.get(CONFIG_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir).expanduser().resolve()

    return DEFAULT_CONFIG_DIR.expanduser().resolve()


def resolve_book_file(
    book_file: Path | str | None = None, configured: str | None = None
) -> Path:
    """
    Resolve the path of the book file.

    Priority:
        1. Explicit book_file parameter (--file option or PHONE_BOOK_FILE)
        2. phone_book_file from the configuration file
        3. phone_book.json in the current working directory

    Returns:
        Path to the book file with ~ expanded
    """
    if book_file:
        return Path(book_file).expanduser()
    if configured:
        return Path(configured).expanduser()
    return Path(DEFAULT_BOOK_FILE)

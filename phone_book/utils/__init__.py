"""
phone_book.utils - Utility module

Common utilities including logging configuration and path resolution.
"""

from phone_book.utils.normalization import normalize_string
from phone_book.utils.paths import (
    DEFAULT_BOOK_FILE,
    DEFAULT_CONFIG_DIR,
    resolve_book_file,
    resolve_config_dir,
)

__all__ = [
    "normalize_string",
    "resolve_book_file",
    "resolve_config_dir",
    "DEFAULT_BOOK_FILE",
    "DEFAULT_CONFIG_DIR",
]

"""CLI package for phone_book."""

from phone_book.cli.formatters import (
    NOT_FOUND_MESSAGE,
    format_contact,
    show_contacts,
    show_search_hits,
)
from phone_book.cli.main import (
    EXIT_CODES,
    cli,
    exit_code_for,
    get_config_dir,
    get_config_file,
    validate_address,
)
from phone_book.utils import DEFAULT_BOOK_FILE, DEFAULT_CONFIG_DIR

__all__ = [
    "DEFAULT_BOOK_FILE",
    "DEFAULT_CONFIG_DIR",
    "EXIT_CODES",
    "NOT_FOUND_MESSAGE",
    "cli",
    "exit_code_for",
    "format_contact",
    "get_config_dir",
    "get_config_file",
    "show_contacts",
    "show_search_hits",
    "validate_address",
]

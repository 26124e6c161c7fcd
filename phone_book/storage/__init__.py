"""
Book file persistence.

This module loads and saves the whole contact store as a pretty-printed
JSON document.
"""

from phone_book.storage.json_file import PhoneBookFile, load_store, save_store

__all__ = ["PhoneBookFile", "load_store", "save_store"]

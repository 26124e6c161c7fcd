"""
phone_book - Local contact book manager.

Stores contacts (name, phone number, optional postal address) in a single
JSON file and manages them from the command line.
"""

__version__ = "0.1.0"

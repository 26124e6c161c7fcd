"""
phone_book.book - Contact book core

Contains the contact records, the phone-keyed contact store, text search
and the error hierarchy.
"""

from phone_book.book.contact import (
    PHONE_NUMBER_LENGTH,
    Address,
    Contact,
    parse_address,
)
from phone_book.book.errors import (
    ContactNotFoundError,
    DuplicateContactError,
    InvalidAddressFormatError,
    InvalidPhoneNumberError,
    PersistenceError,
    PhoneBookError,
)
from phone_book.book.search import SearchHit, find_by_prefix, fuzzy_search
from phone_book.book.store import ContactStore, validate_phone_number

__all__ = [
    "PHONE_NUMBER_LENGTH",
    "Address",
    "Contact",
    "ContactStore",
    "SearchHit",
    "parse_address",
    "find_by_prefix",
    "fuzzy_search",
    "validate_phone_number",
    "PhoneBookError",
    "InvalidPhoneNumberError",
    "DuplicateContactError",
    "ContactNotFoundError",
    "InvalidAddressFormatError",
    "PersistenceError",
]

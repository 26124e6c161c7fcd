"""
Error types raised by the contact book.

Every failure of a store operation, address parsing or book file access is
reported as a subclass of PhoneBookError so the command layer can map it to
a message and an exit status in one place.
"""

from __future__ import annotations

from pathlib import Path


class PhoneBookError(Exception):
    """Base class for all contact book errors."""

    pass


class InvalidPhoneNumberError(PhoneBookError):
    """Raised when a phone number is not exactly ten characters long."""

    def __init__(self, phone_number: str):
        self.phone_number = phone_number
        super().__init__(
            f"phone number must be 10 characters long, got {phone_number!r}"
        )


class DuplicateContactError(PhoneBookError):
    """Raised when inserting a contact whose phone number is already stored."""

    def __init__(self, phone_number: str):
        self.phone_number = phone_number
        super().__init__(f"number already exists: {phone_number}")


class ContactNotFoundError(PhoneBookError):
    """Raised when no contact has the requested phone number."""

    def __init__(self, phone_number: str | None = None):
        self.phone_number = phone_number
        if phone_number:
            message = f"no contact found with phone number {phone_number}"
        else:
            message = "no contact found"
        super().__init__(message)


class InvalidAddressFormatError(PhoneBookError):
    """Raised when an address string does not have five comma separated parts."""

    pass


class PersistenceError(PhoneBookError):
    """Raised when the book file cannot be read, parsed or written."""

    def __init__(self, message: str, path: Path | str | None = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)

"""
In-memory contact store keyed on phone number.

The store is a plain mapping from phone number to Contact, so the
"one contact per phone number" rule is structural rather than a side
effect of custom equality. Lookups by phone are dictionary lookups; name
and city queries scan every contact, which is fine for a personal book.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from phone_book.book.contact import PHONE_NUMBER_LENGTH, Contact
from phone_book.book.errors import (
    ContactNotFoundError,
    DuplicateContactError,
    InvalidPhoneNumberError,
)

logger = logging.getLogger(__name__)


def validate_phone_number(phone_number: str) -> None:
    """
    Check that a phone number is exactly ten characters long.

    Only the length is checked; the characters themselves are not.

    Raises:
        InvalidPhoneNumberError: If the length is not ten
    """
    if len(phone_number) != PHONE_NUMBER_LENGTH:
        raise InvalidPhoneNumberError(phone_number)


class ContactStore:
    """
    Uniqueness-constrained collection of contacts.

    Usage:
        store = ContactStore()
        store.insert(Contact("Jane", "Doe", "5551234567"))

        jane = store.find_by_phone("5551234567")
        store.replace(jane.with_changes(first_name="Janet"))

        store.find_by_name(last="Doe")
        store.find_by_city("Springfield")

        store.delete("5551234567")
    """

    def __init__(self) -> None:
        self._contacts: dict[str, Contact] = {}

    @classmethod
    def from_contacts(cls, contacts: Iterable[Contact]) -> "ContactStore":
        """
        Build a store from existing contacts without validating phone length.

        Raises:
            DuplicateContactError: If two contacts share a phone number
        """
        store = cls()
        for contact in contacts:
            if contact.phone_number in store._contacts:
                raise DuplicateContactError(contact.phone_number)
            store._contacts[contact.phone_number] = contact
        return store

    def __len__(self) -> int:
        return len(self._contacts)

    def __iter__(self) -> Iterator[Contact]:
        return iter(list(self._contacts.values()))

    def __contains__(self, phone_number: object) -> bool:
        return phone_number in self._contacts

    def contacts(self) -> list[Contact]:
        """Return a snapshot of every contact in the store."""
        return list(self._contacts.values())

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def insert(self, contact: Contact) -> None:
        """
        Add a new contact.

        Raises:
            InvalidPhoneNumberError: If the phone number is not ten characters
            DuplicateContactError: If the phone number is already stored
        """
        validate_phone_number(contact.phone_number)

        if contact.phone_number in self._contacts:
            raise DuplicateContactError(contact.phone_number)

        self._contacts[contact.phone_number] = contact
        logger.debug(f"Inserted contact {contact.phone_number}")

    def replace(self, contact: Contact) -> None:
        """
        Replace the stored contact that has the same phone number.

        Every field of the stored record is overwritten; nothing is merged.

        Raises:
            InvalidPhoneNumberError: If the phone number is not ten characters
            ContactNotFoundError: If no contact has this phone number
        """
        validate_phone_number(contact.phone_number)

        if contact.phone_number not in self._contacts:
            raise ContactNotFoundError(contact.phone_number)

        self._contacts[contact.phone_number] = contact
        logger.debug(f"Replaced contact {contact.phone_number}")

    def delete(self, phone_number: str) -> Contact:
        """
        Remove the contact with the given phone number.

        Returns:
            The removed contact

        Raises:
            InvalidPhoneNumberError: If the phone number is not ten characters
            ContactNotFoundError: If no contact has this phone number
        """
        validate_phone_number(phone_number)

        try:
            removed = self._contacts.pop(phone_number)
        except KeyError:
            raise ContactNotFoundError(phone_number) from None

        logger.debug(f"Deleted contact {phone_number}")
        return removed

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def find_by_phone(self, phone_number: str) -> Contact:
        """
        Look up a contact by phone number.

        Raises:
            InvalidPhoneNumberError: If the phone number is not ten characters
            ContactNotFoundError: If no contact has this phone number
        """
        validate_phone_number(phone_number)

        contact = self._contacts.get(phone_number)
        if contact is None:
            raise ContactNotFoundError(phone_number)
        return contact

    def find_by_name(
        self, first: Optional[str] = None, last: Optional[str] = None
    ) -> list[Contact]:
        """
        Find contacts matching the first name OR the last name.

        A contact matches when either comparison succeeds. A term that is
        not supplied compares as the empty string, so it matches contacts
        whose corresponding name is empty.
        """
        first = first or ""
        last = last or ""
        return [
            contact
            for contact in self._contacts.values()
            if contact.first_name == first or contact.last_name == last
        ]

    def find_by_city(self, city: str) -> list[Contact]:
        """
        Find contacts whose address is in the given city.

        The comparison is exact and case-sensitive. Contacts without an
        address never match.
        """
        return [
            contact
            for contact in self._contacts.values()
            if contact.address is not None and contact.address.city == city
        ]

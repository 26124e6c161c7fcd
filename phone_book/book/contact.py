"""
Contact data model for the phone book.

Provides immutable Address and Contact records with methods for:
- Converting to/from the JSON record shape stored in the book file
- Copying a contact with selected fields replaced
- Parsing the "street, city, state, postcode, country" address format
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from phone_book.book.errors import InvalidAddressFormatError

# Required phone number length, checked by every store operation
PHONE_NUMBER_LENGTH = 10

# Number of comma separated parts in an address string
ADDRESS_FIELD_COUNT = 5


def _require_str(data: dict[str, Any], key: str) -> str:
    """Fetch a string field from a record, raising ValueError otherwise."""
    if key not in data:
        raise ValueError(f"missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(
            f"field '{key}' must be a string, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Address:
    """
    Postal address of a contact.

    All fields are free text; no validation is applied beyond the parsing
    rules of parse_address().
    """

    street_address: str
    city: str
    state: str
    postcode: str
    country: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Address":
        """
        Create an Address from its stored record.

        Raises:
            ValueError: If a field is missing or is not a string
        """
        if not isinstance(data, dict):
            raise ValueError(
                f"address must be an object, got {type(data).__name__}"
            )
        return cls(**{f.name: _require_str(data, f.name) for f in fields(cls)})

    def to_dict(self) -> dict[str, str]:
        """Convert to the stored record shape."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        return ", ".join(getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class Contact:
    """
    A person in the phone book.

    The phone number is the identity key: the store never holds two
    contacts with the same phone_number. Its length is validated by the
    store, not here, so records loaded from disk or built by the command
    layer can always be constructed.

    Attributes:
        first_name: Given name
        last_name: Family name
        phone_number: Ten character phone number, the unique key
        address: Optional postal address

    Usage:
        contact = Contact("Jane", "Doe", "5551234567")

        # Copy with a new first name, keeping everything else
        renamed = contact.with_changes(first_name="Janet")

        # Persist and restore
        record = contact.to_dict()
        restored = Contact.from_dict(record)
    """

    first_name: str
    last_name: str
    phone_number: str
    address: Optional[Address] = None

    @property
    def full_name(self) -> str:
        """First and last name joined by a space, skipping empty parts."""
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    def with_changes(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        address: Optional[Address] = None,
    ) -> "Contact":
        """
        Return a copy with the supplied fields replaced.

        Fields passed as None keep their current value. The phone number
        cannot be changed because it identifies the contact.
        """
        changes: dict[str, Any] = {}
        if first_name is not None:
            changes["first_name"] = first_name
        if last_name is not None:
            changes["last_name"] = last_name
        if address is not None:
            changes["address"] = address
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contact":
        """
        Create a Contact from its stored record.

        Example record::

            {
                "first_name": "Jane",
                "last_name": "Doe",
                "phone_number": "5551234567",
                "address": {
                    "street_address": "1 Main St",
                    "city": "Springfield",
                    "state": "IL",
                    "postcode": "62701",
                    "country": "USA"
                }
            }

        A missing or null address loads as None.

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"contact must be an object, got {type(data).__name__}")

        address_data = data.get("address")
        address = Address.from_dict(address_data) if address_data is not None else None

        return cls(
            first_name=_require_str(data, "first_name"),
            last_name=_require_str(data, "last_name"),
            phone_number=_require_str(data, "phone_number"),
            address=address,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored record shape (address is None when absent)."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone_number": self.phone_number,
            "address": self.address.to_dict() if self.address else None,
        }


def parse_address(text: str) -> Address:
    """
    Parse an address given as five comma separated values.

    Format: ``street address, city, state/province, postcode, country``.
    Surrounding whitespace is stripped from every part; empty parts are
    accepted.

    Args:
        text: Address string from the command line

    Returns:
        Parsed Address

    Raises:
        InvalidAddressFormatError: If the string does not split into
            exactly five parts
    """
    parts = text.split(",")
    if len(parts) != ADDRESS_FIELD_COUNT:
        raise InvalidAddressFormatError(
            "address must have five comma separated values"
        )

    street_address, city, state, postcode, country = (p.strip() for p in parts)
    return Address(
        street_address=street_address,
        city=city,
        state=state,
        postcode=postcode,
        country=country,
    )

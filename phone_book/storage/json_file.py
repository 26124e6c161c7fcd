"""
JSON file persistence for the contact store.

Provides functionality to:
- Create an empty book file
- Load the whole store from a book file
- Save the whole store back, replacing the file atomically

The whole store is read and written on every command; nothing is persisted
incrementally. The file is not locked, so two processes editing the same
book at once can lose one of the updates.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from phone_book.book.contact import Contact
from phone_book.book.errors import DuplicateContactError, PersistenceError
from phone_book.book.store import ContactStore

logger = logging.getLogger(__name__)


class PhoneBookFile:
    """
    A book file on disk.

    File format::

        {
          "contacts": [
            {
              "first_name": "Jane",
              "last_name": "Doe",
              "phone_number": "5551234567",
              "address": null
            }
          ]
        }

    Attributes:
        path: Location of the book file

    Usage:
        book = PhoneBookFile(Path("phone_book.json"))
        book.create()

        store = book.load()
        store.insert(contact)
        book.save(store)
    """

    CONTACTS_KEY = "contacts"

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        """Check whether the book file exists."""
        return self.path.exists()

    def create(self, overwrite: bool = False) -> None:
        """
        Write a new, empty book file.

        Args:
            overwrite: If True, replace an existing file. If False, fail
                      when the file already exists.

        Raises:
            PersistenceError: If the file exists (and overwrite is False) or
                             cannot be written
        """
        if self.exists() and not overwrite:
            raise PersistenceError(
                f"Book file already exists: {self.path}\nUse --force to overwrite.",
                self.path,
            )
        self.save(ContactStore())
        logger.info(f"Created book file {self.path}")

    def load(self) -> ContactStore:
        """
        Load the whole store from the book file.

        Returns:
            ContactStore holding every contact in the file

        Raises:
            PersistenceError: If the file is missing, unreadable, not valid
                             JSON, not a valid book, or holds two contacts
                             with the same phone number
        """
        if not self.exists():
            raise PersistenceError(
                f"Book file not found: {self.path}\n"
                "Run 'phone-book init' to create it.",
                self.path,
            )

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise PersistenceError(
                f"Book file is not valid JSON: {self.path}: {e}", self.path
            ) from e
        except UnicodeDecodeError as e:
            raise PersistenceError(
                f"Book file is not valid UTF-8: {self.path}: {e}", self.path
            ) from e
        except OSError as e:
            raise PersistenceError(
                f"Failed to read book file {self.path}: {e}", self.path
            ) from e

        store = self._decode(data)
        logger.debug(f"Loaded {len(store)} contacts from {self.path}")
        return store

    def save(self, store: ContactStore) -> None:
        """
        Write the whole store to the book file.

        The data is written to a temporary file next to the book and then
        moved over it, so an interrupted save leaves the previous file
        intact. The book keeps its permissions; a new book gets the
        umask default.

        Raises:
            PersistenceError: If the file cannot be written
        """
        payload = json.dumps(self._encode(store), indent=2, ensure_ascii=False)

        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            mode = self._target_mode()
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(payload)
                f.write("\n")
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise PersistenceError(
                f"Failed to write book file {self.path}: {e}", self.path
            ) from e

        logger.debug(f"Saved {len(store)} contacts to {self.path}")

    def _target_mode(self) -> int:
        """Permission bits the saved book should have."""
        if self.path.exists():
            return stat.S_IMODE(self.path.stat().st_mode)

        # os.umask can only be read by setting it
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    def _encode(self, store: ContactStore) -> dict[str, Any]:
        contacts = sorted(store.contacts(), key=lambda c: c.phone_number)
        return {self.CONTACTS_KEY: [c.to_dict() for c in contacts]}

    def _decode(self, data: Any) -> ContactStore:
        """Turn parsed JSON into a store, raising PersistenceError on bad shape."""
        if not isinstance(data, dict) or self.CONTACTS_KEY not in data:
            raise PersistenceError(
                f"Book file must contain an object with a '{self.CONTACTS_KEY}' "
                f"list: {self.path}",
                self.path,
            )

        records = data[self.CONTACTS_KEY]
        if not isinstance(records, list):
            raise PersistenceError(
                f"'{self.CONTACTS_KEY}' must be a list, "
                f"got {type(records).__name__}: {self.path}",
                self.path,
            )

        contacts = []
        for index, record in enumerate(records):
            try:
                contacts.append(Contact.from_dict(record))
            except ValueError as e:
                raise PersistenceError(
                    f"Invalid contact #{index} in {self.path}: {e}", self.path
                ) from e

        try:
            return ContactStore.from_contacts(contacts)
        except DuplicateContactError as e:
            raise PersistenceError(
                f"Book file {self.path} contains a duplicate contact: "
                f"{e.phone_number}",
                self.path,
            ) from e


def load_store(path: Path | str) -> ContactStore:
    """Load a store from the book file at path."""
    return PhoneBookFile(path).load()


def save_store(store: ContactStore, path: Path | str) -> None:
    """Save a store to the book file at path, replacing it."""
    PhoneBookFile(path).save(store)

"""
Unit tests for the JSON book file.

Tests creating, loading and saving book files, including rejection of
malformed files and whole-file replacement on save.
"""

import json
import os
import stat

import pytest

from phone_book.book.contact import Address, Contact
from phone_book.book.errors import PersistenceError
from phone_book.book.store import ContactStore
from phone_book.storage.json_file import PhoneBookFile, load_store, save_store


def sample_store() -> ContactStore:
    """Helper to build a store with and without addresses."""
    return ContactStore.from_contacts(
        [
            Contact(
                "Jane",
                "Doe",
                "5551234567",
                Address("1 Main St", "Springfield", "IL", "62701", "USA"),
            ),
            Contact("Bob", "Lee", "4445556666"),
            Contact("Zoë", "Ünal", "1112223333"),
        ]
    )


def as_dicts(store: ContactStore) -> list[dict]:
    """Helper to compare store contents regardless of order."""
    return sorted((c.to_dict() for c in store), key=lambda d: d["phone_number"])


class TestCreate:
    """Tests for PhoneBookFile.create."""

    def test_create_writes_empty_book(self, tmp_path):
        """Test that create writes a book with no contacts."""
        path = tmp_path / "phone_book.json"
        PhoneBookFile(path).create()

        assert json.loads(path.read_text(encoding="utf-8")) == {"contacts": []}

    def test_create_makes_parent_directories(self, tmp_path):
        """Test that missing parent directories are created."""
        path = tmp_path / "nested" / "dir" / "book.json"
        PhoneBookFile(path).create()
        assert path.exists()

    def test_create_refuses_to_overwrite(self, tmp_path):
        """Test that an existing book is not clobbered."""
        path = tmp_path / "phone_book.json"
        save_store(sample_store(), path)

        with pytest.raises(PersistenceError, match="already exists"):
            PhoneBookFile(path).create()
        assert len(load_store(path)) == 3

    def test_create_with_overwrite(self, tmp_path):
        """Test that overwrite=True empties an existing book."""
        path = tmp_path / "phone_book.json"
        save_store(sample_store(), path)

        PhoneBookFile(path).create(overwrite=True)
        assert len(load_store(path)) == 0


class TestSaveAndLoad:
    """Tests for saving and loading stores."""

    def test_round_trip(self, tmp_path):
        """Test that saving then loading keeps every contact and field."""
        path = tmp_path / "phone_book.json"
        store = sample_store()
        save_store(store, path)

        assert as_dicts(load_store(path)) == as_dicts(store)

    def test_file_is_pretty_printed(self, tmp_path):
        """Test that the file is indented, human-readable JSON."""
        path = tmp_path / "phone_book.json"
        save_store(sample_store(), path)

        text = path.read_text(encoding="utf-8")
        assert text.startswith('{\n  "contacts": [')
        assert text.endswith("\n")
        assert "Zoë" in text

    def test_contacts_sorted_by_phone(self, tmp_path):
        """Test that records are written in phone number order."""
        path = tmp_path / "phone_book.json"
        save_store(sample_store(), path)

        data = json.loads(path.read_text(encoding="utf-8"))
        phones = [r["phone_number"] for r in data["contacts"]]
        assert phones == sorted(phones)

    def test_missing_address_written_as_null(self, tmp_path):
        """Test that a contact without address stores null."""
        path = tmp_path / "phone_book.json"
        save_store(ContactStore.from_contacts([Contact("Bob", "Lee", "4445556666")]), path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["contacts"][0]["address"] is None

    def test_save_replaces_whole_file(self, tmp_path):
        """Test that a save drops contacts removed from the store."""
        path = tmp_path / "phone_book.json"
        store = sample_store()
        save_store(store, path)

        store.delete("4445556666")
        save_store(store, path)

        assert "4445556666" not in load_store(path)

    def test_save_leaves_no_temp_files(self, tmp_path):
        """Test that the temporary file is moved into place."""
        path = tmp_path / "phone_book.json"
        save_store(sample_store(), path)
        save_store(sample_store(), path)

        assert [p.name for p in tmp_path.iterdir()] == ["phone_book.json"]

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_save_keeps_existing_permissions(self, tmp_path):
        """Test that rewriting a book does not change its mode."""
        path = tmp_path / "phone_book.json"
        save_store(sample_store(), path)
        path.chmod(0o644)

        PhoneBookFile(path).save(ContactStore())

        assert stat.S_IMODE(path.stat().st_mode) == 0o644
        assert len(load_store(path)) == 0

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_new_book_uses_umask_default(self, tmp_path):
        """Test that a new book gets the mode a plain open() would give it."""
        old_umask = os.umask(0o022)
        try:
            path = tmp_path / "phone_book.json"
            save_store(sample_store(), path)
        finally:
            os.umask(old_umask)

        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_save_to_directory_raises(self, tmp_path):
        """Test that an unwritable target raises PersistenceError."""
        target = tmp_path / "book.json"
        target.mkdir()

        with pytest.raises(PersistenceError, match="Failed to write"):
            save_store(sample_store(), target)
        assert [p.name for p in tmp_path.iterdir()] == ["book.json"]

    def test_load_accepts_records_without_address_key(self, tmp_path):
        """Test loading a record that omits the address key."""
        path = tmp_path / "phone_book.json"
        path.write_text(
            json.dumps(
                {
                    "contacts": [
                        {
                            "first_name": "Bob",
                            "last_name": "Lee",
                            "phone_number": "4445556666",
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )

        store = load_store(path)
        assert store.find_by_phone("4445556666").address is None


class TestLoadErrors:
    """Tests for load failures."""

    def test_missing_file(self, tmp_path):
        """Test that loading a missing file fails with a hint."""
        with pytest.raises(PersistenceError, match="phone-book init") as exc_info:
            load_store(tmp_path / "missing.json")
        assert exc_info.value.path == tmp_path / "missing.json"

    def test_invalid_utf8(self, tmp_path):
        """Test that a file with bytes that are not UTF-8 is rejected."""
        path = tmp_path / "phone_book.json"
        path.write_bytes(b'{"contacts": [{"first_name": "\xff\xfe"}]}')

        with pytest.raises(PersistenceError, match="not valid UTF-8") as exc_info:
            load_store(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_invalid_json(self, tmp_path):
        """Test that a file that is not JSON is rejected."""
        path = tmp_path / "phone_book.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError, match="not valid JSON"):
            load_store(path)

    @pytest.mark.parametrize("payload", [[], {}, {"people": []}, "contacts"])
    def test_wrong_top_level_shape(self, tmp_path, payload):
        """Test that a document without a contacts list is rejected."""
        path = tmp_path / "phone_book.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        with pytest.raises(PersistenceError, match="'contacts'"):
            load_store(path)

    def test_contacts_not_a_list(self, tmp_path):
        """Test that a contacts object instead of list is rejected."""
        path = tmp_path / "phone_book.json"
        path.write_text(json.dumps({"contacts": {}}), encoding="utf-8")

        with pytest.raises(PersistenceError, match="must be a list"):
            load_store(path)

    def test_malformed_record(self, tmp_path):
        """Test that a record missing a field is rejected."""
        path = tmp_path / "phone_book.json"
        path.write_text(
            json.dumps({"contacts": [{"first_name": "Bob", "last_name": "Lee"}]}),
            encoding="utf-8",
        )

        with pytest.raises(PersistenceError, match="Invalid contact #0"):
            load_store(path)

    def test_duplicate_phone_numbers(self, tmp_path):
        """Test that a file holding the same phone twice is rejected."""
        record = {
            "first_name": "Bob",
            "last_name": "Lee",
            "phone_number": "4445556666",
            "address": None,
        }
        path = tmp_path / "phone_book.json"
        path.write_text(json.dumps({"contacts": [record, record]}), encoding="utf-8")

        with pytest.raises(PersistenceError, match="duplicate contact: 4445556666"):
            load_store(path)

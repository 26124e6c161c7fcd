"""
Tests for prefix and fuzzy search over the contact store.
"""

import pytest

from phone_book.book.contact import Address, Contact
from phone_book.book.search import (
    DEFAULT_FUZZY_LIMIT,
    DEFAULT_FUZZY_THRESHOLD,
    SearchHit,
    find_by_prefix,
    fuzzy_search,
)
from phone_book.book.store import ContactStore


@pytest.fixture
def store():
    """A small book with a few names and cities."""
    return ContactStore.from_contacts(
        [
            Contact(
                "Jane",
                "Doe",
                "5551234567",
                Address("1 Main St", "Springfield", "IL", "62701", "USA"),
            ),
            Contact("José", "Díaz", "5559876543"),
            Contact("Bob", "Lee", "4445556666"),
        ]
    )


class TestFindByPrefix:
    """Tests for find_by_prefix."""

    def test_matches_prefix(self, store):
        """Test that every number starting with the prefix is returned."""
        results = find_by_prefix(store, "555")
        assert [c.phone_number for c in results] == ["5551234567", "5559876543"]

    def test_full_number_matches(self, store):
        """Test that a full phone number is its own prefix."""
        results = find_by_prefix(store, "4445556666")
        assert [c.first_name for c in results] == ["Bob"]

    def test_no_match(self, store):
        """Test that an unknown prefix returns nothing."""
        assert find_by_prefix(store, "999") == []

    def test_empty_prefix_matches_nothing(self, store):
        """Test that an empty prefix does not list the whole book."""
        assert find_by_prefix(store, "") == []

    def test_prefix_longer_than_phone_matches_nothing(self, store):
        """Test that an over-long prefix returns nothing."""
        assert find_by_prefix(store, "55512345678") == []


class TestFuzzySearch:
    """Tests for fuzzy_search."""

    def test_defaults(self):
        """Test the default threshold and limit."""
        assert 0.0 < DEFAULT_FUZZY_THRESHOLD < 1.0
        assert DEFAULT_FUZZY_LIMIT >= 1

    def test_exact_name_scores_one(self, store):
        """Test that an exact name is a perfect match."""
        hits = fuzzy_search(store, "Jane Doe")
        assert hits[0].contact.phone_number == "5551234567"
        assert hits[0].score == pytest.approx(1.0)
        assert hits[0].matched_on == "name"

    def test_typo_still_matches(self, store):
        """Test that a misspelled name is found."""
        hits = fuzzy_search(store, "jane do")
        assert hits
        assert hits[0].contact.first_name == "Jane"
        assert hits[0].score >= 0.8

    def test_accents_are_ignored(self, store):
        """Test that unaccented input matches an accented name."""
        hits = fuzzy_search(store, "jose diaz")
        assert hits[0].contact.phone_number == "5559876543"
        assert hits[0].score == pytest.approx(1.0)

    def test_city_match(self, store):
        """Test that the city is searched as well as the name."""
        hits = fuzzy_search(store, "springfield")
        assert hits[0].contact.first_name == "Jane"
        assert hits[0].matched_on == "city"

    def test_unrelated_query_finds_nothing(self, store):
        """Test that a dissimilar query returns no hits."""
        assert fuzzy_search(store, "qqqqqqqq") == []

    def test_empty_query_finds_nothing(self, store):
        """Test that an empty or punctuation-only query returns nothing."""
        assert fuzzy_search(store, "") == []
        assert fuzzy_search(store, "!!!") == []

    def test_limit(self, store):
        """Test that results are truncated to the limit."""
        hits = fuzzy_search(store, "Jane Doe", threshold=0.0, limit=2)
        assert len(hits) == 2

    def test_sorted_by_score(self, store):
        """Test that hits are ordered best first."""
        hits = fuzzy_search(store, "Jane Doe", threshold=0.0)
        scores = [h.score for h in hits]
        assert scores == sorted(scores, reverse=True)
        assert all(isinstance(h, SearchHit) for h in hits)

    def test_empty_store(self):
        """Test searching an empty store."""
        assert fuzzy_search(ContactStore(), "Jane") == []

"""
Free-text search over a contact store.

Two searches complement the exact lookups of ContactStore:
- Prefix search: contacts whose phone number starts with the given digits
- Fuzzy search: contacts whose name or city is similar to a query

Both are linear scans over the store. Fuzzy scores come from rapidfuzz's
WRatio on normalized text and are reported on a 0.0 to 1.0 scale.
"""

import logging
from dataclasses import dataclass

from rapidfuzz import fuzz

from phone_book.book.contact import PHONE_NUMBER_LENGTH, Contact
from phone_book.book.store import ContactStore
from phone_book.utils.normalization import normalize_string

logger = logging.getLogger(__name__)

# Default threshold values
DEFAULT_FUZZY_THRESHOLD = 0.7
DEFAULT_FUZZY_LIMIT = 10


@dataclass
class SearchHit:
    """A fuzzy search result."""

    contact: Contact
    score: float  # 0.0 to 1.0 similarity score
    matched_on: str  # "name" or "city"


def find_by_prefix(store: ContactStore, prefix: str) -> list[Contact]:
    """
    Find contacts whose phone number starts with the given prefix.

    Args:
        store: Store to search
        prefix: Leading characters of the phone number

    Returns:
        Matching contacts sorted by phone number. An empty prefix or one
        longer than a phone number matches nothing.
    """
    if not prefix or len(prefix) > PHONE_NUMBER_LENGTH:
        return []

    matches = [c for c in store if c.phone_number.startswith(prefix)]
    return sorted(matches, key=lambda c: c.phone_number)


def _score(query: str, candidate: str) -> float:
    if not candidate:
        return 0.0
    return fuzz.WRatio(query, candidate) / 100.0


def fuzzy_search(
    store: ContactStore,
    text: str,
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
    limit: int = DEFAULT_FUZZY_LIMIT,
) -> list[SearchHit]:
    """
    Find contacts whose name or city resembles the query.

    Each contact is scored against its "first last" name and, when it has
    an address, its city; the better of the two scores is kept.

    Args:
        store: Store to search
        text: Free-text query
        threshold: Minimum score (0.0 to 1.0) for a contact to be returned
        limit: Maximum number of hits

    Returns:
        Hits sorted by descending score, ties broken by phone number
    """
    query = normalize_string(text)
    if not query:
        return []

    hits: list[SearchHit] = []
    for contact in store:
        name_score = _score(query, normalize_string(contact.full_name))
        city_score = 0.0
        if contact.address is not None:
            city_score = _score(query, normalize_string(contact.address.city))

        if city_score > name_score:
            hit = SearchHit(contact=contact, score=city_score, matched_on="city")
        else:
            hit = SearchHit(contact=contact, score=name_score, matched_on="name")

        logger.debug(
            f"Fuzzy score {hit.score:.2f} on {hit.matched_on} "
            f"for {contact.phone_number}"
        )
        if hit.score >= threshold:
            hits.append(hit)

    hits.sort(key=lambda h: (-h.score, h.contact.phone_number))
    return hits[:limit]

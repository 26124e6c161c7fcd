"""
String normalization utilities for fuzzy contact search.

Folds names and cities into a comparable form so that "José" matches
"jose" and "O'Brien" matches "obrien".
"""

from __future__ import annotations

import re
import unicodedata


def normalize_string(value: str, strip_punctuation: bool = True) -> str:
    """
    Normalize a string for fuzzy comparison.

    Args:
        value: String to normalize
        strip_punctuation: If True, remove non-alphanumeric characters.
                          If False, only normalize unicode, case and whitespace.

    Returns:
        Lowercase string without accents, with runs of whitespace collapsed
        to a single space
    """
    if not value:
        return ""

    # Decompose accents and drop the combining marks
    normalized = unicodedata.normalize("NFKD", value)
    normalized = "".join(c for c in normalized if not unicodedata.combining(c))

    normalized = normalized.lower()

    if strip_punctuation:
        normalized = re.sub(r"[^\w\s]|_", "", normalized)

    return re.sub(r"\s+", " ", normalized).strip()

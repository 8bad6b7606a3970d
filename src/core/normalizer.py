"""Destination label cleanup and catalog key derivation."""
from __future__ import annotations

import re
from typing import Any, List

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
SUFFIX_WORDS = frozenset({"city", "town", "country", "state"})


def normalize_destinations(value: Any) -> List[str]:
    """Return the trimmed, non-blank destination labels contained in ``value``.

    Lists and tuples keep only their string elements; a single string is split on
    commas. Anything else yields an empty list rather than an error.
    """

    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [item for item in value if isinstance(item, str)]
    else:
        return []

    return [part.strip() for part in parts if part.strip()]


def canonical_key(text: str) -> str:
    """Lower-case ``text``, drop punctuation and trailing place-type words.

    ``"Singapore City"``, ``" singapore "`` and ``"SINGAPORE!"`` all map to
    ``"singapore"``. A lone suffix word is kept so ``"City"`` does not collapse
    to an empty key.
    """

    words = _NON_ALNUM.sub(" ", text.lower()).split()
    while len(words) > 1 and words[-1] in SUFFIX_WORDS:
        words.pop()
    return " ".join(words)


def slugify(text: str) -> str:
    """Hyphenated form of the canonical key, used in synthetic identifiers."""

    return canonical_key(text).replace(" ", "-")

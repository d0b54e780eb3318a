"""Query normalization for the card search language."""

from __future__ import annotations

from typing import Any


def normalize_query(raw: Any) -> str:
    """Return the canonical lowercase form of a raw query.

    Non-string input (including ``None``) normalizes to ``""``, which callers
    treat as "clear the filter" rather than "match nothing".
    """
    if not isinstance(raw, str):
        return ""
    return raw.strip().lower()

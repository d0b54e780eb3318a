"""Flatten card fields into a single lowercase searchable string."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from card_query.domain.model import Card


def _field_text(value: Any) -> str:
    if isinstance(value, str):
        return value.lower()
    return ""


def _tags_text(tags: Any) -> str:
    if isinstance(tags, str):
        return tags.lower()
    if not isinstance(tags, (list, tuple, set, frozenset)):
        return ""
    return " ".join(tag for tag in tags if isinstance(tag, str)).lower()


def build_search_text(card: Card | Mapping[str, Any] | None) -> str:
    """Build the match corpus for one card.

    The result is ``text``, ``backText`` and the space-joined ``tags``, each
    lowercased, joined by single spaces and stripped. Missing or non-string
    fields contribute an empty string.

    Args:
        card: A :class:`Card` or a raw card mapping from the card store.

    Returns:
        The searchable text, possibly empty.
    """
    if isinstance(card, Card):
        text, back_text, tags = card.text, card.back_text, card.tags
    elif isinstance(card, Mapping):
        text = card.get("text")
        back_text = card.get("backText", card.get("back_text"))
        tags = card.get("tags")
    else:
        return ""

    return " ".join([_field_text(text), _field_text(back_text), _tags_text(tags)]).strip()

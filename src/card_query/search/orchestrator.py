"""Run the query evaluator over a card corpus.

This is the whole interface the rendering layer needs: it gets back either a
"cleared" signal or the set of matching card ids, and owns all visual effects
itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from card_query.domain.model import Card, CardId, SearchOutcome
from card_query.observability.metrics import SEARCH_COUNT, SEARCH_LATENCY, track_latency
from card_query.search.evaluator import evaluate_query
from card_query.search.indexer import build_search_text
from card_query.search.normalizer import normalize_query


logger = logging.getLogger(__name__)


def _card_id(card: Card | Mapping[str, Any]) -> CardId | None:
    if isinstance(card, Card):
        return card.id
    if isinstance(card, Mapping):
        return card.get("id")
    return None


def search(
    raw_query: Any,
    cards: Iterable[Card | Mapping[str, Any]],
    *,
    raw_regex: bool = False,
) -> SearchOutcome:
    """Find the cards matching ``raw_query``.

    Args:
        raw_query: Query as typed by the user.
        cards: Snapshot of the card corpus; cards without an id are skipped.
        raw_regex: Let wildcard terms use other regex metacharacters unescaped.

    Returns:
        ``SearchOutcome.clear()`` for an empty query, otherwise an outcome
        holding the matching ids.
    """
    query = normalize_query(raw_query)
    if not query:
        SEARCH_COUNT.labels(operation="search", outcome="cleared").inc()
        return SearchOutcome.clear()

    matching: set[CardId] = set()
    with track_latency(SEARCH_LATENCY, operation="search"):
        for card in cards:
            card_id = _card_id(card)
            if card_id is None:
                continue
            if evaluate_query(query, build_search_text(card), raw_regex=raw_regex):
                matching.add(card_id)

    SEARCH_COUNT.labels(operation="search", outcome="matched" if matching else "empty").inc()
    logger.debug("Query %r matched %d cards", query, len(matching))
    return SearchOutcome(cleared=False, matching_ids=frozenset(matching), query=query)

"""Search service orchestration layer.

Reads one snapshot from the card store per call and runs the pure search
core against it. Because the UI re-issues a search on every keystroke, the
service applies a last-call-wins policy: a call whose snapshot arrives after
a newer call has started is discarded and returns ``None``.
"""

import logging

from card_query.adapters.card_store import AbstractCardStore
from card_query.config import Settings
from card_query.domain.model import Card, SearchOutcome
from card_query.observability.metrics import SEARCH_COUNT, SEARCH_LATENCY, track_latency
from card_query.observability.tracing import create_span
from card_query.search.normalizer import normalize_query
from card_query.search.orchestrator import search


logger = logging.getLogger(__name__)


class SearchService:
    """High-level card search API for the canvas layer."""

    def __init__(self, card_store: AbstractCardStore, settings: Settings | None = None):
        """Initialize search service with dependencies.

        Args:
            card_store: Source of card snapshots
            settings: Matching and service options; loaded from the environment when omitted
        """
        self.card_store = card_store
        self.settings = settings or Settings()
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of ``search_cards`` calls started so far."""
        return self._generation

    async def search_cards(self, raw_query: object) -> SearchOutcome | None:
        """Search the current card snapshot.

        Args:
            raw_query: Query as typed by the user

        Returns:
            The outcome, or None when a newer call superseded this one
        """
        self._generation += 1
        generation = self._generation

        query = normalize_query(raw_query)
        if not query:
            logger.debug("Empty query; clearing search state")
            SEARCH_COUNT.labels(operation="service_search", outcome="cleared").inc()
            return SearchOutcome.clear()

        with create_span("card_query.search", attributes={"query.length": len(query)}):
            cards = await self.card_store.get_all_cards()

            if self.settings.latest_only and generation != self._generation:
                logger.debug("Discarding superseded search %d (latest is %d)", generation, self._generation)
                SEARCH_COUNT.labels(operation="service_search", outcome="superseded").inc()
                return None

            outcome = search(query, cards, raw_regex=self.settings.wildcard_regex)

        logger.info(
            "Search matched %d of %d cards",
            len(outcome.matching_ids),
            len(cards),
            extra={"query": query},
        )
        return outcome

    async def filter_by_tag(self, tag: str) -> SearchOutcome:
        """Select cards carrying ``tag`` exactly (case-insensitive)."""
        wanted = normalize_query(tag)
        if not wanted:
            return SearchOutcome.clear()

        with track_latency(SEARCH_LATENCY, operation="filter_by_tag"):
            cards = await self.card_store.get_all_cards()
            matching = frozenset(card.id for card in cards if wanted in _card_tags(card))

        logger.debug("Tag %r matched %d cards", wanted, len(matching))
        return SearchOutcome(cleared=False, matching_ids=matching, query=f"tag:{wanted}")

    async def filter_by_date_range(self, start_ms: int, end_ms: int) -> SearchOutcome:
        """Select cards created between ``start_ms`` and ``end_ms`` inclusive.

        Raises:
            ValueError: If the range is inverted
        """
        if start_ms > end_ms:
            raise ValueError(f"start_ms ({start_ms}) is after end_ms ({end_ms})")

        with track_latency(SEARCH_LATENCY, operation="filter_by_date_range"):
            cards = await self.card_store.get_all_cards()
            matching = frozenset(
                card.id for card in cards if card.created is not None and start_ms <= card.created <= end_ms
            )

        logger.debug("Date range %d..%d matched %d cards", start_ms, end_ms, len(matching))
        return SearchOutcome(cleared=False, matching_ids=matching, query=f"created:{start_ms}..{end_ms}")


def _card_tags(card: Card) -> set[str]:
    return {tag.strip().lower() for tag in card.tags}

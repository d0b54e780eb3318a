"""Domain layer: cards and search outcomes."""

from card_query.domain.model import Card, CardId, SearchOutcome


__all__ = ["Card", "CardId", "SearchOutcome"]

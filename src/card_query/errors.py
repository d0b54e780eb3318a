"""Exception hierarchy for card-query."""


class CardQueryError(Exception):
    """Base class for card-query errors."""


class CardStoreError(CardQueryError):
    """Raised when the card store cannot produce a snapshot."""

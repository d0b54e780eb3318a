"""Card store adapters.

The search service only needs one thing from persistence: an asynchronous
"read all cards" call returning a consistent snapshot.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
import logging
from pathlib import Path
from typing import Any

import anyio
import orjson
from pydantic import ValidationError

from card_query.domain.model import Card
from card_query.errors import CardStoreError


logger = logging.getLogger(__name__)


def _to_card(raw: Card | Mapping[str, Any]) -> Card:
    if isinstance(raw, Card):
        return raw
    try:
        return Card.model_validate(raw)
    except ValidationError as exc:
        raise CardStoreError(f"Invalid card: {exc}") from exc


class AbstractCardStore(ABC):
    """Abstract read-only port onto the card store."""

    @abstractmethod
    async def get_all_cards(self) -> list[Card]:
        """Return a snapshot of every card."""
        raise NotImplementedError


class InMemoryCardStore(AbstractCardStore):
    """Card store backed by a list held in memory.

    ``get_all_cards`` returns a copy, so callers mutating the store after a
    read never affect a snapshot already handed out.
    """

    def __init__(self, cards: Iterable[Card | Mapping[str, Any]] = ()) -> None:
        self._cards = [_to_card(card) for card in cards]

    async def get_all_cards(self) -> list[Card]:
        return list(self._cards)

    def add(self, card: Card | Mapping[str, Any]) -> None:
        self._cards.append(_to_card(card))

    def remove(self, card_id: str | int) -> bool:
        before = len(self._cards)
        self._cards = [card for card in self._cards if card.id != card_id]
        return len(self._cards) != before


class JsonFileCardStore(AbstractCardStore):
    """Card store reading a JSON export from disk.

    Accepts either a top-level array of cards or an object with a ``cards``
    array. The file is re-read on every call, so each search sees the
    current contents.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_sync(self) -> list[Card]:
        try:
            payload = orjson.loads(self.path.read_bytes())
        except FileNotFoundError as exc:
            raise CardStoreError(f"Card file not found: {self.path}") from exc
        except OSError as exc:
            raise CardStoreError(f"Card file cannot be read: {self.path}: {exc}") from exc
        except orjson.JSONDecodeError as exc:
            raise CardStoreError(f"Card file is not valid JSON: {self.path}: {exc}") from exc

        if isinstance(payload, Mapping):
            payload = payload.get("cards")
        if not isinstance(payload, list):
            raise CardStoreError(f"Card file must hold a list of cards: {self.path}")

        cards: list[Card] = []
        for index, raw in enumerate(payload):
            if not isinstance(raw, Mapping):
                raise CardStoreError(f"Card #{index} in {self.path} is not an object")
            try:
                cards.append(Card.model_validate(raw))
            except ValidationError as exc:
                raise CardStoreError(f"Card #{index} in {self.path} is invalid: {exc}") from exc

        logger.debug("Loaded %d cards from %s", len(cards), self.path)
        return cards

    async def get_all_cards(self) -> list[Card]:
        return await anyio.to_thread.run_sync(self._read_sync)

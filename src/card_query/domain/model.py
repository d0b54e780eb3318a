"""Domain models for card search.

Value objects are immutable (frozen=True) and carry no infrastructure
dependencies. Cards arrive from the card store in loosely shaped form, so the
validators here coerce missing or malformed text fields to ``None`` instead of
rejecting the card.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


CardId = str | int


class Card(BaseModel):
    """A user note on the canvas: front text, back text and tags."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: CardId
    text: str | None = None
    back_text: str | None = Field(default=None, alias="backText")
    tags: tuple[str, ...] = Field(default_factory=tuple)
    created: int | None = None

    @field_validator("text", "back_text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            return (value,)
        if not isinstance(value, (list, tuple, set, frozenset)):
            return ()
        return tuple(tag for tag in value if isinstance(tag, str))

    @field_validator("created", mode="before")
    @classmethod
    def _coerce_created(cls, value: Any) -> int | None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return int(value)


class SearchOutcome(BaseModel):
    """Result of one search pass over a card snapshot.

    ``cleared`` is a distinct signal from an empty ``matching_ids``: it tells
    the rendering layer to reset all visual state because the query was empty.
    """

    model_config = ConfigDict(frozen=True)

    cleared: bool
    matching_ids: frozenset[CardId] = Field(default_factory=frozenset)
    query: str = ""

    @classmethod
    def clear(cls) -> "SearchOutcome":
        return cls(cleared=True)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self.matching_ids

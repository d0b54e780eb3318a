"""Adapters onto external collaborators."""

from card_query.adapters.card_store import AbstractCardStore, InMemoryCardStore, JsonFileCardStore


__all__ = ["AbstractCardStore", "InMemoryCardStore", "JsonFileCardStore"]

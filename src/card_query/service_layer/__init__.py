"""Service layer: async orchestration around the search core."""

from card_query.service_layer.search_service import SearchService


__all__ = ["SearchService"]

"""
card-query: boolean search over canvas note cards.

Supports AND/OR/NOT, quoted phrases, ``*`` wildcards, parenthesised groups
and ``NEAR/N`` proximity clauses. The corpus-level entry point is
``card_query.search.search``.
"""

from card_query.domain.model import Card, SearchOutcome
from card_query.search.evaluator import evaluate_query
from card_query.search.indexer import build_search_text
from card_query.search.normalizer import normalize_query


__version__ = "0.1.0"

__all__ = [
    "Card",
    "SearchOutcome",
    "__version__",
    "build_search_text",
    "evaluate_query",
    "normalize_query",
]

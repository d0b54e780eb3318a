"""
Boolean card search query language.

- normalizer: raw query to canonical lowercase form
- indexer: card fields to one searchable string
- matcher: plain and wildcard term matching
- proximity: NEAR/N word-distance clauses
- evaluator: parens > proximity > OR > NOT > AND reduction
- orchestrator: evaluate a query across a card corpus
"""

from card_query.search.evaluator import evaluate_query
from card_query.search.indexer import build_search_text
from card_query.search.matcher import matches
from card_query.search.normalizer import normalize_query
from card_query.search.orchestrator import search
from card_query.search.proximity import proximity


__all__ = [
    "build_search_text",
    "evaluate_query",
    "matches",
    "normalize_query",
    "proximity",
    "search",
]

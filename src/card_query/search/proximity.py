"""Word-proximity constraints (``NEAR/N`` and ``N/N``).

A proximity clause has the form ``<term1> near/<N> <term2>`` (``n/<N>`` is an
accepted abbreviation). It holds when some word matching ``term1`` and some
word matching ``term2`` sit at most ``N`` word positions apart. Terms go
through the regular term matcher, so wildcards work inside proximity clauses.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import re

from card_query.search.matcher import matches


PROXIMITY_PATTERN = re.compile(r"(.+?)\s+(near|n)/(\d+)\s+(.+)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ProximityClause:
    """A parsed ``term1 near/N term2`` clause."""

    first: str
    second: str
    distance: int


def parse_proximity(query: str, mask: str | None = None) -> ProximityClause | None:
    """Parse a whole expression as a single proximity clause.

    Args:
        query: Expression text.
        mask: Optional same-length copy of ``query`` with quoted content
            blanked out. Matching runs on the mask so operators inside quotes
            are ignored; terms are still sliced from ``query``.

    Returns:
        The clause, or None when the expression is not exactly one clause.
    """
    subject = query if mask is None else mask
    if len(subject) != len(query) or "/" not in subject:
        return None
    match = PROXIMITY_PATTERN.fullmatch(subject)
    if match is None:
        return None
    try:
        distance = int(match.group(3))
    except ValueError:
        # Too many digits for int(); treat the clause as literal text
        return None
    first = query[match.start(1) : match.end(1)].strip()
    second = query[match.start(4) : match.end(4)].strip()
    return ProximityClause(first=first, second=second, distance=distance)


def term_positions(term: str, words: Sequence[str], *, raw_regex: bool = False) -> list[int]:
    """Return the indexes of ``words`` matching ``term``."""
    return [index for index, word in enumerate(words) if matches(term, word, raw_regex=raw_regex)]


def within_distance(first_positions: Sequence[int], second_positions: Sequence[int], distance: int) -> bool:
    """Check whether any pair of positions is at most ``distance`` apart.

    Distance 0 means a single word satisfies both terms.
    """
    if not first_positions or not second_positions:
        return False

    for anchor in first_positions:
        closest = min(second_positions, key=lambda p: abs(p - anchor))
        if abs(closest - anchor) <= distance:
            return True
    return False


def evaluate_clause(clause: ProximityClause, haystack: str, *, raw_regex: bool = False) -> bool:
    """Evaluate a parsed clause against whitespace-tokenized ``haystack``."""
    words = haystack.split()
    return within_distance(
        term_positions(clause.first, words, raw_regex=raw_regex),
        term_positions(clause.second, words, raw_regex=raw_regex),
        clause.distance,
    )


def proximity(query: str, haystack: str, *, raw_regex: bool = False) -> bool:
    """Decide whether the two terms of ``query`` occur within N words.

    Returns False when ``query`` is not a proximity clause.
    """
    clause = parse_proximity(query)
    if clause is None:
        return False
    return evaluate_clause(clause, haystack, raw_regex=raw_regex)

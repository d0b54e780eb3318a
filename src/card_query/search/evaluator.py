"""Boolean query evaluation by successive structural reduction.

Queries are not tokenized into a tree. Instead the evaluator finds the
highest-priority construct in the query string, reduces it, and recurses on
what is left. The priority order is fixed:

1. Parenthesised group ``(expr)``: the innermost group is evaluated and
   replaced by a ``__TRUE__``/``__FALSE__`` placeholder, one group per pass.
2. Proximity clause ``a near/N b``: only when it is the whole expression.
3. OR: split on `` or ``; any part may match.
4. NOT: split on the first `` not ``; ``before and not after``.
5. AND: split on `` and `` when present, otherwise on whitespace.

This order differs from the usual NOT > AND > OR, so ``a or b not c`` means
``a or (b and not c)``.

Quoted phrases (``"..."`` or ``'...'``) are atoms: operators, whitespace and
parentheses inside them are literal text. A quote only opens a phrase at the
start of a term and closes at the end of one, so apostrophes inside words such
as ``don't`` stay literal.

Malformed input never raises. Unbalanced parentheses and broken proximity
clauses fall through to lower levels and end up as literal term text.
"""

from __future__ import annotations

import re

from card_query.search.matcher import matches
from card_query.search.proximity import evaluate_clause, parse_proximity


TRUE_PLACEHOLDER = "__TRUE__"
FALSE_PLACEHOLDER = "__FALSE__"

OR_SEPARATOR = " or "
NOT_SEPARATOR = " not "
AND_SEPARATOR = " and "

GROUP_PATTERN = re.compile(r"\(([^()]+)\)")
QUOTED_PATTERN = re.compile(r"""(?<![^\s(])(["'])(.+?)\1(?![^\s)])""")
WORD_PATTERN = re.compile(r"\S+")

# Stands in for quoted characters; must not be whitespace, a paren or a quote.
_MASK_CHAR = "_"


def mask_quoted(query: str) -> str:
    """Blank out the content of quoted phrases, keeping string length.

    Operator and group searches run on the mask and slice the original
    query with the resulting offsets.
    """
    return QUOTED_PATTERN.sub(lambda m: m.group(1) + _MASK_CHAR * len(m.group(2)) + m.group(1), query)


def _placeholder(value: bool) -> str:
    return TRUE_PLACEHOLDER if value else FALSE_PLACEHOLDER


def _split_on(query: str, mask: str, separator: str) -> list[str]:
    """Split ``query`` on ``separator`` wherever it occurs in ``mask``."""
    parts: list[str] = []
    start = 0
    index = mask.find(separator)
    while index != -1:
        parts.append(query[start:index])
        start = index + len(separator)
        index = mask.find(separator, start)
    parts.append(query[start:])
    return parts


def _strip_pair(query: str, mask: str) -> tuple[str, str]:
    stripped = query.lstrip()
    start = len(query) - len(stripped)
    end = start + len(stripped.rstrip())
    return query[start:end], mask[start:end]


def _reduce_groups(query: str, text: str, raw_regex: bool) -> str:
    while "(" in query:
        mask = mask_quoted(query)
        group = GROUP_PATTERN.search(mask)
        if group is None:
            break
        inner = query[group.start(1) : group.end(1)]
        value = _evaluate(inner, text, raw_regex)
        query = query[: group.start()] + _placeholder(value) + query[group.end() :]
    return query.strip()


def _evaluate_atom(term: str, text: str, raw_regex: bool) -> bool:
    if term == TRUE_PLACEHOLDER:
        return True
    if term == FALSE_PLACEHOLDER:
        return False
    if term.startswith('"') and term.endswith('"'):
        return term[1:-1] in text
    if term.startswith("'") and term.endswith("'"):
        return term[1:-1] in text
    return matches(term, text, raw_regex=raw_regex)


def _evaluate_conjunction(query: str, mask: str, text: str, raw_regex: bool) -> bool:
    if AND_SEPARATOR in mask:
        terms = [part.strip() for part in _split_on(query, mask, AND_SEPARATOR)]
    else:
        terms = [query[m.start() : m.end()] for m in WORD_PATTERN.finditer(mask)]
    return all(_evaluate_atom(term, text, raw_regex) for term in terms)


def _evaluate_negation(query: str, mask: str, text: str, raw_regex: bool) -> bool:
    """Evaluate ``h0 not h1 not ... rest`` as ``h0 and not (h1 and not (...))``.

    The chain is folded right to left so long NOT chains do not recurse.
    Each remainder is checked for a whole-expression proximity clause, as a
    recursive pass over it would do.
    """
    heads: list[str] = []
    rest, rest_mask = query, mask
    terminal: bool | None = None

    index = rest_mask.find(NOT_SEPARATOR)
    while index != -1:
        heads.append(rest[:index].strip())
        offset = index + len(NOT_SEPARATOR)
        rest, rest_mask = _strip_pair(rest[offset:], rest_mask[offset:])
        clause = parse_proximity(rest, rest_mask)
        if clause is not None:
            terminal = evaluate_clause(clause, text, raw_regex=raw_regex)
            break
        index = rest_mask.find(NOT_SEPARATOR)

    value = _evaluate(rest, text, raw_regex) if terminal is None else terminal
    for head in reversed(heads[1:]):
        value = _evaluate(head, text, raw_regex) and not value

    before = heads[0]
    before_matches = _evaluate(before, text, raw_regex) if before else True
    return before_matches and not value


def _evaluate(query: str, text: str, raw_regex: bool) -> bool:
    query = _reduce_groups(query.strip(), text, raw_regex)

    if query == TRUE_PLACEHOLDER:
        return True
    if query == FALSE_PLACEHOLDER:
        return False

    mask = mask_quoted(query)

    clause = parse_proximity(query, mask)
    if clause is not None:
        return evaluate_clause(clause, text, raw_regex=raw_regex)

    if OR_SEPARATOR in mask:
        return any(_evaluate(part, text, raw_regex) for part in _split_on(query, mask, OR_SEPARATOR))

    if NOT_SEPARATOR in mask:
        return _evaluate_negation(query, mask, text, raw_regex)

    return _evaluate_conjunction(query, mask, text, raw_regex)


def evaluate_query(normalized_query: str, search_text: str, *, raw_regex: bool = False) -> bool:
    """Evaluate a query against one card's searchable text.

    Both arguments are lowercased and non-string values are treated as empty.
    An empty query matches everything; callers that need "clear" semantics
    check for it before evaluating.

    Args:
        normalized_query: Query, normally the output of ``normalize_query``.
        search_text: Card text, normally the output of ``build_search_text``.
        raw_regex: Let wildcard terms use other regex metacharacters unescaped.

    Returns:
        True when the card matches.
    """
    query = normalized_query.lower() if isinstance(normalized_query, str) else ""
    text = search_text.lower() if isinstance(search_text, str) else ""
    return _evaluate(query, text, raw_regex)

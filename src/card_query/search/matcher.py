"""Atomic term matching with ``*`` wildcard support.

Plain terms match as substrings anywhere in the haystack, so ``inter`` finds
``international``. Wildcard terms are anchored to word boundaries, so
``inter*`` finds ``international`` but not ``counterintelligence``.
"""

from __future__ import annotations

import logging
import re


logger = logging.getLogger(__name__)

WILDCARD = "*"


def is_wildcard(term: str) -> bool:
    """Return True when the term carries a ``*`` wildcard."""
    return WILDCARD in term


def _escaped_pattern(term: str) -> str:
    return ".*".join(re.escape(part) for part in term.split(WILDCARD))


def wildcard_regex(term: str, *, raw_regex: bool = False) -> re.Pattern[str]:
    """Compile a wildcard term into a word-bounded, case-insensitive regex.

    Args:
        term: Term containing one or more ``*``.
        raw_regex: Pass characters other than ``*`` through to the regex
            engine unescaped. A pattern that does not compile falls back to
            the escaped form.

    Returns:
        Compiled pattern for ``re.search`` against the whole haystack.
    """
    if raw_regex:
        try:
            return re.compile(r"\b" + term.replace(WILDCARD, ".*") + r"\b", re.IGNORECASE)
        except (re.error, OverflowError, RecursionError) as exc:
            logger.debug("Wildcard term %r is not a valid regex (%s); matching literally", term, exc)
    return re.compile(r"\b" + _escaped_pattern(term) + r"\b", re.IGNORECASE)


def matches(term: str, haystack: str, *, raw_regex: bool = False) -> bool:
    """Decide whether a single term matches within ``haystack``."""
    if is_wildcard(term):
        return wildcard_regex(term, raw_regex=raw_regex).search(haystack) is not None
    return term in haystack

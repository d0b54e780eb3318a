"""Command-line search over a JSON card export."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
import json
import logging
from pathlib import Path
import sys

from pydantic import ValidationError

from card_query.adapters.card_store import JsonFileCardStore
from card_query.config import Settings
from card_query.domain.model import SearchOutcome
from card_query.errors import CardStoreError
from card_query.observability.logging import configure_logging
from card_query.observability.tracing import init_tracing
from card_query.service_layer.search_service import SearchService


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card-query",
        description="Evaluate a boolean card query (AND/OR/NOT, \"phrases\", wild*, (groups), NEAR/N)",
    )
    parser.add_argument("query", help="Query to evaluate; an empty string clears the search")
    parser.add_argument(
        "--cards",
        type=Path,
        default=None,
        help="JSON file with the card snapshot (default: $CARD_QUERY_CARDS_PATH)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON document instead of one id per line",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level",
    )
    parser.add_argument(
        "--wildcard-regex",
        action="store_true",
        default=None,
        help="Treat regex metacharacters other than '*' in wildcard terms as regex syntax",
    )
    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.cards is not None:
        overrides["cards_path"] = args.cards
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.wildcard_regex is not None:
        overrides["wildcard_regex"] = args.wildcard_regex
    return Settings(**overrides)


def _write_outcome(outcome: SearchOutcome, *, as_json: bool) -> None:
    ids = sorted(outcome.matching_ids, key=str)
    if as_json:
        payload = {"cleared": outcome.cleared, "query": outcome.query, "matching_ids": ids}
        sys.stdout.write(json.dumps(payload, sort_keys=True) + "\n")
        return
    for card_id in ids:
        sys.stdout.write(f"{card_id}\n")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args)
    except ValidationError as exc:
        sys.stderr.write(f"Invalid configuration: {exc}\n")
        return 2

    configure_logging(level=settings.log_level, json_output=settings.log_json)
    init_tracing(service_name="card-query")

    if settings.cards_path is None:
        logger.error("No card file given; pass --cards or set CARD_QUERY_CARDS_PATH")
        return 2

    service = SearchService(JsonFileCardStore(settings.cards_path), settings)
    try:
        outcome = asyncio.run(service.search_cards(args.query))
    except CardStoreError as exc:
        logger.error("%s", exc)
        return 1

    if outcome is None:  # pragma: no cover - single call cannot be superseded
        return 1

    _write_outcome(outcome, as_json=args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())

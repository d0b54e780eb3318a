"""Observability: structured logging, tracing and search metrics."""

from card_query.observability.context import get_trace_context, set_trace_context, trace_context
from card_query.observability.logging import JsonFormatter, configure_logging
from card_query.observability.metrics import (
    SEARCH_COUNT,
    SEARCH_LATENCY,
    get_metrics,
    init_metrics,
    track_latency,
)
from card_query.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "SEARCH_COUNT",
    "SEARCH_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_metrics",
    "init_tracing",
    "set_trace_context",
    "trace_context",
    "track_latency",
]

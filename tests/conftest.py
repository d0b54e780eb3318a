"""Shared test fixtures and configuration."""

import os

import pytest


# Complete test environment that overrides every configurable value
TEST_ENV = {
    "CARD_QUERY_LOG_LEVEL": "info",
    "CARD_QUERY_LOG_JSON": "true",
    "CARD_QUERY_WILDCARD_REGEX": "false",
    "CARD_QUERY_LATEST_ONLY": "true",
}


for key, value in TEST_ENV.items():
    os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset card-query environment variables before each test."""
    monkeypatch.delenv("CARD_QUERY_CARDS_PATH", raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def sample_cards() -> list[dict]:
    """The three-card corpus used across search tests."""
    return [
        {"id": 1, "text": "Python tutorial for beginners", "tags": ["python", "intro"]},
        {"id": 2, "text": "Advanced Rust systems programming", "tags": ["rust"]},
        {"id": 3, "text": "Python and Rust interop guide", "tags": ["python", "rust"]},
    ]

# Pytest configuration for the autocommit test suite
#
# Timeout strategy:
# - FAST tests: 5s (pure unit tests, no I/O)
# - MEDIUM tests: 15s (async cascade with fake tokenizers, config files)

from __future__ import annotations

from typing import Callable, Dict, List

import pytest
from loguru import logger

from autocommit.tokens import TokenEstimator, TokenizerCache

# ---------------------------------------------------------------------------
# Timeout configuration by test file
# ---------------------------------------------------------------------------

TIMEOUT_MAP = {
    # MEDIUM tests (15s)
    "test_cascade": 15,
    "test_token_estimator": 15,
    "test_config": 15,
    # FAST tests (5s)
    "test_importance": 5,
    "test_categorizer": 5,
    "test_strategies": 5,
    "test_diff_parser": 5,
    "test_limits": 5,
}


def pytest_collection_modifyitems(config, items):
    """Apply timeout markers based on test file names."""
    for item in items:
        test_name = item.path.stem

        timeout = 10  # default
        for pattern, t in TIMEOUT_MAP.items():
            if pattern in test_name:
                timeout = t
                break

        if item.get_closest_marker("timeout") is None:
            item.add_marker(pytest.mark.timeout(timeout))


# ---------------------------------------------------------------------------
# Fake tokenizers
# ---------------------------------------------------------------------------


class WhitespaceTokenizer:
    """Deterministic stand-in: one token per whitespace-separated word."""

    def __init__(self, identifier: str):
        self.identifier = identifier

    def encode(self, text: str) -> List[int]:
        return [len(word) for word in text.split()]


class BrokenEncodeTokenizer(WhitespaceTokenizer):
    """Fails to encode any text containing the word BOOM."""

    def encode(self, text: str) -> List[int]:
        if "BOOM" in text:
            raise ValueError("cannot encode")
        return super().encode(text)


class RecordingLoader:
    """Tokenizer loader that records every identifier it is asked for."""

    def __init__(self, factory: Callable[[str], object] = WhitespaceTokenizer, failing=()):
        self.factory = factory
        self.failing = set(failing)
        self.calls: List[str] = []

    def __call__(self, identifier: str):
        self.calls.append(identifier)
        if identifier in self.failing or "*" in self.failing:
            raise OSError(f"cannot fetch {identifier}")
        return self.factory(identifier)

    def call_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for identifier in self.calls:
            counts[identifier] = counts.get(identifier, 0) + 1
        return counts


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def loader():
    return RecordingLoader()


@pytest.fixture
def failing_loader():
    return RecordingLoader(failing=["*"])


@pytest.fixture
def estimator(loader):
    """Estimator backed by the whitespace tokenizer (no network)."""
    return TokenEstimator(cache=TokenizerCache(loader=loader))


@pytest.fixture
def failing_estimator(failing_loader):
    """Estimator whose tokenizers never load."""
    return TokenEstimator(cache=TokenizerCache(loader=failing_loader))


@pytest.fixture(autouse=True)
def clear_autocommit_env(monkeypatch):
    """Keep AUTOCOMMIT_* overrides from the host out of the tests."""
    for name in (
        "AUTOCOMMIT_IMPORTANCE_THRESHOLD",
        "AUTOCOMMIT_MAX_KEY_CHANGES",
        "AUTOCOMMIT_RESERVED_TOKENS",
        "AUTOCOMMIT_TOKENIZER_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def warnings_logged():
    """Collect WARNING-and-above loguru messages emitted during the test."""
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)

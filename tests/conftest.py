"""Shared test fixtures for the llmterminal test suite.

Provides common fixtures used across unit tests: sample ledgers, a
recording fake transport, and canned upstream payloads.
"""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from llmterminal.domain.models import HistoryEntry, HistoryLedger


class FakeTransport:
    """HttpTransport double that records calls and replays one payload."""

    def __init__(self, payload: object = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, dict[str, str], bytes]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def post_json(self, url: str, headers: Mapping[str, str], body: bytes) -> object:
        self.calls.append((url, dict(headers), body))
        if self.error is not None:
            raise self.error
        return self.payload


# ---------------------------------------------------------------------------
# Ledger Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def empty_ledger() -> HistoryLedger:
    return HistoryLedger()


@pytest.fixture
def sample_ledger() -> HistoryLedger:
    """Two closed turns: cat hello.txt -> world, echo 1234 -> 1234."""
    return HistoryLedger(
        [
            HistoryEntry(input="cat hello.txt", output="world"),
            HistoryEntry(input="echo 1234", output="1234"),
        ]
    )


# ---------------------------------------------------------------------------
# Upstream Payload Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def completion_payload() -> dict:
    """A legacy completions response with one choice."""
    return {
        "id": "cmpl-123",
        "choices": [{"text": "prova.txt", "logprobs": None, "finish_reason": "stop"}],
        "usage": {"total_tokens": 42},
    }


@pytest.fixture
def message_payload() -> dict:
    """A messages response whose text is wrapped in a code fence."""
    return {
        "id": "msg_123",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-opus-20240229",
        "usage": {"input_tokens": 120, "output_tokens": 8},
        "content": [{"type": "text", "text": "```\n/home/user\n```"}],
        "stop_reason": "end_turn",
        "stop_sequence": None,
    }


@pytest.fixture
def fake_transport_factory():
    """Build a FakeTransport replaying the given payload or raising an error."""
    return FakeTransport

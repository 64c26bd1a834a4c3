"""Completion adapter module for llmterminal.

Provides one virtual-terminal interface over two upstream wire
protocols, plus the error taxonomy both of them raise.

Public API:
    CompletionAdapter -- Abstract base class
    LegacyCompletionAdapter -- Single-string completions API
    MessageCompletionAdapter -- Structured messages API
    create_adapter -- Build the adapter selected in Settings
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from llmterminal.adapter.base import (
    CompletionAdapter,
    EmptyCompletionError,
    MissingCredentialError,
    RequestEncodingError,
    TerminalSimError,
    TransportError,
)
from llmterminal.adapter.legacy import LegacyCompletionAdapter
from llmterminal.adapter.messages import MessageCompletionAdapter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from llmterminal.config.settings import Settings
    from llmterminal.domain.models import HistoryEntry
    from llmterminal.transport.base import HttpTransport

__all__ = [
    "CompletionAdapter",
    "EmptyCompletionError",
    "LegacyCompletionAdapter",
    "MessageCompletionAdapter",
    "MissingCredentialError",
    "RequestEncodingError",
    "TerminalSimError",
    "TransportError",
    "create_adapter",
]


def create_adapter(
    settings: Settings,
    ledger: Iterable[HistoryEntry],
    transport: HttpTransport | None = None,
) -> CompletionAdapter:
    """Build the adapter flavor selected by ``settings.adapter``.

    Without a transport the adapter creates its own httpx transport and
    closes it in ``close()``.
    """
    from llmterminal.prompt.template import DEFAULT_TEMPLATE

    template = DEFAULT_TEMPLATE
    if settings.prompt.persona_override:
        template = DEFAULT_TEMPLATE.model_copy(
            update={"persona": settings.prompt.persona_override}
        )
    api_key = settings.anthropic_api_key.get_secret_value()
    if settings.adapter == "legacy":
        return LegacyCompletionAdapter(
            ledger, api_key, transport=transport, template=template,
            timeout=settings.transport.timeout, config=settings.legacy,
        )
    return MessageCompletionAdapter(
        ledger, api_key, transport=transport, template=template,
        timeout=settings.transport.timeout, config=settings.messages,
    )

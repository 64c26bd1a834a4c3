"""Structured multi-turn messages adapter.

Wraps the same few-shot prompt as the only text block of a single user
message and sends the template persona as the top-level ``system``
field. Authentication uses an API-key header plus a protocol-version
header instead of a bearer token.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel

from llmterminal.adapter.base import CompletionAdapter, EmptyCompletionError
from llmterminal.adapter.wire import ContentBlock, Message, MessageRequest, MessageResponse
from llmterminal.config.settings import MessageCompletionConfig
from llmterminal.domain.models import HistoryEntry
from llmterminal.prompt.template import PromptTemplate
from llmterminal.transport.base import HttpTransport

logger = logging.getLogger(__name__)

CODE_FENCE = "```"


class MessageCompletionAdapter(CompletionAdapter):
    """Adapter for ``POST /v1/messages`` style APIs.

    The model tends to wrap terminal output in a fenced code block, so
    every literal triple backtick is removed from the returned text.
    """

    name = "messages"

    def __init__(
        self,
        ledger: Iterable[HistoryEntry],
        api_key: str,
        transport: HttpTransport | None = None,
        template: PromptTemplate | None = None,
        timeout: float = 30.0,
        config: MessageCompletionConfig | None = None,
    ) -> None:
        super().__init__(ledger, api_key, transport=transport, template=template, timeout=timeout)
        self._config = config or MessageCompletionConfig()

    @property
    def model(self) -> str:
        return self._config.model

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    def _build_request(self, prompt: str) -> BaseModel:
        cfg = self._config
        return MessageRequest(
            model=cfg.model,
            max_tokens=cfg.max_tokens,
            temperature=cfg.temperature,
            system=self._template.persona,
            messages=[
                Message(role="user", content=[ContentBlock(type="text", text=prompt)]),
            ],
        )

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "anthropic-version": self._config.api_version,
        }

    def _extract_text(self, payload: object) -> str:
        response = self._validate(MessageResponse, payload)
        if not response.content:
            raise EmptyCompletionError(
                "No content blocks returned by the API", adapter=self.name
            )
        logger.debug(
            "Message %s stopped (%s), tokens in=%d out=%d",
            response.id, response.stop_reason,
            response.usage.input_tokens, response.usage.output_tokens,
        )
        return strip_code_fences(response.content[0].text)


def strip_code_fences(text: str) -> str:
    """Remove every triple-backtick sequence from the text."""
    return text.replace(CODE_FENCE, "")

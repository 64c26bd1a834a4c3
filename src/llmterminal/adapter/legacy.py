"""Legacy single-string completion adapter.

Sends the whole few-shot prompt as one ``prompt`` string to a
completions-style endpoint with bearer authentication, and stops the
model at the first newline so exactly one line of output comes back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel

from llmterminal.adapter.base import CompletionAdapter, EmptyCompletionError
from llmterminal.adapter.wire import CompletionRequest, CompletionResponse
from llmterminal.config.settings import LegacyCompletionConfig
from llmterminal.domain.models import HistoryEntry
from llmterminal.prompt.template import PromptTemplate
from llmterminal.transport.base import HttpTransport

logger = logging.getLogger(__name__)


class LegacyCompletionAdapter(CompletionAdapter):
    """Adapter for ``POST /v1/completions`` style APIs.

    The first choice's text is returned exactly as received.
    """

    name = "legacy"

    def __init__(
        self,
        ledger: Iterable[HistoryEntry],
        api_key: str,
        transport: HttpTransport | None = None,
        template: PromptTemplate | None = None,
        timeout: float = 30.0,
        config: LegacyCompletionConfig | None = None,
    ) -> None:
        super().__init__(ledger, api_key, transport=transport, template=template, timeout=timeout)
        self._config = config or LegacyCompletionConfig()

    @property
    def model(self) -> str:
        return self._config.model

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    def _build_request(self, prompt: str) -> BaseModel:
        cfg = self._config
        return CompletionRequest(
            model=cfg.model,
            prompt=prompt,
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
            top_p=cfg.top_p,
            frequency_penalty=cfg.frequency_penalty,
            presence_penalty=cfg.presence_penalty,
            stop=list(cfg.stop),
        )

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def _extract_text(self, payload: object) -> str:
        response = self._validate(CompletionResponse, payload)
        if not response.choices:
            raise EmptyCompletionError(
                "No completion choices returned by the API", adapter=self.name
            )
        choice = response.choices[0]
        logger.debug(
            "Completion %s finished (%s), %d total tokens",
            response.id, choice.finish_reason, response.usage.total_tokens,
        )
        return choice.text

"""Abstract base class for completion adapters.

Every adapter answers the same question: "given this history, what
would the terminal print for this command?". Subclasses only decide
how the rendered prompt is wrapped for their upstream API and how the
answer is pulled back out of the response, so callers can swap one
adapter for another without changing anything else.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from llmterminal.domain.models import HistoryEntry
from llmterminal.prompt.template import DEFAULT_TEMPLATE, PromptTemplate, render
from llmterminal.transport.base import HttpTransport

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class CompletionAdapter(ABC):
    """Abstract interface for virtual terminal completion backends.

    Example usage::

        ledger = HistoryLedger()
        adapter = LegacyCompletionAdapter(ledger, api_key="sk-...")
        output = adapter.complete("whoami")
    """

    name: str = "adapter"

    def __init__(
        self,
        ledger: Iterable[HistoryEntry],
        api_key: str,
        transport: HttpTransport | None = None,
        template: PromptTemplate | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the adapter.

        Args:
            ledger: Caller-owned history. Kept by reference, never copied
                or modified.
            api_key: Credential for the upstream API. An empty key is
                accepted here but fails every completion.
            transport: HTTP capability. Defaults to an httpx transport.
            template: Prompt template. Defaults to the stock terminal one.
            timeout: Request timeout of the default transport, which the
                adapter then owns and closes in close().
        """
        self._ledger = ledger
        self._api_key = api_key
        self._transport = transport
        self._owns_transport = transport is None
        self._template = template or DEFAULT_TEMPLATE
        self._timeout = timeout

    @property
    def ledger(self) -> Iterable[HistoryEntry]:
        return self._ledger

    @property
    def template(self) -> PromptTemplate:
        return self._template

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier sent upstream."""
        ...

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """URL the request is POSTed to."""
        ...

    @abstractmethod
    def _build_request(self, prompt: str) -> BaseModel:
        """Wrap the rendered prompt in this adapter's request envelope."""
        ...

    @abstractmethod
    def _headers(self) -> dict[str, str]:
        """Authentication and protocol headers for the request."""
        ...

    @abstractmethod
    def _extract_text(self, payload: object) -> str:
        """Validate the decoded response and pull out the terminal output.

        Raises:
            TransportError: If the payload does not match the schema.
            EmptyCompletionError: If the response has nothing to return.
        """
        ...

    def build_prompt(self, command: str) -> str:
        """Render the current ledger and the command into prompt text."""
        return render(self._ledger, command, self._template)

    def complete(self, command: str) -> str:
        """Return the simulated terminal output for a command.

        Performs exactly one HTTP round trip. Nothing is retried.

        Raises:
            MissingCredentialError: If the API key is empty. No request
                is built and the transport is never called.
            RequestEncodingError: If the request cannot be serialized.
            TransportError: If the HTTP call fails or the response
                envelope is malformed.
            EmptyCompletionError: If the model returned no completions.
        """
        if not self._api_key or not self._api_key.strip():
            raise MissingCredentialError("API key is missing", adapter=self.name)

        prompt = self.build_prompt(command)
        request = self._build_request(prompt)
        body = self._encode(request)
        headers = {"Content-Type": "application/json", **self._headers()}

        logger.debug("Sending %s request to %s (model=%s)", self.name, self.endpoint, self.model)
        try:
            payload = self._ensure_transport().post_json(self.endpoint, headers, body)
        except Exception as e:
            raise TransportError(
                f"Error making API request: {e}", adapter=self.name
            ) from e

        text = self._extract_text(payload)
        logger.info("%s completion for %r: %d chars", self.name, command[:50], len(text))
        return text

    def _ensure_transport(self) -> HttpTransport:
        """Lazily create the default httpx transport."""
        if self._transport is None:
            from llmterminal.transport.httpx_transport import HttpxTransport
            self._transport = HttpxTransport(timeout=self._timeout)
        return self._transport

    def close(self) -> None:
        """Close the transport if this adapter created it."""
        if self._owns_transport and self._transport is not None:
            close = getattr(self._transport, "close", None)
            if close is not None:
                close()
            self._transport = None

    def __enter__(self) -> CompletionAdapter:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.close()

    def _encode(self, request: BaseModel) -> bytes:
        try:
            return request.model_dump_json().encode("utf-8")
        except (PydanticSerializationError, UnicodeEncodeError) as e:
            raise RequestEncodingError(
                f"Error marshalling request: {e}", adapter=self.name
            ) from e

    def _validate(self, model_cls: type[ResponseT], payload: object) -> ResponseT:
        if not isinstance(payload, Mapping):
            raise TransportError(
                "Invalid response format: expected a JSON object", adapter=self.name
            )
        try:
            return model_cls.model_validate(payload)
        except ValidationError as e:
            raise TransportError(
                f"Invalid response format: {e.error_count()} validation error(s)",
                adapter=self.name,
            ) from e


class TerminalSimError(Exception):
    """Base class for every failure surfaced by a completion adapter."""

    def __init__(self, message: str, adapter: str = "") -> None:
        super().__init__(message)
        self.adapter = adapter


class MissingCredentialError(TerminalSimError):
    """Raised when completion is requested without an API key."""


class RequestEncodingError(TerminalSimError):
    """Raised when the upstream request cannot be serialized."""


class TransportError(TerminalSimError):
    """Raised when the HTTP call fails or returns a malformed envelope."""


class EmptyCompletionError(TerminalSimError):
    """Raised when the model returns no choices or content blocks."""

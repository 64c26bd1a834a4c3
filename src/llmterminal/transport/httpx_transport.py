"""httpx-backed implementation of the HTTP transport."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Sends JSON POST requests with a synchronous httpx client."""

    def __init__(self, timeout: float = 30.0, client: httpx.Client | None = None) -> None:
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _ensure_client(self) -> httpx.Client:
        """Lazily create the httpx client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
            logger.debug("Created httpx client (timeout=%s)", self._timeout)
        return self._client

    def post_json(self, url: str, headers: Mapping[str, str], body: bytes) -> object:
        """POST the body and return the decoded JSON payload.

        Raises:
            httpx.HTTPError: On connection failures and non-2xx statuses.
            ValueError: If the response body is not valid JSON.
        """
        client = self._ensure_client()
        resp = client.post(url, headers=dict(headers), content=body)
        logger.debug("POST %s -> %d", url, resp.status_code)
        resp.raise_for_status()
        return resp.json()

    def close(self) -> None:
        """Close the client if this transport created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.close()

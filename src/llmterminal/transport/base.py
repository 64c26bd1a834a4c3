"""HTTP capability consumed by the completion adapters.

Adapters only need "POST these JSON bytes with these headers, give me
the decoded JSON back". Anything that satisfies :class:`HttpTransport`
can be injected, which is how tests count calls without a network.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class HttpTransport(Protocol):
    """Protocol for a blocking JSON-over-HTTP POST."""

    def post_json(self, url: str, headers: Mapping[str, str], body: bytes) -> object:
        """POST an encoded JSON body and return the decoded JSON response.

        Implementations raise on connection failures, non-2xx statuses
        and undecodable bodies. Timeouts and TLS are their concern.
        """
        ...

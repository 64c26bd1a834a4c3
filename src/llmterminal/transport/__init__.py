"""HTTP transport module for llmterminal.

Public API:
    HttpTransport -- Protocol the adapters depend on
    HttpxTransport -- Default implementation using httpx
"""

from llmterminal.transport.base import HttpTransport

__all__ = ["HttpTransport", "HttpxTransport"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "HttpxTransport":
        from llmterminal.transport.httpx_transport import HttpxTransport
        return HttpxTransport
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

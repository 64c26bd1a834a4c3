"""Domain models for llmterminal.

Public API:
    HistoryEntry -- One past command and the output attributed to it
    HistoryLedger -- Ordered, caller-owned log of HistoryEntry
"""

from llmterminal.domain.models import HistoryEntry, HistoryLedger

__all__ = ["HistoryEntry", "HistoryLedger"]

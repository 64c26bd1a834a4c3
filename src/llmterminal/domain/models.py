"""Core domain models for the llmterminal system.

A conversation with the simulated terminal is remembered as an ordered
ledger of past commands and the outputs the model produced for them.
The ledger belongs to the caller; adapters only ever read it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field


class HistoryEntry(BaseModel):
    """One past command and the terminal output attributed to it."""

    model_config = ConfigDict(frozen=True)

    input: str = Field(description="The command as typed by the user")
    output: str = Field(description="The simulated terminal output for the command")


class HistoryLedger:
    """Ordered log of past command/output pairs, earliest first.

    Adapters keep a reference to the ledger they were built with, so
    entries recorded by the caller between calls are replayed on the
    next prompt. No locking is done: do not record while a completion
    is in flight.

    Example usage::

        ledger = HistoryLedger()
        adapter = MessageCompletionAdapter(ledger, api_key="sk-ant-...")
        output = adapter.complete("ls")
        ledger.record("ls", output)
    """

    def __init__(self, entries: Iterable[HistoryEntry] = ()) -> None:
        self._entries: list[HistoryEntry] = list(entries)

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        """Snapshot of the entries in chronological order."""
        return tuple(self._entries)

    def record(self, input: str, output: str) -> HistoryEntry:
        """Append a command and its output to the end of the ledger."""
        entry = HistoryEntry(input=input, output=output)
        self._entries.append(entry)
        return entry

    def clear(self) -> None:
        """Forget every recorded entry."""
        self._entries.clear()

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HistoryLedger(entries={len(self._entries)})"

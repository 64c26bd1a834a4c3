"""Few-shot prompt rendering for the simulated terminal.

The prompt is a persona paragraph, a handful of example turns, the
replayed history, and one open turn for the new command::

    <persona>

    A:pwd

    Q:/home/user

    ...
    A:<command>

    Q:

The markers are deliberately terse and nothing is escaped. The output
is a pure function of the template, the ledger and the command.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from llmterminal.domain.models import HistoryEntry

logger = logging.getLogger(__name__)


DEFAULT_PERSONA = (
    "You will act as an Ubuntu Linux terminal. User commands and expected "
    "terminal outputs are provided. Your responses must be contained within "
    "a single code block, reflecting the terminal's behavior without "
    "additional explanations unless explicitly requested."
)

DEFAULT_EXAMPLES: tuple[HistoryEntry, ...] = (
    HistoryEntry(input="pwd", output="/home/user"),
    HistoryEntry(input="cat hello.txt", output="world"),
    HistoryEntry(input="echo 1234", output="1234"),
)


class PromptTemplate(BaseModel):
    """Persona text, example turns and turn markers for one prompt style.

    The persona is the single source of the terminal's instructions: it
    opens the few-shot preamble and is also what message-style adapters
    send as their system field.
    """

    model_config = ConfigDict(frozen=True)

    persona: str = Field(default=DEFAULT_PERSONA, description="Terminal persona instructions")
    examples: tuple[HistoryEntry, ...] = Field(
        default=DEFAULT_EXAMPLES, description="Few-shot turns shown before the history"
    )
    command_marker: str = Field(default="A:", description="Prefix of a command turn")
    output_marker: str = Field(default="Q:", description="Prefix of an output turn")

    @property
    def preamble(self) -> str:
        """Persona followed by the closed example turns."""
        return f"{self.persona}\n\n" + self.format_turns(self.examples)

    def format_turn(self, entry: HistoryEntry) -> str:
        return (
            f"{self.command_marker}{entry.input}\n\n"
            f"{self.output_marker}{entry.output}\n\n"
        )

    def format_turns(self, entries: Iterable[HistoryEntry]) -> str:
        return "".join(self.format_turn(entry) for entry in entries)

    def open_turn(self, command: str) -> str:
        """The final turn, left without output for the model to fill in."""
        return f"{self.command_marker}{command}\n\n{self.output_marker}"


DEFAULT_TEMPLATE = PromptTemplate()


def render(
    ledger: Iterable[HistoryEntry],
    command: str,
    template: PromptTemplate = DEFAULT_TEMPLATE,
) -> str:
    """Render the history and a new command into the few-shot prompt.

    Args:
        ledger: Past command/output pairs, earliest first. Only read.
        command: The command the model should produce output for.
        template: Persona, examples and markers to render with.

    Returns:
        The prompt text, ending with an open output marker.
    """
    history = template.format_turns(ledger)
    prompt = template.preamble + history + template.open_turn(command)
    logger.debug("Rendered prompt (%d chars) for command: %s", len(prompt), command[:50])
    return prompt

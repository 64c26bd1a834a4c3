"""llmterminal -- LLM-simulated Linux terminal.

This package renders a caller-owned history of command/output pairs into
a few-shot prompt and asks a remote completion service what the terminal
would print next. Nothing is executed locally: the semantics of every
command are whatever the remote model infers.
"""

__version__ = "0.1.0"

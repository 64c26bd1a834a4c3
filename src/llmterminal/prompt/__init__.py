"""Prompt rendering module for llmterminal.

Public API:
    PromptTemplate -- Persona, few-shot examples and turn markers
    DEFAULT_TEMPLATE -- The stock Ubuntu terminal template
    render -- Ledger + command -> prompt text
"""

from llmterminal.prompt.template import DEFAULT_TEMPLATE, PromptTemplate, render

__all__ = ["DEFAULT_TEMPLATE", "PromptTemplate", "render"]

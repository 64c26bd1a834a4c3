"""Request and response models for the two upstream wire protocols.

Field names and nesting mirror the remote JSON schemas exactly since
these models cross the wire. Bookkeeping fields (ids, usage) default so
that a response only has to carry its completion list to validate.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Legacy single-string completions
# ---------------------------------------------------------------------------


class CompletionRequest(BaseModel):
    model: str
    prompt: str
    temperature: float
    max_tokens: int
    top_p: float
    frequency_penalty: float
    presence_penalty: float
    stop: list[str]


class CompletionChoice(BaseModel):
    text: str = ""
    logprobs: Any = Field(default=None, description="Opaque, passed through verbatim")
    finish_reason: str | None = None


class CompletionUsage(BaseModel):
    total_tokens: int = 0


class CompletionResponse(BaseModel):
    id: str = ""
    choices: list[CompletionChoice]
    usage: CompletionUsage = Field(default_factory=CompletionUsage)


# ---------------------------------------------------------------------------
# Structured multi-turn messages
# ---------------------------------------------------------------------------


class ContentBlock(BaseModel):
    type: str = "text"
    text: str = ""


class Message(BaseModel):
    role: Literal["user", "assistant"]
    content: list[ContentBlock]


class MessageRequest(BaseModel):
    model: str
    max_tokens: int
    temperature: float
    system: str
    messages: list[Message]


class MessageUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0


class MessageResponse(BaseModel):
    id: str = ""
    type: str = "message"
    role: str = "assistant"
    model: str = ""
    usage: MessageUsage = Field(default_factory=MessageUsage)
    content: list[ContentBlock]
    stop_reason: str | None = None
    stop_sequence: Any = Field(default=None, description="Opaque, passed through verbatim")

"""Domain models for the chat-completion transport layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A single conversational message."""

    role: Role
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ChatRequest:
    """A chat-completion request payload."""

    model: str
    messages: tuple[ChatMessage, ...]
    max_tokens: int | None = None
    temperature: float | None = None
    functions: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    #: Name of the function the model must call, when ``functions`` is set.
    function_call: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for the ``/chat/completions`` endpoint."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_payload() for m in self.messages],
        }
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.functions:
            payload["functions"] = list(self.functions)
            if self.function_call is not None:
                payload["function_call"] = {"name": self.function_call}
        return payload

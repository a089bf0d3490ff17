"""Backend transports and request builders."""

from .base import ChatTransport
from .models import ChatMessage, ChatRequest
from .openai import OpenAIChatTransport
from .prompts import schema_instructions, structured_request, summary_request

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatTransport",
    "OpenAIChatTransport",
    "schema_instructions",
    "structured_request",
    "summary_request",
]

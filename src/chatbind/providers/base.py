"""Transport protocol: the one call the assistant needs from a backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import ChatRequest


@runtime_checkable
class ChatTransport(Protocol):
    """Send one chat-completion request and return the raw body text."""

    async def complete(self, request: ChatRequest) -> str:
        """Issue ``request`` and return the response body, unparsed."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...

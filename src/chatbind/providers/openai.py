"""OpenAI chat-completions transport over httpx."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import httpx

from chatbind.providers._errors import wrap_transport_error

if TYPE_CHECKING:
    from chatbind.config import Config

    from .models import ChatRequest

log = logging.getLogger(__name__)

PROVIDER = "openai"


class OpenAIChatTransport:
    """POST requests to ``{base_url}/chat/completions`` and return the body text.

    One request per call; failures surface as `APIError`.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize with credentials; ``client`` lets callers supply transport."""
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    @classmethod
    def from_config(
        cls, config: Config, *, client: httpx.AsyncClient | None = None
    ) -> OpenAIChatTransport:
        return cls(
            config.require_api_key(),
            base_url=cast("str", config.base_url),
            timeout_s=config.timeout_s,
            client=client,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    async def complete(self, request: ChatRequest) -> str:
        """Send ``request`` and return the raw response body."""
        try:
            response = await self._client.post(
                self.endpoint,
                json=request.to_payload(),
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise wrap_transport_error(e, provider=PROVIDER) from e
        log.debug(
            "chat completion for %s: status=%s bytes=%d",
            request.model,
            response.status_code,
            len(response.content),
        )
        return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

"""Model-backed operations: movie summaries, movie details and recipes.

Each operation issues one backend request. Structured answers go through
``extract()``; transport failures propagate as `APIError`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from chatbind.config import Config
from chatbind.core.result_primitives import Success
from chatbind.extraction.envelope import parse_envelope
from chatbind.extraction.pipeline import extract
from chatbind.providers.openai import OpenAIChatTransport
from chatbind.providers.prompts import structured_request, summary_request
from chatbind.schemas import MOVIE_DETAILS, RECIPE

if TYPE_CHECKING:
    from types import TracebackType

    from chatbind.core.schema import SchemaDescription
    from chatbind.extraction.results import ExtractionResult
    from chatbind.providers.base import ChatTransport

log = logging.getLogger(__name__)


class Assistant:
    """Entry point for the application's model-backed features.

    Example:
        async with Assistant(Config()) as assistant:
            result = await assistant.movie_details("Alien")
            if result:
                print(result.record["director"])
    """

    def __init__(
        self, config: Config | None = None, *, transport: ChatTransport | None = None
    ) -> None:
        """Use ``transport`` when given, else an OpenAI transport from ``config``."""
        self.config = config if config is not None else Config()
        self._transport = transport or OpenAIChatTransport.from_config(self.config)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def movie_summary(self, title: str) -> str | None:
        """Return a short plain-text summary, or None if the reply has no text."""
        raw = await self._transport.complete(summary_request(title, self.config))
        parsed = parse_envelope(raw)
        if not isinstance(parsed, Success):
            log.debug("Summary reply for %r is not an envelope", title)
            return None
        match parsed.value.get("content"):
            case str(text):
                return text.strip()
            case _:
                return None

    async def movie_details(self, title: str) -> ExtractionResult:
        """Return the `MOVIE_DETAILS` record for ``title``."""
        return await self.ask(
            MOVIE_DETAILS, f"Give me the details of the movie {title}."
        )

    async def recipe(self, dish: str) -> ExtractionResult:
        """Return the `RECIPE` record for ``dish``."""
        return await self.ask(RECIPE, f"Give me a recipe for {dish}.")

    async def ask(
        self, schema: SchemaDescription, prompt: str, *, diagnostics: bool = False
    ) -> ExtractionResult:
        """Ask ``prompt`` and bind the reply to ``schema``."""
        raw = await self._transport.complete(
            structured_request(schema, prompt, self.config)
        )
        result = extract(raw, schema, diagnostics=diagnostics)
        if not result:
            log.info("No %s record in reply: %s", schema.name, result.failure)
        return result


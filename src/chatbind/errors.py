"""Exception hierarchy for chatbind."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class ChatbindError(Exception):
    """Base exception for all chatbind errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(ChatbindError):
    """Configuration or schema declaration is invalid."""


class APIError(ChatbindError):
    """The chat-completion backend call failed.

    Raised by transports and never handled by the extraction pipeline; it
    reaches the caller as-is.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
        provider: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code = status_code
        self.provider = provider


class ExtractionError(ChatbindError):
    """Why a completion did not yield a record.

    Instances are carried as values (inside ``Failure`` and on a "no result"
    ``ExtractionResult``); ``extract()`` never raises them.
    """

    stage: str = "extraction"


class EnvelopeParseError(ExtractionError):
    """The body is not a readable chat-completion envelope."""

    stage = "envelope"


class CandidateNotFoundError(ExtractionError):
    """No ``{...}`` region could be located in the candidate text."""

    stage = "candidate"


class ObjectParseError(ExtractionError):
    """The narrowed text is not a JSON object."""

    stage = "object"


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)

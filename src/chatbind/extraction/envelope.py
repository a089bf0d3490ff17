"""Envelope reading: find the candidate text inside a chat-completion body.

The body is normally ``{"choices": [{"message": {...}}]}``. The target object
may ride in a function call's ``arguments`` string or in the message's text
``content``. Bodies that are not JSON, or not shaped like an envelope, fall
back to a raw brace scan over the whole text.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any

from chatbind.core.result_primitives import Failure, Success
from chatbind.errors import CandidateNotFoundError, EnvelopeParseError, ExtractionError

from .narrowing import find_object_span
from .results import CandidateSource

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Candidate:
    """Text expected to contain the target JSON object, and where it came from."""

    text: str
    source: CandidateSource
    #: Set when the brace scan replaced envelope parsing.
    fallback_reason: str | None = None


def parse_envelope(raw: str) -> Success[dict[str, Any]] | Failure[EnvelopeParseError]:
    """Return ``choices[0].message`` from a chat-completion body.

    Additional choices are ignored.
    """
    try:
        data = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        return Failure(EnvelopeParseError(f"body is not valid JSON: {e}"))

    match data:
        case {"choices": [{"message": dict() as message}, *_]}:
            return Success(message)
        case _:
            return Failure(
                EnvelopeParseError("body has no choices[0].message object")
            )


def candidate_from_message(
    message: dict[str, Any],
) -> Success[Candidate] | Failure[CandidateNotFoundError]:
    """Pick the carrier of the target object from an envelope message.

    Order: legacy ``function_call``, then the first ``tool_calls`` entry, then
    string ``content``. A function call without string arguments is skipped.
    """
    match message.get("function_call"):
        case {"arguments": str(arguments)}:
            return Success(Candidate(arguments, "function_call"))

    match message.get("tool_calls"):
        case [{"function": {"arguments": str(arguments)}}, *_]:
            return Success(Candidate(arguments, "tool_call"))

    match message.get("content"):
        case str(content):
            return Success(Candidate(content, "content"))

    return Failure(
        CandidateNotFoundError(
            "message carries neither function-call arguments nor text content"
        )
    )


def brace_scan(raw: str) -> Success[str] | Failure[CandidateNotFoundError]:
    """Take the raw text between its first ``{`` and last ``}`` inclusive."""
    span = find_object_span(raw) if isinstance(raw, str) else None
    if span is None:
        return Failure(
            CandidateNotFoundError("body is not an envelope and holds no '{' ... '}' region")
        )
    start, end = span
    return Success(raw[start:end])


def read_envelope(raw: str) -> Success[Candidate] | Failure[ExtractionError]:
    """Produce the candidate string for a raw completion body.

    Never raises: an unreadable envelope is recovered once through
    `brace_scan`, and a failed scan is returned as a `Failure`.
    """
    parsed = parse_envelope(raw)
    if isinstance(parsed, Success):
        return candidate_from_message(parsed.value)

    reason = str(parsed.error)
    log.debug("Envelope unreadable (%s); falling back to brace scan", reason)
    scanned = brace_scan(raw)
    if isinstance(scanned, Failure):
        return scanned
    return Success(Candidate(scanned.value, "brace_scan", fallback_reason=reason))

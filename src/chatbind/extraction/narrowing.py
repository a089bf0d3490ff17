"""Content narrowing: reduce a candidate string to its ``{...}`` span.

Models wrap JSON in prose and markdown fences even when asked not to, so the
object is recovered as the text between the first ``{`` and the last ``}``.
"""

from __future__ import annotations

from chatbind.core.result_primitives import Failure, Success
from chatbind.errors import CandidateNotFoundError


def find_object_span(text: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the first ``{`` to the last ``}`` inclusive.

    ``end`` is exclusive, so ``text[start:end]`` is the span. Returns None when
    either brace is missing or the last ``}`` precedes the first ``{``.
    """
    start = text.find("{")
    if start == -1:
        return None
    end = text.rfind("}")
    if end < start:
        return None
    return start, end + 1


def narrow(candidate: str) -> Success[str] | Failure[CandidateNotFoundError]:
    """Narrow ``candidate`` to its outermost brace span.

    Applying this to its own output returns the same string.
    """
    if not candidate or not candidate.strip():
        return Failure(CandidateNotFoundError("candidate text is empty"))
    span = find_object_span(candidate)
    if span is None:
        return Failure(
            CandidateNotFoundError("no '{' ... '}' region in candidate text")
        )
    start, end = span
    return Success(candidate[start:end])

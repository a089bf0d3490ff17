"""Internal helpers for development-time feature flags.

Centralizes how opt-in debug toggles are read so semantics stay consistent
across the codebase.
"""

from __future__ import annotations

import os

__all__ = ["dev_raw_preview_enabled", "raw_preview"]

_PREVIEW_CHARS = 200


def dev_raw_preview_enabled(*, override: bool | None = None) -> bool:
    """Return True when raw completion previews may appear in debug logs.

    - If ``override`` is provided, it takes precedence.
    - Otherwise, returns True when the environment variable
      ``CHATBIND_DEBUG_PREVIEW`` is exactly ``"1"``.

    Completions can echo user input, so previews stay off unless asked for.
    """
    if override is not None:
        return bool(override)
    return os.getenv("CHATBIND_DEBUG_PREVIEW") == "1"


def raw_preview(text: object, *, limit: int = _PREVIEW_CHARS) -> str:
    """Return a single-line preview of ``text`` capped at ``limit`` characters."""
    s = text if isinstance(text, str) else repr(text)
    s = " ".join(s.split())
    return s if len(s) <= limit else s[:limit] + "..."

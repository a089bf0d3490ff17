"""Transport error helpers: map httpx failures onto `APIError`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chatbind.config import API_KEY_ENV_VAR
from chatbind.errors import APIError, _walk_exception_chain

if TYPE_CHECKING:
    import httpx


def extract_status_code(exc: BaseException) -> int | None:
    """Walk the exception chain to find an HTTP status code."""
    for e in _walk_exception_chain(exc):
        for attr in ("status_code", "status"):
            value = getattr(e, attr, None)
            if isinstance(value, int) and 100 <= value <= 599:
                return value
        response = getattr(e, "response", None)
        value = getattr(response, "status_code", None)
        if isinstance(value, int) and 100 <= value <= 599:
            return value
    return None


def _auth_hint(status_code: int | None, cause_message: str) -> str | None:
    """Generate a hint for auth errors where naming the env var is useful."""
    cause_lower = cause_message.lower()
    if status_code in {401, 403} or (
        status_code == 400 and ("api key" in cause_lower or "api_key" in cause_lower)
    ):
        return f"Check credentials/permissions (try setting {API_KEY_ENV_VAR} or Config.api_key)."
    return None


def wrap_transport_error(
    exc: httpx.HTTPError,
    *,
    provider: str,
    message: str | None = None,
) -> APIError:
    """Map an httpx failure into `APIError`, keeping any HTTP status code."""
    status_code = extract_status_code(exc)
    msg = message or f"{provider} request failed"
    status_note = f" (status={status_code})" if isinstance(status_code, int) else ""
    cause = str(exc)
    return APIError(
        f"{msg}{status_note}: {cause}" if cause else f"{msg}{status_note}",
        hint=_auth_hint(status_code, cause),
        status_code=status_code,
        provider=provider,
    )

"""Configuration: frozen Config for the chat-completion backend."""

from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

from chatbind.errors import ConfigurationError

load_dotenv()

API_KEY_ENV_VAR = "OPENAI_API_KEY"
BASE_URL_ENV_VAR = "CHATBIND_BASE_URL"
MODEL_ENV_VAR = "CHATBIND_MODEL"

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for backend calls.

    Extraction itself needs no configuration; this only steers the transport.
    The API key is auto-resolved from ``OPENAI_API_KEY`` and is checked when a
    transport is built, via `require_api_key()`.

    Example:
        config = Config(model="gpt-4o-mini")
        # API key is automatically resolved from OPENAI_API_KEY
    """

    #: Falls back to ``CHATBIND_MODEL``, then ``gpt-4o-mini``.
    model: str | None = None
    #: Auto-resolved from ``OPENAI_API_KEY`` when *None*.
    api_key: str | None = None
    #: Falls back to ``CHATBIND_BASE_URL``, then the public OpenAI endpoint.
    base_url: str | None = None
    timeout_s: float = 30.0
    max_tokens: int = 800
    temperature: float | None = None

    def __post_init__(self) -> None:
        """Resolve environment defaults and validate values."""
        model = self.model or os.environ.get(MODEL_ENV_VAR) or DEFAULT_MODEL
        model = model.strip()
        if not model:
            raise ConfigurationError(
                "model must be a non-empty string",
                hint=f"Pass model=... or set {MODEL_ENV_VAR}.",
            )
        object.__setattr__(self, "model", model)

        base_url = self.base_url or os.environ.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL
        if not base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"base_url must be an http(s) URL, got {base_url!r}",
                hint=f"Pass base_url=... or set {BASE_URL_ENV_VAR}.",
            )
        object.__setattr__(self, "base_url", base_url.rstrip("/"))

        if self.api_key is None:
            object.__setattr__(self, "api_key", os.environ.get(API_KEY_ENV_VAR))
        elif not self.api_key.strip():
            object.__setattr__(self, "api_key", None)

        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This bounds a single backend request, in seconds.",
            )
        if self.max_tokens < 1:
            raise ConfigurationError(
                f"max_tokens must be ≥ 1, got {self.max_tokens}",
                hint="Structured answers need a few hundred tokens.",
            )
        if self.temperature is not None and not (0.0 <= self.temperature <= 2.0):
            raise ConfigurationError(
                f"temperature must be within [0, 2], got {self.temperature}"
            )

    def require_api_key(self) -> str:
        """Return the API key or raise `ConfigurationError`."""
        if not self.api_key:
            raise ConfigurationError(
                "API key required for backend calls",
                hint=f"Set {API_KEY_ENV_VAR} environment variable or pass api_key=...",
            )
        return self.api_key

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(model={self.model!r}, base_url={self.base_url!r}, "
            f"api_key={'[REDACTED]' if self.api_key else None}, "
            f"timeout_s={self.timeout_s}, max_tokens={self.max_tokens})"
        )

    __repr__ = __str__

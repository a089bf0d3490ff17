"""chatbind: recover schema-conformant records from chat-completion output.

Public API:
    - extract(): Raw completion body -> ExtractionResult
    - SchemaDescription / FieldSpec / FieldKind: Declarative record shapes
    - MOVIE_DETAILS / RECIPE: Declared schemas
    - Assistant: Model-backed summary, movie details and recipe operations
    - Config: Configuration dataclass
"""

from __future__ import annotations

import logging

from chatbind.assistant import Assistant
from chatbind.config import Config
from chatbind.core.schema import FieldKind, FieldSpec, SchemaDescription
from chatbind.errors import (
    APIError,
    CandidateNotFoundError,
    ChatbindError,
    ConfigurationError,
    EnvelopeParseError,
    ExtractionError,
    ObjectParseError,
)
from chatbind.extraction import (
    ExtractionDiagnostics,
    ExtractionResult,
    Violation,
    extract,
)
from chatbind.schemas import (
    MOVIE_DETAILS,
    RECIPE,
    MovieDetails,
    Recipe,
    available_schemas,
    get_schema,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("chatbind")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("chatbind").addHandler(logging.NullHandler())

__all__ = [
    "MOVIE_DETAILS",
    "RECIPE",
    "APIError",
    "Assistant",
    "CandidateNotFoundError",
    "ChatbindError",
    "Config",
    "ConfigurationError",
    "EnvelopeParseError",
    "ExtractionDiagnostics",
    "ExtractionError",
    "ExtractionResult",
    "FieldKind",
    "FieldSpec",
    "MovieDetails",
    "ObjectParseError",
    "Recipe",
    "SchemaDescription",
    "Violation",
    "available_schemas",
    "extract",
    "get_schema",
]

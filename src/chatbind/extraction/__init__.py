"""Structured-output extraction from chat-completion bodies."""

from .binding import bind, bind_object, clip_text, parse_object
from .envelope import Candidate, brace_scan, read_envelope
from .narrowing import find_object_span, narrow
from .pipeline import extract
from .results import ExtractionDiagnostics, ExtractionResult, Violation

__all__ = [
    "Candidate",
    "ExtractionDiagnostics",
    "ExtractionResult",
    "Violation",
    "bind",
    "bind_object",
    "brace_scan",
    "clip_text",
    "extract",
    "find_object_span",
    "narrow",
    "parse_object",
    "read_envelope",
]

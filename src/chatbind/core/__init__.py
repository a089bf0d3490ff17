"""Core value types shared by the extraction pipeline."""

from .result_primitives import Failure, Result, Success, and_then
from .schema import FieldKind, FieldSpec, SchemaDescription

__all__ = [
    "Failure",
    "FieldKind",
    "FieldSpec",
    "Result",
    "SchemaDescription",
    "Success",
    "and_then",
]

"""Schema binding: map a narrowed JSON object onto a `SchemaDescription`.

Binding is corrective, not rejecting. Once the text parses as a JSON object,
every declared field gets a value: recognized values are taken, anything
missing or wrong-typed falls back to the kind's default, and over-long values
are truncated. The only failure exit is text that is not a JSON object.
"""

from __future__ import annotations

from collections.abc import Callable
import json
import math
from typing import Any

from chatbind.core.result_primitives import Failure, Success, and_then
from chatbind.core.schema import FieldKind, FieldSpec, SchemaDescription
from chatbind.errors import ObjectParseError

from .results import ExtractionDiagnostics

# --- Parsing ---


def _parse_int(digits: str) -> int | float:
    # past the int-conversion limit; a non-finite value defaults the field to 0
    try:
        return int(digits)
    except ValueError:
        return float(digits)


def parse_object(text: str) -> Success[dict[str, Any]] | Failure[ObjectParseError]:
    """Parse ``text`` as JSON and require an object at the root."""
    try:
        data = json.loads(text, parse_int=_parse_int)
    except (ValueError, TypeError, RecursionError) as e:
        return Failure(ObjectParseError(f"narrowed text is not valid JSON: {e}"))
    if not isinstance(data, dict):
        return Failure(
            ObjectParseError(f"expected a JSON object, got {type(data).__name__}")
        )
    return Success(data)


# --- Per-kind extraction ---

Extractor = Callable[[dict[str, Any], FieldSpec, ExtractionDiagnostics | None], Any]


def _note_missing(spec: FieldSpec, diag: ExtractionDiagnostics | None) -> None:
    if diag is None:
        return
    if spec.required:
        diag.note(f"Missing required field: {spec.name}", "error", field=spec.name)
    else:
        diag.note(f"Missing optional field: {spec.name}", "info", field=spec.name)


def _note_wrong_type(
    spec: FieldSpec, value: Any, diag: ExtractionDiagnostics | None
) -> None:
    if diag is not None:
        diag.note(
            f"Field {spec.name}: expected {spec.kind.value}, got "
            f"{type(value).__name__}; using default",
            field=spec.name,
        )


def _extract_text(
    obj: dict[str, Any], spec: FieldSpec, diag: ExtractionDiagnostics | None
) -> str:
    if spec.name not in obj:
        _note_missing(spec, diag)
        return spec.default()
    value = obj[spec.name]
    if isinstance(value, str):
        return value
    _note_wrong_type(spec, value, diag)
    return spec.default()


def _extract_integer(
    obj: dict[str, Any], spec: FieldSpec, diag: ExtractionDiagnostics | None
) -> int:
    if spec.name not in obj:
        _note_missing(spec, diag)
        return spec.default()
    value = obj[spec.name]
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool):
        _note_wrong_type(spec, value, diag)
        return spec.default()
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return int(value)
        _note_wrong_type(spec, value, diag)
        return spec.default()
    _note_wrong_type(spec, value, diag)
    return spec.default()


def _extract_text_list(
    obj: dict[str, Any], spec: FieldSpec, diag: ExtractionDiagnostics | None
) -> list[str]:
    if spec.name not in obj:
        _note_missing(spec, diag)
        return spec.default()
    value = obj[spec.name]
    if not isinstance(value, list):
        _note_wrong_type(spec, value, diag)
        return spec.default()

    items: list[str] = []
    skipped = dropped = 0
    for item in value:
        if not isinstance(item, str):
            skipped += 1
            continue
        if spec.max_items is not None and len(items) >= spec.max_items:
            dropped += 1
            continue
        items.append(item)

    if diag is not None:
        if skipped:
            diag.note(
                f"Field {spec.name}: skipped {skipped} non-text item(s)",
                field=spec.name,
            )
        if dropped:
            diag.note(
                f"Field {spec.name}: dropped {dropped} item(s) over max_items={spec.max_items}",
                "info",
                field=spec.name,
            )
    return items


_EXTRACTORS: dict[FieldKind, Extractor] = {
    FieldKind.TEXT: _extract_text,
    FieldKind.INTEGER: _extract_integer,
    FieldKind.TEXT_LIST: _extract_text_list,
}


# --- Constraint enforcement ---


def clip_text(value: str, max_length: int | None) -> str:
    """Trim surrounding whitespace, then truncate to ``max_length`` characters.

    Length is counted in Python characters (code points), so a character
    outside the Basic Multilingual Plane counts once. Whitespace exposed at
    the cut is trimmed as well, so clipping an already clipped value changes
    nothing.
    """
    value = value.strip()
    if max_length is None or len(value) <= max_length:
        return value
    return value[:max_length].rstrip()


def enforce(value: Any, spec: FieldSpec, diag: ExtractionDiagnostics | None = None) -> Any:
    """Apply trimming and truncation for ``spec`` to an extracted value."""
    match spec.kind:
        case FieldKind.TEXT:
            clipped = clip_text(value, spec.max_length)
            if diag is not None and len(clipped) < len(value.strip()):
                diag.note(
                    f"Field {spec.name}: clipped to {spec.max_length} characters",
                    "info",
                    field=spec.name,
                )
            return clipped
        case FieldKind.TEXT_LIST:
            items = value if spec.max_items is None else value[: spec.max_items]
            clipped_items = [clip_text(item, spec.max_length) for item in items]
            if diag is not None:
                n_clipped = sum(
                    1
                    for before, after in zip(items, clipped_items, strict=True)
                    if len(after) < len(before.strip())
                )
                if n_clipped:
                    diag.note(
                        f"Field {spec.name}: clipped {n_clipped} item(s) to "
                        f"{spec.max_length} characters",
                        "info",
                        field=spec.name,
                    )
            return clipped_items
        case _:
            return value


# --- Binding ---


def bind_object(
    obj: dict[str, Any],
    schema: SchemaDescription,
    diag: ExtractionDiagnostics | None = None,
) -> dict[str, Any]:
    """Build a constraint-satisfying record from a parsed object.

    Each field is extracted independently; keys the schema does not declare
    are ignored.
    """
    record: dict[str, Any] = {}
    for spec in schema:
        extracted = _EXTRACTORS[spec.kind](obj, spec, diag)
        record[spec.name] = enforce(extracted, spec, diag)
    return record


def bind(
    text: str,
    schema: SchemaDescription,
    diag: ExtractionDiagnostics | None = None,
) -> Success[dict[str, Any]] | Failure[ObjectParseError]:
    """Parse narrowed ``text`` and bind it to ``schema``."""
    return and_then(
        parse_object(text), lambda obj: Success(bind_object(obj, schema, diag))
    )

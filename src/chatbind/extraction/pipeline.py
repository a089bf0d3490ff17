"""Structured-output extraction pipeline.

``extract()`` runs three pure stages in order and stops at the first failure:

1. Envelope reading: find candidate text in the completion body.
2. Narrowing: cut the candidate down to its ``{...}`` span.
3. Binding: parse the span and map it onto a `SchemaDescription`.

The call holds no shared state and never raises for bad model output; the
outcome is always an `ExtractionResult`.
"""

from __future__ import annotations

import logging
import time

from chatbind._dev_flags import dev_raw_preview_enabled, raw_preview
from chatbind.core.result_primitives import Failure
from chatbind.core.schema import SchemaDescription
from chatbind.errors import ExtractionError

from .binding import bind
from .envelope import read_envelope
from .narrowing import narrow
from .results import ExtractionDiagnostics, ExtractionResult

log = logging.getLogger(__name__)


def extract(
    raw: str,
    schema: SchemaDescription,
    *,
    diagnostics: bool = False,
) -> ExtractionResult:
    """Recover a record conforming to ``schema`` from a raw completion body.

    Args:
        raw: The backend's response body as text.
        schema: Description of the target record.
        diagnostics: If True, attach `ExtractionDiagnostics` to the result.

    Returns:
        A bound `ExtractionResult`, or a "no result" one carrying the
        `ExtractionError` of the stage that failed.
    """
    start = time.perf_counter()
    diag = ExtractionDiagnostics() if diagnostics else None

    def _fail(stage: str, error: ExtractionError) -> ExtractionResult:
        if dev_raw_preview_enabled():
            log.debug(
                "No %s result at %s stage: %s | raw=%r",
                schema.name,
                stage,
                error,
                raw_preview(raw),
            )
        else:
            log.debug("No %s result at %s stage: %s", schema.name, stage, error)
        if diag is not None:
            diag.failure_stage = stage
            diag.duration_ms = (time.perf_counter() - start) * 1000
        return ExtractionResult.no_result(schema, error, diag)

    candidate = read_envelope(raw)
    if isinstance(candidate, Failure):
        return _fail("envelope", candidate.error)
    source = candidate.value.source
    log.debug("Candidate for %s taken from %s", schema.name, source)
    if diag is not None:
        diag.stages.append("envelope")
        diag.candidate_source = source
        diag.fallback_reason = candidate.value.fallback_reason

    narrowed = narrow(candidate.value.text)
    if isinstance(narrowed, Failure):
        return _fail("narrow", narrowed.error)
    if diag is not None:
        diag.stages.append("narrow")

    bound = bind(narrowed.value, schema, diag)
    if isinstance(bound, Failure):
        return _fail("bind", bound.error)
    if diag is not None:
        diag.stages.append("bind")
        diag.duration_ms = (time.perf_counter() - start) * 1000

    return ExtractionResult.bound(schema, bound.value, diag)

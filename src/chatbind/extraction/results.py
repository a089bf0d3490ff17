"""Outcome and diagnostics types for structured-output extraction.

An `ExtractionResult` is either a bound record or an explicit "no result"
carrying the `ExtractionError` that ended the pipeline. Consumers check
``result.ok`` (or truthiness) and treat absence as "the model did not produce
usable structured output".
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Literal, TypeVar, cast

from chatbind.errors import ExtractionError

if TYPE_CHECKING:
    from pydantic import BaseModel

    from chatbind.core.schema import SchemaDescription

M = TypeVar("M", bound="BaseModel")

CandidateSource = Literal["function_call", "tool_call", "content", "brace_scan"]


@dataclasses.dataclass(frozen=True)
class Violation:
    """Record describing a corrected constraint or tolerated gap.

    Violations are informational only and do not change extraction outcomes.
    """

    message: str
    severity: Literal["info", "warning", "error"] = "warning"
    field: str | None = None

    def __post_init__(self) -> None:
        """Validate violation structure."""
        if not self.message:
            raise ValueError("Violation message cannot be empty")


@dataclasses.dataclass
class ExtractionDiagnostics:
    """Mutable diagnostics collected during one extraction.

    Only present when ``extract()`` is called with ``diagnostics=True``.

    Field notes:
    - `stages` lists the stages that completed, in order.
    - `failure_stage` names the stage of the failure exit, if any.
    - `fallback_reason` is set when the brace scan replaced envelope parsing.
    """

    candidate_source: CandidateSource | None = None
    stages: list[str] = dataclasses.field(default_factory=list)
    failure_stage: str | None = None
    fallback_reason: str | None = None
    violations: list[Violation] = dataclasses.field(default_factory=list)
    duration_ms: float | None = None

    def note(
        self,
        message: str,
        severity: Literal["info", "warning", "error"] = "warning",
        *,
        field: str | None = None,
    ) -> None:
        self.violations.append(Violation(message, severity, field))


@dataclasses.dataclass(frozen=True)
class ExtractionResult:
    """Outcome of ``extract()``.

    Attributes:
        schema: The description the record was bound against.
        record: Field values keyed by name when extraction succeeded, else None.
        failure: The error that ended the pipeline when there is no result.
        diagnostics: Optional diagnostics, see `ExtractionDiagnostics`.
    """

    schema: SchemaDescription
    record: dict[str, Any] | None = None
    failure: ExtractionError | None = None
    diagnostics: ExtractionDiagnostics | None = dataclasses.field(
        default=None, compare=False
    )

    def __post_init__(self) -> None:
        """Enforce that exactly one of ``record`` and ``failure`` is set."""
        if (self.record is None) == (self.failure is None):
            raise ValueError("ExtractionResult needs exactly one of record or failure")

    @classmethod
    def bound(
        cls,
        schema: SchemaDescription,
        record: dict[str, Any],
        diagnostics: ExtractionDiagnostics | None = None,
    ) -> ExtractionResult:
        return cls(schema=schema, record=record, diagnostics=diagnostics)

    @classmethod
    def no_result(
        cls,
        schema: SchemaDescription,
        failure: ExtractionError,
        diagnostics: ExtractionDiagnostics | None = None,
    ) -> ExtractionResult:
        return cls(schema=schema, failure=failure, diagnostics=diagnostics)

    @property
    def ok(self) -> bool:
        return self.record is not None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> dict[str, Any]:
        """Return the record, raising the carried failure when there is none."""
        if self.record is None:
            raise cast("ExtractionError", self.failure)
        return self.record

    def to_model(self, model: type[M]) -> M | None:
        """Validate the record into a pydantic model, or return None on no result."""
        if self.record is None:
            return None
        return model.model_validate(self.record)

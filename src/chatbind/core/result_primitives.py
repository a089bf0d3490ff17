"""Explicit result values passed between extraction stages.

Each stage returns ``Success`` or ``Failure`` instead of raising, so the
pipeline composes stages by plain sequencing and a failure short-circuits
without unwinding.
"""

from __future__ import annotations

from collections.abc import Callable
import dataclasses
import typing

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)
T = typing.TypeVar("T")
U = typing.TypeVar("U")
E = typing.TypeVar("E", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A stage produced a value."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A stage could not produce a value; ``error`` says why."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


def and_then(
    result: Success[T] | Failure[E],
    step: Callable[[T], Success[U] | Failure[E]],
) -> Success[U] | Failure[E]:
    """Feed a successful value into ``step``; pass a failure through untouched."""
    if isinstance(result, Failure):
        return result
    return step(result.value)

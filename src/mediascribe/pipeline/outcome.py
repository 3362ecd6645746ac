"""Terminal values returned by a pipeline run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from mediascribe.exceptions import ErrorKind, PipelineError


@dataclass(frozen=True, slots=True)
class GenerationResult:
    raw_text: str
    extracted_text: str


@dataclass(frozen=True, slots=True)
class Success:
    result: GenerationResult
    ok: Literal[True] = True


@dataclass(frozen=True, slots=True)
class Failure:
    kind: ErrorKind
    message: str
    error: PipelineError
    ok: Literal[False] = False

    @classmethod
    def from_error(cls, error: PipelineError) -> Failure:
        return cls(kind=error.kind, message=str(error), error=error)


PipelineOutcome = Success | Failure

# =============================================================================
# core/models/result.py - Result Values and Pipeline Errors
# =============================================================================
# Every public component operation returns a Result instead of raising for
# expected failures (empty CSV, malformed override, ...). The orchestrator is
# the only place that short-circuits on a failed Result.
#
# Usage:
#   result = tokenize(content)
#   if not result.success:
#       print(result.error.code, result.error.message)
#   else:
#       table = result.data
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Stable, machine-readable failure codes."""
    CSV_ERROR = "CSV_ERROR"
    ANALYSIS_ERROR = "ANALYSIS_ERROR"
    DETECTION_ERROR = "DETECTION_ERROR"
    GENERATION_ERROR = "GENERATION_ERROR"
    CANCELLED = "CANCELLED"


class PipelineError(BaseModel):
    """
    Structured failure returned to the caller.

    Example:
        {
            "code": "CSV_ERROR",
            "message": "CSV file is empty",
            "stage": "parsing",
            "suggestion": "Upload a file with a header row and at least one data row"
        }
    """

    model_config = ConfigDict(frozen=True)

    code: ErrorCode = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable description")
    stage: str | None = Field(default=None, description="Pipeline stage that failed")
    suggestion: str | None = Field(default=None, description="How to fix it")
    details: dict[str, Any] = Field(default_factory=dict, description="Extra context")


@dataclass
class Result(Generic[T]):
    """
    Outcome of a component operation: either data or errors, never both.

    Warnings are non-fatal and never change success.
    """
    success: bool
    data: T | None = None
    errors: list[PipelineError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(
        cls,
        data: T,
        warnings: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Result[T]:
        return cls(
            success=True,
            data=data,
            warnings=list(warnings or []),
            metadata=dict(metadata or {}),
        )

    @classmethod
    def fail(
        cls,
        error: PipelineError,
        warnings: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Result[T]:
        return cls(
            success=False,
            errors=[error],
            warnings=list(warnings or []),
            metadata=dict(metadata or {}),
        )

    @property
    def error(self) -> PipelineError | None:
        """First error, or None on success."""
        return self.errors[0] if self.errors else None

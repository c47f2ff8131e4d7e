# =============================================================================
# core/exceptions.py - Engine Exceptions
# =============================================================================
# Exceptions used inside components. They never cross a component boundary:
# each public operation catches them and returns Result.fail(exc.to_error()).
# Following the principle: "Errors should tell HOW to fix, not just WHAT failed."
# =============================================================================

from typing import Any

from core.models.result import ErrorCode, PipelineError


class FormSchemaError(Exception):
    """
    Base exception for the form schema engine.

    Carries a stable error code and an actionable suggestion so it can be
    turned into a PipelineError without losing information.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GENERATION_ERROR,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a plain dict."""
        result: dict[str, Any] = {
            "detail": self.message,
            "code": self.code.value,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result

    def to_error(self, stage: str | None = None) -> PipelineError:
        """Convert exception to the PipelineError value returned to callers."""
        return PipelineError(
            code=self.code,
            message=self.message,
            stage=stage,
            suggestion=self.suggestion,
            details=self.details,
        )


# =============================================================================
# Parsing Exceptions
# =============================================================================

class CsvParseError(FormSchemaError):
    """Raised when CSV text cannot be tokenized."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.CSV_ERROR,
            suggestion="Check that the file is non-empty text with a header row",
            details=details,
        )


class EmptyCsvError(CsvParseError):
    """Raised when no lines remain after dropping blank ones."""

    def __init__(self):
        super().__init__("CSV file is empty")


# =============================================================================
# Analysis and Detection Exceptions
# =============================================================================

class ProfilingError(FormSchemaError):
    """Raised when column statistics cannot be computed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.ANALYSIS_ERROR,
            suggestion="This is unexpected for well-formed input; report the file that triggered it",
            details=details,
        )


class DetectionError(FormSchemaError):
    """Raised for malformed detection input such as an invalid override."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.DETECTION_ERROR,
            suggestion="Check field overrides: column_index must exist and field_type must be known",
            details=details,
        )


class InvalidOverrideError(DetectionError):
    """Raised when an override targets a column that does not exist."""

    def __init__(self, column_index: int, column_count: int):
        super().__init__(
            message=f"Override targets column {column_index} but the table has {column_count} columns",
            details={"column_index": column_index, "column_count": column_count},
        )


# =============================================================================
# Generation Exceptions
# =============================================================================

class GenerationError(FormSchemaError):
    """Raised when the final schema cannot be assembled."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.GENERATION_ERROR,
            suggestion="Retry with field overrides for the affected columns",
            details=details,
        )


class PipelineCancelled(FormSchemaError):
    """Raised between stages when the caller cancelled or the deadline passed."""

    def __init__(self, stage: str, reason: str):
        super().__init__(
            message=f"Pipeline cancelled before {stage}: {reason}",
            code=ErrorCode.CANCELLED,
            suggestion="Re-run with a later deadline; the pipeline is idempotent",
            details={"stage": stage, "reason": reason},
        )

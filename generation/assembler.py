# =============================================================================
# generation/assembler.py - Form Assembler (Pipeline Orchestrator)
# =============================================================================
# Drives the whole pipeline for one upload:
#
#   parsing -> profiling -> detection -> recommendation -> quality_analysis -> assembly
#
# Each stage either hands its output to the next or fails the run with a
# typed PipelineError; a partial schema is never returned. Cancellation
# (a threading.Event or a time.monotonic() deadline) is checked before
# every stage.
#
# Usage:
#   assembler = FormAssembler()
#   result = assembler.generate(csv_text, GenerationOptions(title="Signup"))
#   if result.success:
#       for spec in result.data.fields:
#           print(spec.label, spec.field_type)
# =============================================================================

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from core.config import EngineSettings, get_settings
from core.exceptions import (
    DetectionError,
    FormSchemaError,
    GenerationError,
    InvalidOverrideError,
    PipelineCancelled,
)
from core.models import (
    ColumnProfile,
    CsvTable,
    DetectionResult,
    FieldOverride,
    FieldSpec,
    FormPreview,
    FormSchema,
    GenerationMetadata,
    GenerationOptions,
    PipelineError,
    Result,
)
from detection import FieldTypeDetector
from detection.catalog import DetectionCatalog, get_catalog
from generation.recommender import FieldRecommender
from lib.profiler import profile
from lib.quality import analyze, build_preview
from lib.tokenizer import resolve_options, tokenize
from lib.utils import StageTimer

logger = logging.getLogger(__name__)

MAX_ALTERNATIVES_IN_RECOMMENDATION = 2


# =============================================================================
# Run State
# =============================================================================

class StageFailed(Exception):
    """A component returned a failed Result; carries its PipelineError."""

    def __init__(self, error: PipelineError):
        super().__init__(error.message)
        self.error = error


@dataclass
class PipelineRun:
    """Mutable bookkeeping for one pipeline invocation."""
    operation: str
    cancel_event: threading.Event | None = None
    deadline: float | None = None
    current_stage: str = "options"
    warnings: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.timer = StageTimer(self.operation)

    def check_cancelled(self, stage: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise PipelineCancelled(stage, "cancellation requested")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise PipelineCancelled(stage, "deadline exceeded")

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        self.current_stage = name
        self.check_cancelled(name)
        with self.timer.stage(name):
            yield

    def unwrap(self, result: Result) -> Any:
        """Collect a component Result's warnings and return its data."""
        self.warnings.extend(result.warnings)
        if not result.success:
            raise StageFailed(result.error)
        return result.data

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def metadata(self) -> dict[str, Any]:
        return self.timer.as_metadata()


@dataclass
class Analysis:
    """Output of the shared parsing/profiling/detection stages."""
    table: CsvTable
    profiles: list[ColumnProfile]
    detections: list[DetectionResult]
    overrides: dict[int, FieldOverride]


# =============================================================================
# Option Handling
# =============================================================================

def coerce_options(options: GenerationOptions | Mapping[str, Any] | None) -> GenerationOptions:
    """
    Accept GenerationOptions or a plain dict.

    Raises:
        DetectionError: If a field override in a dict is invalid
        ValidationError: If any other option is invalid
    """
    if options is None:
        return GenerationOptions()
    if isinstance(options, GenerationOptions):
        return options

    raw = dict(options)
    overrides = []
    for index, item in enumerate(raw.pop("field_overrides", None) or []):
        if isinstance(item, FieldOverride):
            overrides.append(item)
            continue
        try:
            overrides.append(FieldOverride.model_validate(item))
        except ValidationError as e:
            raise DetectionError(
                f"Field override #{index} is invalid",
                details={"override": index, "errors": e.errors(include_url=False, include_context=False)},
            )

    return GenerationOptions.model_validate({**raw, "field_overrides": overrides})


def index_overrides(overrides: list[FieldOverride], column_count: int) -> dict[int, FieldOverride]:
    """Overrides keyed by column; a later override for the same column wins."""
    indexed: dict[int, FieldOverride] = {}
    for override in overrides:
        if override.column_index >= column_count:
            raise InvalidOverrideError(override.column_index, column_count)
        indexed[override.column_index] = override
    return indexed


# =============================================================================
# Assembler
# =============================================================================

class FormAssembler:
    """
    Orchestrates tokenizer, profiler, detector, recommender and quality
    analyzer into a FormSchema.

    Holds only read-only settings and catalog; every call builds its own
    run state, so one assembler can be shared between threads.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        catalog: DetectionCatalog | None = None,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog or get_catalog()

    # -------------------------------------------------------------------------
    # Public Entry Points
    # -------------------------------------------------------------------------

    def generate(
        self,
        content: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
        cancel_event: threading.Event | None = None,
        deadline: float | None = None,
    ) -> Result[FormSchema]:
        """
        Generate a form schema from CSV text.

        Args:
            content: Raw CSV text, already in memory
            options: GenerationOptions (or an equivalent dict)
            cancel_event: Set it from another thread to abort between stages
            deadline: time.monotonic() value after which the run aborts

        Returns:
            Result with the FormSchema, or the first stage failure
        """
        run = PipelineRun("generate", cancel_event=cancel_event, deadline=deadline)
        return self._execute(run, lambda: self._generate(content, options, run))

    def preview(
        self,
        content: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
        cancel_event: threading.Event | None = None,
        deadline: float | None = None,
    ) -> Result[FormPreview]:
        """
        Estimate complexity from the first PREVIEW_MAX_ROWS rows only.

        No fields are materialized.
        """
        run = PipelineRun("preview", cancel_event=cancel_event, deadline=deadline)
        return self._execute(run, lambda: self._preview(content, options, run))

    # -------------------------------------------------------------------------
    # Error Boundary
    # -------------------------------------------------------------------------

    def _execute(self, run: PipelineRun, body) -> Result:
        try:
            data = body()
        except StageFailed as e:
            logger.warning(f"{run.operation} failed at {run.current_stage}: {e.error.message}")
            return Result.fail(e.error, warnings=run.warnings, metadata=run.metadata())
        except FormSchemaError as e:
            logger.warning(f"{run.operation} failed at {run.current_stage}: {e}")
            return Result.fail(e.to_error(stage=run.current_stage), warnings=run.warnings, metadata=run.metadata())
        except ValidationError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error during {run.operation} at {run.current_stage}")
            error = GenerationError("Failed to generate form", details={"error": str(e)})
            return Result.fail(error.to_error(stage=run.current_stage), warnings=run.warnings, metadata=run.metadata())

        metadata = run.metadata()
        logger.info(f"{run.operation} finished in {metadata['execution_time_ms']:.1f}ms")
        return Result.ok(data, warnings=run.warnings, metadata=metadata)

    # -------------------------------------------------------------------------
    # Shared Stages
    # -------------------------------------------------------------------------

    def _analyze(
        self,
        content: str,
        options: GenerationOptions,
        run: PipelineRun,
        row_cap: int | None = None,
    ) -> Analysis:
        parse_options = resolve_options(options.parse_options, self.settings)
        if row_cap is not None and parse_options.max_rows > row_cap:
            parse_options = parse_options.model_copy(update={"max_rows": row_cap})

        with run.stage("parsing"):
            table: CsvTable = run.unwrap(tokenize(content, parse_options, self.settings))

        with run.stage("profiling"):
            profiles: list[ColumnProfile] = run.unwrap(profile(table, self.settings))

        with run.stage("detection"):
            overrides = index_overrides(options.field_overrides, table.column_count)

            for column in profiles:
                pinned = column.index in overrides and overrides[column.index].field_type is not None
                if not column.has_data and not pinned:
                    run.warn(
                        f"Column {column.index}: {column.header} has no values - "
                        f"field type inferred from its header only"
                    )

            detector = FieldTypeDetector(self.catalog, options.contextual_hints, self.settings)
            detections: list[DetectionResult] = run.unwrap(detector.detect(profiles, overrides))

        return Analysis(table, profiles, detections, overrides)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _generate(
        self,
        content: str,
        options: GenerationOptions | Mapping[str, Any] | None,
        run: PipelineRun,
    ) -> FormSchema:
        options = coerce_options(options)
        analysis = self._analyze(content, options, run)

        with run.stage("recommendation"):
            recommender = FieldRecommender(self.settings, self.catalog, options.detection_strategy)
            fields: list[FieldSpec] = []
            recommendations: list[str] = []
            for column, detection in zip(analysis.profiles, analysis.detections):
                spec = recommender.recommend(
                    column,
                    detection,
                    analysis.overrides.get(column.index),
                    run.warnings,
                )
                fields.append(spec)
                recommendations.extend(self.recommendations_for(spec, detection))

        with run.stage("quality_analysis"):
            metrics = analyze(analysis.table, analysis.profiles, analysis.detections)
            preview = None
            if options.include_preview:
                preview = build_preview(metrics, analysis.detections, analysis.table.column_count)

        with run.stage("assembly"):
            schema = FormSchema(
                title=options.title,
                description=options.description,
                fields=fields,
                quality_metrics=metrics,
                metadata=self.build_metadata(fields, analysis.detections, run.warnings, recommendations),
                preview=preview,
                detection_results=analysis.detections,
            )

        logger.info(
            f"Generated {len(fields)} fields from {analysis.table.column_count} columns "
            f"({analysis.table.row_count} rows)"
        )
        return schema

    def recommendations_for(self, spec: FieldSpec, detection: DetectionResult) -> list[str]:
        """Human-readable review suggestions for one field."""
        messages = []
        if spec.confidence < self.settings.LOW_CONFIDENCE_THRESHOLD:
            messages.append(
                f'Consider reviewing field "{spec.label}" - low confidence detection '
                f"({round(spec.confidence * 100)}%)"
            )
        if detection.alternative_types:
            alternatives = ", ".join(
                alt.field_type.value
                for alt in detection.alternative_types[:MAX_ALTERNATIVES_IN_RECOMMENDATION]
            )
            messages.append(f'Field "{spec.label}" could also be: {alternatives}')
        return messages

    @staticmethod
    def build_metadata(
        fields: list[FieldSpec],
        detections: list[DetectionResult],
        warnings: list[str],
        recommendations: list[str],
    ) -> GenerationMetadata:
        counts = Counter(spec.field_type.value for spec in fields)
        scores = [d.confidence for d in detections]
        average = sum(scores) / len(scores) if scores else 0.0

        return GenerationMetadata(
            total_fields=len(fields),
            detected_types=dict(sorted(counts.items())),
            confidence_scores=scores,
            average_confidence=min(average, 1.0),
            warnings=list(warnings),
            recommendations=recommendations,
        )

    # -------------------------------------------------------------------------
    # Preview
    # -------------------------------------------------------------------------

    def _preview(
        self,
        content: str,
        options: GenerationOptions | Mapping[str, Any] | None,
        run: PipelineRun,
    ) -> FormPreview:
        options = coerce_options(options)
        analysis = self._analyze(content, options, run, self.settings.PREVIEW_MAX_ROWS)

        with run.stage("quality_analysis"):
            metrics = analyze(analysis.table, analysis.profiles, analysis.detections)
            preview = build_preview(metrics, analysis.detections, analysis.table.column_count)

        logger.info(
            f"Preview: {preview.estimated_fields} fields, complexity {preview.complexity_score:.2f}"
        )
        return preview

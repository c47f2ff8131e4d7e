# =============================================================================
# core/models/form.py - Generated Form Schemas
# =============================================================================
# These models are the engine's output contract with the form-builder UI:
#
#   - FieldOverride: caller-pinned outcome for one column
#   - FieldSpec: one generated form field
#   - QualityMetrics / FormPreview: table-wide quality and complexity
#   - GenerationMetadata: counts, confidences, warnings, recommendations
#   - FormSchema: everything above, returned once per pipeline run
#   - GenerationOptions: knobs for a pipeline run
#
# FormSchema holds no timestamps or random ids, so the same input always
# serializes to the same JSON.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.models.detection import DetectionResult, FieldType, UIHint, ValidationRule
from core.models.table import ParseOptions


class DetectionStrategyMode(str, Enum):
    """How strictly the combined verdict is trusted."""
    AUTO = "auto"                  # Use the combined winner as-is
    CONSERVATIVE = "conservative"  # Fall back to text below the threshold
    AGGRESSIVE = "aggressive"      # Keep the winner only above a low bar


# =============================================================================
# Caller Overrides
# =============================================================================

class FieldOverride(BaseModel):
    """
    Caller-supplied outcome for one column.

    When field_type is set, detection is skipped for that column and the
    field carries confidence 1.0. Any other attribute replaces what the
    recommender would have generated.

    Example:
        FieldOverride(column_index=0, field_type="phone", required=True)
    """

    model_config = ConfigDict(frozen=True)

    column_index: int = Field(..., ge=0, description="Column the override applies to")
    field_type: FieldType | None = Field(default=None, description="Pinned field type")
    required: bool | None = Field(default=None, description="Pinned required flag")
    options: list[str] | None = Field(default=None, description="Pinned option list")
    validation_rules: list[ValidationRule] | None = Field(
        default=None,
        description="Pinned validation rules (replace generated ones)"
    )


# =============================================================================
# Field Specification
# =============================================================================

class FieldSpec(BaseModel):
    """
    One generated form field.

    Example:
        {
            "id": "field_1_email",
            "column_index": 1,
            "label": "email",
            "field_type": "email",
            "confidence": 0.665,
            "required": true,
            "placeholder": "Enter email address...",
            "validation_rules": [{"kind": "required", ...}, {"kind": "pattern", ...}]
        }
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Field id, unique within the form")

    column_index: int = Field(..., ge=0, description="Source column position")

    label: str = Field(default="", description="Display label (the column header)")

    field_type: FieldType = Field(default=FieldType.TEXT, description="Input kind")

    confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Confidence in field_type (1.0 when pinned by an override)"
    )

    required: bool = Field(default=False, description="Whether the field must be filled")

    placeholder: str = Field(default="", description="Placeholder text")

    options: list[str] | None = Field(
        default=None,
        description="Option list for choice fields"
    )

    validation_rules: list[ValidationRule] = Field(
        default_factory=list,
        description="Rules the UI should enforce"
    )

    properties: dict[str, Any] = Field(
        default_factory=dict,
        description="Type-specific widget properties (rating_max, currency, ...)"
    )

    ui_hints: list[UIHint] = Field(default_factory=list, description="Rendering hints")

    reasoning: str = Field(default="", description="Why this field type was chosen")

    overridden: bool = Field(default=False, description="Whether an override pinned the type")


# =============================================================================
# Quality and Preview
# =============================================================================

class QualityMetrics(BaseModel):
    """
    Table-wide quality scores, all in [0, 1].

    validity currently equals consistency; values are not re-parsed.
    """

    model_config = ConfigDict(frozen=True)

    completeness: float = Field(default=0.0, ge=0.0, le=1.0, description="Share of non-empty cells")
    consistency: float = Field(default=0.0, ge=0.0, le=1.0, description="Mean combined detection confidence")
    uniqueness: float = Field(default=0.0, ge=0.0, le=1.0, description="Mean unique/row ratio per column")
    validity: float = Field(default=0.0, ge=0.0, le=1.0, description="Share of values matching their type")


class FormPreview(BaseModel):
    """Lightweight complexity estimate used to decide whether to prompt the user."""

    model_config = ConfigDict(frozen=True)

    estimated_fields: int = Field(default=0, ge=0)
    complexity_score: float = Field(default=0.0, ge=0.0, le=1.0)
    user_interaction_required: bool = Field(default=False)
    suggested_improvements: list[str] = Field(default_factory=list)
    quality_metrics: QualityMetrics = Field(default_factory=QualityMetrics)


# =============================================================================
# Generation Metadata and Schema
# =============================================================================

class GenerationMetadata(BaseModel):
    """Summary of one generation run."""

    model_config = ConfigDict(frozen=True)

    total_fields: int = Field(default=0, ge=0, description="Number of fields generated")

    detected_types: dict[str, int] = Field(
        default_factory=dict,
        description="Field type -> number of fields, sorted by type name"
    )

    confidence_scores: list[float] = Field(
        default_factory=list,
        description="Combined confidence per detected column, column order"
    )

    average_confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    warnings: list[str] = Field(default_factory=list, description="Non-fatal problems")

    recommendations: list[str] = Field(
        default_factory=list,
        description="Human-readable review suggestions"
    )


class FormSchema(BaseModel):
    """
    Complete output of a successful pipeline run.

    The engine keeps no reference to it once returned.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="Generated Form")
    description: str = Field(default="Form generated from CSV data")

    fields: list[FieldSpec] = Field(default_factory=list, description="Fields in column order")

    quality_metrics: QualityMetrics = Field(default_factory=QualityMetrics)

    metadata: GenerationMetadata = Field(default_factory=GenerationMetadata)

    preview: FormPreview | None = Field(default=None)

    detection_results: list[DetectionResult] = Field(
        default_factory=list,
        description="Combined detection result per generated field, same order"
    )

    def get_field(self, column_index: int) -> FieldSpec | None:
        """Find the field generated from a given column."""
        for spec in self.fields:
            if spec.column_index == column_index:
                return spec
        return None


# =============================================================================
# Generation Options
# =============================================================================

class GenerationOptions(BaseModel):
    """
    Options for a full generation run.

    Example:
        GenerationOptions(
            title="Signup",
            field_overrides=[FieldOverride(column_index=0, field_type="phone")],
        )
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(default="Generated Form")

    description: str = Field(default="Form generated from CSV data")

    parse_options: ParseOptions = Field(default_factory=ParseOptions)

    field_overrides: list[FieldOverride] = Field(default_factory=list)

    contextual_hints: dict[str, FieldType] = Field(
        default_factory=dict,
        description="Lower-cased header -> field type hints (e.g. prior user corrections)"
    )

    detection_strategy: DetectionStrategyMode = Field(default=DetectionStrategyMode.AUTO)

    include_preview: bool = Field(default=True)

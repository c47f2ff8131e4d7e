# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the schemas that flow through the pipeline:
# - table.py: ParseOptions, CsvTable, ColumnProfile (tokenizer/profiler)
# - detection.py: FieldType, DetectionResult, ValidationRule (detectors)
# - form.py: FieldSpec, QualityMetrics, FormSchema (recommender/assembler)
# - result.py: Result and PipelineError (error-as-value convention)
#
# These models define the "contract" between the engine and the UI layer.
# =============================================================================

# -----------------------------------------------------------------------------
# Table Models - Tokenizer and profiler output
# -----------------------------------------------------------------------------
from .table import (
    ColumnProfile,
    CsvTable,
    ParseOptions,
)

# -----------------------------------------------------------------------------
# Detection Models - Strategy and combiner output
# -----------------------------------------------------------------------------
from .detection import (
    CHOICE_TYPES,
    FREE_TEXT_TYPES,
    AlternativeType,
    DetectionResult,
    FieldType,
    HintKind,
    RuleKind,
    UIHint,
    ValidationRule,
)

# -----------------------------------------------------------------------------
# Form Models - Generated schema
# -----------------------------------------------------------------------------
from .form import (
    DetectionStrategyMode,
    FieldOverride,
    FieldSpec,
    FormPreview,
    FormSchema,
    GenerationMetadata,
    GenerationOptions,
    QualityMetrics,
)

# -----------------------------------------------------------------------------
# Result Models - Error-as-value convention
# -----------------------------------------------------------------------------
from .result import (
    ErrorCode,
    PipelineError,
    Result,
)

__all__ = [
    # Table
    "ColumnProfile",
    "CsvTable",
    "ParseOptions",
    # Detection
    "CHOICE_TYPES",
    "FREE_TEXT_TYPES",
    "AlternativeType",
    "DetectionResult",
    "FieldType",
    "HintKind",
    "RuleKind",
    "UIHint",
    "ValidationRule",
    # Form
    "DetectionStrategyMode",
    "FieldOverride",
    "FieldSpec",
    "FormPreview",
    "FormSchema",
    "GenerationMetadata",
    "GenerationOptions",
    "QualityMetrics",
    # Result
    "ErrorCode",
    "PipelineError",
    "Result",
]

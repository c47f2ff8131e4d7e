# =============================================================================
# core/models/detection.py - Field Type Detection Schemas
# =============================================================================
# These models describe what the detection strategies produce for a column:
#
#   - FieldType: the catalog of form input kinds a column can become
#   - DetectionResult: one strategy's (or the combiner's) verdict
#   - ValidationRule / UIHint: suggestions attached to a field
#
# A DetectionResult is produced once per column per strategy, then once more
# by the combiner as the final ranked decision.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums for Field Classification
# =============================================================================

class FieldType(str, Enum):
    """
    Kind of form input a CSV column should become.

    Values match the identifiers the form-builder UI understands, so the
    enum serializes straight into the generated schema.
    """
    # Basic inputs
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    URL = "url"
    SEARCH = "search"

    # Dates and times
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    MONTH = "month"
    WEEK = "week"
    YEAR = "year"

    # Long-form text
    TEXTAREA = "textarea"
    RICH_TEXT = "rich-text"
    MARKDOWN = "markdown"

    # Choices
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    YESNO = "yesno"
    TOGGLE = "toggle"

    # Numeric meanings
    MONEY = "money"
    PERCENTAGE = "percentage"
    CURRENCY = "currency"

    # Contact and location
    PHONE = "phone"
    ADDRESS = "address"
    COUNTRY = "country"
    STATE = "state"
    ZIPCODE = "zipcode"
    LOCATION = "location"

    # Media
    FILE = "file"
    IMAGE = "image"
    SIGNATURE = "signature"
    AUDIO = "audio"
    VIDEO = "video"

    # Scales
    RATING = "rating"
    SLIDER = "slider"
    RANGE = "range"
    LIKERT = "likert"

    # Other
    COLOR = "color"
    TAGS = "tags"
    AUTOCOMPLETE = "autocomplete"
    MATRIX = "matrix"


# Field types whose values come from a fixed option list
CHOICE_TYPES: frozenset[FieldType] = frozenset({
    FieldType.SELECT,
    FieldType.RADIO,
    FieldType.CHECKBOX,
    FieldType.MULTISELECT,
})

# Field types that accept arbitrary text and get a maxLength rule
FREE_TEXT_TYPES: frozenset[FieldType] = frozenset({
    FieldType.TEXT,
    FieldType.TEXTAREA,
    FieldType.RICH_TEXT,
    FieldType.MARKDOWN,
})


class RuleKind(str, Enum):
    """Kinds of validation rules a field can carry."""
    REQUIRED = "required"
    PATTERN = "pattern"
    MIN = "min"
    MAX = "max"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"


class HintKind(str, Enum):
    """Kinds of UI hints attached to a field."""
    PLACEHOLDER = "placeholder"
    OPTIONS = "options"
    FORMAT = "format"


# =============================================================================
# Detection Results
# =============================================================================

class AlternativeType(BaseModel):
    """A runner-up field type with its own confidence and reasoning."""

    model_config = ConfigDict(frozen=True)

    field_type: FieldType = Field(..., description="Alternative field type")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence (0.0-1.0)")
    reasoning: str = Field(default="", description="Why this type is plausible")


class DetectionResult(BaseModel):
    """
    Verdict of a detection strategy (or the combiner) for one column.

    Example:
        {
            "field_type": "email",
            "confidence": 0.95,
            "reasoning": "Email pattern detected",
            "strategy": "pattern",
            "pattern": "^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$"
        }
    """

    model_config = ConfigDict(frozen=True)

    field_type: FieldType = Field(
        default=FieldType.TEXT,
        description="Detected field type"
    )

    confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Confidence in the detected type (0.0-1.0)"
    )

    reasoning: str = Field(
        default="",
        description="Human-readable explanation of the verdict"
    )

    alternative_types: list[AlternativeType] = Field(
        default_factory=list,
        max_length=3,
        description="Runner-up types, confidence-descending (at most 3)"
    )

    strategy: str = Field(
        default="combined",
        description="Name of the strategy that produced this result"
    )

    pattern: str | None = Field(
        default=None,
        description="Regex source of the value pattern involved, if any"
    )

    peak_confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Strongest single-strategy confidence backing field_type"
    )


# =============================================================================
# Suggestions
# =============================================================================

class ValidationRule(BaseModel):
    """
    A validation rule suggested for (or pinned on) a field.

    Example:
        {"kind": "maxLength", "value": 255, "message": "Maximum length is 255 characters"}
    """

    model_config = ConfigDict(frozen=True)

    kind: RuleKind = Field(..., description="Kind of rule")
    value: Any | None = Field(default=None, description="Rule argument (regex, bound, length)")
    message: str = Field(default="", description="Message shown when the rule fails")
    confidence: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="How confident the engine is that this rule applies"
    )


class UIHint(BaseModel):
    """Rendering hint for the form-builder UI."""

    model_config = ConfigDict(frozen=True)

    kind: HintKind
    value: Any
    description: str = ""

# =============================================================================
# detection/statistical.py - Column Statistics Strategy
# =============================================================================
# Infers a field type from the shape of the data rather than its content:
#
#   1. nearly all distinct and all-digit      -> number (ID-like)
#   2. few distinct values                    -> select
#   3. long values                            -> textarea
#   4. many empty cells                       -> text (optional)
#   5. otherwise                              -> text (inconclusive)
#
# Rules are evaluated in that order and the first match wins.
# =============================================================================

import re

from core.models import AlternativeType, ColumnProfile, DetectionResult, FieldType
from detection.base import DetectionStrategy
from detection.registry import register_strategy

HIGH_UNIQUE_RATIO = 0.9
LOW_UNIQUE_RATIO = 0.1
MAX_SELECT_VALUES = 10
LONG_TEXT_LENGTH = 100
HIGH_NULL_RATIO = 0.3

_DIGITS_RE = re.compile(r"^[0-9]+$")


@register_strategy
class StatisticalStrategy(DetectionStrategy):
    """Detect field types from uniqueness, length and emptiness."""

    name = "statistical"
    weight = 0.20

    def detect(self, profile: ColumnProfile) -> DetectionResult:
        unique_ratio = profile.unique_ratio
        avg_length = profile.avg_length
        sample = profile.sample_values

        if unique_ratio > HIGH_UNIQUE_RATIO and sample and all(_DIGITS_RE.match(v) for v in sample):
            return self.result(
                FieldType.NUMBER,
                0.8,
                "High uniqueness with numeric values suggests ID field",
                alternative_types=[
                    AlternativeType(field_type=FieldType.TEXT, confidence=0.6, reasoning="Could be text ID"),
                ],
            )

        if profile.has_data and unique_ratio < LOW_UNIQUE_RATIO and profile.unique_count <= MAX_SELECT_VALUES:
            return self.result(
                FieldType.SELECT,
                0.8,
                f"Low uniqueness ({profile.unique_count} unique values) suggests selection field",
                alternative_types=[
                    AlternativeType(field_type=FieldType.RADIO, confidence=0.7, reasoning="Could be radio buttons"),
                    AlternativeType(field_type=FieldType.CHECKBOX, confidence=0.5, reasoning="Could be checkbox group"),
                ],
            )

        if avg_length > LONG_TEXT_LENGTH:
            return self.result(
                FieldType.TEXTAREA,
                0.7,
                f"Long text content (avg {round(avg_length)} chars) suggests textarea",
                alternative_types=[
                    AlternativeType(field_type=FieldType.RICH_TEXT, confidence=0.6, reasoning="Could be rich text"),
                ],
            )

        if profile.null_ratio > HIGH_NULL_RATIO:
            return self.fallback("High null ratio suggests optional text field", confidence=0.6)

        return self.fallback("Statistical analysis inconclusive", confidence=0.5)

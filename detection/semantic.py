# =============================================================================
# detection/semantic.py - Header Keyword Strategy
# =============================================================================
# Looks at the column header only. An exact keyword match wins outright;
# otherwise the first keyword (in catalog order) contained in the header
# wins with its confidence scaled down by the partial-match factor.
# =============================================================================

from core.models import ColumnProfile, DetectionResult
from detection.base import DetectionStrategy
from detection.registry import register_strategy


@register_strategy
class SemanticStrategy(DetectionStrategy):
    """Detect field types from the meaning of the column name."""

    name = "semantic"
    weight = 0.30

    def detect(self, profile: ColumnProfile) -> DetectionResult:
        header = profile.header.strip().lower()
        if not header:
            return self.fallback("Column has no name")

        exact = self.catalog.keyword_index.get(header)
        if exact is not None:
            return self.result(exact.field_type, exact.confidence, exact.reasoning)

        for entry in self.catalog.semantic_keywords:
            if entry.keyword in header:
                confidence = entry.confidence * self.catalog.partial_match_factor
                return self.result(
                    entry.field_type,
                    confidence,
                    f"{entry.reasoning} (partial match)",
                )

        return self.fallback(f"No semantic keyword in column name '{profile.header}'")

# =============================================================================
# detection/contextual.py - Caller Hint Strategy
# =============================================================================
# Uses hints supplied by the caller, such as earlier user corrections keyed
# by lower-cased header. Without a hint for the column it votes a neutral
# `text` so the combiner always sees one result per registered strategy.
# =============================================================================

from core.models import ColumnProfile, DetectionResult
from detection.base import DetectionStrategy
from detection.registry import register_strategy

HINT_CONFIDENCE = 0.9
NEUTRAL_CONFIDENCE = 0.3


@register_strategy
class ContextualStrategy(DetectionStrategy):
    """Detect field types from caller-supplied context."""

    name = "contextual"
    weight = 0.10

    def detect(self, profile: ColumnProfile) -> DetectionResult:
        hinted = self.hints.get(profile.header.strip().lower())
        if hinted is not None:
            return self.result(hinted, HINT_CONFIDENCE, "Caller hint")
        return self.fallback("Contextual analysis not available", confidence=NEUTRAL_CONFIDENCE)

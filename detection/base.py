# =============================================================================
# detection/base.py - Detection Strategy Base Class
# =============================================================================
# Every detection strategy is a small class with a fixed name and combiner
# weight, built once per pipeline run from the read-only catalog.
# =============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from core.models import ColumnProfile, DetectionResult, FieldType
from detection.catalog import DetectionCatalog

# Confidence of the fallback verdict when a strategy finds nothing
NO_SIGNAL_CONFIDENCE = 0.1


class DetectionStrategy(ABC):
    """
    Abstract base class for all detection strategies.

    Every strategy must:
    - set `name` and `weight` class attributes
    - implement detect(profile) -> DetectionResult

    detect() must never raise for ordinary data: when nothing matches it
    returns `text` with a low confidence.

    Example:
        @register_strategy
        class LengthStrategy(DetectionStrategy):
            name = "length"
            weight = 0.05

            def detect(self, profile):
                if profile.avg_length > 500:
                    return self.result(FieldType.MARKDOWN, 0.6, "Very long text")
                return self.fallback("No length signal")
    """

    name: str = ""
    weight: float = 0.0

    def __init__(
        self,
        catalog: DetectionCatalog,
        hints: Mapping[str, FieldType] | None = None,
    ):
        """
        Args:
            catalog: Shared read-only detection catalog
            hints: Lower-cased header -> field type hints from the caller
        """
        self.catalog = catalog
        self.hints = hints or {}

    @abstractmethod
    def detect(self, profile: ColumnProfile) -> DetectionResult:
        """Return this strategy's verdict for one column."""
        pass

    # -------------------------------------------------------------------------
    # Helpers for subclasses
    # -------------------------------------------------------------------------

    def result(
        self,
        field_type: FieldType,
        confidence: float,
        reasoning: str,
        **kwargs,
    ) -> DetectionResult:
        confidence = min(max(confidence, 0.0), 1.0)
        kwargs.setdefault("peak_confidence", confidence)
        return DetectionResult(
            field_type=field_type,
            confidence=confidence,
            reasoning=reasoning,
            strategy=self.name,
            **kwargs,
        )

    def fallback(self, reasoning: str, confidence: float = NO_SIGNAL_CONFIDENCE) -> DetectionResult:
        return self.result(FieldType.TEXT, confidence, reasoning)

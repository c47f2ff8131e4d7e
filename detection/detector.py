# =============================================================================
# detection/detector.py - Per-Column Detection Driver
# =============================================================================
# Runs every registered strategy over each column profile and combines the
# verdicts. Columns are independent, so a batch can fan out over a thread
# pool; results always come back in column order.
#
# Usage:
#   detector = FieldTypeDetector(hints={"status": FieldType.RADIO})
#   result = detector.detect(profiles, overrides={0: FieldOverride(...)})
#   for detection in result.data:
#       print(detection.field_type, detection.confidence)
# =============================================================================

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Mapping, Sequence

from core.config import EngineSettings, get_settings
from core.exceptions import DetectionError, FormSchemaError
from core.models import ColumnProfile, DetectionResult, FieldOverride, FieldType, Result
from detection.base import DetectionStrategy
from detection.catalog import DetectionCatalog, get_catalog
from detection.combiner import combine
from detection.registry import get_strategies
from lib.utils import StageTimer

logger = logging.getLogger(__name__)

OVERRIDE_REASONING = "Pinned by caller override"


def pinned_result(override: FieldOverride) -> DetectionResult:
    """Detection result for a column whose type the caller pinned."""
    return DetectionResult(
        field_type=override.field_type,
        confidence=1.0,
        reasoning=OVERRIDE_REASONING,
        strategy="override",
        peak_confidence=1.0,
    )


class FieldTypeDetector:
    """
    Drives all registered detection strategies for a set of columns.

    Strategy instances are built once per detector and hold only read-only
    state, so one detector can serve several threads.
    """

    def __init__(
        self,
        catalog: DetectionCatalog | None = None,
        hints: Mapping[str, FieldType] | None = None,
        settings: EngineSettings | None = None,
    ):
        self.catalog = catalog or get_catalog()
        self.settings = settings or get_settings()
        normalized_hints = {k.strip().lower(): v for k, v in (hints or {}).items()}
        self.strategies: list[DetectionStrategy] = [
            strategy_cls(self.catalog, normalized_hints) for strategy_cls in get_strategies()
        ]
        self.weights = [strategy.weight for strategy in self.strategies]

    # -------------------------------------------------------------------------
    # Single Column
    # -------------------------------------------------------------------------

    def run_strategy(self, strategy: DetectionStrategy, profile: ColumnProfile) -> DetectionResult:
        """Run one strategy; a failing strategy degrades to text at 0.0."""
        try:
            return strategy.detect(profile)
        except Exception as e:
            logger.warning(
                f"Strategy '{strategy.name}' failed on column {profile.index} "
                f"'{profile.header}': {e}"
            )
            return DetectionResult(
                field_type=FieldType.TEXT,
                confidence=0.0,
                reasoning=f"{strategy.name} strategy failed",
                strategy=strategy.name,
            )

    def strategy_results(self, profile: ColumnProfile) -> list[DetectionResult]:
        """Every strategy's verdict for one column, in registration order."""
        return [self.run_strategy(strategy, profile) for strategy in self.strategies]

    def detect_column(self, profile: ColumnProfile) -> DetectionResult:
        """Combined detection result for one column."""
        combined = combine(self.strategy_results(profile), self.weights)
        logger.debug(
            f"Column {profile.index} '{profile.header}' -> {combined.field_type.value} "
            f"({combined.confidence:.2f})"
        )
        return combined

    # -------------------------------------------------------------------------
    # Batch
    # -------------------------------------------------------------------------

    def detect_columns(
        self,
        profiles: Sequence[ColumnProfile],
        overrides: Mapping[int, FieldOverride] | None = None,
    ) -> list[DetectionResult]:
        """
        Detect every column, in column order.

        Columns whose override pins a field type skip detection entirely.
        """
        overrides = overrides or {}

        def detect_one(profile: ColumnProfile) -> DetectionResult:
            override = overrides.get(profile.index)
            if override is not None and override.field_type is not None:
                return pinned_result(override)
            return self.detect_column(profile)

        workers = self.settings.DETECTION_WORKERS
        if workers > 1 and len(profiles) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order
                return list(executor.map(detect_one, profiles))

        return [detect_one(profile) for profile in profiles]

    def detect(
        self,
        profiles: Sequence[ColumnProfile],
        overrides: Mapping[int, FieldOverride] | None = None,
    ) -> Result[list[DetectionResult]]:
        """
        Result-returning variant of detect_columns().

        Returns:
            Result with one DetectionResult per profile, or a DETECTION_ERROR
        """
        timer = StageTimer("detect")
        try:
            with timer.stage("detection"):
                detections = self.detect_columns(profiles, overrides)
        except FormSchemaError as e:
            logger.warning(f"detect failed: {e}")
            return Result.fail(e.to_error(stage="detection"), metadata=timer.as_metadata())
        except Exception as e:
            logger.exception("Unexpected error during field type detection")
            error = DetectionError("Failed to detect field types", details={"error": str(e)})
            return Result.fail(error.to_error(stage="detection"), metadata=timer.as_metadata())

        logger.info(f"Detected field types for {len(detections)} columns")
        return Result.ok(detections, metadata=timer.as_metadata())

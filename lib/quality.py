# =============================================================================
# lib/quality.py - Quality Analyzer
# =============================================================================
# Table-wide quality metrics and the generation-complexity preview.
#
# Metrics (all in [0, 1], all 0.0 for a table with no cells):
#   completeness = 1 - empty cells / (rows x columns)
#   consistency  = mean combined detection confidence per column
#   uniqueness   = mean (unique values / rows) per column
#   validity     = consistency (values are not re-parsed)
#
# Complexity:
#   0.3 x (1 - completeness) + 0.3 x (1 - consistency) + 0.2 x (1 - validity)
#   + 0.1 x columns with a value pattern + min(distinct types / 10, 0.2)
#   clamped to [0, 1]
# =============================================================================

import logging
from typing import Sequence

import numpy as np

from core.models import ColumnProfile, CsvTable, DetectionResult, FormPreview, QualityMetrics

logger = logging.getLogger(__name__)

# Preview thresholds
MIN_COMPLETENESS = 0.8
MAX_COMPLEXITY = 0.7
MIN_FIELD_CONFIDENCE = 0.6

MISSING_DATA_IMPROVEMENT = "Consider cleaning up missing data for better form generation"
COMPLEX_DATA_IMPROVEMENT = "Complex data detected - manual review recommended"
LOW_CONFIDENCE_IMPROVEMENT = "Some fields have low confidence detection - review recommended"


def _clamp(value: float) -> float:
    return float(min(max(value, 0.0), 1.0))


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(np.mean(values))


# =============================================================================
# Metrics
# =============================================================================

def analyze(
    table: CsvTable,
    profiles: Sequence[ColumnProfile],
    detections: Sequence[DetectionResult],
) -> QualityMetrics:
    """
    Compute table-wide quality metrics.

    Args:
        table: The tokenized table
        profiles: One profile per column
        detections: Combined detection result per analyzed column

    Example:
        metrics = analyze(table, profiles, detections)
        metrics.completeness  # 1.0 for a table without empty cells
    """
    total_cells = table.row_count * table.column_count
    if total_cells == 0:
        logger.debug("Quality analysis on a table with no cells")
        return QualityMetrics()

    null_cells = sum(p.null_count for p in profiles)
    completeness = 1 - null_cells / total_cells

    consistency = _mean([d.confidence for d in detections])
    uniqueness = _mean([p.unique_count / table.row_count for p in profiles])

    return QualityMetrics(
        completeness=_clamp(completeness),
        consistency=_clamp(consistency),
        uniqueness=_clamp(uniqueness),
        validity=_clamp(consistency),
    )


# =============================================================================
# Preview
# =============================================================================

def complexity_score(metrics: QualityMetrics, detections: Sequence[DetectionResult]) -> float:
    """How much manual review a generated form is likely to need, in [0, 1]."""
    score = 0.0
    score += (1 - metrics.completeness) * 0.3
    score += (1 - metrics.consistency) * 0.3
    score += (1 - metrics.validity) * 0.2

    pattern_count = sum(1 for d in detections if d.pattern)
    score += pattern_count * 0.1

    distinct_types = len({d.field_type for d in detections})
    score += min(distinct_types / 10, 0.2)

    return _clamp(score)


def build_preview(
    metrics: QualityMetrics,
    detections: Sequence[DetectionResult],
    estimated_fields: int,
) -> FormPreview:
    """
    Assemble the preview shown before full generation.

    User interaction is required when the data is complex or incomplete.
    """
    score = complexity_score(metrics, detections)

    improvements = []
    if metrics.completeness < MIN_COMPLETENESS:
        improvements.append(MISSING_DATA_IMPROVEMENT)
    if score > MAX_COMPLEXITY:
        improvements.append(COMPLEX_DATA_IMPROVEMENT)
    if any(d.confidence < MIN_FIELD_CONFIDENCE for d in detections):
        improvements.append(LOW_CONFIDENCE_IMPROVEMENT)

    return FormPreview(
        estimated_fields=estimated_fields,
        complexity_score=score,
        user_interaction_required=score > MAX_COMPLEXITY or metrics.completeness < MIN_COMPLETENESS,
        suggested_improvements=improvements,
        quality_metrics=metrics,
    )

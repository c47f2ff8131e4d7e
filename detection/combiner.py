# =============================================================================
# detection/combiner.py - Weighted Vote Combiner
# =============================================================================
# Merges one DetectionResult per strategy into a single ranked decision.
#
# Each strategy's confidence is multiplied by its weight and added to the
# score of the type it voted for. The type with the strictly highest score
# wins (types are visited in first-seen order, so the pattern strategy's
# type wins exact ties). Every other type scoring above 0.1 becomes an
# alternative.
# =============================================================================

from __future__ import annotations

from typing import Sequence

from core.exceptions import DetectionError
from core.models import AlternativeType, DetectionResult, FieldType

# Pattern, semantic, statistical, contextual
DEFAULT_WEIGHTS: tuple[float, ...] = (0.40, 0.30, 0.20, 0.10)

MIN_ALTERNATIVE_SCORE = 0.1
MAX_ALTERNATIVES = 3


def combine(
    results: Sequence[DetectionResult],
    weights: Sequence[float] = DEFAULT_WEIGHTS,
) -> DetectionResult:
    """
    Combine per-strategy verdicts into one result.

    Args:
        results: One result per strategy, in strategy order
        weights: One weight per result, applied positionally

    Returns:
        Combined DetectionResult with strategy="combined"

    Raises:
        DetectionError: If results and weights differ in length

    Example:
        combined = combine([pattern, semantic, statistical, contextual])
        combined.field_type        # FieldType.EMAIL
        combined.confidence        # 0.665 (0.95 * 0.4 + 0.95 * 0.3)
        combined.peak_confidence   # 0.95
    """
    if len(results) != len(weights):
        raise DetectionError(
            "Each strategy result needs exactly one weight",
            details={"results": len(results), "weights": len(weights)},
        )

    scores: dict[FieldType, float] = {}
    reasons: dict[FieldType, list[str]] = {}
    voters: dict[FieldType, list[DetectionResult]] = {}

    for result, weight in zip(results, weights):
        field_type = result.field_type
        scores[field_type] = scores.get(field_type, 0.0) + result.confidence * weight
        reasons.setdefault(field_type, []).append(result.reasoning)
        voters.setdefault(field_type, []).append(result)

    best_type, best_score = FieldType.TEXT, 0.0
    for field_type, score in scores.items():
        if score > best_score:
            best_type, best_score = field_type, score

    alternatives = sorted(
        (
            AlternativeType(
                field_type=field_type,
                confidence=min(score, 1.0),
                reasoning="; ".join(reasons[field_type]) or "Alternative detection",
            )
            for field_type, score in scores.items()
            if field_type != best_type and score > MIN_ALTERNATIVE_SCORE
        ),
        key=lambda alt: alt.confidence,
        reverse=True,
    )[:MAX_ALTERNATIVES]

    backers = voters.get(best_type, [])
    pattern = next((r.pattern for r in backers if r.pattern), None)
    peak = max((r.confidence for r in backers), default=0.0)

    return DetectionResult(
        field_type=best_type,
        confidence=min(best_score, 1.0),
        reasoning="; ".join(reasons.get(best_type, [])) or "Combined detection result",
        alternative_types=alternatives,
        strategy="combined",
        pattern=pattern,
        peak_confidence=peak,
    )

# =============================================================================
# detection/pattern.py - Value Pattern Strategy
# =============================================================================
# Matches the column's sample values against the catalog's value regexes.
#
# A rule is accepted when more than 70% of the sample matches it. Among
# accepted rules the one with the strictly greatest confidence x match ratio
# wins, so on equal scores the earlier (higher-priority) rule is kept.
# =============================================================================

import logging

from core.models import AlternativeType, ColumnProfile, DetectionResult
from detection.base import DetectionStrategy
from detection.registry import register_strategy

logger = logging.getLogger(__name__)

# Share of sample values that must match before a rule counts
MIN_MATCH_RATIO = 0.7


@register_strategy
class PatternStrategy(DetectionStrategy):
    """Detect field types from what the values look like."""

    name = "pattern"
    weight = 0.40

    def detect(self, profile: ColumnProfile) -> DetectionResult:
        sample = profile.sample_values
        if not sample:
            return self.fallback("No values to match against patterns")

        # (score, rule, ratio) for every accepted rule, in priority order
        accepted = []
        for rule in self.catalog.pattern_rules:
            matched = sum(1 for value in sample if rule.matches(value))
            ratio = matched / len(sample)
            if ratio > MIN_MATCH_RATIO:
                accepted.append((rule.confidence * ratio, rule, ratio))

        if not accepted:
            return self.fallback("No value pattern matched")

        best_score, best_rule, best_ratio = accepted[0]
        for score, rule, ratio in accepted[1:]:
            if score > best_score:
                best_score, best_rule, best_ratio = score, rule, ratio

        # Stable sort keeps priority order among equal scores
        runners_up = sorted(
            (entry for entry in accepted if entry[1] is not best_rule),
            key=lambda entry: entry[0],
            reverse=True,
        )
        alternatives = [
            AlternativeType(
                field_type=rule.field_type,
                confidence=round(score, 6),
                reasoning=f"{rule.reasoning} ({ratio:.0%} of sample)",
            )
            for score, rule, ratio in runners_up[:3]
        ]

        logger.debug(
            f"Column '{profile.header}': pattern '{best_rule.name}' matched "
            f"{best_ratio:.0%} of {len(sample)} sample values"
        )

        return self.result(
            best_rule.field_type,
            best_score,
            best_rule.reasoning,
            alternative_types=alternatives,
            pattern=best_rule.regex.pattern,
        )

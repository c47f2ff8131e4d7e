# =============================================================================
# generation/recommender.py - Field Recommender
# =============================================================================
# Turns a column profile plus its combined detection result into a concrete
# FieldSpec: label, type, required flag, placeholder, options, validation
# rules, widget properties and UI hints.
#
# Caller overrides win over everything generated here:
#   - override.field_type    -> type pinned, confidence 1.0
#   - override.required      -> replaces the inferred flag
#   - override.options       -> replaces the generated option list
#   - override.validation_rules -> replaces the generated rules
#
# Required inference: a field is required when fewer than 20% of its cells
# are empty AND the strongest single strategy backing its type was more than
# 70% sure (peak_confidence, not the weighted combined confidence).
# =============================================================================

import logging
import math
from typing import Any

from core.config import EngineSettings, get_settings
from core.models import (
    CHOICE_TYPES,
    FREE_TEXT_TYPES,
    ColumnProfile,
    DetectionResult,
    DetectionStrategyMode,
    FieldOverride,
    FieldSpec,
    FieldType,
    HintKind,
    RuleKind,
    UIHint,
    ValidationRule,
)
from detection.catalog import DetectionCatalog, get_catalog
from generation.placeholders import DATE_FORMAT, placeholder_for, widget_properties
from lib.utils import field_id

logger = logging.getLogger(__name__)

# Suggestions at or below this confidence are not turned into rules
MIN_RULE_CONFIDENCE = 0.7

REQUIRED_RULE_CONFIDENCE = 0.9
MAX_LENGTH_RULE_CONFIDENCE = 0.8
MIN_MAX_LENGTH = 255
DEFAULT_PATTERN_CONFIDENCE = 0.9


class FieldRecommender:
    """
    Builds FieldSpecs from detection results.

    Stateless apart from read-only settings and catalog, so one instance
    can serve a whole pipeline run.

    Example:
        recommender = FieldRecommender()
        spec = recommender.recommend(profile, combined)
        spec.required           # True
        spec.validation_rules   # [required, pattern]
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        catalog: DetectionCatalog | None = None,
        mode: DetectionStrategyMode = DetectionStrategyMode.AUTO,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog or get_catalog()
        self.mode = mode

    # -------------------------------------------------------------------------
    # Type Selection
    # -------------------------------------------------------------------------

    def select_field_type(
        self,
        profile: ColumnProfile,
        detection: DetectionResult,
        warnings: list[str] | None = None,
    ) -> FieldType:
        """
        Final field type for a detected (not pinned) column.

        Conservative mode falls back to text below the conservative
        threshold; aggressive mode only at or below the much lower
        aggressive threshold. Choice types with too many distinct values
        to list are downgraded to text with a warning.
        """
        field_type = detection.field_type

        if (
            self.mode == DetectionStrategyMode.CONSERVATIVE
            and detection.confidence < self.settings.CONSERVATIVE_THRESHOLD
        ):
            logger.debug(
                f"Column '{profile.header}': conservative mode keeps text over "
                f"{field_type.value} ({detection.confidence:.2f})"
            )
            field_type = FieldType.TEXT

        if (
            self.mode == DetectionStrategyMode.AGGRESSIVE
            and detection.confidence <= self.settings.AGGRESSIVE_THRESHOLD
        ):
            logger.debug(
                f"Column '{profile.header}': aggressive mode needs more than "
                f"{self.settings.AGGRESSIVE_THRESHOLD:.2f} for {field_type.value}"
            )
            field_type = FieldType.TEXT

        if field_type in CHOICE_TYPES and profile.unique_count > self.settings.MAX_OPTIONS:
            message = (
                f'Field "{profile.header}" has {profile.unique_count} distinct values, '
                f"too many for a {field_type.value}; using text instead"
            )
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
            field_type = FieldType.TEXT

        return field_type

    def is_required(self, profile: ColumnProfile, detection: DetectionResult) -> bool:
        return (
            profile.null_ratio < self.settings.REQUIRED_NULL_RATIO
            and detection.peak_confidence > self.settings.REQUIRED_CONFIDENCE
        )

    # -------------------------------------------------------------------------
    # Options and Rules
    # -------------------------------------------------------------------------

    def generate_options(self, field_type: FieldType, profile: ColumnProfile) -> list[str] | None:
        """Option list from the column's distinct values, first-seen order."""
        if field_type not in CHOICE_TYPES:
            return None
        if profile.unique_count > self.settings.MAX_OPTIONS:
            return None
        return list(profile.unique_values)

    def pattern_suggestion(
        self,
        field_type: FieldType,
        detection: DetectionResult,
    ) -> ValidationRule | None:
        """
        Pattern rule for a field.

        Prefers the regex of the value pattern that voted for the winning
        type; otherwise the catalog's validation pattern for the type.
        """
        validation = self.catalog.validation_patterns.get(field_type)

        if detection.pattern and detection.field_type == field_type:
            rule = self.catalog.rule_for_pattern(detection.pattern)
            return ValidationRule(
                kind=RuleKind.PATTERN,
                value=detection.pattern,
                message=validation.message if validation else f"Please enter a valid {field_type.value}",
                confidence=rule.confidence if rule else DEFAULT_PATTERN_CONFIDENCE,
            )

        if validation is not None:
            return ValidationRule(
                kind=RuleKind.PATTERN,
                value=validation.pattern,
                message=validation.message,
                confidence=validation.confidence,
            )
        return None

    def generate_rules(
        self,
        field_type: FieldType,
        profile: ColumnProfile,
        detection: DetectionResult,
        required: bool,
    ) -> list[ValidationRule]:
        suggestions: list[ValidationRule] = []

        if required:
            suggestions.append(ValidationRule(
                kind=RuleKind.REQUIRED,
                value=True,
                message=f"{profile.header} is required",
                confidence=REQUIRED_RULE_CONFIDENCE,
            ))

        pattern = self.pattern_suggestion(field_type, detection)
        if pattern is not None:
            suggestions.append(pattern)

        if field_type in FREE_TEXT_TYPES:
            max_length = math.ceil(max(profile.avg_length * 2, MIN_MAX_LENGTH))
            suggestions.append(ValidationRule(
                kind=RuleKind.MAX_LENGTH,
                value=max_length,
                message=f"Maximum length is {max_length} characters",
                confidence=MAX_LENGTH_RULE_CONFIDENCE,
            ))

        return [rule for rule in suggestions if rule.confidence > MIN_RULE_CONFIDENCE]

    # -------------------------------------------------------------------------
    # UI Hints
    # -------------------------------------------------------------------------

    def generate_ui_hints(
        self,
        field_type: FieldType,
        placeholder: str,
        options: list[str] | None,
    ) -> list[UIHint]:
        hints = [UIHint(kind=HintKind.PLACEHOLDER, value=placeholder, description="Suggested placeholder text")]

        if options is not None:
            hints.append(UIHint(kind=HintKind.OPTIONS, value=list(options), description="Suggested options based on data"))

        if field_type == FieldType.DATE:
            hints.append(UIHint(kind=HintKind.FORMAT, value=DATE_FORMAT, description="Suggested date format"))

        return hints

    # -------------------------------------------------------------------------
    # Recommendation
    # -------------------------------------------------------------------------

    def recommend(
        self,
        profile: ColumnProfile,
        detection: DetectionResult,
        override: FieldOverride | None = None,
        warnings: list[str] | None = None,
    ) -> FieldSpec:
        """
        Build the FieldSpec for one column.

        Args:
            profile: Column statistics
            detection: Combined detection result for the column
            override: Caller-pinned outcome, if any
            warnings: List that non-fatal problems are appended to

        Returns:
            FieldSpec (immutable)
        """
        pinned = override is not None and override.field_type is not None

        if pinned:
            field_type = override.field_type
            confidence = 1.0
        else:
            field_type = self.select_field_type(profile, detection, warnings)
            confidence = detection.confidence

        if override is not None and override.required is not None:
            required = override.required
        else:
            required = self.is_required(profile, detection)

        if override is not None and override.options is not None:
            options = list(override.options)
        else:
            options = self.generate_options(field_type, profile)

        if override is not None and override.validation_rules is not None:
            rules = list(override.validation_rules)
        else:
            rules = self.generate_rules(field_type, profile, detection, required)

        placeholder = placeholder_for(field_type, profile.header)
        properties: dict[str, Any] = widget_properties(field_type)

        return FieldSpec(
            id=field_id(profile.index, profile.header),
            column_index=profile.index,
            label=profile.header,
            field_type=field_type,
            confidence=confidence,
            required=required,
            placeholder=placeholder,
            options=options,
            validation_rules=rules,
            properties=properties,
            ui_hints=self.generate_ui_hints(field_type, placeholder, options),
            reasoning=detection.reasoning,
            overridden=pinned,
        )

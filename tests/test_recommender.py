# =============================================================================
# tests/test_recommender.py - Field Recommender Tests
# =============================================================================
# Tests for generation/recommender.py and generation/placeholders.py.
# Covers:
#   - Required inference (deliberate use of peak confidence)
#   - Validation rule generation and the confidence gate
#   - Overrides, conservative mode and option downgrades
#   - Placeholders, widget properties and UI hints
#
# Run with: pytest tests/test_recommender.py -v
# =============================================================================

import pytest

from core.models import (
    AlternativeType,
    DetectionResult,
    DetectionStrategyMode,
    FieldOverride,
    FieldType,
    HintKind,
    RuleKind,
    ValidationRule,
)
from detection import FieldTypeDetector, pinned_result
from detection.catalog import EMAIL_REGEX, PERCENTAGE_REGEX, PHONE_REGEX
from generation import FieldRecommender, placeholder_for, widget_properties


@pytest.fixture
def recommender(engine_settings):
    return FieldRecommender(engine_settings)


@pytest.fixture
def detect(engine_settings):
    detector = FieldTypeDetector(settings=engine_settings)
    return detector.detect_column


# =============================================================================
# Required Inference
# =============================================================================

class TestRequired:
    """
    Required inference is a deliberate behavioral choice: null ratio below
    0.2 AND peak single-strategy confidence above 0.7. A clean email column
    has a weighted combined confidence of only 0.665, yet must be required.
    """

    def test_required_uses_peak_confidence_not_weighted_score(self, recommender, detect, make_profile):
        profile = make_profile(["alice@x.com", "bob@x.com"], header="email", index=1)
        combined = detect(profile)

        spec = recommender.recommend(profile, combined)

        assert combined.confidence < 0.7
        assert combined.peak_confidence > 0.7
        assert spec.required is True

    def test_sparse_column_is_optional(self, recommender, detect, make_profile):
        profile = make_profile(["alice@x.com", "", "bob@x.com", ""], header="email")
        spec = recommender.recommend(profile, detect(profile))

        assert spec.field_type == FieldType.EMAIL
        assert spec.required is False

    def test_low_peak_confidence_is_optional(self, recommender, detect, make_profile):
        profile = make_profile(["Alice", "Bob"], header="name")
        spec = recommender.recommend(profile, detect(profile))

        assert spec.required is False

    def test_override_required_wins(self, recommender, detect, make_profile):
        profile = make_profile(["alice@x.com", "bob@x.com"], header="email")
        override = FieldOverride(column_index=0, required=False)

        spec = recommender.recommend(profile, detect(profile), override)

        assert spec.required is False
        assert all(rule.kind != RuleKind.REQUIRED for rule in spec.validation_rules)


# =============================================================================
# Validation Rules
# =============================================================================

class TestValidationRules:
    """Tests for generated validation rules."""

    def test_email_rules(self, recommender, detect, make_profile):
        profile = make_profile(["alice@x.com", "bob@x.com"], header="email", index=1)
        spec = recommender.recommend(profile, detect(profile))

        kinds = [rule.kind for rule in spec.validation_rules]
        assert kinds == [RuleKind.REQUIRED, RuleKind.PATTERN]
        pattern = spec.validation_rules[1]
        assert pattern.value == EMAIL_REGEX
        assert pattern.message == "Please enter a valid email address"
        assert pattern.confidence > 0.7

    def test_pattern_from_catalog_when_no_value_pattern_voted(self, recommender, make_profile):
        profile = make_profile(["call me", "later"], header="phone")
        detection = DetectionResult(field_type=FieldType.PHONE, confidence=0.27, peak_confidence=0.9)

        spec = recommender.recommend(profile, detection)

        pattern = next(r for r in spec.validation_rules if r.kind == RuleKind.PATTERN)
        assert pattern.value == PHONE_REGEX
        assert pattern.message == "Please enter a valid phone number"

    def test_percentage_pattern_from_value_pattern(self, recommender, detect, make_profile):
        profile = make_profile(["10%", "15%", "5%"], header="discount")
        detection = detect(profile)
        spec = recommender.recommend(profile, detection)

        assert spec.field_type == FieldType.PERCENTAGE
        pattern = next(r for r in spec.validation_rules if r.kind == RuleKind.PATTERN)
        assert pattern.value == PERCENTAGE_REGEX
        assert pattern.confidence == pytest.approx(0.8)

    def test_max_length_for_short_text(self, recommender, make_profile):
        profile = make_profile(["short", "words"], header="nickname")
        detection = DetectionResult(field_type=FieldType.TEXT, confidence=0.2, peak_confidence=0.5)

        spec = recommender.recommend(profile, detection)

        max_length = next(r for r in spec.validation_rules if r.kind == RuleKind.MAX_LENGTH)
        assert max_length.value == 255
        assert max_length.message == "Maximum length is 255 characters"

    def test_max_length_for_long_text(self, recommender, make_profile):
        profile = make_profile(["x" * 200, "y" * 201], header="bio")
        detection = DetectionResult(field_type=FieldType.TEXTAREA, confidence=0.3, peak_confidence=0.7)

        spec = recommender.recommend(profile, detection)

        max_length = next(r for r in spec.validation_rules if r.kind == RuleKind.MAX_LENGTH)
        assert max_length.value == 401

    def test_no_max_length_for_typed_fields(self, recommender, detect, make_profile):
        profile = make_profile(["https://a.io", "https://b.io"], header="website")
        spec = recommender.recommend(profile, detect(profile))

        assert all(rule.kind != RuleKind.MAX_LENGTH for rule in spec.validation_rules)

    def test_all_rules_pass_confidence_gate(self, recommender, detect, make_profile):
        profile = make_profile(["1", "2", "3", "4"], header="quantity")
        spec = recommender.recommend(profile, detect(profile))

        assert all(rule.confidence > 0.7 for rule in spec.validation_rules)

    def test_override_rules_replace_generated(self, recommender, detect, make_profile):
        profile = make_profile(["alice@x.com", "bob@x.com"], header="email")
        rules = [ValidationRule(kind=RuleKind.MAX_LENGTH, value=64, message="Too long")]
        override = FieldOverride(column_index=0, validation_rules=rules)

        spec = recommender.recommend(profile, detect(profile), override)

        assert spec.validation_rules == rules


# =============================================================================
# Type Selection
# =============================================================================

class TestTypeSelection:
    """Tests for override pinning, conservative mode and downgrades."""

    def test_pinned_type_has_full_confidence(self, recommender, make_profile):
        profile = make_profile(["alice@x.com"], header="email")
        override = FieldOverride(column_index=0, field_type=FieldType.PHONE)

        spec = recommender.recommend(profile, pinned_result(override), override)

        assert spec.field_type == FieldType.PHONE
        assert spec.confidence == 1.0
        assert spec.overridden is True

    def test_conservative_mode_falls_back_to_text(self, engine_settings, detect, make_profile):
        recommender = FieldRecommender(engine_settings, mode=DetectionStrategyMode.CONSERVATIVE)
        profile = make_profile(["alice@x.com", "bob@x.com"], header="email")

        spec = recommender.recommend(profile, detect(profile))

        assert spec.field_type == FieldType.TEXT
        assert any(rule.kind == RuleKind.MAX_LENGTH for rule in spec.validation_rules)

    def test_conservative_mode_keeps_confident_types(self, engine_settings, make_profile):
        recommender = FieldRecommender(engine_settings, mode=DetectionStrategyMode.CONSERVATIVE)
        profile = make_profile(["alice@x.com"], header="email")
        detection = DetectionResult(field_type=FieldType.EMAIL, confidence=0.85, peak_confidence=0.95)

        assert recommender.recommend(profile, detection).field_type == FieldType.EMAIL

    def test_aggressive_mode_keeps_types_above_low_bar(self, engine_settings, detect, make_profile):
        recommender = FieldRecommender(engine_settings, mode=DetectionStrategyMode.AGGRESSIVE)
        profile = make_profile(["alice@x.com", "bob@x.com"], header="email")

        # Combined confidence is 0.665: too low for conservative, enough here
        assert recommender.recommend(profile, detect(profile)).field_type == FieldType.EMAIL

    def test_aggressive_mode_falls_back_at_threshold(self, engine_settings, make_profile):
        recommender = FieldRecommender(engine_settings, mode=DetectionStrategyMode.AGGRESSIVE)
        profile = make_profile(["a", "b"], header="grade")
        detection = DetectionResult(field_type=FieldType.SELECT, confidence=0.5, peak_confidence=0.8)

        assert recommender.recommend(profile, detection).field_type == FieldType.TEXT

    def test_too_many_options_downgrades_to_text(self, recommender, make_profile):
        values = [f"value {i}" for i in range(25)]
        profile = make_profile(values, header="category")
        detection = DetectionResult(field_type=FieldType.SELECT, confidence=0.5, peak_confidence=0.8)
        warnings = []

        spec = recommender.recommend(profile, detection, warnings=warnings)

        assert spec.field_type == FieldType.TEXT
        assert spec.options is None
        assert len(warnings) == 1
        assert "25 distinct values" in warnings[0]

    def test_choice_options_first_seen_order(self, recommender, make_profile):
        profile = make_profile(["b", "a", "b", "c"], header="grade")
        detection = DetectionResult(field_type=FieldType.RADIO, confidence=0.5, peak_confidence=0.8)

        spec = recommender.recommend(profile, detection)

        assert spec.options == ["b", "a", "c"]

    def test_override_options_replace_generated(self, recommender, make_profile):
        profile = make_profile(["b", "a"], header="grade")
        detection = DetectionResult(field_type=FieldType.SELECT, confidence=0.5, peak_confidence=0.8)
        override = FieldOverride(column_index=0, options=["A", "B", "C"])

        spec = recommender.recommend(profile, detection, override)

        assert spec.options == ["A", "B", "C"]

    def test_non_choice_types_have_no_options(self, recommender, detect, make_profile):
        profile = make_profile(["alice@x.com"], header="email")
        assert recommender.recommend(profile, detect(profile)).options is None


# =============================================================================
# Presentation
# =============================================================================

class TestPresentation:
    """Tests for ids, placeholders, widget properties and UI hints."""

    def test_field_id_and_label(self, recommender, detect, make_profile):
        profile = make_profile(["alice@x.com"], header="Work Email", index=3)
        spec = recommender.recommend(profile, detect(profile))

        assert spec.id == "field_3_work_email"
        assert spec.label == "Work Email"
        assert spec.column_index == 3

    def test_placeholders(self):
        assert placeholder_for(FieldType.EMAIL, "Email") == "Enter email address..."
        assert placeholder_for(FieldType.TEXT, "Full Name") == "Enter full name..."
        assert placeholder_for(FieldType.MONEY, "price") == "$0.00"
        assert placeholder_for(FieldType.DATE, "when") == "Select date..."

    def test_every_field_type_has_a_placeholder(self):
        for field_type in FieldType:
            assert placeholder_for(field_type, "x")

    def test_widget_properties(self):
        assert widget_properties(FieldType.RATING) == {"rating_max": 5}
        assert widget_properties(FieldType.SLIDER) == {"slider_min": 0, "slider_max": 100, "slider_step": 1}
        assert widget_properties(FieldType.TEXTAREA) == {"textarea_rows": 4}
        assert widget_properties(FieldType.MONEY) == {"currency": "USD"}
        assert widget_properties(FieldType.CURRENCY) == {"currency": "USD"}
        assert widget_properties(FieldType.PERCENTAGE) == {"percentage_decimals": 2}
        assert widget_properties(FieldType.EMAIL) == {}

    def test_widget_properties_are_copies(self):
        props = widget_properties(FieldType.RATING)
        props["rating_max"] = 10
        assert widget_properties(FieldType.RATING) == {"rating_max": 5}

    def test_date_format_hint(self, recommender, detect, make_profile):
        profile = make_profile(["01/15/2024", "02/20/2024"], header="joined")
        spec = recommender.recommend(profile, detect(profile))

        hints = {hint.kind: hint.value for hint in spec.ui_hints}
        assert spec.field_type == FieldType.DATE
        assert hints[HintKind.PLACEHOLDER] == "Select date..."
        assert hints[HintKind.FORMAT] == "mm/dd/yyyy"

    def test_options_hint(self, recommender, make_profile):
        profile = make_profile(["a", "b"], header="grade")
        detection = DetectionResult(field_type=FieldType.SELECT, confidence=0.5, peak_confidence=0.8)

        spec = recommender.recommend(profile, detection)

        options_hint = next(h for h in spec.ui_hints if h.kind == HintKind.OPTIONS)
        assert options_hint.value == ["a", "b"]

    def test_reasoning_is_carried(self, recommender, make_profile):
        profile = make_profile(["a"], header="x")
        detection = DetectionResult(
            field_type=FieldType.TEXT,
            confidence=0.2,
            reasoning="Statistical analysis inconclusive",
            alternative_types=[AlternativeType(field_type=FieldType.SELECT, confidence=0.16)],
        )

        assert recommender.recommend(profile, detection).reasoning == "Statistical analysis inconclusive"

# =============================================================================
# tests/test_quality.py - Quality Analyzer Tests
# =============================================================================
# Tests for lib/quality.py.
# Covers:
#   - Completeness, consistency, uniqueness and validity
#   - Empty tables
#   - Complexity score and preview improvements
#
# Run with: pytest tests/test_quality.py -v
# =============================================================================

import pytest

from core.models import CsvTable, DetectionResult, FieldType, QualityMetrics
from lib.profiler import profile
from lib.quality import (
    COMPLEX_DATA_IMPROVEMENT,
    LOW_CONFIDENCE_IMPROVEMENT,
    MISSING_DATA_IMPROVEMENT,
    analyze,
    build_preview,
    complexity_score,
)
from lib.tokenizer import tokenize


def detection(field_type=FieldType.TEXT, confidence=0.5, pattern=None):
    return DetectionResult(field_type=field_type, confidence=confidence, pattern=pattern)


def table_and_profiles(content):
    table = tokenize(content).data
    return table, profile(table).data


# =============================================================================
# Metrics Tests
# =============================================================================

class TestAnalyze:
    """Tests for analyze()."""

    def test_fully_populated_table_is_complete(self):
        table, profiles = table_and_profiles("a,b\n1,x\n2,y\n")
        metrics = analyze(table, profiles, [detection(), detection()])

        assert metrics.completeness == 1.0

    def test_completeness_counts_empty_cells(self):
        table, profiles = table_and_profiles("a,b\n1,\n2,y\n")
        metrics = analyze(table, profiles, [detection(), detection()])

        assert metrics.completeness == pytest.approx(0.75)

    def test_consistency_is_mean_confidence_and_validity_matches(self):
        table, profiles = table_and_profiles("a,b\n1,x\n")
        metrics = analyze(table, profiles, [detection(confidence=0.4), detection(confidence=0.8)])

        assert metrics.consistency == pytest.approx(0.6)
        assert metrics.validity == metrics.consistency

    def test_uniqueness(self):
        table, profiles = table_and_profiles("a,b\n1,x\n2,x\n3,x\n4,x\n")
        metrics = analyze(table, profiles, [detection(), detection()])

        # a: 4/4, b: 1/4
        assert metrics.uniqueness == pytest.approx(0.625)

    def test_empty_table(self):
        table = CsvTable(headers=["a", "b"], rows=[])
        metrics = analyze(table, profile(table).data, [])

        assert metrics == QualityMetrics(completeness=0.0, consistency=0.0, uniqueness=0.0, validity=0.0)

    def test_sparse_fixture(self, sparse_csv):
        table, profiles = table_and_profiles(sparse_csv)
        metrics = analyze(table, profiles, [detection(), detection()])

        # 24 cells, 6 empty comments + 8 empty scores
        assert metrics.completeness == pytest.approx(1 - 14 / 24)

    def test_metrics_in_unit_interval(self, customers_csv):
        table, profiles = table_and_profiles(customers_csv)
        metrics = analyze(table, profiles, [detection(confidence=1.0)] * len(profiles))

        for value in metrics.model_dump().values():
            assert 0.0 <= value <= 1.0


# =============================================================================
# Preview Tests
# =============================================================================

class TestComplexity:
    """Tests for complexity_score() and build_preview()."""

    def test_perfect_metrics_without_detections(self):
        perfect = QualityMetrics(completeness=1.0, consistency=1.0, uniqueness=1.0, validity=1.0)
        assert complexity_score(perfect, []) == 0.0

    def test_patterns_and_type_diversity_add_complexity(self):
        perfect = QualityMetrics(completeness=1.0, consistency=1.0, uniqueness=1.0, validity=1.0)
        detections = [
            detection(FieldType.EMAIL, pattern="x"),
            detection(FieldType.URL, pattern="y"),
        ]

        # 2 patterns x 0.1 + min(2 / 10, 0.2)
        assert complexity_score(perfect, detections) == pytest.approx(0.4)

    def test_type_diversity_is_capped(self):
        perfect = QualityMetrics(completeness=1.0, consistency=1.0, uniqueness=1.0, validity=1.0)
        detections = [detection(field_type) for field_type in list(FieldType)[:6]]

        assert complexity_score(perfect, detections) == pytest.approx(0.2)

    def test_score_is_clamped(self):
        worst = QualityMetrics()
        detections = [detection(pattern="x") for _ in range(5)]

        assert complexity_score(worst, detections) == 1.0

    def test_clean_preview(self):
        metrics = QualityMetrics(completeness=1.0, consistency=0.9, uniqueness=1.0, validity=0.9)
        preview = build_preview(metrics, [detection(confidence=0.9)], estimated_fields=1)

        assert preview.estimated_fields == 1
        assert preview.user_interaction_required is False
        assert preview.suggested_improvements == []
        assert preview.quality_metrics == metrics

    def test_missing_data_requires_interaction(self):
        metrics = QualityMetrics(completeness=0.5, consistency=0.9, uniqueness=1.0, validity=0.9)
        preview = build_preview(metrics, [detection(confidence=0.9)], estimated_fields=1)

        assert preview.user_interaction_required is True
        assert MISSING_DATA_IMPROVEMENT in preview.suggested_improvements

    def test_complex_data_requires_interaction(self):
        preview = build_preview(QualityMetrics(), [detection(confidence=0.9, pattern="x")] * 3, 3)

        assert preview.complexity_score > 0.7
        assert preview.user_interaction_required is True
        assert COMPLEX_DATA_IMPROVEMENT in preview.suggested_improvements

    def test_low_confidence_improvement(self):
        metrics = QualityMetrics(completeness=1.0, consistency=0.9, uniqueness=1.0, validity=0.9)
        preview = build_preview(metrics, [detection(confidence=0.9), detection(confidence=0.3)], 2)

        assert preview.suggested_improvements == [LOW_CONFIDENCE_IMPROVEMENT]

# =============================================================================
# detection - Field Type Detection
# =============================================================================
# Multi-signal classification of CSV columns into form field types.
#
# Key principles:
# - Every strategy is deterministic (same profile = same verdict)
# - Strategies never raise for ordinary data (worst case: low-confidence text)
# - Catalogs and the strategy registry are read-only after import
#
# Architecture:
#   ColumnProfile → [pattern, semantic, statistical, contextual] → combine → DetectionResult
#
# Usage:
#   from detection import FieldTypeDetector
#
#   detector = FieldTypeDetector()
#   combined = detector.detect_column(profile)
# =============================================================================

from detection.base import DetectionStrategy
from detection.catalog import DetectionCatalog, get_catalog
from detection.registry import (
    STRATEGY_REGISTRY,
    get_strategies,
    get_strategy,
    list_strategies,
    register_strategy,
)

# Import strategies to register them, in run order
# This must come after registry imports
from detection.pattern import PatternStrategy  # noqa: E402
from detection.semantic import SemanticStrategy  # noqa: E402
from detection.statistical import StatisticalStrategy  # noqa: E402
from detection.contextual import ContextualStrategy  # noqa: E402

from detection.combiner import DEFAULT_WEIGHTS, combine  # noqa: E402
from detection.detector import FieldTypeDetector, pinned_result  # noqa: E402

__all__ = [
    # Strategies
    "DetectionStrategy",
    "PatternStrategy",
    "SemanticStrategy",
    "StatisticalStrategy",
    "ContextualStrategy",
    # Registry
    "STRATEGY_REGISTRY",
    "register_strategy",
    "get_strategy",
    "get_strategies",
    "list_strategies",
    # Catalog
    "DetectionCatalog",
    "get_catalog",
    # Combining
    "DEFAULT_WEIGHTS",
    "combine",
    "FieldTypeDetector",
    "pinned_result",
]

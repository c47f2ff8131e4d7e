# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the form schema engine:
# - test_models.py: Pydantic model validation and the Result convention
# - test_config.py: Environment-driven settings
# - test_tokenizer.py / test_profiler.py: Parsing and column statistics
# - test_detection.py / test_combiner.py: Strategies and weighted voting
# - test_recommender.py / test_quality.py: Field specs and metrics
# - test_assembler.py: End-to-end pipeline runs
#
# Run tests with: pytest
# =============================================================================

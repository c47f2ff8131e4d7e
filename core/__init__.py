# =============================================================================
# core/ - Shared Foundation Package
# =============================================================================
# This package contains framework-agnostic building blocks:
# - models/: Pydantic schemas for every pipeline stage
# - config.py: EngineSettings loaded from the environment
# - exceptions.py: Exception taxonomy mapped onto stable error codes
#
# Code in this package should NOT import from lib, detection, or generation.
# =============================================================================

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Pins environment variables before any imports
# - Provides sample CSV text, settings and profile factories
# =============================================================================

import os
from pathlib import Path

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing core.config which loads settings immediately

os.environ.setdefault("FORMGEN_LOG_LEVEL", "DEBUG")
os.environ.setdefault("FORMGEN_DETECTION_WORKERS", "1")

import pytest

from core.config import EngineSettings
from core.models import ColumnProfile
from generation import FormAssembler

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# =============================================================================
# Settings and Components
# =============================================================================

@pytest.fixture
def engine_settings() -> EngineSettings:
    """Default settings, ignoring any local .env file."""
    return EngineSettings(_env_file=None)


@pytest.fixture
def assembler(engine_settings) -> FormAssembler:
    return FormAssembler(engine_settings)


# =============================================================================
# CSV Samples
# =============================================================================

@pytest.fixture
def contacts_csv() -> str:
    """The two-column sample used for the end-to-end scenario."""
    return "name,email\nAlice,alice@x.com\nBob,bob@x.com\n"


@pytest.fixture
def tier_csv() -> str:
    """1000 rows cycling through four distinct values."""
    tiers = ["gold", "silver", "bronze", "platinum"]
    rows = [tiers[i % 4] for i in range(1000)]
    return "tier\n" + "\n".join(rows) + "\n"


@pytest.fixture
def customers_csv() -> str:
    return (FIXTURES_DIR / "customers.csv").read_text(encoding="utf-8")


@pytest.fixture
def sparse_csv() -> str:
    return (FIXTURES_DIR / "sparse.csv").read_text(encoding="utf-8")


# =============================================================================
# Profile Factory
# =============================================================================

@pytest.fixture
def make_profile():
    """
    Build a ColumnProfile from raw cell values.

    Empty strings count as empty cells.

    Example:
        profile = make_profile(["a@x.com", "", "b@x.com"], header="email")
        profile.null_count  # 1
    """
    def _make(values, header="column", index=0, sample_size=10):
        non_empty = [v for v in values if v]
        unique = list(dict.fromkeys(non_empty))
        return ColumnProfile(
            index=index,
            header=header,
            sample_values=non_empty[:sample_size],
            all_values=non_empty,
            unique_values=unique,
            unique_count=len(unique),
            null_count=len(values) - len(non_empty),
            total_count=len(values),
        )

    return _make

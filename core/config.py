# =============================================================================
# core/config.py - Engine Settings
# =============================================================================
# This module loads configuration from environment variables using
# pydantic-settings. It provides a single EngineSettings class with every
# tunable threshold and limit of the pipeline.
#
# Usage:
#   from core.config import settings
#   print(settings.MAX_ROWS)
#
# Environment variables (prefixed FORMGEN_) are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are read-only after construction. Components take an explicit
# settings argument that defaults to the cached instance, so tests can pass
# their own without touching the environment.
# =============================================================================

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    All settings are accessed via the global `settings` instance or
    `get_settings()`.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level used when DEBUG is off"
    )

    # -------------------------------------------------------------------------
    # Tokenizer Limits
    # -------------------------------------------------------------------------

    DEFAULT_DELIMITER: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Delimiter used when the caller gives none"
    )

    MAX_ROWS: int = Field(
        default=1000,
        ge=1,
        le=100_000,
        description="Row cap used when the caller sets no max_rows"
    )

    PREVIEW_MAX_ROWS: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Row cap for the preview entry point"
    )

    # -------------------------------------------------------------------------
    # Profiling and Detection
    # -------------------------------------------------------------------------

    SAMPLE_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Non-empty values per column handed to the detectors"
    )

    DETECTION_WORKERS: int = Field(
        default=1,
        ge=1,
        le=32,
        description="Threads for per-column detection (1 = run inline)"
    )

    # -------------------------------------------------------------------------
    # Recommendation Thresholds
    # -------------------------------------------------------------------------

    MAX_OPTIONS: int = Field(
        default=20,
        ge=1,
        description="Largest unique-value set turned into an option list"
    )

    REQUIRED_NULL_RATIO: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Columns with fewer empty cells than this ratio may be required"
    )

    REQUIRED_CONFIDENCE: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Minimum peak confidence for a field to be required"
    )

    LOW_CONFIDENCE_THRESHOLD: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Fields below this confidence get a review recommendation"
    )

    CONSERVATIVE_THRESHOLD: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Conservative mode falls back to text below this confidence"
    )

    AGGRESSIVE_THRESHOLD: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Aggressive mode keeps the detected type only above this confidence"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_prefix="FORMGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        frozen=True,
        extra="ignore",
    )

    @property
    def log_level(self) -> int:
        """Resolve the effective logging level."""
        if self.DEBUG:
            return logging.DEBUG
        return getattr(logging, self.LOG_LEVEL)


@lru_cache
def get_settings() -> EngineSettings:
    """
    Get cached EngineSettings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return EngineSettings()


def configure_logging(engine_settings: EngineSettings | None = None) -> None:
    """Configure root logging for entry points (scripts, services)."""
    engine_settings = engine_settings or get_settings()
    logging.basicConfig(
        level=engine_settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# Global settings instance for easy importing
# Usage: from core.config import settings
settings = get_settings()

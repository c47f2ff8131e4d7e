# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common helpers used across the pipeline: stage timing and id slugs.
# =============================================================================

import logging
import re
import time
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")


# =============================================================================
# Stage Timing
# =============================================================================

class StageTimer:
    """
    Records wall-clock duration of named pipeline stages.

    Example:
        timer = StageTimer("generate")
        with timer.stage("parsing"):
            table = ...
        timer.timings  # {"parsing": 1.42}
        timer.total_ms()
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        stage_start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = (time.perf_counter() - stage_start) * 1000
            self.timings[name] = round(elapsed, 3)
            logger.debug(f"{self.operation}: stage '{name}' took {elapsed:.2f}ms")

    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 3)

    def as_metadata(self) -> dict:
        """Timing block attached to a Result's metadata."""
        return {
            "operation": self.operation,
            "execution_time_ms": self.total_ms(),
            "stage_timings_ms": dict(self.timings),
        }


# =============================================================================
# Identifiers
# =============================================================================

def slugify(text: str) -> str:
    """
    Lower-case a header and collapse non-alphanumerics to underscores.

    Example:
        slugify("Registration Date")  # "registration_date"
        slugify("  ")                 # ""
    """
    return _SLUG_STRIP_RE.sub("_", text.lower()).strip("_")


def field_id(column_index: int, header: str) -> str:
    """Deterministic field id; the index prefix keeps duplicate headers unique."""
    slug = slugify(header)
    return f"field_{column_index}_{slug}" if slug else f"field_{column_index}"

# =============================================================================
# lib/profiler.py - Column Profiler
# =============================================================================
# Computes per-column statistics from a tokenized CsvTable:
#
#   - non-empty values (row order) and their first-seen distinct set
#   - null count (empty cells, including cells missing from short rows)
#   - a bounded sample of the first non-empty values for the detectors
#
# The table is loaded into a pandas DataFrame of strings, padded to the
# header width. Extra trailing cells in long rows are ignored.
# =============================================================================

import logging

import pandas as pd

from core.config import EngineSettings, get_settings
from core.exceptions import FormSchemaError, ProfilingError
from core.models import ColumnProfile, CsvTable, Result
from lib.utils import StageTimer

logger = logging.getLogger(__name__)


# =============================================================================
# DataFrame Conversion
# =============================================================================

def table_to_frame(table: CsvTable) -> pd.DataFrame:
    """
    Load a CsvTable into a string DataFrame with positional column labels.

    Short rows are padded with "" and long rows truncated, so every row
    has exactly column_count cells. Positional labels keep duplicate
    headers apart.
    """
    width = table.column_count
    normalized = [
        (row + [""] * (width - len(row)))[:width]
        for row in table.rows
    ]
    return pd.DataFrame(normalized, columns=range(width), dtype=object)


# =============================================================================
# Column Analysis
# =============================================================================

def analyze_column(
    series: pd.Series,
    index: int,
    header: str,
    total_rows: int,
    sample_size: int,
) -> ColumnProfile:
    """
    Profile a single column.

    Example:
        series = pd.Series(["a", "", "b", "a"])
        profile = analyze_column(series, 0, "letter", 4, 10)
        profile.null_count      # 1
        profile.unique_values   # ["a", "b"]
    """
    non_empty = series[series != ""]
    all_values = [str(v) for v in non_empty.tolist()]
    unique_values = [str(v) for v in pd.unique(non_empty)] if len(non_empty) else []

    return ColumnProfile(
        index=index,
        header=header,
        sample_values=all_values[:sample_size],
        all_values=all_values,
        unique_values=unique_values,
        unique_count=len(unique_values),
        null_count=total_rows - len(all_values),
        total_count=total_rows,
    )


def profile_columns(table: CsvTable, sample_size: int) -> list[ColumnProfile]:
    """Profile every column, raising ProfilingError on failure."""
    df = table_to_frame(table)
    total_rows = table.row_count
    profiles = []

    for index, header in enumerate(table.headers):
        profile = analyze_column(df[index], index, header, total_rows, sample_size)
        logger.debug(
            f"Column {index} '{header}': {profile.non_empty_count} values, "
            f"{profile.unique_count} unique, {profile.null_count} empty"
        )
        profiles.append(profile)

    if len(profiles) != table.column_count:
        raise ProfilingError(
            "Profiled column count does not match header width",
            details={"profiles": len(profiles), "columns": table.column_count},
        )
    return profiles


def profile(
    table: CsvTable,
    settings: EngineSettings | None = None,
) -> Result[list[ColumnProfile]]:
    """
    Compute one ColumnProfile per header index.

    Returns:
        Result with profiles in column order, or an ANALYSIS_ERROR failure
    """
    settings = settings or get_settings()
    timer = StageTimer("profile")

    try:
        with timer.stage("profiling"):
            profiles = profile_columns(table, settings.SAMPLE_SIZE)
    except FormSchemaError as e:
        logger.warning(f"profile failed: {e}")
        return Result.fail(e.to_error(stage="profiling"), metadata=timer.as_metadata())
    except Exception as e:
        logger.exception("Unexpected error while profiling columns")
        error = ProfilingError("Failed to analyze CSV data", details={"error": str(e)})
        return Result.fail(error.to_error(stage="profiling"), metadata=timer.as_metadata())

    logger.info(f"Profiled {len(profiles)} columns over {table.row_count} rows")
    return Result.ok(profiles, metadata=timer.as_metadata())

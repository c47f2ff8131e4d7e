# =============================================================================
# core/models/table.py - Tokenized Table and Column Profile Schemas
# =============================================================================
# Models for the first two pipeline stages:
#
#   - ParseOptions: how raw CSV text is tokenized
#   - CsvTable: header row + bounded data rows produced by the tokenizer
#   - ColumnProfile: per-column statistics produced by the profiler
#
# All three are immutable once built. A CsvTable lives for one pipeline run.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


# =============================================================================
# Parse Options
# =============================================================================

class ParseOptions(BaseModel):
    """
    Options for tokenizing CSV text.

    Invalid options are a programmer error, so they raise ValidationError
    at construction instead of producing a failed Result.

    Example:
        ParseOptions(delimiter=";", max_rows=50)
    """

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(
        default=",",
        description="Single character separating fields"
    )

    has_header: bool = Field(
        default=True,
        description="Whether the first line holds column names"
    )

    skip_empty_rows: bool = Field(
        default=True,
        description="Drop lines that are blank after trimming"
    )

    max_rows: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of data rows to keep"
    )

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("delimiter must be exactly one character")
        if v == '"':
            raise ValueError("delimiter cannot be the quote character")
        return v


# =============================================================================
# Tokenized Table
# =============================================================================

class CsvTable(BaseModel):
    """
    Header row plus the bounded set of data rows from one upload.

    Rows are kept exactly as parsed. A row may be shorter or longer than the
    header; ragged_row_count records how many are. The profiler treats
    missing trailing cells as empty and ignores extra cells.
    """

    model_config = ConfigDict(frozen=True)

    headers: list[str] = Field(
        default_factory=list,
        description="Column names in file order (not necessarily unique)"
    )

    rows: list[list[str]] = Field(
        default_factory=list,
        description="Data rows, each a list of trimmed cell strings"
    )

    ragged_row_count: int = Field(
        default=0,
        ge=0,
        description="Rows whose width differs from the header width"
    )

    @computed_field
    @property
    def row_count(self) -> int:
        return len(self.rows)

    @computed_field
    @property
    def column_count(self) -> int:
        return len(self.headers)

    def cell(self, row_index: int, column_index: int) -> str:
        """Return a cell, or "" when the row is too short to have it."""
        row = self.rows[row_index]
        if column_index < len(row):
            return row[column_index]
        return ""


# =============================================================================
# Column Profile
# =============================================================================

class ColumnProfile(BaseModel):
    """
    Statistics for a single column, the input to every detection strategy.

    Example:
        {
            "index": 1,
            "header": "email",
            "sample_values": ["alice@x.com", "bob@x.com"],
            "unique_count": 2,
            "null_count": 0,
            "total_count": 2
        }
    """

    model_config = ConfigDict(frozen=True)

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    index: int = Field(..., ge=0, description="Zero-based column position")

    header: str = Field(default="", description="Column name from the header row")

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    sample_values: list[str] = Field(
        default_factory=list,
        description="First non-empty values (bounded sample used by detectors)"
    )

    all_values: list[str] = Field(
        default_factory=list,
        description="Every non-empty value in row order"
    )

    unique_values: list[str] = Field(
        default_factory=list,
        description="Distinct non-empty values in first-seen order"
    )

    # -------------------------------------------------------------------------
    # Counts
    # -------------------------------------------------------------------------

    unique_count: int = Field(default=0, ge=0, description="Count of distinct non-empty values")

    null_count: int = Field(default=0, ge=0, description="Count of empty cells")

    total_count: int = Field(default=0, ge=0, description="Number of data rows")

    # -------------------------------------------------------------------------
    # Derived Ratios
    # -------------------------------------------------------------------------

    @property
    def non_empty_count(self) -> int:
        return self.total_count - self.null_count

    @property
    def has_data(self) -> bool:
        return self.non_empty_count > 0

    @property
    def null_ratio(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.null_count / self.total_count

    @property
    def unique_ratio(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.unique_count / self.total_count

    @property
    def avg_length(self) -> float:
        """Mean length of the sample values (0.0 for an empty sample)."""
        if not self.sample_values:
            return 0.0
        return sum(len(v) for v in self.sample_values) / len(self.sample_values)

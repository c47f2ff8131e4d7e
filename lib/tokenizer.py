# =============================================================================
# lib/tokenizer.py - CSV Tokenizer
# =============================================================================
# Turns raw CSV text into a CsvTable: a header row plus a bounded set of
# data rows. Parsing is line based with a single-pass quote-aware scanner:
#
#   - '"' toggles quoting; '""' inside quotes emits one literal quote
#   - the delimiter splits fields only outside quotes
#   - every field is trimmed after splitting
#
# Quoted fields cannot span lines. The engine only needs a bounded sample
# for schema inference, so the whole text is assumed to be in memory.
# =============================================================================

import logging

from core.config import EngineSettings, get_settings
from core.exceptions import CsvParseError, EmptyCsvError, FormSchemaError
from core.models import CsvTable, ParseOptions, Result
from lib.utils import StageTimer

logger = logging.getLogger(__name__)

QUOTE = '"'


# =============================================================================
# Row Scanner
# =============================================================================

def parse_row(line: str, delimiter: str = ",") -> list[str]:
    """
    Split one line into trimmed fields, honoring double quotes.

    A line with no characters has no fields.

    Example:
        parse_row('John,"Doe, Jr.",30')      # ["John", "Doe, Jr.", "30"]
    """
    if line == "":
        return []

    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]

        if char == QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def synthetic_headers(width: int) -> list[str]:
    """Headers used when the file has no header row."""
    return [f"Column {i + 1}" for i in range(width)]


# =============================================================================
# Tokenizer
# =============================================================================

def _split_lines(content: str, skip_empty_rows: bool) -> list[str]:
    lines = content.split("\n")
    if skip_empty_rows:
        lines = [line for line in lines if line.strip()]
    return lines


def build_table(content: str, options: ParseOptions) -> CsvTable:
    """
    Tokenize CSV text, raising CsvParseError on failure.

    Use tokenize() for the Result-returning variant.
    """
    if not content or not content.strip():
        raise EmptyCsvError()

    lines = _split_lines(content, options.skip_empty_rows)
    if not lines:
        raise EmptyCsvError()

    start = 1 if options.has_header else 0
    end = min(len(lines), start + options.max_rows)

    rows: list[list[str]] = []
    for line_number in range(start, end):
        row = parse_row(lines[line_number], options.delimiter)
        if row:
            rows.append(row)

    if options.has_header:
        headers = parse_row(lines[0], options.delimiter)
    else:
        headers = synthetic_headers(len(rows[0]) if rows else 0)

    if not headers:
        raise CsvParseError("CSV header row is empty", details={"line": 0})

    width = len(headers)
    ragged = sum(1 for row in rows if len(row) != width)
    if ragged:
        logger.debug(f"{ragged} rows differ from header width {width}")

    return CsvTable(headers=headers, rows=rows, ragged_row_count=ragged)


def resolve_options(
    options: ParseOptions | None,
    settings: EngineSettings | None = None,
) -> ParseOptions:
    """
    Fill the delimiter and row cap from settings unless the caller set them.

    Values the caller passed explicitly are kept as given.
    """
    settings = settings or get_settings()
    options = options or ParseOptions()

    defaults = {}
    if "delimiter" not in options.model_fields_set:
        defaults["delimiter"] = settings.DEFAULT_DELIMITER
    if "max_rows" not in options.model_fields_set:
        defaults["max_rows"] = settings.MAX_ROWS
    if not defaults:
        return options
    return ParseOptions.model_validate({**options.model_dump(exclude_unset=True), **defaults})


def tokenize(
    content: str,
    options: ParseOptions | None = None,
    settings: EngineSettings | None = None,
) -> Result[CsvTable]:
    """
    Tokenize CSV text into a CsvTable.

    Args:
        content: Raw CSV text, already in memory
        options: ParseOptions; an unset delimiter or max_rows comes from
                 settings (DEFAULT_DELIMITER, MAX_ROWS)
        settings: EngineSettings (defaults to the cached instance)

    Returns:
        Result with the CsvTable, or a CSV_ERROR failure (no partial table)

    Example:
        result = tokenize("name,email\\nAlice,alice@x.com\\n")
        result.data.headers  # ["name", "email"]
    """
    options = resolve_options(options, settings)
    timer = StageTimer("tokenize")

    try:
        with timer.stage("parsing"):
            table = build_table(content, options)
    except FormSchemaError as e:
        logger.warning(f"tokenize failed: {e}")
        return Result.fail(e.to_error(stage="parsing"), metadata=timer.as_metadata())
    except Exception as e:
        logger.exception("Unexpected error while tokenizing CSV")
        error = CsvParseError("Failed to parse CSV content", details={"error": str(e)})
        return Result.fail(error.to_error(stage="parsing"), metadata=timer.as_metadata())

    warnings = []
    if table.ragged_row_count:
        warnings.append(
            f"{table.ragged_row_count} rows have a different number of cells than the header; "
            f"missing cells are treated as empty and extra cells are ignored"
        )

    logger.info(f"Tokenized CSV: {table.row_count} rows × {table.column_count} columns")
    return Result.ok(table, warnings=warnings, metadata=timer.as_metadata())

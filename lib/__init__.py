# =============================================================================
# lib/ - Standalone Pipeline Stages
# =============================================================================
# This package contains the stages that do not depend on detection:
# - tokenizer.py: CSV text -> CsvTable (quote-aware, bounded rows)
# - profiler.py: CsvTable -> ColumnProfile per column (pandas)
# - quality.py: table-wide quality metrics and the complexity preview
# - utils.py: Shared utilities (stage timing, field ids)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.tokenizer import build_table, parse_row, resolve_options, tokenize
from lib.profiler import profile, profile_columns, table_to_frame
from lib.quality import analyze, build_preview, complexity_score
from lib.utils import StageTimer, field_id, slugify

__all__ = [
    # Tokenizer
    "build_table",
    "parse_row",
    "resolve_options",
    "tokenize",
    # Profiler
    "profile",
    "profile_columns",
    "table_to_frame",
    # Quality
    "analyze",
    "build_preview",
    "complexity_score",
    # Utils
    "StageTimer",
    "field_id",
    "slugify",
]

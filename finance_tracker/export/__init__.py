"""
Export module for deterministic CSV generation.
"""
from finance_tracker.export.csv_emitter import escape_field, to_csv, CSVEmitter
from finance_tracker.export.columns import (
    ColumnSet,
    DETAILED_COLUMNS,
    COMPACT_COLUMNS,
    emitter_for,
)
from finance_tracker.export.filenames import (
    FilenameScheme,
    generate_export_filename,
    generate_dated_filename,
    generate_filename,
)

__all__ = [
    "escape_field",
    "to_csv",
    "CSVEmitter",
    "ColumnSet",
    "DETAILED_COLUMNS",
    "COMPACT_COLUMNS",
    "emitter_for",
    "FilenameScheme",
    "generate_export_filename",
    "generate_dated_filename",
    "generate_filename",
]

"""
CSV emitter - deterministic CSV generation with exact specs.

Output rules:
- Header line from the column names, escaped like any other field
- One line per record, in input order
- Lines joined with a bare '\n', no trailing newline, no BOM
- Quote a field only when it contains a comma, a quote or a line break
  (RFC-4180 style, internal quotes doubled)

Byte-identical on repeated runs (idempotent).
"""
from typing import Any, Callable, Iterable, List, Sequence, TypeVar

R = TypeVar("R")

_NEEDS_QUOTING = (",", '"', "\n", "\r")


def escape_field(value: Any) -> str:
    """
    Escape a scalar for embedding in a CSV record.

    Args:
        value: Any scalar (None → empty field)

    Returns:
        The field text, quoted only when necessary

    Examples:
        escape_field("simple") → 'simple'
        escape_field('Coffee, "good" one') → '"Coffee, ""good"" one"'
    """
    if value is None:
        return ""

    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)

    if any(ch in text for ch in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'

    return text


def to_csv(
    records: Iterable[R],
    columns: Sequence[str],
    projector: Callable[[R], Sequence[Any]],
) -> str:
    """
    Serialize records to a CSV document.

    Args:
        records: Records in output order
        columns: Header column names
        projector: Maps a record to raw values aligned with `columns`

    Returns:
        CSV text; just the header line when there are no records
    """
    lines: List[str] = [",".join(escape_field(column) for column in columns)]

    for record in records:
        values = projector(record)
        lines.append(",".join(escape_field(value) for value in values))

    return "\n".join(lines)


class CSVEmitter:
    """
    Emits CSV documents for a fixed column layout.

    Features:
    - Exact header order from the layout
    - Projection supplied by the caller (domain formatting lives there)
    - UTF-8 bytes, LF line endings, necessary quoting
    """

    def __init__(self, columns: Sequence[str], projector: Callable[[Any], Sequence[Any]]):
        """
        Initialize CSV emitter.

        Args:
            columns: Header column names
            projector: Record → raw values, positionally aligned with columns
        """
        self.columns = list(columns)
        self.projector = projector

    def emit(self, records: Iterable[Any]) -> str:
        """Emit the CSV text for records."""
        return to_csv(records, self.columns, self._project)

    def emit_bytes(self, records: Iterable[Any]) -> bytes:
        """Emit the CSV document as UTF-8 bytes."""
        return self.emit(records).encode("utf-8")

    def _project(self, record: Any) -> Sequence[Any]:
        values = self.projector(record)
        if len(values) != len(self.columns):
            raise ValueError(
                f"Projector returned {len(values)} values for {len(self.columns)} columns.\n"
                f"Columns: {self.columns}"
            )
        return values

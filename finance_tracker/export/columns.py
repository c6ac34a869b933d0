"""
Column layouts for transaction CSV exports.

DETAILED is the canonical layout. COMPACT is kept for the legacy export
endpoint; both share escaping and date rules.
"""
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

from finance_tracker.core.records import EnrichedTransaction
from finance_tracker.export.csv_emitter import CSVEmitter
from finance_tracker.transform.normalizers import format_day, format_instant, normalize_amount

DEFAULT_CURRENCY = "USD"


class ColumnSet(str, Enum):
    """CSV column layout."""

    DETAILED = "detailed"
    COMPACT = "compact"


DETAILED_COLUMNS = [
    "id",
    "date",
    "type",
    "categoryName",
    "description",
    "amount",
    "currency",
    "createdAt",
    "updatedAt",
]

COMPACT_COLUMNS = ["id", "date", "description", "category", "type", "amount"]


def _category_name(transaction: EnrichedTransaction) -> str:
    return transaction.category.name if transaction.category else ""


def project_detailed(
    transaction: EnrichedTransaction, currency: str = DEFAULT_CURRENCY
) -> List[Any]:
    """Project a transaction onto DETAILED_COLUMNS."""
    return [
        transaction.id,
        format_day(transaction.date),
        transaction.type.value,
        _category_name(transaction),
        transaction.description or "",
        normalize_amount(transaction.amount),
        currency,
        format_instant(transaction.created_at),
        format_instant(transaction.updated_at),
    ]


def project_compact(transaction: EnrichedTransaction) -> List[Any]:
    """Project a transaction onto COMPACT_COLUMNS."""
    return [
        transaction.id,
        format_day(transaction.date),
        transaction.description or "",
        _category_name(transaction),
        transaction.type.value,
        normalize_amount(transaction.amount),
    ]


def get_layout(
    column_set: ColumnSet, currency: str = DEFAULT_CURRENCY
) -> Tuple[List[str], Callable[[EnrichedTransaction], List[Any]]]:
    """
    Get the columns and projector for a column set.

    Args:
        column_set: Layout to use
        currency: Currency code written by the DETAILED layout

    Returns:
        Tuple of (columns, projector)
    """
    layouts: Dict[ColumnSet, Tuple[List[str], Callable[[EnrichedTransaction], List[Any]]]] = {
        ColumnSet.DETAILED: (
            DETAILED_COLUMNS,
            lambda transaction: project_detailed(transaction, currency),
        ),
        ColumnSet.COMPACT: (COMPACT_COLUMNS, project_compact),
    }
    return layouts[column_set]


def emitter_for(column_set: ColumnSet, currency: str = DEFAULT_CURRENCY) -> CSVEmitter:
    """Build a CSVEmitter for a column set."""
    columns, projector = get_layout(column_set, currency)
    return CSVEmitter(columns, projector)

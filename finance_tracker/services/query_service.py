"""
Transaction query engine - filter, join and order an owner's transactions.

Pipeline (fixed order, each stage a pure filter/map over the previous one):
1. Scope to owner
2. Type filter
3. Category filter
4. Start date (inclusive, >=)
5. End date (whole named day inclusive: < start of end day + 1 day)
6. Enrich: resolve category against the owner's categories
7. Order: date descending, ties keep store order (stable sort)

Never mutates store data; filters that match nothing yield [].
"""
from dataclasses import fields
from datetime import timedelta
from typing import Dict, Iterable, List, Optional

from finance_tracker.core.records import (
    Category,
    EnrichedTransaction,
    ExportFilter,
    Transaction,
)
from finance_tracker.ports.repositories import TransactionStore
from finance_tracker.transform.normalizers import parse_instant

ONE_DAY = timedelta(days=1)

_TRANSACTION_FIELDS = [f.name for f in fields(Transaction)]


def apply_filters(
    transactions: Iterable[Transaction], owner_id: str, filter: ExportFilter
) -> List[Transaction]:
    """
    Apply stages 1-5 (scope, type, category, start date, end date).

    Args:
        transactions: Candidate transactions, in store order
        owner_id: Owner to scope to
        filter: Filter values (already validated)

    Returns:
        Surviving transactions, in input order
    """
    result = [t for t in transactions if t.owner_id == owner_id]

    if filter.type is not None:
        result = [t for t in result if t.type == filter.type]

    if filter.category_id is not None:
        result = [t for t in result if t.category_id == filter.category_id]

    if filter.start_date is not None:
        start = filter.start_date
        result = [t for t in result if t.date >= start]

    if filter.end_date is not None:
        # Whole named day, whatever time-of-day the end instant carries
        end_day = parse_instant(filter.end_date).replace(hour=0, minute=0, second=0, microsecond=0)
        end_exclusive = end_day + ONE_DAY
        result = [t for t in result if t.date < end_exclusive]

    return result


def enrich(transaction: Transaction, category: Optional[Category]) -> EnrichedTransaction:
    """Attach a resolved category to a transaction."""
    values = {name: getattr(transaction, name) for name in _TRANSACTION_FIELDS}
    return EnrichedTransaction(**values, category=category)


def order_by_date_desc(transactions: Iterable[EnrichedTransaction]) -> List[EnrichedTransaction]:
    """Most recent first; equal dates keep their relative order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


class TransactionQueryEngine:
    """
    Query engine over a TransactionStore.

    Reads only; every call recomputes the enriched view from the store.
    """

    def __init__(self, store: TransactionStore):
        """
        Initialize query engine.

        Args:
            store: Transaction store to read from
        """
        self.store = store

    def query(self, owner_id: str, filter: Optional[ExportFilter] = None) -> List[EnrichedTransaction]:
        """
        Run the query pipeline for an owner.

        Args:
            owner_id: Owner identifier
            filter: Optional filter (None → no filtering)

        Returns:
            Enriched transactions, most recent first
        """
        filter = filter or ExportFilter()

        survivors = apply_filters(self.store.list_transactions(owner_id), owner_id, filter)

        categories: Dict[str, Optional[Category]] = {}
        enriched = []
        for transaction in survivors:
            category = None
            if transaction.category_id is not None:
                if transaction.category_id not in categories:
                    categories[transaction.category_id] = self.store.get_category_by_id(
                        transaction.category_id, owner_id
                    )
                category = categories[transaction.category_id]
            enriched.append(enrich(transaction, category))

        return order_by_date_desc(enriched)

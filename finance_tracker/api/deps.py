"""
Shared FastAPI dependencies: owner resolution, store wiring and query filters.
"""
import logging
from typing import Iterator, Optional
from fastapi import Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session

from finance_tracker.adapters.repositories_memory import (
    InMemoryBudgetsRepo,
    InMemoryTransactionStore,
    seed_demo_data,
)
from finance_tracker.adapters.repositories_sql import SQLBudgetsRepo, SQLTransactionStore
from finance_tracker.core.config import settings
from finance_tracker.core.database import get_db
from finance_tracker.core.records import ExportFilter, ExportFormat, TransactionType
from finance_tracker.ports.repositories import BudgetsRepo, TransactionStore
from finance_tracker.transform.normalizers import NormalizeError, parse_instant

logger = logging.getLogger(__name__)

# Process-wide in-memory stores
_memory_store: Optional[InMemoryTransactionStore] = None
_memory_budgets: Optional[InMemoryBudgetsRepo] = None


def get_memory_store() -> InMemoryTransactionStore:
    """Get or create the global in-memory transaction store."""
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemoryTransactionStore()
        if settings.SEED_DEMO_DATA:
            seed_demo_data(_memory_store, settings.DEMO_OWNER_ID)
            logger.info(f"Seeded demo data for user: {settings.DEMO_OWNER_ID}")
    return _memory_store


def get_memory_budgets() -> InMemoryBudgetsRepo:
    """Get or create the global in-memory budgets repository."""
    global _memory_budgets
    if _memory_budgets is None:
        _memory_budgets = InMemoryBudgetsRepo()
    return _memory_budgets


def get_owner_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> str:
    """
    Resolve the acting owner.

    Authentication is stubbed: the X-User-Id header is trusted as-is and
    DEMO_OWNER_ID is used when it is absent.
    """
    return x_user_id or settings.DEMO_OWNER_ID


def get_session() -> Iterator[Optional[Session]]:
    """Per-request SQL session, or None for the in-memory backend."""
    if settings.STORE_BACKEND != "sql":
        yield None
        return

    yield from get_db()


def get_store(db: Optional[Session] = Depends(get_session)) -> TransactionStore:
    if db is not None:
        return SQLTransactionStore(db)
    return get_memory_store()


def get_budgets_repo(db: Optional[Session] = Depends(get_session)) -> BudgetsRepo:
    if db is not None:
        return SQLBudgetsRepo(db)
    return get_memory_budgets()


def get_export_filter(
    type: Optional[TransactionType] = Query(None, description="income or expense"),
    category: Optional[str] = Query(None, description="Category id"),
    start_date: Optional[str] = Query(None, alias="startDate", description="Earliest date (inclusive)"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Latest date (whole day inclusive)"),
    format: ExportFormat = Query(ExportFormat.CSV, description="csv or json"),
) -> ExportFilter:
    """
    Build an ExportFilter from query parameters.

    Raises:
        HTTPException: 400 if a date cannot be parsed
    """
    try:
        start = parse_instant(start_date) if start_date else None
        end = parse_instant(end_date) if end_date else None
    except NormalizeError as e:
        logger.warning(f"Rejected filter dates {start_date!r}/{end_date!r}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return ExportFilter(
        type=type,
        category_id=category or None,
        start_date=start,
        end_date=end,
        format=format,
    )

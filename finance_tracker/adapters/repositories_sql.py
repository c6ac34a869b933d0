"""
SQL implementations of repository interfaces.

Lean stack implementation using SQLAlchemy + SQLite.
Easy migration path to Postgres (same SQLAlchemy API).
"""
import uuid
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional
from sqlalchemy.orm import Session

from finance_tracker.core.records import (
    Budget,
    BudgetPeriod,
    Category,
    Transaction,
    TransactionType,
)
from finance_tracker.models import BudgetRow, CategoryRow, TransactionRow
from finance_tracker.ports.repositories import TransactionStore, BudgetsRepo
from finance_tracker.transform.normalizers import parse_instant, utc_now


def _to_db_time(value: datetime) -> datetime:
    """Aware instant → naive UTC for storage."""
    return parse_instant(value).astimezone(timezone.utc).replace(tzinfo=None)


def _from_db_time(value: Optional[datetime]) -> Optional[datetime]:
    """Naive UTC from storage → aware instant."""
    if value is None:
        return None
    return parse_instant(value)


def _prepare_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    prepared = {}
    for key, value in changes.items():
        if key in ("id", "owner_id"):
            continue
        if isinstance(value, datetime):
            value = _to_db_time(value)
        prepared[key] = value
    return prepared


def _category_from_row(row: CategoryRow) -> Category:
    return Category(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        type=TransactionType(row.type),
        created_at=_from_db_time(row.created_at),
        icon=row.icon,
        color=row.color,
    )


def _transaction_from_row(row: TransactionRow) -> Transaction:
    return Transaction(
        id=row.id,
        owner_id=row.owner_id,
        amount=row.amount,
        date=_from_db_time(row.date),
        type=TransactionType(row.type),
        created_at=_from_db_time(row.created_at),
        updated_at=_from_db_time(row.updated_at),
        description=row.description or "",
        category_id=row.category_id,
    )


def _budget_from_row(row: BudgetRow) -> Budget:
    return Budget(
        id=row.id,
        owner_id=row.owner_id,
        category_id=row.category_id,
        amount=row.amount,
        period=BudgetPeriod(row.period),
        start_date=_from_db_time(row.start_date),
        end_date=_from_db_time(row.end_date),
        created_at=_from_db_time(row.created_at),
    )


class SQLTransactionStore(TransactionStore):
    """SQLAlchemy implementation of TransactionStore."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, transaction_id: str, owner_id: str) -> Optional[TransactionRow]:
        return (
            self.db.query(TransactionRow)
            .filter(TransactionRow.id == transaction_id, TransactionRow.owner_id == owner_id)
            .first()
        )

    def list_transactions(self, owner_id: str) -> List[Transaction]:
        """List all transactions of an owner."""
        rows = (
            self.db.query(TransactionRow)
            .filter(TransactionRow.owner_id == owner_id)
            .order_by(TransactionRow.seq)
            .all()
        )
        return [_transaction_from_row(row) for row in rows]

    def get_transaction(self, transaction_id: str, owner_id: str) -> Optional[Transaction]:
        """Get a single transaction."""
        row = self._get_row(transaction_id, owner_id)
        return _transaction_from_row(row) if row else None

    def create_transaction(
        self,
        owner_id: str,
        amount: str,
        date: datetime,
        type: TransactionType,
        description: str = "",
        category_id: Optional[str] = None,
    ) -> Transaction:
        """Create a transaction."""
        now = _to_db_time(utc_now())
        row = TransactionRow(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            amount=amount,
            description=description,
            category_id=category_id,
            date=_to_db_time(date),
            type=type,
            created_at=now,
            updated_at=now,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _transaction_from_row(row)

    def update_transaction(
        self, transaction_id: str, owner_id: str, changes: Dict[str, Any]
    ) -> Optional[Transaction]:
        """Apply a partial update and bump updated_at."""
        row = self._get_row(transaction_id, owner_id)
        if not row:
            return None

        for key, value in _prepare_changes(changes).items():
            setattr(row, key, value)
        row.updated_at = _to_db_time(utc_now())

        self.db.commit()
        self.db.refresh(row)
        return _transaction_from_row(row)

    def delete_transaction(self, transaction_id: str, owner_id: str) -> bool:
        """Delete a transaction."""
        row = self._get_row(transaction_id, owner_id)
        if not row:
            return False

        self.db.delete(row)
        self.db.commit()
        return True

    def list_categories(self, owner_id: str) -> List[Category]:
        """List all categories of an owner."""
        rows = (
            self.db.query(CategoryRow)
            .filter(CategoryRow.owner_id == owner_id)
            .order_by(CategoryRow.seq)
            .all()
        )
        return [_category_from_row(row) for row in rows]

    def get_category_by_id(self, category_id: str, owner_id: str) -> Optional[Category]:
        """Get a category by ID, scoped to the owner."""
        row = (
            self.db.query(CategoryRow)
            .filter(CategoryRow.id == category_id, CategoryRow.owner_id == owner_id)
            .first()
        )
        return _category_from_row(row) if row else None

    def create_category(
        self,
        owner_id: str,
        name: str,
        type: TransactionType,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Create a category."""
        row = CategoryRow(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            name=name,
            type=type,
            icon=icon,
            color=color,
            created_at=_to_db_time(utc_now()),
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _category_from_row(row)


class SQLBudgetsRepo(BudgetsRepo):
    """SQLAlchemy implementation of BudgetsRepo."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, budget_id: str, owner_id: str) -> Optional[BudgetRow]:
        return (
            self.db.query(BudgetRow)
            .filter(BudgetRow.id == budget_id, BudgetRow.owner_id == owner_id)
            .first()
        )

    def list(self, owner_id: str) -> List[Budget]:
        """List budgets of an owner."""
        rows = (
            self.db.query(BudgetRow)
            .filter(BudgetRow.owner_id == owner_id)
            .order_by(BudgetRow.seq)
            .all()
        )
        return [_budget_from_row(row) for row in rows]

    def get(self, budget_id: str, owner_id: str) -> Optional[Budget]:
        """Get a budget."""
        row = self._get_row(budget_id, owner_id)
        return _budget_from_row(row) if row else None

    def create(
        self,
        owner_id: str,
        category_id: str,
        amount: str,
        period: BudgetPeriod,
        start_date: datetime,
        end_date: datetime,
    ) -> Budget:
        """Create a budget."""
        row = BudgetRow(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            category_id=category_id,
            amount=amount,
            period=period,
            start_date=_to_db_time(start_date),
            end_date=_to_db_time(end_date),
            created_at=_to_db_time(utc_now()),
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return _budget_from_row(row)

    def update(
        self, budget_id: str, owner_id: str, changes: Dict[str, Any]
    ) -> Optional[Budget]:
        """Apply a partial update."""
        row = self._get_row(budget_id, owner_id)
        if not row:
            return None

        for key, value in _prepare_changes(changes).items():
            setattr(row, key, value)

        self.db.commit()
        self.db.refresh(row)
        return _budget_from_row(row)

    def delete(self, budget_id: str, owner_id: str) -> bool:
        """Delete a budget."""
        row = self._get_row(budget_id, owner_id)
        if not row:
            return False

        self.db.delete(row)
        self.db.commit()
        return True

"""
In-memory implementations of repository interfaces.

Lean stack implementation for development and tests: plain lists of frozen
records, guarded by a lock so concurrent request threads see atomic writes.
"""
import threading
import uuid
from dataclasses import replace
from datetime import datetime
from typing import List, Dict, Any, Optional

from finance_tracker.core.records import (
    Budget,
    BudgetPeriod,
    Category,
    Transaction,
    TransactionType,
)
from finance_tracker.ports.repositories import TransactionStore, BudgetsRepo
from finance_tracker.transform.normalizers import parse_instant, utc_now


class InMemoryTransactionStore(TransactionStore):
    """In-memory implementation of TransactionStore."""

    def __init__(
        self,
        transactions: Optional[List[Transaction]] = None,
        categories: Optional[List[Category]] = None,
    ):
        self._transactions: List[Transaction] = list(transactions or [])
        self._categories: List[Category] = list(categories or [])
        self._lock = threading.Lock()

    def load(
        self,
        transactions: Optional[List[Transaction]] = None,
        categories: Optional[List[Category]] = None,
    ) -> None:
        """Append prebuilt records, keeping their ids and timestamps."""
        with self._lock:
            self._categories.extend(categories or [])
            self._transactions.extend(transactions or [])

    def list_transactions(self, owner_id: str) -> List[Transaction]:
        """List all transactions of an owner."""
        with self._lock:
            return [t for t in self._transactions if t.owner_id == owner_id]

    def get_transaction(self, transaction_id: str, owner_id: str) -> Optional[Transaction]:
        """Get a single transaction."""
        with self._lock:
            return next(
                (
                    t
                    for t in self._transactions
                    if t.id == transaction_id and t.owner_id == owner_id
                ),
                None,
            )

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
        now = utc_now()
        transaction = Transaction(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            amount=amount,
            date=date,
            type=type,
            created_at=now,
            updated_at=now,
            description=description,
            category_id=category_id,
        )
        with self._lock:
            self._transactions.append(transaction)
        return transaction

    def update_transaction(
        self, transaction_id: str, owner_id: str, changes: Dict[str, Any]
    ) -> Optional[Transaction]:
        """Apply a partial update and bump updated_at."""
        # id and owner are immutable
        changes = {k: v for k, v in changes.items() if k not in ("id", "owner_id")}

        with self._lock:
            for index, existing in enumerate(self._transactions):
                if existing.id == transaction_id and existing.owner_id == owner_id:
                    updated = replace(existing, **changes, updated_at=utc_now())
                    self._transactions[index] = updated
                    return updated
        return None

    def delete_transaction(self, transaction_id: str, owner_id: str) -> bool:
        """Delete a transaction."""
        with self._lock:
            for index, existing in enumerate(self._transactions):
                if existing.id == transaction_id and existing.owner_id == owner_id:
                    del self._transactions[index]
                    return True
        return False

    def list_categories(self, owner_id: str) -> List[Category]:
        """List all categories of an owner."""
        with self._lock:
            return [c for c in self._categories if c.owner_id == owner_id]

    def get_category_by_id(self, category_id: str, owner_id: str) -> Optional[Category]:
        """Get a category by ID, scoped to the owner."""
        with self._lock:
            return next(
                (
                    c
                    for c in self._categories
                    if c.id == category_id and c.owner_id == owner_id
                ),
                None,
            )

    def create_category(
        self,
        owner_id: str,
        name: str,
        type: TransactionType,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Create a category."""
        category = Category(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            name=name,
            type=type,
            created_at=utc_now(),
            icon=icon,
            color=color,
        )
        with self._lock:
            self._categories.append(category)
        return category


class InMemoryBudgetsRepo(BudgetsRepo):
    """In-memory implementation of BudgetsRepo."""

    def __init__(self, budgets: Optional[List[Budget]] = None):
        self._budgets: List[Budget] = list(budgets or [])
        self._lock = threading.Lock()

    def list(self, owner_id: str) -> List[Budget]:
        """List budgets of an owner."""
        with self._lock:
            return [b for b in self._budgets if b.owner_id == owner_id]

    def get(self, budget_id: str, owner_id: str) -> Optional[Budget]:
        """Get a budget."""
        with self._lock:
            return next(
                (b for b in self._budgets if b.id == budget_id and b.owner_id == owner_id),
                None,
            )

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
        budget = Budget(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            category_id=category_id,
            amount=amount,
            period=period,
            start_date=start_date,
            end_date=end_date,
            created_at=utc_now(),
        )
        with self._lock:
            self._budgets.append(budget)
        return budget

    def update(
        self, budget_id: str, owner_id: str, changes: Dict[str, Any]
    ) -> Optional[Budget]:
        """Apply a partial update."""
        changes = {k: v for k, v in changes.items() if k not in ("id", "owner_id")}

        with self._lock:
            for index, existing in enumerate(self._budgets):
                if existing.id == budget_id and existing.owner_id == owner_id:
                    updated = replace(existing, **changes)
                    self._budgets[index] = updated
                    return updated
        return None

    def delete(self, budget_id: str, owner_id: str) -> bool:
        """Delete a budget."""
        with self._lock:
            for index, existing in enumerate(self._budgets):
                if existing.id == budget_id and existing.owner_id == owner_id:
                    del self._budgets[index]
                    return True
        return False


def seed_demo_data(store: InMemoryTransactionStore, owner_id: str = "user-1") -> None:
    """
    Load the demo data set (3 categories, 4 transactions) into a store.

    Args:
        store: Store to populate
        owner_id: Owner of the demo records
    """
    seeded_at = utc_now()
    categories = [
        Category(
            id="cat-1", owner_id=owner_id, name="Food & Dining",
            type=TransactionType.EXPENSE, created_at=seeded_at,
            icon="utensils", color="#ef4444",
        ),
        Category(
            id="cat-2", owner_id=owner_id, name="Transportation",
            type=TransactionType.EXPENSE, created_at=seeded_at,
            icon="car", color="#3b82f6",
        ),
        Category(
            id="cat-3", owner_id=owner_id, name="Salary",
            type=TransactionType.INCOME, created_at=seeded_at,
            icon="banknotes", color="#10b981",
        ),
    ]

    rows = [
        ("trans-1", "25.50", "Coffee and breakfast", "cat-1", "2024-01-15", "expense",
         "2024-01-15T10:30:00.000Z"),
        ("trans-2", "100.00", "Gas station", "cat-2", "2024-01-14", "expense",
         "2024-01-14T15:20:00.000Z"),
        ("trans-3", "3500.00", "Monthly salary", "cat-3", "2024-01-01", "income",
         "2024-01-01T09:00:00.000Z"),
        ("trans-4", "45.75", 'Grocery shopping with "special" items', "cat-1", "2024-01-10",
         "expense", "2024-01-10T18:45:00.000Z"),
    ]
    transactions = [
        Transaction(
            id=tid,
            owner_id=owner_id,
            amount=amount,
            date=parse_instant(day),
            type=TransactionType(kind),
            created_at=parse_instant(stamp),
            updated_at=parse_instant(stamp),
            description=description,
            category_id=category_id,
        )
        for tid, amount, description, category_id, day, kind, stamp in rows
    ]

    store.load(transactions=transactions, categories=categories)

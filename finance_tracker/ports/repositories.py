"""
Repository interfaces for data access.

Ports (interfaces) for lean stack → scale migration path:
- Current: in-memory lists or SQLite via SQLAlchemy
- Future: Postgres

Business logic depends only on these interfaces, never on a concrete store.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Dict, Any, Optional

from finance_tracker.core.records import (
    Budget,
    BudgetPeriod,
    Category,
    Transaction,
    TransactionType,
)


class TransactionStore(ABC):
    """
    Store for transactions and their categories.

    All reads and writes are scoped by owner id. List operations return
    records in insertion order, which the query engine relies on for
    stable tie-breaking.
    """

    @abstractmethod
    def list_transactions(self, owner_id: str) -> List[Transaction]:
        """
        List all transactions of an owner.

        Args:
            owner_id: Owner identifier

        Returns:
            Transactions in insertion order
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str, owner_id: str) -> Optional[Transaction]:
        """
        Get a single transaction.

        Args:
            transaction_id: Transaction ID
            owner_id: Owner identifier

        Returns:
            The transaction, or None if not found for this owner
        """
        pass

    @abstractmethod
    def create_transaction(
        self,
        owner_id: str,
        amount: str,
        date: datetime,
        type: TransactionType,
        description: str = "",
        category_id: Optional[str] = None,
    ) -> Transaction:
        """
        Create a transaction.

        Values must already be normalized (two-decimal amount, UTC date).

        Returns:
            The stored transaction with id and timestamps assigned
        """
        pass

    @abstractmethod
    def update_transaction(
        self, transaction_id: str, owner_id: str, changes: Dict[str, Any]
    ) -> Optional[Transaction]:
        """
        Apply a partial update and bump updated_at.

        Args:
            transaction_id: Transaction ID
            owner_id: Owner identifier
            changes: Field name → new value (normalized)

        Returns:
            Updated transaction, or None if not found
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str, owner_id: str) -> bool:
        """
        Delete a transaction.

        Returns:
            True if a transaction was deleted, False if not found
        """
        pass

    @abstractmethod
    def list_categories(self, owner_id: str) -> List[Category]:
        """List all categories of an owner, in insertion order."""
        pass

    @abstractmethod
    def get_category_by_id(self, category_id: str, owner_id: str) -> Optional[Category]:
        """
        Get a category by ID, scoped to the owner.

        Returns:
            The category, or None if absent or owned by someone else
        """
        pass

    @abstractmethod
    def create_category(
        self,
        owner_id: str,
        name: str,
        type: TransactionType,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """Create a category."""
        pass


class BudgetsRepo(ABC):
    """
    Repository for budget operations.

    Budgets are scoped by owner like transactions.
    """

    @abstractmethod
    def list(self, owner_id: str) -> List[Budget]:
        """List budgets of an owner, in insertion order."""
        pass

    @abstractmethod
    def get(self, budget_id: str, owner_id: str) -> Optional[Budget]:
        """Get a budget, or None if not found for this owner."""
        pass

    @abstractmethod
    def create(
        self,
        owner_id: str,
        category_id: str,
        amount: str,
        period: BudgetPeriod,
        start_date: datetime,
        end_date: datetime,
    ) -> Budget:
        """Create a budget (values already validated and normalized)."""
        pass

    @abstractmethod
    def update(
        self, budget_id: str, owner_id: str, changes: Dict[str, Any]
    ) -> Optional[Budget]:
        """Apply a partial update. Returns None if not found."""
        pass

    @abstractmethod
    def delete(self, budget_id: str, owner_id: str) -> bool:
        """Delete a budget. Returns False if not found."""
        pass

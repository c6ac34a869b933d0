"""
Transaction and category services - CRUD on top of the store port.

Values are normalized here (two-decimal amounts, UTC instants) so the store
and the query engine only ever see well-formed records.
"""
import logging
from typing import Any, Dict, List, Optional

from finance_tracker.core.records import (
    Category,
    EnrichedTransaction,
    ExportFilter,
    TransactionType,
)
from finance_tracker.ports.repositories import TransactionStore
from finance_tracker.services.errors import NotFoundError, ValidationError
from finance_tracker.services.query_service import TransactionQueryEngine, enrich
from finance_tracker.transform.normalizers import normalize_amount, parse_instant

logger = logging.getLogger(__name__)


class TransactionService:
    def __init__(self, store: TransactionStore):
        self.store = store
        self.query_engine = TransactionQueryEngine(store)

    def list(self, owner_id: str, filter: Optional[ExportFilter] = None) -> List[EnrichedTransaction]:
        """List an owner's transactions, filtered and most recent first."""
        return self.query_engine.query(owner_id, filter)

    def get(self, transaction_id: str, owner_id: str) -> EnrichedTransaction:
        """
        Get a single enriched transaction.

        Raises:
            NotFoundError: If the transaction does not exist for this owner
        """
        transaction = self.store.get_transaction(transaction_id, owner_id)
        if not transaction:
            raise NotFoundError("Transaction not found")
        return self._enrich(transaction, owner_id)

    def create(self, owner_id: str, data: Dict[str, Any]) -> EnrichedTransaction:
        """
        Create a transaction.

        Args:
            owner_id: Owner identifier
            data: amount, date, type, optional description and category_id

        Raises:
            ValidationError: If category_id does not name one of the owner's categories
        """
        category_id = data.get("category_id") or None
        if category_id:
            self._require_category(category_id, owner_id)

        transaction = self.store.create_transaction(
            owner_id=owner_id,
            amount=normalize_amount(data["amount"]),
            date=parse_instant(data["date"]),
            type=TransactionType(data["type"]),
            description=data.get("description") or "",
            category_id=category_id,
        )

        logger.info(f"Transaction created: {transaction.id} for user: {owner_id}")
        return self._enrich(transaction, owner_id)

    def update(
        self, transaction_id: str, owner_id: str, changes: Dict[str, Any]
    ) -> EnrichedTransaction:
        """
        Apply a partial update.

        A None category_id clears the category; None for any other field is
        ignored.

        Raises:
            ValidationError: If a new category_id is not one of the owner's categories
            NotFoundError: If the transaction does not exist for this owner
        """
        prepared: Dict[str, Any] = {}

        if "category_id" in changes:
            category_id = changes["category_id"] or None
            if category_id:
                self._require_category(category_id, owner_id)
            prepared["category_id"] = category_id

        if changes.get("amount") is not None:
            prepared["amount"] = normalize_amount(changes["amount"])
        if changes.get("date") is not None:
            prepared["date"] = parse_instant(changes["date"])
        if changes.get("type") is not None:
            prepared["type"] = TransactionType(changes["type"])
        if changes.get("description") is not None:
            prepared["description"] = changes["description"]

        transaction = self.store.update_transaction(transaction_id, owner_id, prepared)
        if not transaction:
            raise NotFoundError("Transaction not found")

        logger.info(f"Transaction updated: {transaction.id} for user: {owner_id}")
        return self._enrich(transaction, owner_id)

    def delete(self, transaction_id: str, owner_id: str) -> None:
        """
        Delete a transaction.

        Raises:
            NotFoundError: If the transaction does not exist for this owner
        """
        if not self.store.delete_transaction(transaction_id, owner_id):
            raise NotFoundError("Transaction not found")

        logger.info(f"Transaction deleted: {transaction_id} for user: {owner_id}")

    def _require_category(self, category_id: str, owner_id: str) -> Category:
        category = self.store.get_category_by_id(category_id, owner_id)
        if not category:
            logger.warning(f"Rejected unknown category {category_id} for user: {owner_id}")
            raise ValidationError("Invalid category")
        return category

    def _enrich(self, transaction, owner_id: str) -> EnrichedTransaction:
        category = None
        if transaction.category_id:
            category = self.store.get_category_by_id(transaction.category_id, owner_id)
        return enrich(transaction, category)


class CategoryService:
    def __init__(self, store: TransactionStore):
        self.store = store

    def list(self, owner_id: str) -> List[Category]:
        """List an owner's categories."""
        return self.store.list_categories(owner_id)

    def create(self, owner_id: str, data: Dict[str, Any]) -> Category:
        """Create a category."""
        category = self.store.create_category(
            owner_id=owner_id,
            name=data["name"],
            type=TransactionType(data["type"]),
            icon=data.get("icon"),
            color=data.get("color"),
        )
        logger.info(f"Category created: {category.id} for user: {owner_id}")
        return category

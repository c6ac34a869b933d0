"""
Tests for TransactionService and CategoryService.
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from finance_tracker.adapters.repositories_memory import InMemoryTransactionStore, seed_demo_data
from finance_tracker.core.records import ExportFilter, TransactionType
from finance_tracker.services.errors import NotFoundError, ValidationError
from finance_tracker.services.transaction_service import CategoryService, TransactionService
from finance_tracker.transform.normalizers import NormalizeError


@pytest.fixture
def store():
    store = InMemoryTransactionStore()
    seed_demo_data(store, "user-1")
    return store


@pytest.fixture
def service(store):
    return TransactionService(store)


class TestCreate:
    """Tests for TransactionService.create."""

    def test_create_normalizes_values(self, service):
        transaction = service.create(
            "user-1",
            {
                "amount": Decimal("12.5"),
                "date": "2024-02-03",
                "type": "expense",
                "category_id": "cat-2",
            },
        )

        assert transaction.amount == "12.50"
        assert transaction.date == datetime(2024, 2, 3, tzinfo=timezone.utc)
        assert transaction.type == TransactionType.EXPENSE
        assert transaction.description == ""
        assert transaction.category.name == "Transportation"
        assert transaction.created_at == transaction.updated_at

    def test_create_without_category(self, service):
        transaction = service.create(
            "user-1", {"amount": "5", "date": "2024-02-03", "type": "income"}
        )
        assert transaction.category_id is None
        assert transaction.category is None

    def test_create_unknown_category(self, service):
        with pytest.raises(ValidationError, match="Invalid category"):
            service.create(
                "user-1",
                {"amount": "5", "date": "2024-02-03", "type": "expense", "category_id": "nope"},
            )

    def test_create_other_owners_category(self, service):
        """Categories are resolved within the owner only."""
        with pytest.raises(ValidationError):
            service.create(
                "user-2",
                {"amount": "5", "date": "2024-02-03", "type": "expense", "category_id": "cat-1"},
            )

    def test_create_bad_date(self, service):
        with pytest.raises(NormalizeError):
            service.create("user-1", {"amount": "5", "date": "yesterday", "type": "expense"})

    def test_created_transaction_is_listed(self, service):
        created = service.create(
            "user-1", {"amount": "1", "date": "2024-05-01", "type": "expense"}
        )
        assert service.list("user-1", ExportFilter())[0].id == created.id


class TestUpdateDelete:
    """Tests for update, get and delete."""

    def test_update_partial(self, service):
        updated = service.update("trans-2", "user-1", {"amount": "99.999"})

        assert updated.amount == "100.00"
        assert updated.description == "Gas station"
        assert updated.updated_at > updated.created_at

    def test_update_clears_category(self, service):
        updated = service.update("trans-1", "user-1", {"category_id": None})
        assert updated.category_id is None
        assert updated.category is None

    def test_update_ignores_other_nones(self, service):
        updated = service.update("trans-1", "user-1", {"description": None, "amount": None})
        assert updated.description == "Coffee and breakfast"
        assert updated.amount == "25.50"

    def test_update_invalid_category(self, service):
        with pytest.raises(ValidationError):
            service.update("trans-1", "user-1", {"category_id": "missing"})

    def test_update_missing(self, service):
        with pytest.raises(NotFoundError):
            service.update("missing", "user-1", {"amount": "1"})

    def test_update_other_owner(self, service):
        with pytest.raises(NotFoundError):
            service.update("trans-1", "user-2", {"amount": "1"})

    def test_get(self, service):
        assert service.get("trans-3", "user-1").category.name == "Salary"
        with pytest.raises(NotFoundError, match="Transaction not found"):
            service.get("trans-3", "user-2")

    def test_delete(self, service):
        service.delete("trans-1", "user-1")
        with pytest.raises(NotFoundError):
            service.get("trans-1", "user-1")
        with pytest.raises(NotFoundError):
            service.delete("trans-1", "user-1")


class TestCategoryService:
    """Tests for CategoryService."""

    def test_list_scoped(self, store):
        service = CategoryService(store)
        assert [c.id for c in service.list("user-1")] == ["cat-1", "cat-2", "cat-3"]
        assert service.list("user-2") == []

    def test_create(self, store):
        service = CategoryService(store)
        category = service.create(
            "user-2", {"name": "Rent", "type": "expense", "icon": "home", "color": None}
        )
        assert category.owner_id == "user-2"
        assert category.type == TransactionType.EXPENSE
        assert service.list("user-2") == [category]

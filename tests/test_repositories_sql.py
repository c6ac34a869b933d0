"""
Tests for the SQL store adapters (in-memory SQLite).

Validates:
- Round trip of records (aware UTC instants, two-decimal amounts)
- Owner scoping
- Insertion order for listings
- Partial updates, deletes
- Query engine on top of the SQL store
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import finance_tracker.models  # noqa: F401
from finance_tracker.adapters.repositories_sql import SQLBudgetsRepo, SQLTransactionStore
from finance_tracker.core.database import Base
from finance_tracker.core.records import BudgetPeriod, ExportFilter, TransactionType
from finance_tracker.services.query_service import TransactionQueryEngine
from finance_tracker.transform.normalizers import parse_instant

engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db_session):
    return SQLTransactionStore(db_session)


@pytest.fixture
def food(store):
    return store.create_category("user-1", "Food", TransactionType.EXPENSE, icon="utensils")


def add(store, day, amount="10.00", category_id=None, owner_id="user-1", type=TransactionType.EXPENSE):
    return store.create_transaction(
        owner_id=owner_id,
        amount=amount,
        date=parse_instant(day),
        type=type,
        description=f"on {day}",
        category_id=category_id,
    )


class TestSQLTransactionStore:
    """Tests for SQLTransactionStore."""

    def test_round_trip(self, store, food):
        created = add(store, "2024-01-15", amount="25.50", category_id=food.id)
        fetched = store.get_transaction(created.id, "user-1")

        assert fetched == created
        assert fetched.date == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert fetched.date.tzinfo is not None
        assert fetched.amount == "25.50"
        assert fetched.type == TransactionType.EXPENSE

    def test_owner_scoping(self, store):
        created = add(store, "2024-01-15")
        add(store, "2024-01-16", owner_id="user-2")

        assert store.get_transaction(created.id, "user-2") is None
        assert [t.id for t in store.list_transactions("user-1")] == [created.id]

    def test_insertion_order(self, store):
        ids = [add(store, day).id for day in ("2024-01-03", "2024-01-01", "2024-01-02")]
        assert [t.id for t in store.list_transactions("user-1")] == ids

    def test_update(self, store, food):
        created = add(store, "2024-01-15")
        updated = store.update_transaction(
            created.id,
            "user-1",
            {"amount": "99.00", "category_id": food.id, "date": parse_instant("2024-02-01")},
        )

        assert updated.amount == "99.00"
        assert updated.category_id == food.id
        assert updated.date == datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert updated.updated_at >= created.updated_at
        assert store.update_transaction("missing", "user-1", {"amount": "1.00"}) is None

    def test_update_ignores_identity_fields(self, store):
        created = add(store, "2024-01-15")
        updated = store.update_transaction(created.id, "user-1", {"owner_id": "user-2", "id": "x"})
        assert updated.id == created.id
        assert updated.owner_id == "user-1"

    def test_delete(self, store):
        created = add(store, "2024-01-15")
        assert store.delete_transaction(created.id, "user-2") is False
        assert store.delete_transaction(created.id, "user-1") is True
        assert store.get_transaction(created.id, "user-1") is None

    def test_categories(self, store, food):
        assert store.get_category_by_id(food.id, "user-1") == food
        assert store.get_category_by_id(food.id, "user-2") is None
        assert store.list_categories("user-1") == [food]

    def test_query_engine_over_sql(self, store, food):
        add(store, "2024-01-10", category_id=food.id)
        add(store, "2024-01-14")
        add(store, "2024-01-15", category_id=food.id)

        result = TransactionQueryEngine(store).query(
            "user-1", ExportFilter(category_id=food.id, end_date=parse_instant("2024-01-15"))
        )

        assert [t.description for t in result] == ["on 2024-01-15", "on 2024-01-10"]
        assert all(t.category == food for t in result)


class TestSQLBudgetsRepo:
    """Tests for SQLBudgetsRepo."""

    def test_crud(self, db_session, food):
        repo = SQLBudgetsRepo(db_session)
        budget = repo.create(
            owner_id="user-1",
            category_id=food.id,
            amount="200.00",
            period=BudgetPeriod.MONTHLY,
            start_date=parse_instant("2024-01-01"),
            end_date=parse_instant("2024-01-31"),
        )

        assert repo.get(budget.id, "user-1") == budget
        assert repo.get(budget.id, "user-2") is None
        assert repo.list("user-1") == [budget]

        updated = repo.update(budget.id, "user-1", {"amount": "300.00"})
        assert updated.amount == "300.00"
        assert updated.end_date == datetime(2024, 1, 31, tzinfo=timezone.utc)

        assert repo.delete(budget.id, "user-1") is True
        assert repo.list("user-1") == []

"""
Pytest fixtures for API integration tests.

Provides a FastAPI test client backed by fresh in-memory stores.
"""
import pytest
from fastapi.testclient import TestClient

from finance_tracker.adapters.repositories_memory import (
    InMemoryBudgetsRepo,
    InMemoryTransactionStore,
    seed_demo_data,
)
from finance_tracker.api.deps import get_budgets_repo, get_store
from finance_tracker.main import app


@pytest.fixture(scope="function")
def store():
    """
    Fresh in-memory store for each test, seeded with the demo data set
    for user-1.
    """
    store = InMemoryTransactionStore()
    seed_demo_data(store, "user-1")
    return store


@pytest.fixture(scope="function")
def budgets_repo():
    return InMemoryBudgetsRepo()


@pytest.fixture(scope="function")
def client(store, budgets_repo):
    """
    FastAPI test client with store dependency overrides.

    Requests without an X-User-Id header act as user-1.
    """
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_budgets_repo] = lambda: budgets_repo

    with TestClient(app) as test_client:
        yield test_client

    # Clean up override
    app.dependency_overrides.clear()

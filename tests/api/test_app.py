"""
Tests for application wiring: dependencies and the global error handler.
"""
from unittest.mock import Mock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from finance_tracker.adapters.repositories_sql import SQLBudgetsRepo, SQLTransactionStore
from finance_tracker.api import deps
from finance_tracker.api.deps import get_owner_id, get_store
from finance_tracker.core.config import settings
from finance_tracker.main import app


@pytest.fixture
def failing_client():
    """Client whose store raises on every read."""
    store = Mock()
    store.list_transactions.side_effect = RuntimeError("store offline")
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.mark.api
class TestErrorHandler:
    """Tests for the global exception handler."""

    def test_unhandled_error_returns_500(self, failing_client, monkeypatch):
        monkeypatch.setattr(settings, "DEBUG", False)

        response = failing_client.get("/api/v1/transactions")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Internal Server Error"}

    def test_debug_includes_stack(self, failing_client, monkeypatch):
        monkeypatch.setattr(settings, "DEBUG", True)

        response = failing_client.get("/api/v1/transactions/export")

        data = response.json()
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert data["message"] == "store offline"
        assert any("RuntimeError" in line for line in data["stack"])


class TestDependencies:
    """Tests for shared dependencies."""

    def test_owner_from_header(self):
        assert get_owner_id("user-42") == "user-42"

    def test_owner_defaults_to_demo_user(self):
        assert get_owner_id(None) == settings.DEMO_OWNER_ID

    def test_memory_store_singleton_seeded(self, monkeypatch):
        monkeypatch.setattr(deps, "_memory_store", None)
        monkeypatch.setattr(settings, "SEED_DEMO_DATA", True)

        store = deps.get_memory_store()

        assert deps.get_memory_store() is store
        assert len(store.list_transactions(settings.DEMO_OWNER_ID)) == 4

    def test_memory_store_unseeded(self, monkeypatch):
        monkeypatch.setattr(deps, "_memory_store", None)
        monkeypatch.setattr(settings, "SEED_DEMO_DATA", False)

        assert deps.get_memory_store().list_transactions(settings.DEMO_OWNER_ID) == []

    def test_get_store_memory_backend(self):
        assert get_store(None) is deps.get_memory_store()

    def test_sql_backend_wiring(self, monkeypatch):
        monkeypatch.setattr(settings, "STORE_BACKEND", "sql")

        sessions = deps.get_session()
        db = next(sessions)
        try:
            assert isinstance(get_store(db), SQLTransactionStore)
            assert isinstance(deps.get_budgets_repo(db), SQLBudgetsRepo)
        finally:
            sessions.close()

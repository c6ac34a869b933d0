"""
Adapters - concrete implementations of ports.

Follows hexagonal architecture pattern (ports & adapters).
Current implementations use lean stack (in-memory lists, SQLite).
"""
from finance_tracker.adapters.repositories_memory import (
    InMemoryTransactionStore,
    InMemoryBudgetsRepo,
    seed_demo_data,
)
from finance_tracker.adapters.repositories_sql import SQLTransactionStore, SQLBudgetsRepo

__all__ = [
    "InMemoryTransactionStore",
    "InMemoryBudgetsRepo",
    "seed_demo_data",
    "SQLTransactionStore",
    "SQLBudgetsRepo",
]

"""
Ports - interface definitions for external dependencies.

Follows hexagonal architecture pattern (ports & adapters).
Ports define interfaces, adapters provide concrete implementations.
"""
from finance_tracker.ports.repositories import TransactionStore, BudgetsRepo

__all__ = ["TransactionStore", "BudgetsRepo"]

"""
Domain records shared by the store port, the query engine and the exporters.

Records are frozen dataclasses: the store replaces them on update, and every
query builds new derived sequences instead of touching stored instances.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Transaction (and category) kind."""

    INCOME = "income"
    EXPENSE = "expense"


class BudgetPeriod(str, Enum):
    """Budget period."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ExportFormat(str, Enum):
    """Export document format."""

    CSV = "csv"
    JSON = "json"


@dataclass(frozen=True)
class Category:
    id: str
    owner_id: str
    name: str
    type: TransactionType
    created_at: datetime
    icon: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """
    A stored transaction.

    Attributes:
        amount: Fixed-point string with exactly two fraction digits ("25.50")
        description: Free text, "" when not given (never None)
        date: UTC instant; only the calendar day is meaningful
    """

    id: str
    owner_id: str
    amount: str
    date: datetime
    type: TransactionType
    created_at: datetime
    updated_at: datetime
    description: str = ""
    category_id: Optional[str] = None


@dataclass(frozen=True)
class EnrichedTransaction(Transaction):
    """Transaction with its category reference resolved (None if unset or gone)."""

    category: Optional[Category] = None


@dataclass(frozen=True)
class Budget:
    id: str
    owner_id: str
    category_id: str
    amount: str
    period: BudgetPeriod
    start_date: datetime
    end_date: datetime
    created_at: datetime


@dataclass(frozen=True)
class ExportFilter:
    """
    Per-request filter for transaction queries and exports.

    start_date is inclusive; end_date includes the whole named day.
    """

    type: Optional[TransactionType] = None
    category_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    format: ExportFormat = ExportFormat.CSV


@dataclass(frozen=True)
class EnrichedBudget(Budget):
    """Budget with its category resolved."""

    category: Optional[Category] = None

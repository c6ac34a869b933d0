"""
ORM rows for the SQL-backed store.

Instants are stored as naive UTC datetimes; amounts as two-decimal text so
the store never rounds. The autoincrement `seq` column preserves insertion
order for list operations.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SAEnum
from finance_tracker.core.database import Base
from finance_tracker.core.records import BudgetPeriod, TransactionType


class CategoryRow(Base):
    __tablename__ = "categories"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False, index=True)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=True)
    color = Column(String, nullable=True)
    type = Column(SAEnum(TransactionType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    created_at = Column(DateTime, nullable=False)


class TransactionRow(Base):
    __tablename__ = "transactions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False, index=True)
    owner_id = Column(String, nullable=False, index=True)
    amount = Column(String, nullable=False)  # "25.50"
    description = Column(String, nullable=False, default="")
    category_id = Column(String, ForeignKey("categories.id"), nullable=True)
    date = Column(DateTime, nullable=False, index=True)
    type = Column(SAEnum(TransactionType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


class BudgetRow(Base):
    __tablename__ = "budgets"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False, index=True)
    owner_id = Column(String, nullable=False, index=True)
    category_id = Column(String, ForeignKey("categories.id"), nullable=False)
    amount = Column(String, nullable=False)
    period = Column(SAEnum(BudgetPeriod, values_callable=lambda e: [m.value for m in e]), nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)

"""
Pydantic schemas for budgets API.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field, field_serializer, field_validator, model_validator

from finance_tracker.core.records import BudgetPeriod
from finance_tracker.schemas.transaction import CamelModel, CategoryResponse
from finance_tracker.transform.normalizers import format_instant, parse_instant


class BudgetCreate(CamelModel):
    category_id: str
    amount: Decimal = Field(gt=0, decimal_places=2)
    period: BudgetPeriod
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_instant(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class BudgetUpdate(CamelModel):
    category_id: Optional[str] = None
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    period: Optional[BudgetPeriod] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        if v is None:
            return v
        return parse_instant(v)


class BudgetResponse(CamelModel):
    id: str
    owner_id: str = Field(alias="userId")
    category_id: str
    amount: str
    period: BudgetPeriod
    start_date: datetime
    end_date: datetime
    created_at: datetime
    category: Optional[CategoryResponse] = None

    @field_serializer("start_date", "end_date", "created_at")
    def serialize_instant(self, value: datetime) -> str:
        return format_instant(value)


class BudgetProgressResponse(CamelModel):
    budget_id: str
    spent: str
    remaining: str
    percentage: float

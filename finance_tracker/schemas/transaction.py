"""
Pydantic schemas for transactions and categories.

Wire format uses camelCase keys (userId, categoryId, createdAt, ...),
amounts as two-decimal strings and instants as ISO-8601 UTC text with
millisecond precision.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from finance_tracker.core.records import TransactionType
from finance_tracker.transform.normalizers import format_instant, parse_instant


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CategoryResponse(CamelModel):
    id: str
    owner_id: str = Field(alias="userId")
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    type: TransactionType
    created_at: datetime

    @field_serializer("created_at")
    def serialize_instant(self, value: datetime) -> str:
        return format_instant(value)


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    icon: Optional[str] = None
    color: Optional[str] = None
    type: TransactionType


class TransactionResponse(CamelModel):
    id: str
    owner_id: str = Field(alias="userId")
    amount: str
    description: str = ""
    category_id: Optional[str] = None
    date: datetime
    type: TransactionType
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryResponse] = None

    @field_serializer("date", "created_at", "updated_at")
    def serialize_instant(self, value: datetime) -> str:
        return format_instant(value)


class TransactionCreate(CamelModel):
    amount: Decimal = Field(gt=0, decimal_places=2)
    description: str = Field("", max_length=500)
    category_id: Optional[str] = None
    date: datetime
    type: TransactionType

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return parse_instant(v)


class TransactionUpdate(CamelModel):
    """Partial update; only fields present in the request body are applied."""

    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    description: Optional[str] = Field(None, max_length=500)
    category_id: Optional[str] = None
    date: Optional[datetime] = None
    type: Optional[TransactionType] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        if v is None:
            return v
        return parse_instant(v)


class Pagination(BaseModel):
    page: int = 1
    limit: int = 20
    total: int
    pages: int = 1


class TransactionListResponse(BaseModel):
    data: List[TransactionResponse]
    pagination: Pagination

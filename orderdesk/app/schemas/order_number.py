from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field


class OrderNumberCreate(BaseModel):
    # Plain string so unknown channels reach the generator and come back as
    # INVALID_CHANNEL rather than a schema error.
    channel: str = Field(min_length=1, max_length=32)
    actor_id: str | None = Field(default=None, max_length=128)
    # datetime first: a date-only match would drop the UTC offset of
    # "2024-01-15T00:00:00+05:00", which is still the 14th in UTC
    reference_date: datetime | date | None = Field(default=None, union_mode="left_to_right")


class OrderNumberRead(BaseModel):
    order_number: str
    key: str
    prefix: str
    day: str
    sequence: int

    class Config:
        from_attributes = True


class CounterRead(BaseModel):
    key: str
    value: int


class OrderNumberErrorRead(BaseModel):
    code: str
    message: str


class OrderNumberErrorResponse(BaseModel):
    detail: OrderNumberErrorRead

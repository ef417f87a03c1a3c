from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class StockOperationCreate(BaseModel):
    product_id: str = Field(min_length=1, max_length=64)
    # create | edit | delete | restore; other kinds are kept but have no effect
    operation: str = Field(min_length=1, max_length=32)
    quantity: float
    timestamp: datetime | None = None
    order_id: str | None = Field(default=None, max_length=64)


class StockOperationRead(BaseModel):
    product_id: str
    operation: str
    quantity: float
    timestamp: datetime
    order_id: str | None = None

    class Config:
        from_attributes = True


class ExpectedStockRead(BaseModel):
    product_id: str
    initial_stock: float
    expected_stock: float


class StockValidateRequest(BaseModel):
    reported_stock: float
    initial_stock: float = 0


class ReconciliationRead(BaseModel):
    product_id: str
    is_valid: bool
    expected_stock: float
    reported_stock: float
    difference: float
    operations: list[StockOperationRead]

    class Config:
        from_attributes = True

"""Shared sales report schema (v1)."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DailySalesV1(BaseModel):
    date: str
    total_amount: float
    order_count: int


class ItemSalesV1(BaseModel):
    item_name: str
    total_sales: float
    quantity_sold: int


class MonthlyTotalsV1(BaseModel):
    total_sales: float = 0
    order_count: int = 0


class MonthlySalesV1(BaseModel):
    month: int
    year: int
    total_sales: float = 0
    order_count: int = 0
    daily_transactions: list[DailySalesV1] = Field(default_factory=list)
    items: list[ItemSalesV1] = Field(default_factory=list)

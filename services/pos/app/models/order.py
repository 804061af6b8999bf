from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from packages.shared.schemas.cart_v1 import LineItemV1
from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderCreateRequest(BaseModel):
    # Generated server-side when omitted.
    order_number: str | None = None
    items: list[LineItemV1] = Field(..., min_length=1)
    total_amount: float = Field(..., ge=0)
    status: OrderStatus = OrderStatus.COMPLETED


class CompletedOrderOut(BaseModel):
    id: str
    order_number: str
    items: list[LineItemV1]
    total_amount: float
    date: datetime
    status: OrderStatus


class OrderRangeDeleteRequest(BaseModel):
    start_date: date
    end_date: date


class OrderRangeDeleteResponse(BaseModel):
    message: str
    deleted_count: int


class MessageResponse(BaseModel):
    message: str

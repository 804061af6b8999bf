"""Shared cart payload schema (v1).

These models are persisted as JSON in the terminal key-value store and returned by the
terminal cart API. Field names must stay stable once a terminal has saved data.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class MenuItemV1(BaseModel):
    id: str
    name: str
    category: str = ""
    description: str | None = None
    price: float = Field(..., ge=0)
    image: str = ""


class LineItemV1(BaseModel):
    """One menu item in a cart, with the price captured when it was added."""

    id: str
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1)
    image: str = ""


class PendingOrderV1(BaseModel):
    id: str
    name: str
    items: list[LineItemV1] = Field(default_factory=list)
    total_amount: float = 0
    created_at: str


class CartStateV1(BaseModel):
    items: list[LineItemV1] = Field(default_factory=list)
    total_amount: float = 0
    total_item_count: int = 0

    # Pending order the cart was loaded from, if any.
    active_order: PendingOrderV1 | None = None
    has_unsaved_changes: bool = False

    pending_orders: list[PendingOrderV1] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

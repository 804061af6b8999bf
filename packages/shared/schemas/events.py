"""Shared cart event schema (v1).

The cart session emits one event per mutation. Clients subscribe to these instead of
re-reading terminal storage on a timer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class CartEventTypeV1(str, Enum):
    CART_CHANGED = "CART_CHANGED"
    CART_CLEARED = "CART_CLEARED"
    PENDING_ORDER_SAVED = "PENDING_ORDER_SAVED"
    PENDING_ORDER_UPDATED = "PENDING_ORDER_UPDATED"
    PENDING_ORDER_REMOVED = "PENDING_ORDER_REMOVED"
    ACTIVE_LINK_CHANGED = "ACTIVE_LINK_CHANGED"
    CHECKOUT_COMPLETED = "CHECKOUT_COMPLETED"
    STORAGE_WARNING = "STORAGE_WARNING"


class CartEventV1(BaseModel):
    type: CartEventTypeV1
    active_order_id: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

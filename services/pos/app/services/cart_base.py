from __future__ import annotations

from typing import Protocol

CART_KEY = "pos_cart"
PENDING_ORDERS_KEY = "pos_pending_orders"
ACTIVE_ORDER_ID_KEY = "pos_current_pending_order_id"


class CartError(Exception):
    """Base class for cart and pending-order errors."""


class CartValidationError(CartError, ValueError):
    pass


class PendingOrderNotFoundError(CartError, LookupError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Pending order not found: {order_id}")
        self.order_id = order_id


class StorageUnavailableError(CartError):
    """Raised by a key-value store that cannot be read or written."""


class KeyValueStore(Protocol):
    """Synchronous string store, durable across sessions on one terminal.

    Implementations raise StorageUnavailableError when the backing medium fails.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

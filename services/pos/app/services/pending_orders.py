from __future__ import annotations

import random
import string
import time
from datetime import datetime, timezone

from packages.shared.schemas.cart_v1 import LineItemV1, PendingOrderV1
from packages.shared.schemas.events import CartEventTypeV1
from services.pos.app.services.cart_base import CartValidationError
from services.pos.app.services.cart_events import CartEventBus
from services.pos.app.services.cart_manager import line_total
from services.pos.app.services.cart_storage import CartStorage

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_pending_order_id() -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"order-{int(time.time() * 1000)}-{suffix}"


class PendingOrderSet:
    """Named save slots ("Table 3", "Customer A") for carts.

    Stored snapshots are independent of the live cart. This class never touches the
    active link; callers that remove the linked order must unlink it themselves.
    """

    def __init__(self, storage: CartStorage, events: CartEventBus) -> None:
        self._storage = storage
        self._events = events

    def list_orders(self) -> list[PendingOrderV1]:
        return self._storage.read_orders()

    def get_order(self, order_id: str) -> PendingOrderV1 | None:
        for order in self.list_orders():
            if order.id == order_id:
                return order
        return None

    def save_current_cart_as(self, name: str, items: list[LineItemV1]) -> str:
        name = (name or "").strip()
        if not name:
            raise CartValidationError("Order name is required (e.g. Table 1, Customer 2)")
        if not items:
            raise CartValidationError("Cart is empty. Add items before saving.")

        snapshot = [item.model_copy(deep=True) for item in items]
        order = PendingOrderV1(
            id=new_pending_order_id(),
            name=name,
            items=snapshot,
            total_amount=line_total(snapshot),
            created_at=datetime.now(timezone.utc).isoformat(),
        )

        orders = self.list_orders()
        orders.append(order)
        self._storage.write_orders(orders)

        self._events.emit(
            CartEventTypeV1.PENDING_ORDER_SAVED,
            order_id=order.id,
            name=order.name,
            total_amount=order.total_amount,
        )
        return order.id

    def update_order(
        self,
        order_id: str,
        items: list[LineItemV1],
        total_amount: float | None = None,
    ) -> PendingOrderV1 | None:
        orders = self.list_orders()
        for idx, order in enumerate(orders):
            if order.id != order_id:
                continue

            snapshot = [item.model_copy(deep=True) for item in items]
            updated = order.model_copy(
                update={
                    "items": snapshot,
                    "total_amount": line_total(snapshot) if total_amount is None else total_amount,
                }
            )
            orders[idx] = updated
            self._storage.write_orders(orders)

            self._events.emit(
                CartEventTypeV1.PENDING_ORDER_UPDATED,
                order_id=order_id,
                total_amount=updated.total_amount,
            )
            return updated

        return None

    def remove_order(self, order_id: str) -> bool:
        orders = self.list_orders()
        kept = [order for order in orders if order.id != order_id]
        if len(kept) == len(orders):
            return False

        self._storage.write_orders(kept)
        self._events.emit(CartEventTypeV1.PENDING_ORDER_REMOVED, order_id=order_id)
        return True

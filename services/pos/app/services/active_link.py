from __future__ import annotations

import logging

from packages.shared.schemas.cart_v1 import LineItemV1, PendingOrderV1
from packages.shared.schemas.events import CartEventTypeV1
from services.pos.app.services.cart_base import PendingOrderNotFoundError
from services.pos.app.services.cart_events import CartEventBus
from services.pos.app.services.cart_manager import CartManager
from services.pos.app.services.cart_storage import CartStorage
from services.pos.app.services.pending_orders import PendingOrderSet

logger = logging.getLogger(__name__)


def _keyed(items: list[LineItemV1]) -> dict[str, dict]:
    return {item.id: item.model_dump() for item in items}


class ActiveLinkTracker:
    """Tracks which pending order (if any) the current cart was loaded from.

    States are Unlinked and Linked(order_id). The link is only ever set by `load_order`.
    It is cleared by CartManager.clear(), by `finish_checkout`, and lazily whenever the
    linked order turns out to be gone (deleted from another tab or terminal).
    """

    def __init__(
        self,
        storage: CartStorage,
        events: CartEventBus,
        cart: CartManager,
        pending_orders: PendingOrderSet,
    ) -> None:
        self._storage = storage
        self._events = events
        self._cart = cart
        self._pending = pending_orders

    def current_order_id(self) -> str | None:
        order = self.current_order()
        return order.id if order is not None else None

    def current_order(self) -> PendingOrderV1 | None:
        order_id = self._storage.read_active_id()
        if order_id is None:
            return None

        order = self._pending.get_order(order_id)
        if order is None:
            logger.info("active pending order %s no longer exists; unlinking", order_id)
            self._unlink(order_id, reason="order_missing")
        return order

    def has_unsaved_changes(self) -> bool:
        order = self.current_order()
        if order is None:
            return False
        return _keyed(self._cart.get_items()) != _keyed(order.items)

    def load_order(self, order_id: str) -> PendingOrderV1 | None:
        """Replace the cart with a copy of the order's snapshot and link to it.

        Covers load, reload (same id: discards cart edits) and switch (different id: the
        previously linked order keeps whatever it last saved). Asking the operator to
        confirm before discarding edits is the caller's job. Returns None if the cart or
        the link could not be written, in which case the cart and link are left as they were.
        """

        order = self._pending.get_order(order_id)
        if order is None:
            raise PendingOrderNotFoundError(order_id)

        previous = self._storage.read_active_id()
        previous_items = self._cart.get_items()
        if not self._cart.replace_items(order.items):
            return None

        if not self._storage.write_active_id(order.id):
            # The link still names the previous order, so the cart must go back to match it.
            if not self._cart.replace_items(previous_items) and previous is not None:
                self._unlink(previous, reason="link_write_failed")
            return None

        self._events.emit(
            CartEventTypeV1.ACTIVE_LINK_CHANGED,
            active_order_id=order.id,
            previous_order_id=previous,
            reason="reloaded" if previous == order.id else "loaded",
        )
        return order

    def save_changes(self) -> PendingOrderV1 | None:
        order = self.current_order()
        if order is None:
            return None

        items = self._cart.get_items()
        if not items:
            return None
        return self._pending.update_order(order.id, items)

    def unlink_if(self, order_id: str) -> bool:
        if self._storage.read_active_id() != order_id:
            return False
        self._unlink(order_id, reason="order_removed")
        return True

    def finish_checkout(self) -> str | None:
        """Drop the pending order backing the cart (if any) and clear the cart.

        Only call this after the order-storage collaborator has confirmed the order.
        """

        order_id = self._storage.read_active_id()
        if order_id is not None:
            self._pending.remove_order(order_id)
        self._cart.clear()
        return order_id

    def _unlink(self, order_id: str, *, reason: str) -> None:
        self._storage.write_active_id(None)
        self._events.emit(
            CartEventTypeV1.ACTIVE_LINK_CHANGED,
            previous_order_id=order_id,
            reason=reason,
        )

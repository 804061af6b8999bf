from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from packages.shared.schemas.cart_v1 import CartStateV1, LineItemV1, MenuItemV1, PendingOrderV1
from packages.shared.schemas.events import CartEventTypeV1
from services.pos.app.services.active_link import ActiveLinkTracker
from services.pos.app.services.cart_base import KeyValueStore
from services.pos.app.services.cart_events import CartEventBus, CartEventListener
from services.pos.app.services.cart_manager import CartManager
from services.pos.app.services.cart_storage import CartStorage
from services.pos.app.services.pending_orders import PendingOrderSet


class CartSession:
    """Cart, pending orders and active link of one terminal, over one injected store."""

    def __init__(self, store: KeyValueStore, events: CartEventBus | None = None) -> None:
        self.events = events or CartEventBus()
        self.warnings: list[str] = []

        self.storage = CartStorage(store, on_warning=self._on_storage_warning)
        self.cart = CartManager(self.storage, self.events)
        self.pending_orders = PendingOrderSet(self.storage, self.events)
        self.active_link = ActiveLinkTracker(
            self.storage, self.events, self.cart, self.pending_orders
        )

    def subscribe(self, listener: CartEventListener) -> Callable[[], None]:
        return self.events.subscribe(listener)

    def unsubscribe(self, listener: CartEventListener) -> None:
        self.events.unsubscribe(listener)

    # Cart

    def add_item(self, menu_item: MenuItemV1 | Mapping[str, Any] | object) -> list[LineItemV1]:
        return self.cart.add_item(menu_item)

    def set_quantity(self, item_id: str, quantity: int) -> list[LineItemV1]:
        return self.cart.set_quantity(item_id, quantity)

    def remove_item(self, item_id: str) -> list[LineItemV1]:
        return self.cart.remove_item(item_id)

    def clear(self) -> None:
        self.cart.clear()

    # Pending orders

    def save_current_cart_as(self, name: str, *, clear_cart: bool = False) -> str:
        order_id = self.pending_orders.save_current_cart_as(name, self.cart.get_items())
        if clear_cart:
            self.cart.clear()
        return order_id

    def load_order(self, order_id: str) -> PendingOrderV1 | None:
        return self.active_link.load_order(order_id)

    def save_changes(self) -> PendingOrderV1 | None:
        return self.active_link.save_changes()

    def delete_order(self, order_id: str) -> bool:
        # The one place removal and unlinking are coupled: deleting the order the cart
        # is editing must not leave a dangling link.
        removed = self.pending_orders.remove_order(order_id)
        self.active_link.unlink_if(order_id)
        return removed

    def has_unsaved_changes(self) -> bool:
        return self.active_link.has_unsaved_changes()

    def complete_checkout(self, **payload: object) -> str | None:
        order_id = self.active_link.finish_checkout()
        self.events.emit(
            CartEventTypeV1.CHECKOUT_COMPLETED,
            completed_pending_order_id=order_id,
            **payload,
        )
        return order_id

    def state(self) -> CartStateV1:
        items = self.cart.get_items()
        active = self.active_link.current_order()

        unsaved = False
        if active is not None:
            unsaved = self.active_link.has_unsaved_changes()

        return CartStateV1(
            items=items,
            total_amount=sum(item.price * item.quantity for item in items),
            total_item_count=sum(item.quantity for item in items),
            active_order=active,
            has_unsaved_changes=unsaved,
            pending_orders=self.pending_orders.list_orders(),
            warnings=list(self.warnings),
        )

    def _on_storage_warning(self, message: str) -> None:
        self.warnings.append(message)
        self.events.emit(CartEventTypeV1.STORAGE_WARNING, message=message)

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from packages.shared.schemas.cart_v1 import LineItemV1, MenuItemV1
from packages.shared.schemas.events import CartEventTypeV1
from pydantic import ValidationError
from services.pos.app.services.cart_base import CartValidationError
from services.pos.app.services.cart_events import CartEventBus
from services.pos.app.services.cart_storage import CartStorage


def line_total(items: list[LineItemV1]) -> float:
    return sum(item.price * item.quantity for item in items)


def coerce_menu_item(menu_item: MenuItemV1 | Mapping[str, Any] | object) -> MenuItemV1:
    if isinstance(menu_item, MenuItemV1):
        return menu_item
    try:
        return MenuItemV1.model_validate(menu_item, from_attributes=True)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or "menu_item"
        raise CartValidationError(f"Invalid menu item {field}: {first['msg']}") from e


class CartManager:
    """The single active cart of a terminal.

    Every mutation reads the stored cart, applies the change and writes it back before
    returning, so there is no in-memory copy that can drift from storage.
    """

    def __init__(self, storage: CartStorage, events: CartEventBus) -> None:
        self._storage = storage
        self._events = events

    def get_items(self) -> list[LineItemV1]:
        return self._storage.read_items()

    def get_total_amount(self) -> float:
        return line_total(self.get_items())

    def get_total_item_count(self) -> int:
        return sum(item.quantity for item in self.get_items())

    def add_item(self, menu_item: MenuItemV1 | Mapping[str, Any] | object) -> list[LineItemV1]:
        # Price and image are copied now; later menu edits do not reach the cart.
        menu = coerce_menu_item(menu_item)
        items = self.get_items()

        for item in items:
            if item.id == menu.id:
                item.quantity += 1
                break
        else:
            items.append(
                LineItemV1(id=menu.id, name=menu.name, price=menu.price, quantity=1, image=menu.image)
            )

        return self._save(items, item_id=menu.id)

    def set_quantity(self, item_id: str, quantity: int) -> list[LineItemV1]:
        if quantity <= 0:
            return self.remove_item(item_id)

        items = self.get_items()
        for item in items:
            if item.id == item_id:
                item.quantity = quantity
                return self._save(items, item_id=item_id)
        return items

    def remove_item(self, item_id: str) -> list[LineItemV1]:
        items = self.get_items()
        kept = [item for item in items if item.id != item_id]
        if len(kept) == len(items):
            return items
        return self._save(kept, item_id=item_id)

    def replace_items(self, items: list[LineItemV1]) -> bool:
        """Overwrite the cart wholesale. Returns False if the write did not persist."""

        copied = [item.model_copy(deep=True) for item in items]
        ok = self._storage.write_items(copied)
        if ok:
            self._emit_changed(copied)
        return ok

    def clear(self) -> None:
        """Empty the cart and forget which pending order it was loaded from.

        Both keys are dropped in the same call; a cleared cart is never left linked.
        """

        previous_link = self._storage.read_active_id()
        self._storage.remove_items()
        self._storage.write_active_id(None)

        self._events.emit(CartEventTypeV1.CART_CLEARED)
        if previous_link is not None:
            self._events.emit(
                CartEventTypeV1.ACTIVE_LINK_CHANGED,
                previous_order_id=previous_link,
                reason="cart_cleared",
            )

    def _save(self, items: list[LineItemV1], *, item_id: str) -> list[LineItemV1]:
        # A failed write leaves the stored cart as it was; report that, not the edit.
        if not self._storage.write_items(items):
            return self.get_items()
        self._emit_changed(items, item_id=item_id)
        return items

    def _emit_changed(self, items: list[LineItemV1], item_id: str | None = None) -> None:
        self._events.emit(
            CartEventTypeV1.CART_CHANGED,
            active_order_id=self._storage.read_active_id(),
            item_id=item_id,
            total_amount=line_total(items),
            total_item_count=sum(item.quantity for item in items),
        )

from __future__ import annotations

import logging
from collections.abc import Callable

from packages.shared.schemas.cart_v1 import LineItemV1, PendingOrderV1
from pydantic import TypeAdapter, ValidationError
from services.pos.app.services.cart_base import (
    ACTIVE_ORDER_ID_KEY,
    CART_KEY,
    PENDING_ORDERS_KEY,
    KeyValueStore,
    StorageUnavailableError,
)

logger = logging.getLogger(__name__)

_LINE_ITEMS = TypeAdapter(list[LineItemV1])
_PENDING_ORDERS = TypeAdapter(list[PendingOrderV1])


class CartStorage:
    """JSON codec and failure policy between the cart components and a KeyValueStore.

    Reads never raise: an unavailable store or a corrupt value yields the empty default.
    Writes never raise either. A failed write is logged every time but reported through
    `on_warning` only once per key until a write to that key succeeds again.
    """

    def __init__(
        self,
        store: KeyValueStore,
        on_warning: Callable[[str], None] | None = None,
    ) -> None:
        self.store = store
        self._on_warning = on_warning
        self._failing_keys: set[str] = set()

    def read_items(self) -> list[LineItemV1]:
        raw = self._read(CART_KEY)
        if not raw:
            return []
        try:
            return _LINE_ITEMS.validate_json(raw)
        except ValidationError as e:
            logger.warning("discarding corrupt cart value: %s", e.error_count())
            return []

    def write_items(self, items: list[LineItemV1]) -> bool:
        return self._write(CART_KEY, _LINE_ITEMS.dump_json(items).decode())

    def remove_items(self) -> bool:
        return self._write(CART_KEY, None)

    def read_orders(self) -> list[PendingOrderV1]:
        raw = self._read(PENDING_ORDERS_KEY)
        if not raw:
            return []
        try:
            return _PENDING_ORDERS.validate_json(raw)
        except ValidationError as e:
            logger.warning("discarding corrupt pending orders value: %s", e.error_count())
            return []

    def write_orders(self, orders: list[PendingOrderV1]) -> bool:
        return self._write(PENDING_ORDERS_KEY, _PENDING_ORDERS.dump_json(orders).decode())

    def read_active_id(self) -> str | None:
        return self._read(ACTIVE_ORDER_ID_KEY) or None

    def write_active_id(self, order_id: str | None) -> bool:
        return self._write(ACTIVE_ORDER_ID_KEY, order_id or None)

    def _read(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except StorageUnavailableError as e:
            logger.warning("storage read failed for %s: %s", key, e)
            return None

    def _write(self, key: str, value: str | None) -> bool:
        try:
            if value is None:
                self.store.remove(key)
            else:
                self.store.set(key, value)
        except StorageUnavailableError as e:
            logger.warning("storage write failed for %s: %s", key, e)
            if key not in self._failing_keys:
                self._failing_keys.add(key)
                if self._on_warning is not None:
                    self._on_warning(f"Could not save {key}: {e}")
            return False

        self._failing_keys.discard(key)
        return True

from __future__ import annotations

import logging
from collections.abc import Callable

from packages.shared.schemas.events import CartEventTypeV1, CartEventV1

logger = logging.getLogger(__name__)

CartEventListener = Callable[[CartEventV1], None]


class CartEventBus:
    """Synchronous fan-out of cart events to subscribed listeners.

    Listeners run in subscription order inside the mutating call. A failing listener is
    logged and skipped; it never undoes the mutation that produced the event.
    """

    def __init__(self) -> None:
        self._listeners: list[CartEventListener] = []

    def subscribe(self, listener: CartEventListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: CartEventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(
        self,
        event_type: CartEventTypeV1,
        *,
        active_order_id: str | None = None,
        **payload: object,
    ) -> CartEventV1:
        event = CartEventV1(type=event_type, active_order_id=active_order_id, payload=payload)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("cart event listener failed for %s", event_type.value)
        return event

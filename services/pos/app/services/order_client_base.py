from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

from packages.shared.schemas.cart_v1 import LineItemV1
from services.pos.app.models.order import CompletedOrderOut


class OrderClientError(Exception):
    """Base class for order-storage client errors."""


class OrderClientTimeoutError(OrderClientError):
    def __init__(self, timeout_s: float) -> None:
        super().__init__(f"Order storage did not respond within {timeout_s:g}s. Please retry.")
        self.timeout_s = timeout_s


class OrderRejectedError(OrderClientError):
    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"Order storage rejected the request ({status_code}): {detail}")
        self.status_code = status_code
        self.detail = detail


class OrderClient(Protocol):
    name: str

    def create_order(
        self,
        order_number: str | None,
        items: list[LineItemV1],
        total_amount: float,
    ) -> CompletedOrderOut: ...

    def list_orders(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[CompletedOrderOut]: ...

    def delete_order(self, order_id: str) -> bool: ...

    def delete_orders_in_range(self, start: date, end: date) -> int: ...

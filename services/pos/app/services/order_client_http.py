from __future__ import annotations

import os
from datetime import date, datetime
from typing import Any

import httpx
from packages.shared.schemas.cart_v1 import LineItemV1
from services.pos.app.models.order import CompletedOrderOut
from services.pos.app.services.order_client_base import (
    OrderClientError,
    OrderClientTimeoutError,
    OrderRejectedError,
)

DEFAULT_TIMEOUT_S = 10.0


def default_timeout_s() -> float:
    raw = os.getenv("POS_CHECKOUT_TIMEOUT_S", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_S
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_S


class HttpOrderClient:
    """Order storage behind another counterpos API instance."""

    name = "http"

    def __init__(
        self,
        base_url: str,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    @classmethod
    def from_env(cls) -> HttpOrderClient:
        base_url = os.getenv("POS_ORDER_API_URL", "").strip()
        if not base_url:
            raise ValueError("POS_ORDER_API_URL is required when POS_ORDER_CLIENT=http")
        return cls(base_url=base_url, timeout_s=default_timeout_s())

    def create_order(
        self,
        order_number: str | None,
        items: list[LineItemV1],
        total_amount: float,
    ) -> CompletedOrderOut:
        payload = {
            "order_number": order_number,
            "items": [item.model_dump() for item in items],
            "total_amount": total_amount,
        }
        data = self._request("POST", "/v1/orders", json=payload)
        return CompletedOrderOut.model_validate(data)

    def list_orders(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[CompletedOrderOut]:
        params: dict[str, str] = {}
        if start is not None:
            params["start"] = start.isoformat()
        if end is not None:
            params["end"] = end.isoformat()
        data = self._request("GET", "/v1/orders", params=params)
        return [CompletedOrderOut.model_validate(row) for row in data]

    def delete_order(self, order_id: str) -> bool:
        try:
            self._request("DELETE", f"/v1/orders/{order_id}")
        except OrderRejectedError as e:
            if e.status_code == 404:
                return False
            raise
        return True

    def delete_orders_in_range(self, start: date, end: date) -> int:
        data = self._request(
            "DELETE",
            "/v1/orders/range/by-date",
            json={"start_date": start.isoformat(), "end_date": end.isoformat()},
        )
        return int(data["deleted_count"])

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self._transport) as c:
                r = c.request(method, url, headers={"Content-Type": "application/json"}, **kwargs)
        except httpx.TimeoutException as e:
            raise OrderClientTimeoutError(self.timeout_s) from e
        except httpx.HTTPError as e:
            raise OrderClientError(f"Cannot connect to order storage at {self.base_url}: {e}") from e

        if r.status_code >= 400:
            try:
                detail = r.json().get("detail", r.text)
            except ValueError:
                detail = r.text
            raise OrderRejectedError(r.status_code, str(detail))

        return r.json()

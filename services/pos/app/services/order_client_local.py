from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime

from packages.shared.schemas.cart_v1 import LineItemV1
from services.pos.app.db.database import db_session
from services.pos.app.models.order import CompletedOrderOut
from services.pos.app.services import orders
from services.pos.app.services.order_client_base import OrderClientError, OrderRejectedError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class LocalOrderClient:
    """Order storage in the same process, through the service database."""

    name = "local"

    def __init__(self, session_factory: Callable[[], Session] = db_session) -> None:
        self._session_factory = session_factory

    def create_order(
        self,
        order_number: str | None,
        items: list[LineItemV1],
        total_amount: float,
    ) -> CompletedOrderOut:
        try:
            with self._session_factory() as db:
                return orders.create_order(
                    db, items=items, total_amount=total_amount, order_number=order_number
                )
        except orders.DuplicateOrderNumberError as e:
            raise OrderRejectedError(409, str(e)) from e
        except SQLAlchemyError as e:
            raise OrderClientError(f"Database error while saving order: {e}") from e

    def list_orders(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[CompletedOrderOut]:
        try:
            with self._session_factory() as db:
                return orders.list_orders(db, start, end)
        except SQLAlchemyError as e:
            raise OrderClientError(f"Database error while listing orders: {e}") from e

    def delete_order(self, order_id: str) -> bool:
        try:
            with self._session_factory() as db:
                return orders.delete_order(db, order_id)
        except SQLAlchemyError as e:
            raise OrderClientError(f"Database error while deleting order: {e}") from e

    def delete_orders_in_range(self, start: date, end: date) -> int:
        lo, hi = orders.day_range(start, end)
        try:
            with self._session_factory() as db:
                return orders.delete_orders_in_range(db, lo, hi)
        except SQLAlchemyError as e:
            raise OrderClientError(f"Database error while deleting orders: {e}") from e

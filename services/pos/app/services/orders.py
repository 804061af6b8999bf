from __future__ import annotations

import logging
import random
import string
import time
from datetime import date, datetime, time as dtime
from uuid import uuid4

from packages.shared.schemas.cart_v1 import LineItemV1
from services.pos.app.db.models import Order
from services.pos.app.models.order import CompletedOrderOut, OrderStatus
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

_ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


class DuplicateOrderNumberError(Exception):
    def __init__(self, order_number: str) -> None:
        super().__init__(f"Order number already exists: {order_number}")
        self.order_number = order_number


def generate_order_number() -> str:
    suffix = "".join(random.choices(_ORDER_NUMBER_ALPHABET, k=9))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"


def day_range(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    """Inclusive datetime bounds covering every moment of both calendar days."""

    if start_date > end_date:
        raise ValueError("Start date must be before or equal to end date")
    return datetime.combine(start_date, dtime.min), datetime.combine(end_date, dtime.max)


def order_to_out(row: Order) -> CompletedOrderOut:
    return CompletedOrderOut(
        id=row.id,
        order_number=row.order_number,
        items=[LineItemV1.model_validate(it) for it in row.items_json],
        total_amount=row.total_amount,
        date=row.date,
        status=OrderStatus(row.status),
    )


def create_order(
    db: Session,
    *,
    items: list[LineItemV1],
    total_amount: float,
    order_number: str | None = None,
    status: OrderStatus = OrderStatus.COMPLETED,
    order_date: datetime | None = None,
) -> CompletedOrderOut:
    order_number = order_number or generate_order_number()

    existing = db.query(Order).filter(Order.order_number == order_number).first()
    if existing is not None:
        raise DuplicateOrderNumberError(order_number)

    row = Order(
        id=uuid4().hex,
        order_number=order_number,
        items_json=[item.model_dump() for item in items],
        total_amount=total_amount,
        date=order_date or datetime.now(),
        status=status.value,
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info("order saved: %s total=%s items=%d", row.order_number, total_amount, len(items))
    return order_to_out(row)


def list_orders(
    db: Session,
    start: datetime | None = None,
    end: datetime | None = None,
    status: OrderStatus | None = None,
) -> list[CompletedOrderOut]:
    q = db.query(Order)
    if start is not None:
        q = q.filter(Order.date >= start)
    if end is not None:
        q = q.filter(Order.date <= end)
    if status is not None:
        q = q.filter(Order.status == status.value)
    return [order_to_out(r) for r in q.order_by(Order.date.desc()).all()]


def get_order(db: Session, order_id: str) -> CompletedOrderOut | None:
    row = db.get(Order, order_id)
    return order_to_out(row) if row is not None else None


def delete_order(db: Session, order_id: str) -> bool:
    row = db.get(Order, order_id)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    return True


def delete_orders_in_range(db: Session, start: datetime, end: datetime) -> int:
    deleted = (
        db.query(Order)
        .filter(Order.date >= start, Order.date <= end)
        .delete(synchronize_session=False)
    )
    db.commit()

    logger.info("deleted %d orders (%s to %s)", deleted, start.isoformat(), end.isoformat())
    return int(deleted)

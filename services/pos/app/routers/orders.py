from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from services.pos.app.db.deps import get_db
from services.pos.app.models.order import (
    CompletedOrderOut,
    MessageResponse,
    OrderCreateRequest,
    OrderRangeDeleteRequest,
    OrderRangeDeleteResponse,
)
from services.pos.app.services import orders
from sqlalchemy.orm import Session

router = APIRouter()


@router.post("/v1/orders", response_model=CompletedOrderOut, status_code=201)
def create_order(payload: OrderCreateRequest, db: Session = Depends(get_db)) -> CompletedOrderOut:
    try:
        return orders.create_order(
            db,
            items=payload.items,
            total_amount=payload.total_amount,
            order_number=payload.order_number,
            status=payload.status,
        )
    except orders.DuplicateOrderNumberError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


@router.get("/v1/orders", response_model=list[CompletedOrderOut])
def list_orders(
    start: datetime | None = None,
    end: datetime | None = None,
    db: Session = Depends(get_db),
) -> list[CompletedOrderOut]:
    return orders.list_orders(db, start, end)


@router.delete("/v1/orders/range/by-date", response_model=OrderRangeDeleteResponse)
def delete_orders_by_date(
    payload: OrderRangeDeleteRequest,
    db: Session = Depends(get_db),
) -> OrderRangeDeleteResponse:
    try:
        start, end = orders.day_range(payload.start_date, payload.end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    deleted = orders.delete_orders_in_range(db, start, end)
    return OrderRangeDeleteResponse(message="Orders deleted successfully", deleted_count=deleted)


@router.get("/v1/orders/{order_id}", response_model=CompletedOrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)) -> CompletedOrderOut:
    order = orders.get_order(db, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.delete("/v1/orders/{order_id}", response_model=MessageResponse)
def delete_order(order_id: str, db: Session = Depends(get_db)) -> MessageResponse:
    if not orders.delete_order(db, order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    return MessageResponse(message="Order deleted successfully")

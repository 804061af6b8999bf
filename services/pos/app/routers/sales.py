from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from packages.shared.schemas.sales_v1 import ItemSalesV1, MonthlySalesV1
from services.pos.app.db.deps import get_db
from services.pos.app.models.order import OrderStatus
from services.pos.app.services import orders, sales
from sqlalchemy.orm import Session

router = APIRouter()


def _window(year: int | None, month: int | None) -> tuple[datetime, datetime]:
    try:
        return sales.month_window(year, month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/v1/sales/monthly", response_model=MonthlySalesV1)
def monthly_sales(
    year: int | None = None,
    month: int | None = None,
    db: Session = Depends(get_db),
) -> MonthlySalesV1:
    start, end = _window(year, month)
    rows = orders.list_orders(db, start, end, status=OrderStatus.COMPLETED)
    return sales.monthly_report(rows, start.year, start.month)


@router.get("/v1/sales/item", response_model=list[ItemSalesV1])
def item_sales(
    year: int | None = None,
    month: int | None = None,
    db: Session = Depends(get_db),
) -> list[ItemSalesV1]:
    start, end = _window(year, month)
    rows = orders.list_orders(db, start, end, status=OrderStatus.COMPLETED)
    return sales.item_breakdown(rows)

"""Monthly sales aggregation over completed orders.

Pure functions: callers fetch orders from order storage and pass them in. Orders whose
status is not `completed` are ignored everywhere.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import datetime

from packages.shared.schemas.sales_v1 import (
    DailySalesV1,
    ItemSalesV1,
    MonthlySalesV1,
    MonthlyTotalsV1,
)
from services.pos.app.models.order import CompletedOrderOut, OrderStatus


def month_window(year: int | None = None, month: int | None = None) -> tuple[datetime, datetime]:
    """First instant and last second (inclusive) of a calendar month.

    Defaults to the current month when either part is missing.
    """

    if year is None or month is None:
        now = datetime.now()
        year, month = now.year, now.month

    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")

    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime(year, month, last_day, 23, 59, 59)


def _completed(orders: Iterable[CompletedOrderOut]) -> list[CompletedOrderOut]:
    return [o for o in orders if o.status == OrderStatus.COMPLETED]


def _naive(dt: datetime) -> datetime:
    return dt.replace(tzinfo=None) if dt.tzinfo is not None else dt


def orders_in_window(
    orders: Iterable[CompletedOrderOut],
    start: datetime,
    end: datetime,
) -> list[CompletedOrderOut]:
    # Compare on local wall-clock time; an order's own offset is not converted.
    lo, hi = _naive(start), _naive(end)
    return [o for o in orders if lo <= _naive(o.date) <= hi]


def monthly_totals(orders: Iterable[CompletedOrderOut]) -> MonthlyTotalsV1:
    completed = _completed(orders)
    return MonthlyTotalsV1(
        total_sales=sum(o.total_amount for o in completed),
        order_count=len(completed),
    )


def daily_breakdown(orders: Iterable[CompletedOrderOut]) -> list[DailySalesV1]:
    days: dict[str, DailySalesV1] = {}
    for order in _completed(orders):
        key = order.date.date().isoformat()
        day = days.get(key)
        if day is None:
            day = days[key] = DailySalesV1(date=key, total_amount=0, order_count=0)
        day.total_amount += order.total_amount
        day.order_count += 1

    return [days[k] for k in sorted(days)]


def item_breakdown(orders: Iterable[CompletedOrderOut]) -> list[ItemSalesV1]:
    # Grouped by display name, so two menu items sharing a name are merged.
    by_name: dict[str, ItemSalesV1] = {}
    for order in _completed(orders):
        for item in order.items:
            row = by_name.get(item.name)
            if row is None:
                row = by_name[item.name] = ItemSalesV1(
                    item_name=item.name, total_sales=0, quantity_sold=0
                )
            row.total_sales += item.price * item.quantity
            row.quantity_sold += item.quantity

    return list(by_name.values())


def monthly_report(
    orders: Iterable[CompletedOrderOut],
    year: int | None = None,
    month: int | None = None,
) -> MonthlySalesV1:
    start, end = month_window(year, month)
    in_month = orders_in_window(orders, start, end)
    totals = monthly_totals(in_month)

    return MonthlySalesV1(
        month=start.month,
        year=start.year,
        total_sales=totals.total_sales,
        order_count=totals.order_count,
        daily_transactions=daily_breakdown(in_month),
        items=item_breakdown(in_month),
    )

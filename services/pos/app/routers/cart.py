from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from packages.shared.schemas.cart_v1 import CartStateV1, PendingOrderV1
from services.pos.app.db.deps import get_db
from services.pos.app.db.models import MenuItem
from services.pos.app.models.cart import (
    BillOut,
    CartAddItemRequest,
    CartQuantityRequest,
    CheckoutCompleteRequest,
    CheckoutCompleteResponse,
    PendingOrderSaveRequest,
    PendingOrderSaveResponse,
)
from services.pos.app.services.cart_base import (
    CartError,
    CartValidationError,
    PendingOrderNotFoundError,
)
from services.pos.app.services.cart_session import CartSession
from services.pos.app.services.checkout import CheckoutService
from services.pos.app.services.kv_factory import get_kv_store
from services.pos.app.services.order_client_base import (
    OrderClientError,
    OrderClientTimeoutError,
    OrderRejectedError,
)
from services.pos.app.services.order_client_factory import get_order_client
from services.pos.app.services.shop_settings import get_or_create_settings
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/terminals/{terminal_id}")


def _raise_cart_http_error(e: Exception) -> None:
    if isinstance(e, CartValidationError):
        raise HTTPException(status_code=400, detail=str(e)) from e

    if isinstance(e, PendingOrderNotFoundError):
        raise HTTPException(status_code=404, detail=str(e)) from e

    if isinstance(e, OrderClientTimeoutError):
        raise HTTPException(status_code=504, detail=str(e)) from e

    if isinstance(e, OrderRejectedError):
        status = 409 if e.status_code == 409 else 502
        raise HTTPException(status_code=status, detail=str(e)) from e

    if isinstance(e, (OrderClientError, CartError)):
        raise HTTPException(status_code=502, detail=str(e)) from e

    logger.exception("unexpected cart error")
    raise HTTPException(status_code=500, detail="Internal Server Error") from e


def get_cart_session(terminal_id: str) -> CartSession:
    try:
        store = get_kv_store(terminal_id)
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return CartSession(store)


@router.get("/cart", response_model=CartStateV1)
def get_cart(session: CartSession = Depends(get_cart_session)) -> CartStateV1:
    return session.state()


@router.delete("/cart", response_model=CartStateV1)
def clear_cart(session: CartSession = Depends(get_cart_session)) -> CartStateV1:
    session.clear()
    return session.state()


@router.post("/cart/items", response_model=CartStateV1)
def add_cart_item(
    payload: CartAddItemRequest,
    session: CartSession = Depends(get_cart_session),
    db: Session = Depends(get_db),
) -> CartStateV1:
    menu_item = db.get(MenuItem, payload.menu_item_id)
    if menu_item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")

    try:
        session.add_item(menu_item)
    except Exception as e:
        _raise_cart_http_error(e)
    return session.state()


@router.put("/cart/items/{item_id}", response_model=CartStateV1)
def set_cart_item_quantity(
    item_id: str,
    payload: CartQuantityRequest,
    session: CartSession = Depends(get_cart_session),
) -> CartStateV1:
    session.set_quantity(item_id, payload.quantity)
    return session.state()


@router.delete("/cart/items/{item_id}", response_model=CartStateV1)
def remove_cart_item(item_id: str, session: CartSession = Depends(get_cart_session)) -> CartStateV1:
    session.remove_item(item_id)
    return session.state()


@router.get("/pending-orders", response_model=list[PendingOrderV1])
def list_pending_orders(session: CartSession = Depends(get_cart_session)) -> list[PendingOrderV1]:
    return session.pending_orders.list_orders()


@router.post("/pending-orders", response_model=PendingOrderSaveResponse, status_code=201)
def save_pending_order(
    payload: PendingOrderSaveRequest,
    session: CartSession = Depends(get_cart_session),
) -> PendingOrderSaveResponse:
    try:
        order_id = session.save_current_cart_as(payload.name, clear_cart=payload.clear_cart)
    except Exception as e:
        _raise_cart_http_error(e)
    return PendingOrderSaveResponse(order_id=order_id, state=session.state())


@router.post("/pending-orders/active/save", response_model=CartStateV1)
def save_active_pending_order(session: CartSession = Depends(get_cart_session)) -> CartStateV1:
    if session.active_link.current_order() is None:
        raise HTTPException(status_code=409, detail="Cart is not linked to a pending order")

    if session.save_changes() is None:
        raise HTTPException(status_code=400, detail="Cart is empty. Nothing to save.")
    return session.state()


@router.post("/pending-orders/{order_id}/load", response_model=CartStateV1)
def load_pending_order(order_id: str, session: CartSession = Depends(get_cart_session)) -> CartStateV1:
    try:
        session.load_order(order_id)
    except Exception as e:
        _raise_cart_http_error(e)
    return session.state()


@router.delete("/pending-orders/{order_id}", response_model=CartStateV1)
def delete_pending_order(
    order_id: str,
    session: CartSession = Depends(get_cart_session),
) -> CartStateV1:
    if not session.delete_order(order_id):
        raise HTTPException(status_code=404, detail="Pending order not found")
    return session.state()


@router.post("/checkout/bill", response_model=BillOut)
def prepare_bill(
    session: CartSession = Depends(get_cart_session),
    db: Session = Depends(get_db),
) -> BillOut:
    settings = get_or_create_settings(db)
    try:
        client = get_order_client()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    try:
        return CheckoutService(session, client).prepare_bill(
            shop_name=settings.shop_name, upi_id=settings.upi_id
        )
    except Exception as e:
        _raise_cart_http_error(e)


@router.post("/checkout/complete", response_model=CheckoutCompleteResponse)
def complete_checkout(
    payload: CheckoutCompleteRequest,
    session: CartSession = Depends(get_cart_session),
) -> CheckoutCompleteResponse:
    try:
        client = get_order_client()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    try:
        order = CheckoutService(session, client).complete_payment(payload.order_number)
    except Exception as e:
        _raise_cart_http_error(e)

    return CheckoutCompleteResponse(order=order, state=session.state())

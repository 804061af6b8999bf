from __future__ import annotations

from packages.shared.schemas.cart_v1 import CartStateV1, LineItemV1
from pydantic import BaseModel, Field
from services.pos.app.models.order import CompletedOrderOut


class CartAddItemRequest(BaseModel):
    menu_item_id: str


class CartQuantityRequest(BaseModel):
    quantity: int


class PendingOrderSaveRequest(BaseModel):
    name: str
    # "Save and start fresh" clears the cart; pass false to keep editing.
    clear_cart: bool = True


class PendingOrderSaveResponse(BaseModel):
    order_id: str
    state: CartStateV1


class BillOut(BaseModel):
    order_number: str
    items: list[LineItemV1]
    total_amount: float
    shop_name: str
    upi_id: str
    upi_uri: str
    warnings: list[str] = Field(default_factory=list)


class CheckoutCompleteRequest(BaseModel):
    # The number issued with the bill. Retrying with it cannot record the sale twice.
    order_number: str = Field(..., min_length=1)


class CheckoutCompleteResponse(BaseModel):
    order: CompletedOrderOut
    state: CartStateV1

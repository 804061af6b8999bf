from __future__ import annotations

import logging
from urllib.parse import quote

from services.pos.app.models.cart import BillOut
from services.pos.app.models.order import CompletedOrderOut
from services.pos.app.services.cart_base import CartValidationError
from services.pos.app.services.cart_session import CartSession
from services.pos.app.services.order_client_base import OrderClient
from services.pos.app.services.orders import generate_order_number

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone, which UPI apps expect unescaped.
_UPI_SAFE = "!~*'()"


def build_upi_uri(upi_id: str, amount: float, order_number: str) -> str:
    """UPI deep link a payment QR code encodes. Empty when no UPI id is configured."""

    upi_id = (upi_id or "").strip()
    if not upi_id:
        return ""

    note = f"Payment for Order {order_number}"
    return (
        f"upi://pay?pa={quote(upi_id, safe=_UPI_SAFE)}"
        f"&am={amount:.2f}&cu=INR"
        f"&tn={quote(note, safe=_UPI_SAFE)}"
    )


class CheckoutService:
    """Bill the current cart and record it once staff confirm the payment.

    Payment is confirmed manually; nothing here talks to a payment gateway.
    """

    def __init__(self, session: CartSession, client: OrderClient) -> None:
        self._session = session
        self._client = client

    def prepare_bill(self, *, shop_name: str = "", upi_id: str = "") -> BillOut:
        items = self._session.cart.get_items()
        if not items:
            raise CartValidationError("Cart is empty. Add items before billing.")

        order_number = generate_order_number()
        total = self._session.cart.get_total_amount()
        return BillOut(
            order_number=order_number,
            items=items,
            total_amount=total,
            shop_name=shop_name,
            upi_id=upi_id,
            upi_uri=build_upi_uri(upi_id, total, order_number),
            warnings=[] if upi_id else ["UPI ID not configured. Add it in Settings."],
        )

    def complete_payment(self, order_number: str) -> CompletedOrderOut:
        """Persist the cart as a completed order, then release the cart.

        `order_number` is the one issued by `prepare_bill`. Any client error propagates
        with the cart, pending orders and active link untouched, so the operator can
        retry with the same number; if the first attempt did reach order storage, the
        retry is rejected as a duplicate instead of recording the sale twice.
        """

        if not (order_number or "").strip():
            raise CartValidationError("Order number from the bill is required.")

        items = self._session.cart.get_items()
        if not items:
            raise CartValidationError("Cart is empty. Nothing to check out.")

        total = self._session.cart.get_total_amount()
        order = self._client.create_order(order_number, items, total)
        logger.info("payment recorded for %s via %s client", order.order_number, self._client.name)

        self._session.complete_checkout(order_number=order.order_number, order_id=order.id)
        return order

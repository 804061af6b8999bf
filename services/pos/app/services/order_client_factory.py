from __future__ import annotations

import os

from services.pos.app.services.order_client_base import OrderClient
from services.pos.app.services.order_client_local import LocalOrderClient


def get_order_client() -> OrderClient:
    """Select the order-storage client based on env vars.

    Defaults to the local client, which writes straight to this service's database.
    """

    mode = os.getenv("POS_ORDER_CLIENT", "local").strip().lower()

    if mode == "local":
        return LocalOrderClient()

    if mode == "http":
        from services.pos.app.services.order_client_http import HttpOrderClient

        return HttpOrderClient.from_env()

    raise ValueError(f"Unknown POS_ORDER_CLIENT={mode!r}. Expected local or http.")

"""counterpos API service entrypoint."""

import logging
import os

from fastapi import FastAPI

from services.pos.app.db.init_db import init_db
from services.pos.app.routers.cart import router as cart_router
from services.pos.app.routers.menu import router as menu_router
from services.pos.app.routers.orders import router as orders_router
from services.pos.app.routers.sales import router as sales_router
from services.pos.app.routers.settings import router as settings_router


def configure_logging() -> None:
    level = os.getenv("POS_LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()

app = FastAPI(title="counterpos API")

app.include_router(menu_router)
app.include_router(orders_router)
app.include_router(sales_router)
app.include_router(settings_router)
app.include_router(cart_router)


@app.on_event("startup")
def _startup() -> None:
    init_db()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}

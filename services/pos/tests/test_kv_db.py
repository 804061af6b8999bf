from __future__ import annotations

from pathlib import Path

import pytest
from packages.shared.schemas.cart_v1 import MenuItemV1
from services.pos.app.services.cart_base import StorageUnavailableError
from services.pos.app.services.cart_session import CartSession
from services.pos.app.services.kv_factory import get_kv_store, reset_memory_stores
from services.pos.app.services.kv_memory import InMemoryKeyValueStore
from sqlalchemy.exc import OperationalError


@pytest.fixture()
def db_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    url = f"sqlite+pysqlite:///{tmp_path / 'pos_kv.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("POS_DB_AUTO_CREATE", "true")

    from services.pos.app.db.init_db import init_db

    init_db()
    return url


def test_db_store_set_get_remove(db_url: str) -> None:
    from services.pos.app.services.kv_db import DbKeyValueStore

    store = DbKeyValueStore("till-1")
    assert store.get("pos_cart") is None

    store.set("pos_cart", "[]")
    store.set("pos_cart", '[{"id": "a"}]')
    assert store.get("pos_cart") == '[{"id": "a"}]'

    store.remove("pos_cart")
    store.remove("pos_cart")
    assert store.get("pos_cart") is None


def test_db_store_namespaces_are_isolated(db_url: str) -> None:
    from services.pos.app.services.kv_db import DbKeyValueStore

    DbKeyValueStore("till-1").set("pos_cart", "one")
    DbKeyValueStore("till-2").set("pos_cart", "two")

    assert DbKeyValueStore("till-1").get("pos_cart") == "one"
    assert DbKeyValueStore("till-2").get("pos_cart") == "two"


def test_cart_survives_new_session_over_db_store(db_url: str) -> None:
    from services.pos.app.services.kv_db import DbKeyValueStore

    first = CartSession(DbKeyValueStore("till-1"))
    first.add_item(MenuItemV1(id="tea", name="Tea", price=10))
    order_id = first.save_current_cart_as("Table 1", clear_cart=True)
    first.load_order(order_id)

    second = CartSession(DbKeyValueStore("till-1"))
    assert second.cart.get_total_amount() == 10
    assert second.active_link.current_order_id() == order_id


def test_db_errors_surface_as_storage_unavailable() -> None:
    from services.pos.app.services.kv_db import DbKeyValueStore

    class _BrokenSession:
        def __enter__(self) -> _BrokenSession:
            return self

        def __exit__(self, *exc: object) -> None:
            return None

        def get(self, *args: object) -> None:
            raise OperationalError("SELECT", {}, Exception("database is locked"))

    store = DbKeyValueStore("till-1", session_factory=_BrokenSession)
    with pytest.raises(StorageUnavailableError):
        store.get("pos_cart")
    with pytest.raises(StorageUnavailableError):
        store.set("pos_cart", "[]")


def test_factory_selects_store(monkeypatch: pytest.MonkeyPatch, db_url: str) -> None:
    from services.pos.app.services.kv_db import DbKeyValueStore

    monkeypatch.delenv("POS_CART_STORE", raising=False)
    assert isinstance(get_kv_store("till-1"), DbKeyValueStore)

    reset_memory_stores()
    monkeypatch.setenv("POS_CART_STORE", "memory")
    store = get_kv_store("till-1")
    assert isinstance(store, InMemoryKeyValueStore)
    assert get_kv_store("till-1") is store
    assert get_kv_store("till-2") is not store
    reset_memory_stores()
    assert get_kv_store("till-1") is not store
    reset_memory_stores()

    monkeypatch.setenv("POS_CART_STORE", "redis")
    with pytest.raises(ValueError):
        get_kv_store("till-1")

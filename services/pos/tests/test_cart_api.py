from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from services.pos.app.services.order_client_base import OrderClientTimeoutError


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "pos_cart.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("POS_DB_AUTO_CREATE", "true")
    monkeypatch.setenv("POS_CART_STORE", "db")
    monkeypatch.setenv("POS_ORDER_CLIENT", "local")

    from services.pos.app.main import app

    with TestClient(app) as c:
        yield c


def _menu_item(client: TestClient, name: str, price: float) -> str:
    r = client.post(
        "/v1/menu-items",
        json={"name": name, "category": "Drinks", "price": price, "image": f"https://img.test/{name}.jpg"},
    )
    assert r.status_code == 201
    return r.json()["id"]


def test_counter_flow_save_load_edit_checkout(client: TestClient) -> None:
    tea = _menu_item(client, "Tea", 10)
    coffee = _menu_item(client, "Coffee", 25)
    client.put("/v1/settings/upi-id", json={"upi_id": "cafe@upi"})
    base = "/v1/terminals/till-1"

    client.post(f"{base}/cart/items", json={"menu_item_id": tea})
    state = client.post(f"{base}/cart/items", json={"menu_item_id": tea}).json()
    assert state["total_amount"] == 20
    assert state["total_item_count"] == 2

    saved = client.post(f"{base}/pending-orders", json={"name": "Table 1"})
    assert saved.status_code == 201
    order_id = saved.json()["order_id"]
    assert saved.json()["state"]["items"] == []

    loaded = client.post(f"{base}/pending-orders/{order_id}/load").json()
    assert loaded["active_order"]["id"] == order_id
    assert loaded["has_unsaved_changes"] is False

    edited = client.post(f"{base}/cart/items", json={"menu_item_id": coffee}).json()
    assert edited["has_unsaved_changes"] is True

    after_save = client.post(f"{base}/pending-orders/active/save").json()
    assert after_save["has_unsaved_changes"] is False
    assert after_save["pending_orders"][0]["total_amount"] == 45

    bill = client.post(f"{base}/checkout/bill")
    assert bill.status_code == 200
    assert bill.json()["upi_uri"].startswith("upi://pay?pa=cafe%40upi&am=45.00&cu=INR")
    assert bill.json()["shop_name"] == "My Restaurant"

    done = client.post(f"{base}/checkout/complete", json={"order_number": bill.json()["order_number"]})
    assert done.status_code == 200
    body = done.json()
    assert body["order"]["order_number"] == bill.json()["order_number"]
    assert body["order"]["total_amount"] == 45
    assert body["state"]["items"] == []
    assert body["state"]["active_order"] is None
    assert body["state"]["pending_orders"] == []

    stored = client.get("/v1/orders").json()
    assert [o["order_number"] for o in stored] == [bill.json()["order_number"]]


def test_terminals_are_isolated(client: TestClient) -> None:
    tea = _menu_item(client, "Tea", 10)

    client.post("/v1/terminals/till-1/cart/items", json={"menu_item_id": tea})

    assert client.get("/v1/terminals/till-1/cart").json()["total_item_count"] == 1
    assert client.get("/v1/terminals/till-2/cart").json()["items"] == []


def test_quantity_and_removal(client: TestClient) -> None:
    tea = _menu_item(client, "Tea", 10)
    base = "/v1/terminals/till-1"
    client.post(f"{base}/cart/items", json={"menu_item_id": tea})

    state = client.put(f"{base}/cart/items/{tea}", json={"quantity": 4}).json()
    assert state["total_amount"] == 40

    state = client.put(f"{base}/cart/items/{tea}", json={"quantity": 0}).json()
    assert state["items"] == []

    client.post(f"{base}/cart/items", json={"menu_item_id": tea})
    state = client.delete(f"{base}/cart/items/{tea}").json()
    assert state["items"] == []


def test_price_change_does_not_reprice_cart(client: TestClient) -> None:
    tea = _menu_item(client, "Tea", 10)
    base = "/v1/terminals/till-1"
    client.post(f"{base}/cart/items", json={"menu_item_id": tea})

    client.put(f"/v1/menu-items/{tea}", json={"price": 15})
    state = client.post(f"{base}/cart/items", json={"menu_item_id": tea}).json()

    assert state["items"][0]["price"] == 10
    assert state["total_amount"] == 20


def test_cart_errors(client: TestClient) -> None:
    base = "/v1/terminals/till-1"

    assert client.post(f"{base}/cart/items", json={"menu_item_id": "missing"}).status_code == 404
    assert client.post(f"{base}/pending-orders", json={"name": "Empty"}).status_code == 400
    assert client.post(f"{base}/pending-orders/order-missing/load").status_code == 404
    assert client.delete(f"{base}/pending-orders/order-missing").status_code == 404
    assert client.post(f"{base}/pending-orders/active/save").status_code == 409
    assert client.post(f"{base}/checkout/bill").status_code == 400
    assert client.post(f"{base}/checkout/complete", json={"order_number": "ORD-1"}).status_code == 400
    assert client.post(f"{base}/checkout/complete", json={}).status_code == 422


def test_clear_cart_unlinks(client: TestClient) -> None:
    tea = _menu_item(client, "Tea", 10)
    base = "/v1/terminals/till-1"
    client.post(f"{base}/cart/items", json={"menu_item_id": tea})
    order_id = client.post(f"{base}/pending-orders", json={"name": "Table 1"}).json()["order_id"]
    client.post(f"{base}/pending-orders/{order_id}/load")

    state = client.delete(f"{base}/cart").json()

    assert state["items"] == []
    assert state["active_order"] is None
    assert [o["id"] for o in state["pending_orders"]] == [order_id]


def test_deleting_linked_pending_order_unlinks(client: TestClient) -> None:
    tea = _menu_item(client, "Tea", 10)
    base = "/v1/terminals/till-1"
    client.post(f"{base}/cart/items", json={"menu_item_id": tea})
    order_id = client.post(f"{base}/pending-orders", json={"name": "Table 1"}).json()["order_id"]
    client.post(f"{base}/pending-orders/{order_id}/load")

    state = client.delete(f"{base}/pending-orders/{order_id}").json()

    assert state["active_order"] is None
    assert state["pending_orders"] == []
    assert state["total_item_count"] == 1


def test_checkout_timeout_keeps_cart(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    tea = _menu_item(client, "Tea", 10)
    base = "/v1/terminals/till-1"
    client.post(f"{base}/cart/items", json={"menu_item_id": tea})
    order_id = client.post(f"{base}/pending-orders", json={"name": "Table 1"}).json()["order_id"]
    client.post(f"{base}/pending-orders/{order_id}/load")

    class _SlowClient:
        name = "slow"

        def create_order(self, order_number, items, total_amount):
            raise OrderClientTimeoutError(10)

    monkeypatch.setattr("services.pos.app.routers.cart.get_order_client", lambda: _SlowClient())

    response = client.post(f"{base}/checkout/complete", json={"order_number": "ORD-1"})
    assert response.status_code == 504

    state = client.get(f"{base}/cart").json()
    assert state["total_item_count"] == 1
    assert state["active_order"]["id"] == order_id
    assert client.get("/v1/orders").json() == []


def test_checkout_with_already_recorded_number_conflicts(client: TestClient) -> None:
    tea = _menu_item(client, "Tea", 10)
    base = "/v1/terminals/till-1"
    client.post(f"{base}/cart/items", json={"menu_item_id": tea})
    number = client.post(f"{base}/checkout/bill").json()["order_number"]

    # The first attempt reached order storage but its response never came back.
    items = client.get(f"{base}/cart").json()["items"]
    client.post("/v1/orders", json={"order_number": number, "items": items, "total_amount": 10})

    retry = client.post(f"{base}/checkout/complete", json={"order_number": number})
    assert retry.status_code == 409

    assert client.get(f"{base}/cart").json()["total_item_count"] == 1
    assert [o["order_number"] for o in client.get("/v1/orders").json()] == [number]

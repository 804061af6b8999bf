from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "pos_menu.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("POS_DB_AUTO_CREATE", "true")

    from services.pos.app.main import app

    with TestClient(app) as c:
        yield c


def _item(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": "Mango Shake",
        "category": "Milkshakes",
        "description": "Fresh alphonso",
        "price": 120,
        "image": "https://img.test/mango.jpg",
    }
    payload.update(overrides)
    return payload


def test_menu_item_crud(client: TestClient) -> None:
    created = client.post("/v1/menu-items", json=_item(name="  Mango Shake  "))
    assert created.status_code == 201
    item = created.json()
    assert item["name"] == "Mango Shake"
    assert item["price"] == 120

    got = client.get(f"/v1/menu-items/{item['id']}")
    assert got.status_code == 200
    assert got.json()["category"] == "Milkshakes"

    updated = client.put(f"/v1/menu-items/{item['id']}", json={"price": 135})
    assert updated.status_code == 200
    assert updated.json()["price"] == 135
    assert updated.json()["name"] == "Mango Shake"

    deleted = client.delete(f"/v1/menu-items/{item['id']}")
    assert deleted.status_code == 200
    assert client.get(f"/v1/menu-items/{item['id']}").status_code == 404


def test_list_menu_items_filters_by_category(client: TestClient) -> None:
    client.post("/v1/menu-items", json=_item())
    client.post("/v1/menu-items", json=_item(name="Orange Juice", category="Fresh Juices"))

    everything = client.get("/v1/menu-items").json()
    juices = client.get("/v1/menu-items", params={"category": "Fresh Juices"}).json()

    assert len(everything) == 2
    assert [r["name"] for r in juices] == ["Orange Juice"]


@pytest.mark.parametrize(
    "overrides",
    [{"name": "   "}, {"price": -1}, {"image": ""}, {"category": ""}],
)
def test_create_menu_item_validates(client: TestClient, overrides: dict[str, object]) -> None:
    response = client.post("/v1/menu-items", json=_item(**overrides))
    assert response.status_code == 422


def test_missing_menu_item_is_404(client: TestClient) -> None:
    assert client.put("/v1/menu-items/missing", json={"price": 1}).status_code == 404
    assert client.delete("/v1/menu-items/missing").status_code == 404


def test_category_crud_and_duplicate_names(client: TestClient) -> None:
    first = client.post("/v1/categories", json={"name": "Fresh Juices", "display_order": 2})
    assert first.status_code == 201
    client.post("/v1/categories", json={"name": "Milkshakes", "display_order": 1})

    names = [c["name"] for c in client.get("/v1/categories").json()]
    assert names == ["Milkshakes", "Fresh Juices"]

    dup = client.post("/v1/categories", json={"name": " Fresh Juices "})
    assert dup.status_code == 400

    category_id = first.json()["id"]
    renamed = client.put(f"/v1/categories/{category_id}", json={"name": "Juices"})
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Juices"

    clash = client.put(f"/v1/categories/{category_id}", json={"name": "Milkshakes"})
    assert clash.status_code == 400


def test_category_in_use_cannot_be_deleted(client: TestClient) -> None:
    category = client.post("/v1/categories", json={"name": "Milkshakes"}).json()
    item = client.post("/v1/menu-items", json=_item()).json()

    blocked = client.delete(f"/v1/categories/{category['id']}")
    assert blocked.status_code == 400
    assert "1 menu item" in blocked.json()["detail"]

    client.delete(f"/v1/menu-items/{item['id']}")
    assert client.delete(f"/v1/categories/{category['id']}").status_code == 200
    assert client.get(f"/v1/categories/{category['id']}").status_code == 404

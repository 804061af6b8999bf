from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    db_path = tmp_path / "pos_settings.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("POS_DB_AUTO_CREATE", "true")

    from services.pos.app.main import app

    with TestClient(app) as c:
        yield c


def test_settings_defaults_on_first_read(client: TestClient) -> None:
    response = client.get("/v1/settings")
    assert response.status_code == 200
    assert response.json() == {
        "shop_name": "My Restaurant",
        "upi_id": "",
        "sound_notifications": True,
        "auto_save_orders": False,
    }


def test_update_settings_partial(client: TestClient) -> None:
    response = client.put("/v1/settings", json={"shop_name": " Corner Cafe ", "auto_save_orders": True})
    assert response.status_code == 200
    data = response.json()
    assert data["shop_name"] == "Corner Cafe"
    assert data["auto_save_orders"] is True
    assert data["sound_notifications"] is True

    # A blank shop name is ignored rather than wiping the header.
    client.put("/v1/settings", json={"shop_name": "   "})
    assert client.get("/v1/settings").json()["shop_name"] == "Corner Cafe"


def test_update_upi_id(client: TestClient) -> None:
    response = client.put("/v1/settings/upi-id", json={"upi_id": " cafe@upi "})
    assert response.status_code == 200
    assert response.json()["upi_id"] == "cafe@upi"
    assert client.get("/v1/settings").json()["upi_id"] == "cafe@upi"


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}

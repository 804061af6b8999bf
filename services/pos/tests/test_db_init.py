from pathlib import Path

from sqlalchemy import inspect


def test_init_db_creates_tables(tmp_path: Path, monkeypatch) -> None:
    db_path = tmp_path / "nested" / "pos_test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("POS_DB_AUTO_CREATE", "true")

    from services.pos.app.db.database import get_engine
    from services.pos.app.db.init_db import init_db

    init_db()

    inspector = inspect(get_engine())
    tables = set(inspector.get_table_names())

    assert {"menu_items", "categories", "orders", "settings", "kv_entries"} <= tables
    assert db_path.exists()


def test_init_db_can_be_disabled(tmp_path: Path, monkeypatch) -> None:
    db_path = tmp_path / "pos_skip.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("POS_DB_AUTO_CREATE", "false")

    from services.pos.app.db.database import get_engine
    from services.pos.app.db.init_db import init_db

    init_db()

    assert "orders" not in set(inspect(get_engine()).get_table_names())

from __future__ import annotations

from collections.abc import Callable

from services.pos.app.db.database import db_session
from services.pos.app.db.models import KeyValueEntry
from services.pos.app.services.cart_base import StorageUnavailableError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session


class DbKeyValueStore:
    """Key-value store backed by the `kv_entries` table.

    Each terminal gets its own namespace. Every call runs in its own short session and
    commits before returning, so an acknowledged write survives a process restart.
    """

    def __init__(self, namespace: str, session_factory: Callable[[], Session] = db_session) -> None:
        self.namespace = namespace
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        try:
            with self._session_factory() as db:
                row = db.get(KeyValueEntry, (self.namespace, key))
                return row.value if row is not None else None
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"kv read failed for {key!r}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as db:
                row = db.get(KeyValueEntry, (self.namespace, key))
                if row is None:
                    db.add(KeyValueEntry(namespace=self.namespace, key=key, value=value))
                else:
                    row.value = value
                db.commit()
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"kv write failed for {key!r}: {e}") from e

    def remove(self, key: str) -> None:
        try:
            with self._session_factory() as db:
                row = db.get(KeyValueEntry, (self.namespace, key))
                if row is not None:
                    db.delete(row)
                    db.commit()
        except SQLAlchemyError as e:
            raise StorageUnavailableError(f"kv remove failed for {key!r}: {e}") from e

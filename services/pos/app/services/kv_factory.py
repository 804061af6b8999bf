from __future__ import annotations

import os

from services.pos.app.services.cart_base import KeyValueStore
from services.pos.app.services.kv_memory import InMemoryKeyValueStore

_MEMORY_STORES: dict[str, InMemoryKeyValueStore] = {}


def get_kv_store(namespace: str) -> KeyValueStore:
    """Select the terminal store based on env vars.

    Defaults to the database-backed store so terminal carts survive restarts. The memory
    store is for local development and tests: it keeps one instance per namespace for the
    life of the process and never evicts, so every terminal id ever requested stays in
    memory until `reset_memory_stores()` or a restart.
    """

    mode = os.getenv("POS_CART_STORE", "db").strip().lower()

    if mode == "memory":
        store = _MEMORY_STORES.get(namespace)
        if store is None:
            store = _MEMORY_STORES[namespace] = InMemoryKeyValueStore()
        return store

    if mode == "db":
        from services.pos.app.services.kv_db import DbKeyValueStore

        return DbKeyValueStore(namespace)

    raise ValueError(f"Unknown POS_CART_STORE={mode!r}. Expected db or memory.")


def reset_memory_stores() -> None:
    _MEMORY_STORES.clear()

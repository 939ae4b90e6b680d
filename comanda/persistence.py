"""SQLite key/value persistence for point-of-sale state."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Callable, TypeVar

from comanda.config import DB_PATH, STORAGE_PREFIX
from comanda.models import Menu, Order, Sale, Table
from comanda.serialization import (
    menu_from_dict,
    menu_to_dict,
    orders_from_list,
    orders_to_list,
    sales_from_list,
    sales_to_list,
    tables_from_dict,
    tables_to_dict,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

MENU_KEY = "menu"
ORDERS_KEY = "orders"
TABLES_KEY = "tables"
SALES_KEY = "sales"
SESSION_KEY = "session"


class KeyValueStore:
    """Namespaced key -> JSON blob store with synchronous get/set."""

    def __init__(self, db_path: str = DB_PATH, prefix: str = STORAGE_PREFIX) -> None:
        self.db_path = db_path
        self.prefix = prefix
        self.bootstrap_schema()

    def _connect(self) -> sqlite3.Connection:
        db_file = Path(self.db_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(db_file)

    def bootstrap_schema(self) -> None:
        """Create the key/value table if it does not already exist."""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

    def get_raw(self, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (self.prefix + key,)).fetchone()
        return None if row is None else row[0]

    def get(self, key: str) -> Any | None:
        """Return the decoded value, or None when missing or not valid JSON."""
        raw = self.get_raw(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("stored value for %r is not valid JSON; treating as absent", key)
            return None

    def set(self, key: str, value: Any) -> None:
        self.write_many({key: value})

    def write_many(self, values: dict[str, Any]) -> None:
        """Write several keys in one transaction."""
        encoded = [(self.prefix + key, json.dumps(value)) for key, value in values.items()]
        with self._connect() as conn:
            with conn:
                conn.executemany(
                    """
                    INSERT INTO kv (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    encoded,
                )

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            with conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (self.prefix + key,))


class StateRepository:
    """Reads and writes the four state collections through a ``KeyValueStore``."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _load(self, key: str, decode: Callable[[Any], T], default: Callable[[], T]) -> T:
        raw = self.store.get(key)
        if raw is None:
            return default()
        try:
            return decode(raw)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("stored %s is malformed (%s); using empty default", key, exc)
            return default()

    def load_menu(self) -> Menu | None:
        """Return the stored menu, or None when absent or lacking categories."""
        return self._load(MENU_KEY, menu_from_dict, lambda: None)

    def load_orders(self) -> list[Order]:
        return self._load(ORDERS_KEY, orders_from_list, list)

    def load_tables(self) -> dict[int, Table]:
        return self._load(TABLES_KEY, tables_from_dict, dict)

    def load_sales(self) -> list[Sale]:
        return self._load(SALES_KEY, sales_from_list, list)

    def save_menu(self, menu: Menu) -> None:
        self.store.set(MENU_KEY, menu_to_dict(menu))

    def save_snapshot(self, menu: Menu, orders: list[Order], tables: dict[int, Table], sales: list[Sale]) -> None:
        """Persist every collection atomically."""
        self.store.write_many(
            {
                MENU_KEY: menu_to_dict(menu),
                ORDERS_KEY: orders_to_list(orders),
                TABLES_KEY: tables_to_dict(tables),
                SALES_KEY: sales_to_list(sales),
            }
        )

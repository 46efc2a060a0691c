from __future__ import annotations

from typing import Iterable, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .kv import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    """Key-value store backed by the ``kv_store`` table (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection, *, table: str = "kv_store"):
        self._conn_factory = conn_factory
        self._table = table

    @property
    def conn_factory(self) -> DatabaseConnection:
        return self._conn_factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT store_value FROM {self._table} WHERE store_key=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            return row["store_value"]

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {self._table}(store_key, store_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE store_value=VALUES(store_value)
                """,
                (key, str(value)),
            )

    def remove(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE store_key=%s", (key,))

    def keys(self) -> Iterable[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT store_key FROM {self._table} ORDER BY store_key")
            return [r["store_key"] for r in fetchall(cur)]

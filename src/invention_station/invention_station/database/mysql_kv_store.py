from __future__ import annotations

from typing import Optional, Sequence

from .connection import DatabaseConnection
from .kv_store import KeyValueStore
from .mysql_base import db_cursor, fetchall, fetchone


class MySQLKeyValueStore(KeyValueStore):
    """Key-value blobs in the ``kv_store`` table (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT store_value FROM kv_store WHERE store_key=%s", (key,))
            row = fetchone(cur)
            return row["store_value"] if row else None

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store (store_key, store_value)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE store_value=VALUES(store_value)
                """,
                (key, value),
            )

    def delete(self, key: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kv_store WHERE store_key=%s", (key,))
            return cur.rowcount > 0

    def keys(self, prefix: str = "") -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT store_key FROM kv_store WHERE store_key LIKE %s ORDER BY store_key",
                (prefix.replace("%", r"\%").replace("_", r"\_") + "%",),
            )
            return [row["store_key"] for row in fetchall(cur)]

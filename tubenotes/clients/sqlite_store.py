"""SQLite-backed string key/value storage."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Dict, Iterable, Optional


class SQLiteKeyValueStore:
    """Durable string slots in a single ``kv_records`` table."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_records (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_records WHERE key = ?", (key,)
            ).fetchone()
        if not row:
            return None
        return row["value"]

    def replace(self, values: Dict[str, str], drop: Iterable[str] = ()) -> None:
        """Upsert ``values`` and delete ``drop`` in one transaction."""
        with self._connect() as conn:
            conn.executemany(
                "DELETE FROM kv_records WHERE key = ?", [(key,) for key in drop]
            )
            conn.executemany(
                """
                INSERT INTO kv_records (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                list(values.items()),
            )

    def delete(self, *keys: str) -> None:
        with self._connect() as conn:
            conn.executemany(
                "DELETE FROM kv_records WHERE key = ?", [(key,) for key in keys]
            )


class InMemoryKeyValueStore:
    """Process-local stand-in for :class:`SQLiteKeyValueStore`."""

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def replace(self, values: Dict[str, str], drop: Iterable[str] = ()) -> None:
        for key in drop:
            self._values.pop(key, None)
        self._values.update(values)

    def delete(self, *keys: str) -> None:
        for key in keys:
            self._values.pop(key, None)


__all__ = ["InMemoryKeyValueStore", "SQLiteKeyValueStore"]

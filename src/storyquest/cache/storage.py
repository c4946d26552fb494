"""Persistent key-value stores the content cache is built on."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Protocol

from storyquest.errors.exceptions import StorageError

logger = logging.getLogger(__name__)

_DEFAULT_DB_PATH = Path.home() / ".storyquest" / "store.db"


class KeyValueStore(Protocol):
    """Synchronous string store: get/set/remove plus key enumeration."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


class MemoryStore:
    """Process-local dict store. Contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class SqliteStore:
    """SQLite-backed persistent store with a single key/value table."""

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path or _DEFAULT_DB_PATH
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._create_table()

    @property
    def path(self) -> Path:
        return self._db_path

    def get(self, key: str) -> str | None:
        row = self._execute("SELECT value FROM kv WHERE key = ?", (key,), key).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        self._execute(
            "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value), key
        )
        self._commit(key)

    def remove(self, key: str) -> None:
        self._execute("DELETE FROM kv WHERE key = ?", (key,), key)
        self._commit(key)

    def keys(self) -> list[str]:
        rows = self._execute("SELECT key FROM kv ORDER BY rowid").fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        self._conn.close()

    def _create_table(self) -> None:
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self._conn.commit()

    def _execute(
        self, sql: str, params: tuple = (), key: str | None = None
    ) -> sqlite3.Cursor:
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as e:
            raise StorageError(f"Store operation failed: {e}", key=key, original=e) from e

    def _commit(self, key: str | None) -> None:
        try:
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Store commit failed: {e}", key=key, original=e) from e

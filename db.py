"""
db.py
SQLite-backed key-value slot used to persist the member snapshot.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path

from logging_config import get_logger

logger = get_logger("db")


class StorageError(Exception):
    """Any failure reading or writing the key-value slot."""


class SqliteStorage:
    """
    get_item / set_item / remove_item over a single `kv_store` table.
    Every call opens its own short-lived connection.
    """

    def __init__(self, db_file: str | Path):
        self.db_file = Path(db_file)
        self._initialized = False

    @contextmanager
    def get_conn(self):
        try:
            conn = sqlite3.connect(self.db_file, check_same_thread=False)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {self.db_file}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    def init(self) -> None:
        """Create the table if it doesn't exist yet."""
        if self._initialized:
            return
        with self.get_conn() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
        self._initialized = True
        logger.debug("Storage ready at %s", self.db_file)

    def get_item(self, key: str) -> str | None:
        self.init()
        with self.get_conn() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        if row:
            return str(row["value"])
        return None

    def set_item(self, key: str, value: str) -> None:
        self.init()
        with self.get_conn() as conn:
            conn.execute(
                """
                INSERT INTO kv_store(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )

    def remove_item(self, key: str) -> None:
        self.init()
        with self.get_conn() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def close(self) -> None:
        # Connections are per call; nothing stays open
        self._initialized = False

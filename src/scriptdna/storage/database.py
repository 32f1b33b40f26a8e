"""SQLite key/value storage backend."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from scriptdna.errors import StorageError
from scriptdna.storage.base import Storage

SCHEMA_SQL = """
-- One row per named slot; value_json holds the full serialized value
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value_json TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


class Database:
    """SQLite database wrapper with connection management."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._connection: Optional[sqlite3.Connection] = None

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        if str(self.db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> sqlite3.Connection:
        """Get or create a database connection."""
        if self._connection is None:
            self._ensure_directory()
            self._connection = sqlite3.connect(str(self.db_path))
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def initialize(self) -> None:
        """Create tables if they don't exist."""
        conn = self.connect()
        conn.executescript(SCHEMA_SQL)
        conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> "Database":
        self.connect()
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class SqliteStorage(Storage):
    """Stores each slot as a row of the ``kv_store`` table."""

    def __init__(self, db: Database):
        self.db = db
        self._initialized = False

    @property
    def name(self) -> str:
        return "sqlite"

    def _conn(self) -> sqlite3.Connection:
        conn = self.db.connect()
        if not self._initialized:
            self.db.initialize()
            self._initialized = True
        return conn

    def _read(self, key: str) -> Optional[str]:
        try:
            cursor = self._conn().execute("SELECT value_json FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot read {key!r} from {self.db.db_path}: {e}") from e
        return None if row is None else row["value_json"]

    def _write(self, key: str, payload: str) -> None:
        try:
            conn = self._conn()
            conn.execute(
                """
                INSERT INTO kv_store (key, value_json, updated_at)
                VALUES (?, ?, datetime('now'))
                ON CONFLICT(key) DO UPDATE SET
                    value_json = excluded.value_json,
                    updated_at = excluded.updated_at
                """,
                (key, payload),
            )
            conn.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot write {key!r} to {self.db.db_path}: {e}") from e

    def close(self) -> None:
        self.db.close()
        self._initialized = False

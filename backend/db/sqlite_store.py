"""
SQLite backend: one row (id = 1) in the settings table, JSON in a TEXT column.
sqlite3 calls run in a worker thread; each call opens its own connection.
"""

import asyncio
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import orjson

from .errors import StorageError

SETTINGS_ROW_ID = 1

_SCHEMA = """
CREATE TABLE IF NOT EXISTS settings (
    id INTEGER PRIMARY KEY CHECK (id = 1),
    data TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_UPSERT = """
INSERT INTO settings (id, data, updated_at) VALUES (?, ?, ?)
ON CONFLICT(id) DO UPDATE SET data = excluded.data, updated_at = excluded.updated_at
"""


class SqliteStore:
    name = "sqlite"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.lock = asyncio.Lock()

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path), timeout=10)
        conn.execute(_SCHEMA)
        return conn

    def _read_sync(self) -> Optional[str]:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT data FROM settings WHERE id = ?", (SETTINGS_ROW_ID,)).fetchone()
        return row[0] if row else None

    def _write_sync(self, data: str) -> None:
        updated_at = datetime.now(timezone.utc).isoformat()
        with closing(self._connect()) as conn:
            # connection context manager commits, or rolls back on error
            with conn:
                conn.execute(_UPSERT, (SETTINGS_ROW_ID, data, updated_at))

    async def read(self) -> Optional[dict]:
        """Return the stored document, or None when the row does not exist yet."""
        try:
            raw = await asyncio.to_thread(self._read_sync)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Failed to read settings from {self.path}: {e}") from e
        if raw is None:
            return None
        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in settings row: {e}") from e
        if not isinstance(data, dict):
            raise StorageError("Settings row does not contain a JSON object")
        return data

    async def write(self, document: dict) -> None:
        try:
            data = orjson.dumps(document).decode("utf-8")
        except TypeError as e:
            raise StorageError(f"Settings are not JSON serializable: {e}") from e
        try:
            await asyncio.to_thread(self._write_sync, data)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Failed to write settings to {self.path}: {e}") from e

    def __repr__(self) -> str:
        return f"SqliteStore({str(self.path)!r})"

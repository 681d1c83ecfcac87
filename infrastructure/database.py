"""SQLite connection and schema for captures and the bonus ledger.

Foreign keys are switched on and verified at open time, so deleting a
capture always cascades to its bonus events.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
import sqlite3
from typing import Any

from loguru import logger

from core.errors import StorageError

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS captures (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        item_id TEXT NOT NULL,
        title TEXT NOT NULL,
        original_uri TEXT NOT NULL,
        thumbnail_uri TEXT NOT NULL,
        created_at INTEGER NOT NULL,
        latitude REAL,
        longitude REAL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_captures_item ON captures(item_id)",
    "CREATE INDEX IF NOT EXISTS idx_captures_created_at ON captures(created_at)",
    """
    CREATE TABLE IF NOT EXISTS bonus_events (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        capture_id INTEGER NOT NULL REFERENCES captures(id) ON DELETE CASCADE,
        biome_id TEXT NOT NULL,
        biome_label TEXT NOT NULL,
        multiplier REAL NOT NULL,
        bonus_points INTEGER NOT NULL CHECK (bonus_points >= 0),
        created_at INTEGER NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_bonus_events_capture ON bonus_events(capture_id)",
)


class Database:
    """Wrapper around a single SQLite connection that maps errors to `StorageError`."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._conn = sqlite3.connect(self.path, isolation_level=None)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            enabled = self._conn.execute("PRAGMA foreign_keys").fetchone()[0]
            for statement in SCHEMA:
                self._conn.execute(statement)
        except sqlite3.Error as ex:
            raise StorageError(f"Cannot open database {self.path}: {ex}") from ex
        if not enabled:
            self._conn.close()
            raise StorageError("SQLite build does not enforce foreign keys; cascade delete unavailable")
        logger.info("Database ready: {}", self.path)

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        """Run a write statement and return its cursor."""
        try:
            return self._conn.execute(sql, params)
        except sqlite3.Error as ex:
            raise StorageError(str(ex)) from ex

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        """Run a read statement and return all rows."""
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as ex:
            raise StorageError(str(ex)) from ex

    def clear(self) -> None:
        """Delete every capture and bonus event."""
        self.execute("DELETE FROM bonus_events")
        self.execute("DELETE FROM captures")
        logger.warning("Database cleared: {}", self.path)

    def close(self) -> None:
        self._conn.close()

"""SQLite persistence for captures."""

from __future__ import annotations

import sqlite3

from loguru import logger

from core.models import Capture
from infrastructure.database import Database
from infrastructure.events import ChangeNotifier


def _row_to_capture(row: sqlite3.Row) -> Capture:
    return Capture(
        id=int(row["id"]),
        item_id=row["item_id"],
        title=row["title"],
        original_uri=row["original_uri"],
        thumbnail_uri=row["thumbnail_uri"],
        created_at=int(row["created_at"]),
        latitude=row["latitude"],
        longitude=row["longitude"],
    )


class SqliteCaptureRepository:
    """Insert, query and delete captures; every write emits a change."""

    def __init__(self, db: Database, notifier: ChangeNotifier) -> None:
        self._db = db
        self._notifier = notifier

    def insert_capture(
        self,
        item_id: str,
        title: str,
        original_uri: str,
        thumbnail_uri: str,
        created_at: int,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> int:
        cur = self._db.execute(
            "INSERT INTO captures (item_id, title, original_uri, thumbnail_uri, created_at, latitude, longitude)"
            " VALUES (?, ?, ?, ?, ?, ?, ?)",
            (item_id, title, original_uri, thumbnail_uri, created_at, latitude, longitude),
        )
        capture_id = int(cur.lastrowid or 0)
        logger.info("Capture {} stored for item {}", capture_id, item_id)
        self._notifier.emit()
        return capture_id

    def delete_capture(self, capture_id: int) -> None:
        """Delete a capture; its bonus events go with it."""
        self._db.execute("DELETE FROM captures WHERE id = ?", (capture_id,))
        logger.info("Capture {} deleted", capture_id)
        self._notifier.emit()

    def update_capture_location(self, capture_id: int, latitude: float, longitude: float) -> None:
        self._db.execute(
            "UPDATE captures SET latitude = ?, longitude = ? WHERE id = ?",
            (latitude, longitude, capture_id),
        )
        self._notifier.emit()

    def get_capture(self, capture_id: int) -> Capture | None:
        rows = self._db.query("SELECT * FROM captures WHERE id = ?", (capture_id,))
        return _row_to_capture(rows[0]) if rows else None

    def capture_exists(self, capture_id: int) -> bool:
        return bool(self._db.query("SELECT 1 FROM captures WHERE id = ?", (capture_id,)))

    def get_latest_capture_for_item(self, item_id: str) -> Capture | None:
        rows = self._db.query(
            "SELECT * FROM captures WHERE item_id = ? ORDER BY created_at DESC, id DESC LIMIT 1",
            (item_id,),
        )
        return _row_to_capture(rows[0]) if rows else None

    def list_captures(
        self,
        item_id: str | None = None,
        start_ms: int | None = None,
        end_ms: int | None = None,
    ) -> list[Capture]:
        """Captures matching the optional filters, newest first."""
        clauses: list[str] = []
        params: list[object] = []
        if item_id:
            clauses.append("item_id = ?")
            params.append(item_id)
        if start_ms is not None:
            clauses.append("created_at >= ?")
            params.append(start_ms)
        if end_ms is not None:
            clauses.append("created_at <= ?")
            params.append(end_ms)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._db.query(f"SELECT * FROM captures {where} ORDER BY created_at DESC, id DESC", params)
        return [_row_to_capture(r) for r in rows]

    def list_distinct_captured_item_ids(self) -> list[str]:
        rows = self._db.query("SELECT DISTINCT item_id FROM captures ORDER BY item_id")
        return [r["item_id"] for r in rows]

    def clear_all(self) -> None:
        """Delete every capture (bonus events cascade) and notify listeners."""
        self._db.clear()
        self._notifier.emit()

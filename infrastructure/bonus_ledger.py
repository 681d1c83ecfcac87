"""Append-only SQLite ledger of bonus events."""

from __future__ import annotations

import sqlite3

from core.models import BonusEvent
from infrastructure.database import Database
from infrastructure.events import ChangeNotifier


def _row_to_event(row: sqlite3.Row) -> BonusEvent:
    return BonusEvent(
        id=int(row["id"]),
        capture_id=int(row["capture_id"]),
        biome_id=row["biome_id"],
        biome_label=row["biome_label"],
        multiplier=float(row["multiplier"]),
        bonus_points=int(row["bonus_points"]),
        created_at=int(row["created_at"]),
    )


class SqliteBonusLedger:
    """Stores bonus events; rows are never updated, only cascaded away.

    `list_all` joins against live captures. With foreign keys enforced by
    `Database` the join never drops rows, it only keeps the query honest if
    an older database file was written without the cascade.
    """

    def __init__(self, db: Database, notifier: ChangeNotifier) -> None:
        self._db = db
        self._notifier = notifier

    def append(
        self,
        capture_id: int,
        biome_id: str,
        biome_label: str,
        multiplier: float,
        bonus_points: int,
        created_at: int,
    ) -> int:
        """Insert one event and notify listeners; returns the new event id."""
        cur = self._db.execute(
            "INSERT INTO bonus_events (capture_id, biome_id, biome_label, multiplier, bonus_points, created_at)"
            " VALUES (?, ?, ?, ?, ?, ?)",
            (capture_id, biome_id, biome_label, multiplier, bonus_points, created_at),
        )
        self._notifier.emit()
        return int(cur.lastrowid or 0)

    def list_for_capture(self, capture_id: int) -> list[BonusEvent]:
        rows = self._db.query(
            "SELECT * FROM bonus_events WHERE capture_id = ? ORDER BY created_at ASC, id ASC",
            (capture_id,),
        )
        return [_row_to_event(r) for r in rows]

    def list_all(self) -> list[BonusEvent]:
        rows = self._db.query(
            "SELECT b.* FROM bonus_events b JOIN captures c ON c.id = b.capture_id"
            " ORDER BY b.created_at DESC, b.id DESC"
        )
        return [_row_to_event(r) for r in rows]

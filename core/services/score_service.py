"""Score aggregation over captures and the bonus ledger.

The total is the base points of every distinct captured item plus the bonus
points of every ledger event attached to a live capture. Capturing the same
item twice adds its base points once; each capture keeps its own bonuses.
"""

from __future__ import annotations

from collections import defaultdict

from core.items import base_points_for_item, get_item, max_total_points
from core.models import PointsEntry
from core.services.interfaces import BonusLedgerStore, CaptureStore


class ScoreService:
    """Read-only score queries used by the tally, breakdown and leaderboard."""

    def __init__(self, captures: CaptureStore, ledger: BonusLedgerStore) -> None:
        self._captures = captures
        self._ledger = ledger

    def points_entries(self) -> list[PointsEntry]:
        """Per-item breakdown sorted by points (desc), then title."""
        captures = self._captures.list_captures()
        live_ids = {c.id for c in captures}

        bonus_by_capture: dict[int, int] = defaultdict(int)
        for event in self._ledger.list_all():
            if event.capture_id in live_ids:
                bonus_by_capture[event.capture_id] += event.bonus_points

        entries: dict[str, PointsEntry] = {}
        for capture in captures:
            entry = entries.get(capture.item_id)
            if entry is None:
                item = get_item(capture.item_id)
                entry = PointsEntry(
                    item_id=capture.item_id,
                    title=item.title if item else capture.title,
                    base_points=base_points_for_item(capture.item_id),
                )
                entries[capture.item_id] = entry
            entry.capture_ids.append(capture.id)
            entry.bonus_points += bonus_by_capture.get(capture.id, 0)

        return sorted(entries.values(), key=lambda e: (-e.points, e.title))

    def total_score(self) -> int:
        return sum(e.points for e in self.points_entries())

    def capture_breakdown(self, capture_id: int) -> tuple[int, int, int]:
        """(base, bonus, total) for one capture; zeros if it no longer exists."""
        capture = self._captures.get_capture(capture_id)
        if capture is None:
            return 0, 0, 0
        base = base_points_for_item(capture.item_id)
        bonus = sum(e.bonus_points for e in self._ledger.list_for_capture(capture_id))
        return base, bonus, base + bonus

    def progress(self) -> float:
        """Total as a fraction of the catalog's base points, clamped to [0, 1]."""
        max_total = max_total_points()
        if max_total <= 0:
            return 0.0
        return max(0.0, min(1.0, self.total_score() / max_total))

    def leaderboard_score(self) -> int:
        return max(0, self.total_score())

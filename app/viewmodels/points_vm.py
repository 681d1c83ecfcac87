"""ViewModel for the points tally and the points breakdown screen."""

from __future__ import annotations

from loguru import logger

from core.items import max_total_points
from core.models import PointsEntry
from core.services.interfaces import ChangeSource
from core.services.score_service import ScoreService


class PointsVM:
    """Keeps score aggregates current by listening for data changes."""

    def __init__(self, scores: ScoreService, changes: ChangeSource) -> None:
        """Create a PointsVM and load the initial aggregates.

        Args:
            scores: Score queries.
            changes: Notification source fired on capture/bonus writes.
        """
        self._scores = scores
        self.entries: list[PointsEntry] = []
        self.total: int = 0
        self.max_total: int = max_total_points()
        self.refresh()
        self._unsubscribe = changes.add_listener(self.refresh)

    def refresh(self) -> None:
        """Recompute entries and total from storage."""
        self.entries = self._scores.points_entries()
        self.total = sum(e.points for e in self.entries)
        logger.debug("Points refreshed: {} items, total {}", len(self.entries), self.total)

    @property
    def progress(self) -> float:
        """Fraction of the maximum base total, clamped to [0, 1]."""
        if self.max_total <= 0:
            return 0.0
        return max(0.0, min(1.0, self.total / self.max_total))

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def entry_label(self, entry: PointsEntry) -> str:
        if entry.bonus_points:
            return f"{entry.base_points} + {entry.bonus_points} bonus = {entry.points} pts"
        return f"{entry.points} pts"

    def close(self) -> None:
        """Stop listening for changes."""
        self._unsubscribe()

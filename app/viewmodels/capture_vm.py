"""Lightweight view model wrapper around a `Capture`."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import Capture
from core.services.score_service import ScoreService


@dataclass
class CaptureVM:
    """Per-capture detail: base + bonus = total."""

    capture: Capture
    base_points: int
    bonus_points: int

    @classmethod
    def load(cls, capture: Capture, scores: ScoreService) -> CaptureVM:
        base, bonus, _ = scores.capture_breakdown(capture.id)
        return cls(capture=capture, base_points=base, bonus_points=bonus)

    @property
    def total_points(self) -> int:
        return self.base_points + self.bonus_points

    @property
    def title(self) -> str:
        return self.capture.title

    @property
    def points_label(self) -> str:
        return f"{self.total_points} pts"

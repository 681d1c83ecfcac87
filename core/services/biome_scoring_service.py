"""Biome bonus evaluation and recording.

`BiomeScoringService` is the single entry point UI code uses after a capture
gets coordinates. It never raises for ordinary outcomes: a missing location,
no matching biome, a zero bonus and a failed ledger write all come back as a
not-awarded `BonusResult`.
"""

from __future__ import annotations

from collections.abc import Callable
import time

from loguru import logger

from core.errors import StorageError
from core.geo import GeoIndex
from core.models import Biome, BonusEvent, BonusResult
from core.scoring import compute_bonus
from core.services.interfaces import BonusLedgerStore


def _now_ms() -> int:
    return int(time.time() * 1000)


class BiomeScoringService:
    """Orchestrates the geo index, the scoring formula and the bonus ledger."""

    def __init__(
        self,
        geo_index: GeoIndex,
        ledger: BonusLedgerStore,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Create the service.

        Args:
            geo_index: Loaded biomes (possibly degraded/empty).
            ledger: Bonus event storage.
            clock: Returns the current time in epoch ms (defaults to wall clock).
        """
        self._geo = geo_index
        self._ledger = ledger
        self._clock = clock or _now_ms
        if geo_index.degraded:
            logger.warning("Biome configuration unavailable; bonuses are disabled")

    @property
    def bonuses_available(self) -> bool:
        return not self._geo.degraded

    async def evaluate_and_record_bonus(
        self,
        capture_id: int,
        latitude: float | None,
        longitude: float | None,
        base_points: int,
    ) -> BonusResult:
        """Award and record a biome bonus for a capture if its location qualifies."""
        if latitude is None or longitude is None:
            logger.debug("Capture {} has no location; skipping bonus", capture_id)
            return BonusResult.none()

        match = self._geo.find_best_match(latitude, longitude)
        if match is None:
            logger.debug("Capture {} at ({}, {}) is outside all biomes", capture_id, latitude, longitude)
            return BonusResult.none()

        biome = match.biome
        bonus_points = compute_bonus(base_points, biome.multiplier)
        if bonus_points <= 0:
            logger.debug("Capture {} in biome {} earns no bonus", capture_id, biome.id)
            return BonusResult.none()

        try:
            event_id = self._ledger.append(
                capture_id,
                biome.id,
                biome.label,
                biome.multiplier,
                bonus_points,
                self._clock(),
            )
        except StorageError as ex:
            logger.warning("Bonus for capture {} not recorded: {}", capture_id, ex)
            return BonusResult.none()

        logger.info(
            "Bonus event {}: capture {} +{} pts in {} (x{})",
            event_id,
            capture_id,
            bonus_points,
            biome.label,
            biome.multiplier,
        )
        return BonusResult(
            awarded=True,
            bonus_points=bonus_points,
            biome_label=biome.label,
            multiplier=biome.multiplier,
        )

    def list_bonus_events_for_capture(self, capture_id: int) -> list[BonusEvent]:
        """Bonus events of one capture, oldest first."""
        return self._ledger.list_for_capture(capture_id)

    def list_all_bonuses(self) -> list[BonusEvent]:
        """Bonus events of all live captures, newest first."""
        return self._ledger.list_all()

    def list_biomes(self) -> list[Biome]:
        """Circle biomes for map overlays."""
        return self._geo.circle_biomes()

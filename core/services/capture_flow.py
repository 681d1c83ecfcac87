"""Capture recording with immediate or deferred bonus evaluation.

A capture is evaluated for a biome bonus exactly once per capture event:
synchronously when the photo's EXIF carried GPS, otherwise in one background
task after a live fix resolves. The two paths never both run for the same
capture event.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import time

from loguru import logger

from core.errors import StorageError
from core.items import base_points_for_item, get_item
from core.models import BonusResult
from core.services.biome_scoring_service import BiomeScoringService
from core.services.interfaces import CaptureOutcome, CaptureStore, LocationProvider


class CaptureFlow:
    """Stores captures and drives their bonus evaluation."""

    def __init__(
        self,
        captures: CaptureStore,
        scoring: BiomeScoringService,
        location_provider: LocationProvider,
        delete_capture: Callable[[int], object] | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Create the flow.

        Args:
            captures: Capture persistence.
            scoring: Bonus evaluation service.
            location_provider: Live fix source for photos without EXIF GPS.
            delete_capture: Used by `replace_capture`; defaults to the store's
                own delete (no file cleanup).
            clock: Returns epoch ms.
        """
        self._captures = captures
        self._scoring = scoring
        self._location = location_provider
        self._delete = delete_capture or captures.delete_capture
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._pending: set[asyncio.Task[BonusResult]] = set()

    async def record_capture(
        self,
        item_id: str,
        original_uri: str,
        thumbnail_uri: str,
        exif_gps: tuple[float, float] | None = None,
        created_at: int | None = None,
    ) -> CaptureOutcome:
        """Insert a capture and evaluate its bonus.

        Args:
            item_id: Hunt item slug.
            original_uri: Stored original image.
            thumbnail_uri: Stored square thumbnail.
            exif_gps: Coordinates read from the photo's EXIF, if any.
            created_at: Capture time in epoch ms (defaults to now).
        """
        item = get_item(item_id)
        title = item.title if item else item_id
        base_points = base_points_for_item(item_id)
        lat, lon = exif_gps if exif_gps else (None, None)

        capture_id = self._captures.insert_capture(
            item_id=item_id,
            title=title,
            original_uri=original_uri,
            thumbnail_uri=thumbnail_uri,
            created_at=created_at if created_at is not None else self._clock(),
            latitude=lat,
            longitude=lon,
        )

        if exif_gps:
            bonus = await self._scoring.evaluate_and_record_bonus(capture_id, lat, lon, base_points)
            return CaptureOutcome(capture_id=capture_id, bonus=bonus)

        task = asyncio.create_task(self._resolve_deferred(capture_id, base_points))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return CaptureOutcome(capture_id=capture_id, bonus=BonusResult.none(), deferred=task)

    async def replace_capture(
        self,
        old_capture_id: int,
        item_id: str,
        original_uri: str,
        thumbnail_uri: str,
        exif_gps: tuple[float, float] | None = None,
        created_at: int | None = None,
    ) -> CaptureOutcome:
        """Delete a previous capture (its bonuses cascade) and record a new one."""
        self._delete(old_capture_id)
        return await self.record_capture(item_id, original_uri, thumbnail_uri, exif_gps, created_at)

    async def _resolve_deferred(self, capture_id: int, base_points: int) -> BonusResult:
        location = await self._location.get_location()
        if location is None:
            logger.debug("No live fix for capture {}", capture_id)
            return BonusResult.none()

        lat, lon = location
        try:
            if not self._captures.capture_exists(capture_id):
                logger.info("Capture {} deleted before its fix resolved", capture_id)
                return BonusResult.none()
            self._captures.update_capture_location(capture_id, lat, lon)
        except StorageError as ex:
            logger.warning("Could not store location for capture {}: {}", capture_id, ex)
            return BonusResult.none()
        return await self._scoring.evaluate_and_record_bonus(capture_id, lat, lon, base_points)

    async def wait_pending(self) -> list[BonusResult]:
        """Wait for all in-flight deferred evaluations."""
        if not self._pending:
            return []
        return list(await asyncio.gather(*list(self._pending)))

    @property
    def pending_count(self) -> int:
        return len(self._pending)

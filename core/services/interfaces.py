"""Core service interfaces and shared data structures.

The scoring core depends on these protocols only, so persistence and
platform integrations (location, file removal) can be swapped in tests.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from core.models import BonusEvent, BonusResult, Capture


class CaptureStore(Protocol):
    """Capture persistence owned by the storage layer."""

    def insert_capture(
        self,
        item_id: str,
        title: str,
        original_uri: str,
        thumbnail_uri: str,
        created_at: int,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> int: ...

    def delete_capture(self, capture_id: int) -> None: ...

    def update_capture_location(self, capture_id: int, latitude: float, longitude: float) -> None: ...

    def get_capture(self, capture_id: int) -> Capture | None: ...

    def capture_exists(self, capture_id: int) -> bool: ...

    def list_captures(
        self,
        item_id: str | None = None,
        start_ms: int | None = None,
        end_ms: int | None = None,
    ) -> list[Capture]: ...

    def list_distinct_captured_item_ids(self) -> list[str]: ...


class BonusLedgerStore(Protocol):
    """Append-only bonus event storage."""

    def append(
        self,
        capture_id: int,
        biome_id: str,
        biome_label: str,
        multiplier: float,
        bonus_points: int,
        created_at: int,
    ) -> int: ...

    def list_for_capture(self, capture_id: int) -> list[BonusEvent]: ...

    def list_all(self) -> list[BonusEvent]: ...


class ChangeSource(Protocol):
    """Subscribe/unsubscribe pair for "data changed" notifications."""

    def add_listener(self, listener: Callable[[], None]) -> Callable[[], None]: ...


class LocationProvider(Protocol):
    """Resolves a single live location fix; None when unavailable."""

    async def get_location(self) -> tuple[float, float] | None: ...


@dataclass
class DeleteResult:
    """Outcome of a capture delete.

    Attributes:
        capture_id: The capture that was removed.
        success_paths: Files successfully moved to the recycle bin.
        failed: Tuples of (path, reason) for files that could not be removed.
    """

    capture_id: int
    success_paths: list[str]
    failed: list[tuple[str, str]]


@dataclass
class CaptureOutcome:
    """Result of recording a capture.

    Attributes:
        capture_id: Identifier assigned by storage.
        bonus: Result of the immediate (EXIF) evaluation; not awarded when the
            photo carried no GPS.
        deferred: Background task resolving a live fix when EXIF had no GPS.
    """

    capture_id: int
    bonus: BonusResult
    deferred: asyncio.Task[BonusResult] | None = None

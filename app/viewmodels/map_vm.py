"""ViewModel for map overlays: biome circles and capture markers."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import Biome, Capture
from core.services.biome_scoring_service import BiomeScoringService
from core.services.interfaces import CaptureStore


@dataclass
class BiomeOverlay:
    biome: Biome
    intensity: float  # 0..1, relative to the strongest multiplier


@dataclass
class CaptureMarker:
    capture_id: int
    title: str
    latitude: float
    longitude: float


class MapVM:
    """Builds overlay and marker lists for a map view."""

    def __init__(self, scoring: BiomeScoringService, captures: CaptureStore) -> None:
        self._scoring = scoring
        self._captures = captures

    def biome_overlays(self) -> list[BiomeOverlay]:
        biomes = self._scoring.list_biomes()
        if not biomes:
            return []
        strongest = max(b.multiplier for b in biomes)
        return [
            BiomeOverlay(biome=b, intensity=(b.multiplier / strongest) if strongest > 0 else 0.0)
            for b in biomes
        ]

    def capture_markers(self) -> list[CaptureMarker]:
        markers: list[CaptureMarker] = []
        for c in self._captures.list_captures():
            if not c.has_location:
                continue
            markers.append(self._marker(c))
        return markers

    @staticmethod
    def _marker(capture: Capture) -> CaptureMarker:
        return CaptureMarker(
            capture_id=capture.id,
            title=capture.title,
            latitude=float(capture.latitude),
            longitude=float(capture.longitude),
        )

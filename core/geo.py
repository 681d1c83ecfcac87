"""Geofenced biome lookup.

Distances use the haversine formula on a spherical Earth, which is well within
GPS error for the few-kilometre radii the biomes use.
"""

from __future__ import annotations

from collections.abc import Iterable
import math

from core.models import Biome, BiomeMatch

EARTH_RADIUS_METERS = 6_371_000.0


def distance_meters(lat_a: float, lon_a: float, lat_b: float, lon_b: float) -> float:
    """Return the great-circle distance in meters between two points."""
    dlat = math.radians(lat_b - lat_a)
    dlon = math.radians(lon_b - lon_a)
    lat_a_rad = math.radians(lat_a)
    lat_b_rad = math.radians(lat_b)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat_a_rad) * math.cos(lat_b_rad) * math.sin(dlon / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.atan2(math.sqrt(a), math.sqrt(1 - a))


class GeoIndex:
    """Immutable set of biomes answering point-in-region queries."""

    def __init__(self, biomes: Iterable[Biome] = (), degraded: bool = False) -> None:
        self._biomes: tuple[Biome, ...] = tuple(biomes)
        self._circles: tuple[Biome, ...] = tuple(b for b in self._biomes if b.is_circle)
        self.degraded = degraded

    @classmethod
    def unavailable(cls) -> GeoIndex:
        """Index used when the biome configuration could not be loaded."""
        return cls((), degraded=True)

    @property
    def biomes(self) -> tuple[Biome, ...]:
        return self._biomes

    def circle_biomes(self) -> list[Biome]:
        """Circle biomes in configuration order."""
        return list(self._circles)

    def find_best_match(self, latitude: float | None, longitude: float | None) -> BiomeMatch | None:
        """Return the best biome containing the point, or None.

        The boundary is inclusive. The highest multiplier wins; ties go to the
        biome whose center is closest to the point.
        """
        if latitude is None or longitude is None:
            return None

        best: BiomeMatch | None = None
        for biome in self._circles:
            d = distance_meters(latitude, longitude, biome.center_latitude, biome.center_longitude)
            if d > biome.radius_meters:
                continue
            if best is None:
                best = BiomeMatch(biome=biome, distance_meters=d)
            elif biome.multiplier > best.biome.multiplier or (
                biome.multiplier == best.biome.multiplier and d < best.distance_meters
            ):
                best = BiomeMatch(biome=biome, distance_meters=d)
        return best

"""Core domain models for biomes, captures, and bonus events."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class BiomeType(str, Enum):
    """Geometry variant of a biome."""

    CIRCLE = "circle"
    # Reserved: altitude readings are not captured yet.
    ALTITUDE = "altitude"


@dataclass(frozen=True)
class Biome:
    """A configured bonus region.

    Circle biomes carry a center and radius; altitude biomes carry optional
    inclusive bounds in meters and are never matched by location.
    """

    id: str
    label: str
    type: BiomeType
    multiplier: float
    center_latitude: float | None = None
    center_longitude: float | None = None
    radius_meters: float | None = None
    min_meters: float | None = None
    max_meters: float | None = None
    description: str | None = None

    @property
    def is_circle(self) -> bool:
        return self.type is BiomeType.CIRCLE


@dataclass(frozen=True)
class BiomeMatch:
    """Best biome for a location and the distance to its center."""

    biome: Biome
    distance_meters: float


@dataclass
class Capture:
    """A stored photo capture of a hunt item."""

    id: int
    item_id: str
    title: str
    original_uri: str
    thumbnail_uri: str
    created_at: int  # epoch ms
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class BonusEvent:
    """Ledger row: extra points a capture earned from one biome match.

    Biome fields are a snapshot taken at evaluation time.
    """

    id: int
    capture_id: int
    biome_id: str
    biome_label: str
    multiplier: float
    bonus_points: int
    created_at: int  # epoch ms


@dataclass(frozen=True)
class BonusResult:
    """Outcome of a single bonus evaluation attempt."""

    awarded: bool
    bonus_points: int = 0
    biome_label: str | None = None
    multiplier: float | None = None

    @classmethod
    def none(cls) -> BonusResult:
        return cls(awarded=False, bonus_points=0)


@dataclass(frozen=True)
class HuntItem:
    """A point of interest players try to photograph."""

    id: str
    title: str
    category: str
    description: str
    difficulty: int


@dataclass
class PointsEntry:
    """One row of the points breakdown for a captured item."""

    item_id: str
    title: str
    base_points: int
    bonus_points: int = 0
    capture_ids: list[int] = field(default_factory=list)

    @property
    def points(self) -> int:
        return self.base_points + self.bonus_points

"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import itertools
import json
from pathlib import Path

import pytest

from core.geo import GeoIndex
from core.models import Biome, BiomeType
from core.services.biome_scoring_service import BiomeScoringService
from core.services.score_service import ScoreService
from infrastructure import biome_config
from infrastructure.bonus_ledger import SqliteBonusLedger
from infrastructure.capture_repository import SqliteCaptureRepository
from infrastructure.database import Database
from infrastructure.events import ChangeNotifier


# ============================================================================
# Biome fixtures
# ============================================================================


def make_circle(
    biome_id: str,
    lat: float,
    lon: float,
    radius: float,
    multiplier: float,
    label: str | None = None,
) -> Biome:
    return Biome(
        id=biome_id,
        label=label or biome_id,
        type=BiomeType.CIRCLE,
        multiplier=multiplier,
        center_latitude=lat,
        center_longitude=lon,
        radius_meters=radius,
    )


@pytest.fixture
def jungle_biome():
    """5 km jungle zone doubling base points."""
    return make_circle("jungle", -12.0, -69.0, 5000, 2.0, label="jungle")


@pytest.fixture
def geo_index(jungle_biome):
    return GeoIndex([jungle_biome])


@pytest.fixture
def biome_records():
    """Raw JSON records as found in data/biomes.json."""
    return [
        {
            "id": "jungle",
            "label": "Jungle",
            "type": "circle",
            "centerLat": -12.0,
            "centerLng": -69.0,
            "radiusMeters": 5000,
            "multiplier": 2.0,
            "description": "Lowland rainforest",
        },
        {
            "id": "plaza",
            "label": "Plaza",
            "type": "circle",
            "centerLat": -13.5163,
            "centerLng": -71.9785,
            "radiusMeters": 1500,
            "multiplier": 1.25,
        },
        {"id": "peaks", "label": "Peaks", "type": "altitude", "minMeters": 4000, "multiplier": 1.5},
    ]


@pytest.fixture
def write_biomes(tmp_path: Path):
    """Write a biome document to a temp file and return its path."""

    def _write(data, name: str = "biomes.json") -> Path:
        path = tmp_path / name
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    yield _write
    biome_config.clear_cache()


# ============================================================================
# Storage fixtures
# ============================================================================


@pytest.fixture
def db():
    database = Database(":memory:")
    yield database
    try:
        database.close()
    except Exception:  # pylint: disable=broad-exception-caught
        pass


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def captures(db, notifier):
    return SqliteCaptureRepository(db, notifier)


@pytest.fixture
def ledger(db, notifier):
    return SqliteBonusLedger(db, notifier)


@pytest.fixture
def clock():
    """Deterministic epoch-ms clock advancing one second per call."""
    counter = itertools.count(1_700_000_000_000, 1000)
    return lambda: next(counter)


@pytest.fixture
def scoring(geo_index, ledger, clock):
    return BiomeScoringService(geo_index, ledger, clock=clock)


@pytest.fixture
def scores(captures, ledger):
    return ScoreService(captures, ledger)


@pytest.fixture
def insert_capture(captures, clock):
    """Insert a capture for `item_id` with optional coordinates."""

    def _insert(item_id: str = "llama", latitude=None, longitude=None, created_at=None) -> int:
        return captures.insert_capture(
            item_id=item_id,
            title=item_id.title(),
            original_uri=f"file:///data/originals/{item_id}.jpg",
            thumbnail_uri=f"file:///data/thumbs/{item_id}.jpg",
            created_at=created_at if created_at is not None else clock(),
            latitude=latitude,
            longitude=longitude,
        )

    return _insert

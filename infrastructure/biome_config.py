"""Load biome definitions from a JSON file.

The file is an ordered array of records. Loading fails fast with
`ConfigError` on the first malformed record; callers decide whether to run
without bonuses.
"""

from __future__ import annotations

from functools import lru_cache
import json
import math
from pathlib import Path
from typing import Any

from loguru import logger

from core.errors import ConfigError
from core.geo import GeoIndex
from core.models import Biome, BiomeType

_REQUIRED = ("id", "label", "type", "multiplier")
_CIRCLE_REQUIRED = ("centerLat", "centerLng", "radiusMeters")


def _number(record: dict[str, Any], key: str, index: int) -> float:
    value = record.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"Biome #{index} ({record.get('id')}): '{key}' must be a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as ex:
        raise ConfigError(f"Biome #{index} ({record.get('id')}): '{key}' is out of range") from ex
    if not math.isfinite(number):
        raise ConfigError(f"Biome #{index} ({record.get('id')}): '{key}' must be finite, got {value!r}")
    return number


def _optional_number(record: dict[str, Any], key: str, index: int) -> float | None:
    if record.get(key) is None:
        return None
    return _number(record, key, index)


def parse_biome(record: Any, index: int) -> Biome:
    """Build a `Biome` from one JSON record."""
    if not isinstance(record, dict):
        raise ConfigError(f"Biome #{index} must be an object, got {type(record).__name__}")
    missing = [k for k in _REQUIRED if k not in record]
    if missing:
        raise ConfigError(f"Biome #{index} missing required fields: {missing}")

    try:
        biome_type = BiomeType(record["type"])
    except ValueError as ex:
        raise ConfigError(f"Biome #{index} ({record['id']}): unknown type {record['type']!r}") from ex

    description = record.get("description")
    common: dict[str, Any] = {
        "id": str(record["id"]),
        "label": str(record["label"]),
        "type": biome_type,
        "multiplier": _number(record, "multiplier", index),
        "description": str(description) if description is not None else None,
    }

    if biome_type is BiomeType.CIRCLE:
        missing = [k for k in _CIRCLE_REQUIRED if k not in record]
        if missing:
            raise ConfigError(f"Biome #{index} ({record['id']}) missing circle fields: {missing}")
        radius = _number(record, "radiusMeters", index)
        if radius <= 0:
            raise ConfigError(f"Biome #{index} ({record['id']}): radiusMeters must be positive")
        return Biome(
            center_latitude=_number(record, "centerLat", index),
            center_longitude=_number(record, "centerLng", index),
            radius_meters=radius,
            **common,
        )

    return Biome(
        min_meters=_optional_number(record, "minMeters", index),
        max_meters=_optional_number(record, "maxMeters", index),
        **common,
    )


def parse_biomes(data: Any) -> list[Biome]:
    """Validate a decoded JSON document and return its biomes in order."""
    if not isinstance(data, list):
        raise ConfigError("Biome configuration must be a JSON array")
    biomes = [parse_biome(record, i) for i, record in enumerate(data)]
    seen: set[str] = set()
    for biome in biomes:
        if biome.id in seen:
            raise ConfigError(f"Duplicate biome id: {biome.id}")
        seen.add(biome.id)
        if biome.multiplier < 1.0:
            logger.warning("Biome {} has multiplier {} < 1.0; it never awards a bonus", biome.id, biome.multiplier)
    return biomes


@lru_cache(maxsize=None)
def _load_cached(path: str) -> tuple[Biome, ...]:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as ex:
        raise ConfigError(f"Cannot read biome configuration {path}: {ex}") from ex
    except json.JSONDecodeError as ex:
        raise ConfigError(f"Invalid JSON in {path}: {ex}") from ex
    biomes = tuple(parse_biomes(data))
    logger.info("Loaded {} biomes from {}", len(biomes), path)
    return biomes


def load_biomes(path: str | Path) -> list[Biome]:
    """Read biomes from `path`; later calls for the same path hit the cache."""
    return list(_load_cached(str(Path(path).resolve())))


def load_geo_index(path: str | Path) -> GeoIndex:
    """Build a `GeoIndex`, falling back to a degraded empty index on bad config."""
    try:
        return GeoIndex(load_biomes(path))
    except ConfigError as ex:
        logger.error("Biome configuration rejected: {}", ex)
        return GeoIndex.unavailable()


def clear_cache() -> None:
    _load_cached.cache_clear()

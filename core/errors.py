"""Domain error types shared by the scoring core and its storage layer."""

from __future__ import annotations


class BiomeHuntError(Exception):
    """Base class for all application errors."""


class ConfigError(BiomeHuntError):
    """Biome configuration or settings file is missing or malformed."""


class StorageError(BiomeHuntError):
    """The local database could not complete a read or write."""

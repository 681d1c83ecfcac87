"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.errors import ConfigError


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise ConfigError(f"settings.json not found: {self._path}")
        try:
            with self._path.open("r", encoding="utf-8") as f:
                self._data = json.load(f)
        except json.JSONDecodeError as ex:
            raise ConfigError(f"Invalid settings file {self._path}: {ex}") from ex

    @property
    def base_dir(self) -> Path:
        return self._path.parent

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_path(self, key: str, default: str | Path | None = None) -> Path | None:
        """Return `key` as a path; relative paths resolve against the settings file."""
        value = self.get(key, default)
        if value is None:
            return None
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.base_dir / path

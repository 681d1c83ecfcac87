"""Tests for infrastructure/settings.py and infrastructure/logging.py."""

import json

import pytest

from core.errors import ConfigError
from infrastructure.logging import find_latest_log_file
from infrastructure.settings import JsonSettings


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"storage": {"database_path": "data/app.db"}, "logging": {"level": "DEBUG"}}),
        encoding="utf-8",
    )
    return path


class TestJsonSettings:
    def test_dotted_get(self, settings_file):
        settings = JsonSettings(settings_file)
        assert settings.get("logging.level") == "DEBUG"
        assert settings.get("logging.missing", "x") == "x"
        assert settings.get("storage.database_path.deeper") is None

    def test_relative_path_resolves_against_settings_dir(self, settings_file, tmp_path):
        settings = JsonSettings(settings_file)
        assert settings.get_path("storage.database_path") == tmp_path / "data" / "app.db"
        assert settings.get_path("biomes.config_path", "data/biomes.json") == tmp_path / "data" / "biomes.json"
        assert settings.get_path("logging.directory") is None

    def test_absolute_path_kept(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"storage": {"database_path": "/var/db/app.db"}}), encoding="utf-8")
        assert str(JsonSettings(path).get_path("storage.database_path")) == "/var/db/app.db"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            JsonSettings(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigError):
            JsonSettings(path)


class TestLogFiles:
    def test_latest_log_file(self, tmp_path):
        assert find_latest_log_file(str(tmp_path)) is None
        (tmp_path / "app_20240101.log").write_text("x", encoding="utf-8")
        assert find_latest_log_file(str(tmp_path)).name == "app_20240101.log"

    def test_missing_directory(self, tmp_path):
        assert find_latest_log_file(str(tmp_path / "nope")) is None

"""
Tests for preference persistence
"""
import json

import config


def test_missing_file_gives_defaults(tmp_path):
    assert config.load_settings(tmp_path / "missing.json") == config.DEFAULT_SETTINGS


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert config.load_settings(path) == config.DEFAULT_SETTINGS


def test_save_merges_and_round_trips(tmp_path):
    path = tmp_path / "settings.json"
    config.save_settings({"dark_mode": True}, path)
    config.save_settings({"angle_mode": "rad"}, path)
    settings = config.load_settings(path)
    assert settings["dark_mode"] is True
    assert settings["angle_mode"] == "rad"
    assert settings["scientific"] is False


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"language": "fr", "scientific": True}))
    settings = config.load_settings(path)
    assert "language" not in settings
    assert settings["scientific"] is True


def test_get_theme():
    assert config.get_theme(True) is config.NEU_DARK
    assert config.get_theme(False) is config.NEU_LIGHT

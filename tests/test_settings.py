"""
Unit tests for settings persistence.
"""

import json

from settings import load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "missing.json"))
    assert settings["locale"] is None
    assert settings["calendar"] == "gregorian"
    assert settings["min_offset_days"] == -10
    assert settings["max_offset_days"] == 90
    assert settings["quick_pick_days"] == 21


def test_round_trip(tmp_path):
    path = str(tmp_path / "settings.json")
    settings = load_settings(path)
    settings["locale"] = "fr_FR"
    settings["calendar"] = "buddhist"
    save_settings(settings, path)
    assert load_settings(path) == settings


def test_invalid_values_are_ignored(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "locale": 42,
        "calendar": "julian",
        "min_offset_days": "soon",
        "quick_pick_days": True,
        "log_level": "LOUD",
    }), encoding="utf-8")
    assert load_settings(str(path)) == load_settings(str(tmp_path / "missing.json"))


def test_inverted_window_resets_offsets(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"min_offset_days": 30, "max_offset_days": 5}), encoding="utf-8")
    settings = load_settings(str(path))
    assert (settings["min_offset_days"], settings["max_offset_days"]) == (-10, 90)


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(str(path))["calendar"] == "gregorian"

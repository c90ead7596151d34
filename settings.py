"""JSON-based settings persistence for the date-range picker."""

import json
import logging
import os

from date_services import CalendarSystem

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".date-range-picker-settings.json")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_DEFAULTS = {
    "locale": None,
    "calendar": CalendarSystem.GREGORIAN.value,
    "min_offset_days": -10,
    "max_offset_days": 90,
    "quick_pick_days": 21,
    "log_level": "WARNING",
}


def load_settings(path: str = _SETTINGS_PATH) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError):
        logger.warning("Ignoring unreadable settings file %s", path, exc_info=True)
        return settings
    if not isinstance(stored, dict):
        return settings

    if isinstance(stored.get("locale"), str) and stored["locale"]:
        settings["locale"] = stored["locale"]
    if stored.get("calendar") in {s.value for s in CalendarSystem}:
        settings["calendar"] = stored["calendar"]
    for key in ("min_offset_days", "max_offset_days", "quick_pick_days"):
        value = stored.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            settings[key] = value
    if settings["min_offset_days"] > settings["max_offset_days"]:
        settings["min_offset_days"] = _DEFAULTS["min_offset_days"]
        settings["max_offset_days"] = _DEFAULTS["max_offset_days"]
    settings["quick_pick_days"] = max(1, settings["quick_pick_days"])
    if stored.get("log_level") in LOG_LEVELS:
        settings["log_level"] = stored["log_level"]
    return settings


def save_settings(settings: dict, path: str = _SETTINGS_PATH) -> None:
    """Persist settings to disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)

"""Display strings for dates, always rendered through the active calendar."""

from __future__ import annotations

import logging
from datetime import date

from calendar_logic import CalendarConfig, DateWindow, start_of_day
from date_services import CalendarError, CalendarSystem
from selection import Selection, selected_days

logger = logging.getLogger(__name__)

CALENDAR_NAMES = {
    CalendarSystem.GREGORIAN: "Gregorian",
    CalendarSystem.ISO8601: "ISO 8601",
    CalendarSystem.BUDDHIST: "Buddhist",
    CalendarSystem.ISLAMIC_UMM_AL_QURA: "Islamic (Umm al-Qura)",
}

LOCALE_NAMES = {
    "en_US": "English (US)",
    "fr_FR": "French (FR)",
    "ar_SA": "Arabic (SA)",
}


def _render(value: date, template: str, config: CalendarConfig) -> str:
    services = config.services
    day = start_of_day(value)
    try:
        pattern = services.localized_pattern(template, config.locale_id, config.system)
        return services.format(day, pattern, config.system, config.locale_id)
    except CalendarError:
        logger.debug("Cannot format %s as %r in %s", day, template, config.system.value)
        return day.isoformat()


def day_number(value: date, config: CalendarConfig) -> str:
    return _render(value, "d", config)


def short_weekday(value: date, config: CalendarConfig) -> str:
    return _render(value, "EEE", config)


def short_month(value: date, config: CalendarConfig) -> str:
    return _render(value, "MMM", config)


def month_title(value: date, config: CalendarConfig) -> str:
    """Month and year heading, e.g. ``January 2025``."""
    return _render(value, "yMMMM", config)


def date_label(value: date, config: CalendarConfig) -> str:
    """Medium-style date, e.g. ``Jan 5, 2025``."""
    return _render(value, "medium", config)


def accessibility_date(value: date, config: CalendarConfig) -> str:
    """Full date for screen readers, e.g. ``Sunday, January 5, 2025``."""
    return _render(value, "full", config)


def weekday_symbols(config: CalendarConfig) -> list[str]:
    """Very short weekday names, starting at ``config.first_weekday``."""
    names = config.services.weekday_names("narrow", config.locale_id)
    start = config.first_weekday - 1
    return names[start:] + names[:start]


# ------------------------------------------------------------------
# Summary strings
# ------------------------------------------------------------------
def selection_label(selection: Selection, config: CalendarConfig) -> str:
    if selection.start is None:
        return "No dates selected"
    if selection.end is None:
        return f"{date_label(selection.start, config)} (tap end date)"
    return f"{date_label(selection.start, config)} → {date_label(selection.end, config)}"


def window_label(window: DateWindow, config: CalendarConfig) -> str:
    return f"{date_label(window.min, config)} – {date_label(window.max, config)}"


def range_length_label(selection: Selection) -> str:
    """Length of a complete range, e.g. ``10 days (1 week, 3 days)``."""
    if selection.end is None:
        return ""
    total_days = selected_days(selection)
    full_weeks, rem_days = divmod(total_days, 7)

    parts: list[str] = []
    if full_weeks:
        parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
    if rem_days:
        parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")
    return f"{total_days} day{'s' if total_days != 1 else ''}  ({', '.join(parts)})"


def calendar_name(system: CalendarSystem) -> str:
    return CALENDAR_NAMES[CalendarSystem(system)]


def locale_name(locale_id: str | None, system_locale: str) -> str:
    """Picker label for a locale option; ``None`` is the system default."""
    if locale_id is None:
        return f"System ({system_locale})"
    return LOCALE_NAMES.get(locale_id, locale_id)

"""Pure calendar calculations: no UI dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from date_services import (
    MONDAY,
    PLATFORM_SERVICES,
    CalendarError,
    CalendarSystem,
    DateServices,
)

logger = logging.getLogger(__name__)

MIN_OFFSET_DAYS = -10
MAX_OFFSET_DAYS = 90


def start_of_day(value: date | datetime) -> date:
    """Drop any time-of-day part, leaving the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


# ------------------------------------------------------------------
# Selectable window
# ------------------------------------------------------------------
@dataclass(frozen=True)
class DateWindow:
    min: date
    max: date

    def __contains__(self, value: date | datetime) -> bool:
        return self.min <= start_of_day(value) <= self.max


def _offset(today: date, days: int) -> date:
    try:
        return today + timedelta(days=days)
    except OverflowError:
        logger.warning("Window bound %+d days from %s overflows, using today", days, today)
        return today


def date_window(today: date | datetime,
                min_offset: int = MIN_OFFSET_DAYS,
                max_offset: int = MAX_OFFSET_DAYS) -> DateWindow:
    """Return the selectable window around *today* (inclusive on both ends)."""
    today = start_of_day(today)
    return DateWindow(_offset(today, min_offset), _offset(today, max_offset))


# ------------------------------------------------------------------
# Calendar context
# ------------------------------------------------------------------
@dataclass(frozen=True)
class CalendarConfig:
    """The active calendar: system, locale and first weekday.

    Grid building, selection and formatting all read from one instance.
    """

    system: CalendarSystem
    locale_id: str
    first_weekday: int = MONDAY
    services: DateServices = field(default=PLATFORM_SERVICES, compare=False, repr=False)


def calendar_config(system: CalendarSystem | str,
                    locale_id: str | None,
                    services: DateServices | None = None) -> CalendarConfig:
    """Derive the active calendar from the two user-facing preferences.

    The week always starts on Monday, whatever the locale would default to.
    An empty or unknown locale id falls back to the system locale.
    """
    services = services or PLATFORM_SERVICES
    system = CalendarSystem(system)
    if not locale_id:
        locale_id = services.system_locale()
    elif not services.supports_locale(locale_id):
        logger.warning("Unknown locale %r, using system default", locale_id)
        locale_id = services.system_locale()
    return CalendarConfig(system, locale_id, MONDAY, services)


# ------------------------------------------------------------------
# Month grid
# ------------------------------------------------------------------
def month_days(reference: date | datetime, config: CalendarConfig) -> list[date | None]:
    """Return the day cells for the month containing *reference*.

    Leading ``None`` entries pad the first row so that the first day lands
    in its weekday column (columns start at ``config.first_weekday``).
    The last row is not padded.  Returns an empty list when the month
    cannot be computed in the active calendar.
    """
    services = config.services
    try:
        month_start, month_end = services.month_interval(start_of_day(reference), config.system)
    except CalendarError:
        logger.warning("No %s month for %s", config.system.value, reference, exc_info=True)
        return []

    blanks = (services.weekday(month_start) - config.first_weekday + 7) % 7
    days: list[date | None] = [None] * blanks
    days.extend(month_start + timedelta(days=i)
                for i in range((month_end - month_start).days))
    return days


def month_rows(days: list[date | None]) -> list[list[date | None]]:
    """Split a flat cell list into weeks of 7 (last week may be short)."""
    return [days[i:i + 7] for i in range(0, len(days), 7)]


def shift_month(reference: date, months: int, config: CalendarConfig) -> date:
    """Move *reference* by whole months in the active calendar."""
    try:
        return config.services.add_months(start_of_day(reference), months, config.system)
    except CalendarError:
        logger.warning("Cannot move %s by %d months", reference, months, exc_info=True)
        return reference

"""
Pytest configuration and fixtures for the date-range picker tests.
"""

import calendar
from datetime import date, timedelta

import pytest

from calendar_logic import CalendarConfig, calendar_config
from date_services import CalendarError, CalendarFields, CalendarSystem

_WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class FakeDateServices:
    """Deterministic Gregorian-only services.

    ``format`` echoes the pattern and the ISO date so tests can see which
    template a formatter asked for.  Months listed in ``broken_months``
    raise CalendarError, like a date outside a lunar calendar's table.
    """

    def __init__(self, broken_months=()):
        self.broken_months = set(broken_months)
        self.calls = []

    def _check(self, value):
        if (value.year, value.month) in self.broken_months:
            raise CalendarError(f"broken month {value.year}-{value.month}")

    def month_interval(self, reference, system):
        self.calls.append(("month_interval", reference, system))
        self._check(reference)
        start = reference.replace(day=1)
        return start, start + timedelta(days=calendar.monthrange(start.year, start.month)[1])

    def add_months(self, reference, months, system):
        year, month = divmod(reference.year * 12 + reference.month - 1 + months, 12)
        target = date(year, month + 1, 1)
        self._check(target)
        return target.replace(day=min(reference.day, calendar.monthrange(year, month + 1)[1]))

    def fields(self, value, system):
        self._check(value)
        return CalendarFields(value.year, value.month, value.day)

    def weekday(self, value):
        return value.isoweekday() % 7 + 1

    def weekday_names(self, width, locale_id):
        return [name[:1] if width == "narrow" else name for name in _WEEKDAYS]

    def localized_pattern(self, template, locale_id, system):
        return f"<{template}>"

    def format(self, value, pattern, system, locale_id):
        self._check(value)
        return f"{pattern}{value.isoformat()}"

    def system_locale(self):
        return "xx_XX"

    def supports_locale(self, locale_id):
        return locale_id in ("en_US", "fr_FR", "ar_SA", "xx_XX")


@pytest.fixture
def fake_services() -> FakeDateServices:
    return FakeDateServices()


@pytest.fixture
def fake_config(fake_services) -> CalendarConfig:
    """Gregorian, Monday-first config backed by the fake services."""
    return calendar_config(CalendarSystem.GREGORIAN, "en_US", fake_services)


@pytest.fixture
def en_config() -> CalendarConfig:
    """Real Babel-backed Gregorian config for en_US."""
    return calendar_config(CalendarSystem.GREGORIAN, "en_US")


@pytest.fixture
def islamic_config() -> CalendarConfig:
    return calendar_config(CalendarSystem.ISLAMIC_UMM_AL_QURA, "en_US")

"""Calendar arithmetic and locale-aware formatting services.

Everything that knows about a concrete calendar system or about locale data
lives here, behind the small :class:`DateServices` protocol.  The rest of the
picker only ever talks to the protocol, so tests can swap in a deterministic
implementation.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from enum import Enum
from functools import lru_cache
from typing import NamedTuple, Protocol

from babel import Locale, UnknownLocaleError, default_locale
from babel.dates import (
    DateTimeFormat,
    get_date_format,
    get_day_names,
    get_month_names,
    match_skeleton,
    parse_pattern,
    tokenize_pattern,
)
from hijridate import Gregorian, Hijri

FALLBACK_LOCALE = "en_US"

# Weekday numbering used throughout: 1=Sunday .. 7=Saturday
SUNDAY = 1
MONDAY = 2

DATE_STYLES = ("short", "medium", "long", "full")

_BUDDHIST_ERA_OFFSET = 543
# Languages hijridate ships month names for
_HIJRI_LANGUAGES = ("en", "ar", "bn")

# CLDR abbreviated Islamic month names (en); hijridate only has full names
_HIJRI_ABBREVIATED_EN = (
    "Muh.", "Saf.", "Rab. I", "Rab. II", "Jum. I", "Jum. II",
    "Raj.", "Sha.", "Ram.", "Shaw.", "Dhuʻl-Q.", "Dhuʻl-H.",
)


class CalendarSystem(str, Enum):
    """Calendar systems offered by the preferences panel."""

    GREGORIAN = "gregorian"
    ISO8601 = "iso8601"
    BUDDHIST = "buddhist"
    ISLAMIC_UMM_AL_QURA = "islamic-umalqura"


# Calendars whose year reads wrong without its era
_ERA_SYSTEMS = frozenset({CalendarSystem.BUDDHIST, CalendarSystem.ISLAMIC_UMM_AL_QURA})


class CalendarError(ValueError):
    """Raised when a date cannot be represented in the requested calendar."""


class CalendarFields(NamedTuple):
    """Year / month / day of a date as seen by one calendar system."""

    year: int
    month: int
    day: int


class DateServices(Protocol):
    """The calendar/locale capability consumed by the picker."""

    def month_interval(self, reference: date, system: CalendarSystem) -> tuple[date, date]:
        """Return ``[start, end)`` of the month containing *reference*."""
        ...

    def add_months(self, reference: date, months: int, system: CalendarSystem) -> date:
        ...

    def fields(self, value: date, system: CalendarSystem) -> CalendarFields:
        ...

    def weekday(self, value: date) -> int:
        """Weekday of *value*, 1=Sunday .. 7=Saturday."""
        ...

    def weekday_names(self, width: str, locale_id: str) -> list[str]:
        """Seven weekday names, Sunday first."""
        ...

    def localized_pattern(self, template: str, locale_id: str, system: CalendarSystem) -> str:
        """Resolve a date style (``"medium"``) or skeleton (``"yMMMM"``) to a pattern.

        Date styles carry the era for calendars other than Gregorian.
        """
        ...

    def format(self, value: date, pattern: str, system: CalendarSystem, locale_id: str) -> str:
        ...

    def system_locale(self) -> str:
        ...

    def supports_locale(self, locale_id: str) -> bool:
        ...


# ---------------------------------------------------------------------------
# Locale helpers
# ---------------------------------------------------------------------------

@lru_cache(maxsize=32)
def get_locale(locale_id: str) -> Locale:
    """Parse and cache a Babel locale, raising CalendarError for unknown ids."""
    try:
        return Locale.parse(locale_id)
    except (UnknownLocaleError, ValueError, TypeError) as exc:
        raise CalendarError(f"Unknown locale: {locale_id!r}") from exc


def _has_era(pattern: str) -> bool:
    return any(kind == "field" and value[0] == "G"
               for kind, value in tokenize_pattern(pattern))


def _hijri_language(locale: Locale) -> str:
    return locale.language if locale.language in _HIJRI_LANGUAGES else "en"


def _to_hijri(value: date) -> Hijri:
    try:
        return Gregorian(value.year, value.month, value.day).to_hijri()
    except (OverflowError, ValueError) as exc:
        raise CalendarError(f"{value.isoformat()} is outside the Umm al-Qura range") from exc


def _from_hijri(year: int, month: int, day: int) -> date:
    try:
        g = Hijri(year, month, day).to_gregorian()
    except (OverflowError, ValueError) as exc:
        raise CalendarError(f"Hijri date {year}-{month}-{day} is out of range") from exc
    return date(g.year, g.month, g.day)


def _hijri_month_length(year: int, month: int) -> int:
    try:
        return Hijri(year, month, 1).month_length()
    except (OverflowError, ValueError) as exc:
        raise CalendarError(f"Hijri month {year}-{month} is out of range") from exc


# ---------------------------------------------------------------------------
# Pattern rendering with calendar-specific fields
# ---------------------------------------------------------------------------

class _CalendarDateTimeFormat(DateTimeFormat):
    """Babel field formatter that reads year/month/day from another calendar.

    Weekday and the remaining fields still come from the underlying date,
    which is the same instant in every calendar.
    """

    def __init__(self, value: date, locale: Locale, system: CalendarSystem,
                 fields: CalendarFields) -> None:
        super().__init__(value, locale)
        self.system = system
        self.fields = fields

    def __getitem__(self, name: str) -> str:
        if name[0] == "d":
            return self.format(self.fields.day, len(name))
        return super().__getitem__(name)

    def format_year(self, char: str, num: int) -> str:
        if char not in ("y", "u"):
            return super().format_year(char, num)
        year = self.format(self.fields.year, num)
        if num == 2:
            year = year[-2:]
        return year

    def format_month(self, char: str, num: int) -> str:
        if num <= 2:
            return "%0*d" % (num, self.fields.month)
        if self.system is not CalendarSystem.ISLAMIC_UMM_AL_QURA:
            width = {3: "abbreviated", 4: "wide", 5: "narrow"}[num]
            context = {"M": "format", "L": "stand-alone"}[char]
            return get_month_names(width, context, self.locale)[self.fields.month]
        if num == 5:
            return str(self.fields.month)
        language = _hijri_language(self.locale)
        if num == 3 and language == "en":
            return _HIJRI_ABBREVIATED_EN[self.fields.month - 1]
        return Hijri(self.fields.year, self.fields.month, 1).month_name(language)

    def format_era(self, char: str, num: int) -> str:
        if self.system is CalendarSystem.BUDDHIST:
            return "BE"
        if self.system is CalendarSystem.ISLAMIC_UMM_AL_QURA:
            hijri = Hijri(self.fields.year, self.fields.month, 1)
            return hijri.notation(_hijri_language(self.locale))
        return super().format_era(char, num)


# ---------------------------------------------------------------------------
# Platform implementation
# ---------------------------------------------------------------------------

class PlatformDateServices:
    """DateServices backed by Babel (CLDR) and hijridate (Umm al-Qura)."""

    def month_interval(self, reference: date, system: CalendarSystem) -> tuple[date, date]:
        if system is CalendarSystem.ISLAMIC_UMM_AL_QURA:
            h = _to_hijri(reference)
            start = _from_hijri(h.year, h.month, 1)
            return start, start + timedelta(days=_hijri_month_length(h.year, h.month))
        start = reference.replace(day=1)
        days = calendar.monthrange(reference.year, reference.month)[1]
        try:
            return start, start + timedelta(days=days)
        except OverflowError as exc:
            raise CalendarError(f"Month of {reference.isoformat()} has no end") from exc

    def add_months(self, reference: date, months: int, system: CalendarSystem) -> date:
        if system is CalendarSystem.ISLAMIC_UMM_AL_QURA:
            h = _to_hijri(reference)
            year, month = divmod(h.year * 12 + h.month - 1 + months, 12)
            month += 1
            day = min(h.day, _hijri_month_length(year, month))
            return _from_hijri(year, month, day)
        year, month = divmod(reference.year * 12 + reference.month - 1 + months, 12)
        month += 1
        try:
            day = min(reference.day, calendar.monthrange(year, month)[1])
            return date(year, month, day)
        except ValueError as exc:
            raise CalendarError(f"Cannot move {reference.isoformat()} by {months} months") from exc

    def fields(self, value: date, system: CalendarSystem) -> CalendarFields:
        if system is CalendarSystem.ISLAMIC_UMM_AL_QURA:
            h = _to_hijri(value)
            return CalendarFields(h.year, h.month, h.day)
        if system is CalendarSystem.BUDDHIST:
            return CalendarFields(value.year + _BUDDHIST_ERA_OFFSET, value.month, value.day)
        return CalendarFields(value.year, value.month, value.day)

    def weekday(self, value: date) -> int:
        return value.isoweekday() % 7 + 1

    def weekday_names(self, width: str, locale_id: str) -> list[str]:
        names = get_day_names(width, "stand-alone", get_locale(locale_id))
        # Babel keys weekdays 0=Monday .. 6=Sunday
        return [names[6]] + [names[i] for i in range(6)]

    def localized_pattern(self, template: str, locale_id: str, system: CalendarSystem) -> str:
        locale = get_locale(locale_id)
        if template in DATE_STYLES:
            pattern = get_date_format(template, locale).pattern
            if system in _ERA_SYSTEMS and not _has_era(pattern):
                pattern += " G"
            return pattern
        skeletons = locale.datetime_skeletons
        key = template if template in skeletons else match_skeleton(template, skeletons)
        if key is None:
            return template
        return parse_pattern(skeletons[key]).pattern

    def format(self, value: date, pattern: str, system: CalendarSystem, locale_id: str) -> str:
        locale = get_locale(locale_id)
        fmt = _CalendarDateTimeFormat(value, locale, system, self.fields(value, system))
        return parse_pattern(pattern) % fmt

    def system_locale(self) -> str:
        locale_id = default_locale()
        if not locale_id or not self.supports_locale(locale_id):
            return FALLBACK_LOCALE
        return locale_id

    def supports_locale(self, locale_id: str) -> bool:
        try:
            get_locale(locale_id)
        except CalendarError:
            return False
        return True


PLATFORM_SERVICES = PlatformDateServices()

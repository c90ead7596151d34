"""Immutable picker state and the events that move it forward.

The window never mutates state directly: every interaction becomes an
event, ``reduce`` returns the next state, and the window redraws from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, timedelta

from calendar_logic import (
    CalendarConfig,
    DateWindow,
    calendar_config,
    date_window,
    month_days,
    month_rows,
    shift_month,
    start_of_day,
)
from date_services import PLATFORM_SERVICES, CalendarSystem, DateServices
from selection import Selection, clear_selection, is_in_range, is_selectable, toggle_selection

QUICK_PICK_DAYS = 21


@dataclass(frozen=True)
class PickerState:
    window: DateWindow
    display_month: date
    system: CalendarSystem = CalendarSystem.GREGORIAN
    locale_id: str | None = None  # None follows the system locale
    selection: Selection = field(default_factory=Selection)
    services: DateServices = field(default=PLATFORM_SERVICES, compare=False, repr=False)

    @property
    def config(self) -> CalendarConfig:
        return calendar_config(self.system, self.locale_id, self.services)


def initial_state(today: date,
                  system: CalendarSystem | str = CalendarSystem.GREGORIAN,
                  locale_id: str | None = None,
                  window: DateWindow | None = None,
                  services: DateServices | None = None) -> PickerState:
    today = start_of_day(today)
    return PickerState(
        window=window or date_window(today),
        display_month=today,
        system=CalendarSystem(system),
        locale_id=locale_id,
        services=services or PLATFORM_SERVICES,
    )


# ------------------------------------------------------------------
# Events
# ------------------------------------------------------------------
@dataclass(frozen=True)
class TapDate:
    value: date


@dataclass(frozen=True)
class ShiftMonth:
    months: int


@dataclass(frozen=True)
class JumpToToday:
    today: date


@dataclass(frozen=True)
class ChangeLocale:
    locale_id: str | None


@dataclass(frozen=True)
class ChangeCalendar:
    system: CalendarSystem


@dataclass(frozen=True)
class ClearSelection:
    pass


def reduce(state: PickerState, event: object) -> PickerState:
    """Return the state that follows *event*."""
    if isinstance(event, TapDate):
        return replace(state, selection=toggle_selection(state.selection, event.value, state.window))
    if isinstance(event, ShiftMonth):
        return replace(state, display_month=shift_month(state.display_month, event.months, state.config))
    if isinstance(event, JumpToToday):
        return replace(state, display_month=start_of_day(event.today))
    if isinstance(event, ChangeLocale):
        return replace(state, locale_id=event.locale_id or None)
    if isinstance(event, ChangeCalendar):
        return replace(state, system=CalendarSystem(event.system))
    if isinstance(event, ClearSelection):
        return replace(state, selection=clear_selection())
    raise TypeError(f"Unknown picker event: {event!r}")


# ------------------------------------------------------------------
# Projections used by the renderer
# ------------------------------------------------------------------
@dataclass(frozen=True)
class DayView:
    value: date
    selectable: bool
    in_range: bool
    is_today: bool


def _day_view(state: PickerState, value: date, today: date) -> DayView:
    return DayView(
        value=value,
        selectable=is_selectable(value, state.window),
        in_range=is_in_range(value, state.selection),
        is_today=value == today,
    )


def quick_pick_days(state: PickerState, today: date,
                    count: int = QUICK_PICK_DAYS) -> list[DayView]:
    """The horizontal strip: *count* consecutive days starting today."""
    today = start_of_day(today)
    return [_day_view(state, today + timedelta(days=i), today) for i in range(count)]


def grid_cells(state: PickerState, today: date) -> list[list[DayView | None]]:
    """Weeks of the displayed month; blanks stay ``None``."""
    today = start_of_day(today)
    days = month_days(state.display_month, state.config)
    return [[_day_view(state, d, today) if d is not None else None for d in row]
            for row in month_rows(days)]

"""Start/end range selection built up from single taps."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from calendar_logic import DateWindow, start_of_day

EMPTY = "empty"
START_ONLY = "start_only"
START_AND_END = "start_and_end"


@dataclass(frozen=True)
class Selection:
    """A (possibly partial) date range; ``end`` is never set without ``start``."""

    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        if self.end is not None and (self.start is None or self.end < self.start):
            raise ValueError(f"Invalid selection: start={self.start}, end={self.end}")

    @property
    def state(self) -> str:
        if self.start is None:
            return EMPTY
        if self.end is None:
            return START_ONLY
        return START_AND_END


def clear_selection() -> Selection:
    return Selection()


def is_selectable(value: date | datetime, window: DateWindow) -> bool:
    """True if *value*'s day lies inside the window, bounds included."""
    return value in window


def toggle_selection(selection: Selection, candidate: date | datetime,
                     window: DateWindow) -> Selection:
    """Apply one tap to the selection and return the new selection.

    - nothing selected: the tapped day becomes the start
    - start only: an earlier day moves the start, otherwise it becomes the end
    - start and end: start over from the tapped day

    Taps outside the window leave the selection untouched.
    """
    if not is_selectable(candidate, window):
        return selection
    day = start_of_day(candidate)

    if selection.state == START_ONLY:
        if day < selection.start:
            return Selection(start=day)
        return Selection(start=selection.start, end=day)
    return Selection(start=day)


def is_in_range(value: date | datetime, selection: Selection) -> bool:
    """Whether *value* should be highlighted as part of the selection."""
    if selection.start is None:
        return False
    day = start_of_day(value)
    if selection.end is None:
        return day == selection.start
    return selection.start <= day <= selection.end


def selected_days(selection: Selection) -> int:
    """Number of days covered, both ends included (0 when nothing is selected)."""
    if selection.start is None:
        return 0
    if selection.end is None:
        return 1
    return (selection.end - selection.start).days + 1

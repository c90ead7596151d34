"""
Unit tests for the tap-driven range selector.
"""

from datetime import date, datetime

import pytest

from calendar_logic import DateWindow
from selection import (
    EMPTY,
    START_AND_END,
    START_ONLY,
    Selection,
    clear_selection,
    is_in_range,
    is_selectable,
    selected_days,
    toggle_selection,
)

WINDOW = DateWindow(date(2025, 1, 1), date(2025, 4, 30))


def tap(selection, *days):
    for day in days:
        selection = toggle_selection(selection, day, WINDOW)
    return selection


class TestSelection:
    def test_states(self):
        assert Selection().state == EMPTY
        assert Selection(date(2025, 1, 5)).state == START_ONLY
        assert Selection(date(2025, 1, 5), date(2025, 1, 5)).state == START_AND_END

    def test_end_without_start_is_invalid(self):
        with pytest.raises(ValueError):
            Selection(end=date(2025, 1, 5))

    def test_end_before_start_is_invalid(self):
        with pytest.raises(ValueError):
            Selection(date(2025, 1, 5), date(2025, 1, 4))

    def test_clear(self):
        assert clear_selection() == Selection()


class TestIsSelectable:
    def test_inside_and_bounds(self):
        assert is_selectable(date(2025, 1, 1), WINDOW)
        assert is_selectable(date(2025, 2, 14), WINDOW)
        assert is_selectable(date(2025, 4, 30), WINDOW)

    def test_time_of_day_is_ignored(self):
        assert is_selectable(datetime(2025, 4, 30, 23, 59), WINDOW)
        assert is_selectable(datetime(2025, 1, 1, 0, 1), WINDOW)

    def test_outside(self):
        assert not is_selectable(date(2024, 12, 31), WINDOW)
        assert not is_selectable(date(2025, 5, 1), WINDOW)


class TestToggleSelection:
    """Tests for the start/end state machine."""

    def test_scenario(self):
        selection = tap(Selection(), date(2025, 1, 5))
        assert selection == Selection(start=date(2025, 1, 5))

        selection = tap(selection, date(2025, 1, 10))
        assert selection == Selection(start=date(2025, 1, 5), end=date(2025, 1, 10))

        selection = tap(selection, date(2025, 1, 3))
        assert selection == Selection(start=date(2025, 1, 3))

    def test_earlier_tap_moves_start(self):
        selection = tap(Selection(), date(2025, 2, 10), date(2025, 2, 1))
        assert selection == Selection(start=date(2025, 2, 1))
        assert selection.state == START_ONLY

    def test_same_day_closes_single_day_range(self):
        selection = tap(Selection(), date(2025, 2, 10), date(2025, 2, 10))
        assert selection == Selection(date(2025, 2, 10), date(2025, 2, 10))

    def test_full_range_resets_on_any_tap(self):
        full = Selection(date(2025, 2, 1), date(2025, 2, 20))
        for day in (date(2025, 1, 15), date(2025, 2, 10), date(2025, 3, 1)):
            assert tap(full, day) == Selection(start=day)

    def test_datetime_is_normalized(self):
        selection = tap(Selection(), datetime(2025, 1, 5, 14, 30))
        assert selection.start == date(2025, 1, 5)

    @pytest.mark.parametrize("selection", [
        Selection(),
        Selection(date(2025, 2, 1)),
        Selection(date(2025, 2, 1), date(2025, 2, 3)),
    ])
    @pytest.mark.parametrize("outside", [date(2024, 12, 31), date(2025, 5, 1), date(2030, 1, 1)])
    def test_outside_window_is_ignored(self, selection, outside):
        assert toggle_selection(selection, outside, WINDOW) is selection


class TestIsInRange:
    def test_nothing_selected(self):
        assert not is_in_range(date(2025, 1, 5), Selection())

    def test_start_only_matches_start(self):
        selection = Selection(date(2025, 1, 5))
        assert is_in_range(datetime(2025, 1, 5, 9), selection)
        assert not is_in_range(date(2025, 1, 6), selection)

    def test_full_range_is_inclusive(self):
        selection = Selection(date(2025, 1, 5), date(2025, 1, 10))
        assert is_in_range(date(2025, 1, 5), selection)
        assert is_in_range(date(2025, 1, 7), selection)
        assert is_in_range(date(2025, 1, 10), selection)
        assert not is_in_range(date(2025, 1, 4), selection)
        assert not is_in_range(date(2025, 1, 11), selection)


def test_selected_days():
    assert selected_days(Selection()) == 0
    assert selected_days(Selection(date(2025, 1, 5))) == 1
    assert selected_days(Selection(date(2025, 1, 5), date(2025, 1, 10))) == 6

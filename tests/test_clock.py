"""Tests for mapping wall-clock time onto days and periods."""
from datetime import datetime

import pytest

from timetable_app.clock import current_day, current_period, period_range
from timetable_app.io_text import load_timetable
from timetable_app.models import Period

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def test_period_range_parses_am_pm() -> None:
    assert period_range(Period("Period 1", "8:30 AM - 9:10 AM")) == (510, 550)
    assert period_range(Period("Period 7", "12:50 PM - 01:30 PM")) == (770, 810)


def test_period_range_unreadable() -> None:
    assert period_range(Period("Period 1", "")) is None


@pytest.mark.parametrize("hour,minute,expected", [
    (8, 45, 0),     # inside Period 1
    (11, 20, 4),    # break before Period 5
    (12, 30, 5),
    (7, 0, 0),      # before school
    (15, 0, 7),     # after school
])
def test_current_period_on_bundled_times(hour: int, minute: int, expected: int) -> None:
    periods = load_timetable().periods
    assert current_period(periods, datetime(2026, 10, 19, hour, minute)) == expected


def test_current_period_without_periods() -> None:
    assert current_period([], datetime(2026, 10, 19, 9, 0)) == 0


def test_current_day() -> None:
    assert current_day(DAYS, datetime(2026, 10, 19, 9, 0)) == "Monday"
    assert current_day(DAYS, datetime(2026, 10, 24, 9, 0)) == "Saturday"


def test_sunday_maps_to_monday() -> None:
    assert current_day(DAYS, datetime(2026, 10, 18, 9, 0)) == "Monday"


def test_day_missing_from_timetable_falls_back() -> None:
    assert current_day(["Tuesday", "Wednesday"], datetime(2026, 10, 24, 9, 0)) == "Tuesday"


def test_break_reports_the_next_period() -> None:
    # 11:10-11:30 is the break between Period 4 and Period 5
    periods = load_timetable().periods
    assert current_period(periods, datetime(2026, 10, 19, 11, 20)) == 4
    assert current_period(periods, datetime(2026, 10, 19, 11, 10)) == 3
    assert current_period(periods, datetime(2026, 10, 19, 11, 30)) == 4

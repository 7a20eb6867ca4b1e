"""Tests for precheck layer."""
import pytest

from timetable_app.io_text import parse_timetable
from timetable_app.substitution.index import build_index
from timetable_app.substitution.precheck import PlanningError, ensure_ok, precheck_request

TEXT = "\n".join([
    "Monday",
    "Class,Period 1<br>8:30 AM - 9:10 AM,Period 2<br>9:10 AM - 9:50 AM",
    "Class 1,Maths (Asha),Maths (Asha)",
    "Tuesday",
    "Class,Period 1<br>8:30 AM - 9:10 AM,Period 2<br>9:10 AM - 9:50 AM",
    "Class 1,Hindi (Bala),Free Period",
])


def _check(*args, **kwargs):
    tt  = parse_timetable(TEXT)
    idx = build_index(tt.all_slots(), len(tt.periods))
    return precheck_request(tt, idx, *args, **kwargs)


def test_ok_request_passes() -> None:
    errors, warnings = _check("Monday", ["Asha"])
    assert errors == []
    assert warnings == []


def test_missing_day() -> None:
    errors, _ = _check("", ["Asha"])
    assert errors == ["No day selected."]


def test_unknown_day_lists_known_days() -> None:
    errors, _ = _check("Sunday", ["Asha"])
    assert any("Monday, Tuesday" in e for e in errors)


def test_no_absentees() -> None:
    errors, _ = _check("Monday", [])
    assert any("absent teacher" in e for e in errors)
    errors, _ = _check("Monday", [], require_absentees=False)
    assert errors == []


def test_period_out_of_range() -> None:
    errors, _ = _check("Monday", period_index=2, require_absentees=False)
    assert any("out of range" in e for e in errors)
    errors, _ = _check("Monday", period_index=-1, require_absentees=False)
    assert errors


def test_unknown_and_idle_teachers_warn() -> None:
    errors, warnings = _check("Monday", ["Zed", "Bala"])
    assert errors == []
    assert any("Zed" in w for w in warnings)
    assert any("No classes on Monday for: Bala" in w for w in warnings)


def test_ensure_ok_raises() -> None:
    tt  = parse_timetable(TEXT)
    idx = build_index(tt.all_slots(), len(tt.periods))
    with pytest.raises(PlanningError, match="Unknown day"):
        ensure_ok(tt, idx, "Sunday", ["Asha"])

"""Tests for the substitute eligibility rules and free-teacher ordering."""
from timetable_app.io_text import parse_timetable
from timetable_app.models import Rules
from timetable_app.substitution.availability import find_free_teachers, is_available
from timetable_app.substitution.index import build_index

TEXT = "\n".join([
    "Monday",
    "Class,Period 1<br>8:30 AM - 9:10 AM,Period 2<br>9:10 AM - 9:50 AM,Period 3<br>9:50 AM - 10:30 AM",
    "Class 1,Maths (Asha),Maths (Asha),Free Period",
    "Class 2,English (Bala),Hindi (Chitra),English (Bala)",
    "Class 3,Science (Dev),Art (Esha),Science (Dev)",
])


def _index():
    tt = parse_timetable(TEXT)
    return build_index(tt.all_slots(), len(tt.periods))


def test_free_teacher_is_available() -> None:
    assert is_available(_index(), Rules(), "Chitra", "Monday", 0, [], {})


def test_absent_teacher_not_available() -> None:
    assert not is_available(_index(), Rules(), "Chitra", "Monday", 0, ["Chitra"], {})


def test_special_teacher_never_available() -> None:
    rules = Rules(special_teachers=["Chitra"])
    assert not is_available(_index(), rules, "Chitra", "Monday", 0, [], {})


def test_earliest_period_restriction() -> None:
    rules = Rules(earliest_period={"Esha": 2})
    idx   = _index()
    assert not is_available(idx, rules, "Esha", "Monday", 0, [], {})
    # period 1 is Esha's own Art class anyway; period 2 is free and allowed
    assert is_available(idx, rules, "Esha", "Monday", 2, [], {})


def test_own_class_blocks() -> None:
    assert not is_available(_index(), Rules(), "Asha", "Monday", 0, [], {})
    assert is_available(_index(), Rules(), "Asha", "Monday", 2, [], {})


def test_already_substituting_same_period_blocks() -> None:
    plan = {"Class 1": {0: "Chitra"}}
    idx  = _index()
    assert not is_available(idx, Rules(), "Chitra", "Monday", 0, [], plan)
    # same teacher at a different period is fine
    assert is_available(idx, Rules(), "Chitra", "Monday", 2, [], plan)


def test_teacher_with_no_classes_that_day_is_free() -> None:
    assert is_available(_index(), Rules(), "Asha", "Tuesday", 0, [], {})


def test_free_teachers_sorted_by_workload_then_name() -> None:
    idx = _index()
    # period 2: Asha(2) Chitra(1) Esha(1) free; Bala and Dev teach
    assert find_free_teachers(idx, Rules(), "Monday", 2, [], {}) == ["Chitra", "Esha", "Asha"]


def test_free_teachers_respects_plan_and_absentees() -> None:
    idx  = _index()
    plan = {"Class 2": {2: "Chitra"}}
    assert find_free_teachers(idx, Rules(), "Monday", 2, ["Asha"], plan) == ["Esha"]

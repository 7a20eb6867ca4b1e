"""Tests for the per-day plan store."""
from timetable_app.models import DayPlan
from timetable_app.substitution.store import PlanStore


def test_get_returns_copy() -> None:
    store = PlanStore(["Monday"])
    store.set("Monday", DayPlan(plan={"Class 1": {0: "Asha"}}), ["Bala"])
    got = store.get("Monday")
    got.assign("Class 1", 1, "Chitra")
    got.absent_teachers.append("Dev")
    assert store.get("Monday").plan == {"Class 1": {0: "Asha"}}
    assert store.get("Monday").absent_teachers == ["Bala"]


def test_set_does_not_alias_caller_plan() -> None:
    store = PlanStore(["Monday"])
    plan  = DayPlan(plan={"Class 1": {0: "Asha"}})
    store.set("Monday", plan, ["Bala"])
    plan.assign("Class 2", 0, "Esha")
    assert "Class 2" not in store.get("Monday").plan


def test_clear_keeps_absentees() -> None:
    store = PlanStore(["Monday", "Tuesday"])
    store.set("Monday", DayPlan(plan={"Class 1": {0: "Asha"}}), ["Bala"])
    store.clear("Monday")
    assert store.get("Monday") == DayPlan(plan={}, absent_teachers=["Bala"])


def test_unknown_day_is_empty_and_clear_is_noop() -> None:
    calls = []
    store = PlanStore(["Monday"], on_change=calls.append)
    assert store.get("Sunday") == DayPlan()
    store.clear("Sunday")
    assert calls == []
    assert store.days() == ["Monday"]


def test_on_change_called_for_set_and_clear() -> None:
    calls = []
    store = PlanStore(["Monday"], on_change=calls.append)
    store.set("Monday", DayPlan(), ["Asha"])
    store.clear("Monday")
    assert calls == ["Monday", "Monday"]


def test_days_are_independent() -> None:
    store = PlanStore(["Monday", "Tuesday"])
    store.set("Monday", DayPlan(plan={"Class 1": {0: "Asha"}}), ["Bala"])
    assert store.get("Tuesday") == DayPlan()
    snap = store.snapshot()
    assert set(snap) == {"Monday", "Tuesday"}
    assert snap["Monday"].assignment_count() == 1


def test_lock_is_reentrant_and_stable() -> None:
    store = PlanStore(["Monday"])
    lock  = store.lock("Monday")
    assert store.lock("Monday") is lock
    with lock:
        store.set("Monday", DayPlan(), ["Asha"])
    assert store.get("Monday").absent_teachers == ["Asha"]

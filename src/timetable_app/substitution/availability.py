"""
Who can cover a given (day, period).

A teacher is eligible when they are
  - not absent,
  - not one of the special teachers who never cover,
  - past their earliest usable period, if they have one,
  - not teaching their own class at that period,
  - not already covering another class at that period in the plan.

Candidates are returned lightest-loaded first. sorted() is stable, so
teachers with equal workload keep the alphabetical order of
index.teacher_names.
Reference: https://docs.python.org/3/howto/sorting.html#sort-stability-and-complex-sorts
"""

from __future__ import annotations

from typing import Collection, List, Mapping

from ..models import Rules
from .index import ScheduleIndex

PlanMapping = Mapping[str, Mapping[int, str]]


def is_busy_as_substitute(teacher: str, period_index: int, plan: PlanMapping) -> bool:
    return any(periods.get(period_index) == teacher for periods in plan.values())


def is_available(
    index: ScheduleIndex,
    rules: Rules,
    teacher: str,
    day: str,
    period_index: int,
    absent_teachers: Collection[str],
    plan: PlanMapping,
) -> bool:
    if teacher in absent_teachers:
        return False
    if teacher in rules.special_teachers:
        return False
    earliest = rules.earliest_period.get(teacher)
    if earliest is not None and period_index < earliest:
        return False
    if index.commitment(teacher, day, period_index) is not None:
        return False
    return not is_busy_as_substitute(teacher, period_index, plan)


def find_free_teachers(
    index: ScheduleIndex,
    rules: Rules,
    day: str,
    period_index: int,
    absent_teachers: Collection[str],
    plan: PlanMapping,
) -> List[str]:
    free = [
        t for t in index.teacher_names
        if is_available(index, rules, t, day, period_index, absent_teachers, plan)
    ]
    return sorted(free, key=lambda t: index.workload_for(t, day))

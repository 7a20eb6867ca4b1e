"""
Read-only teacher lookups derived from the timetable, built once at load.

schedule  (teacher, day) -> one entry per period, None where the teacher is free
workload  (teacher, day) -> number of periods the teacher teaches that day

Workload counts base teaching only; substitution duty never changes it.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import Commitment, TimetableSlot

logger = logging.getLogger(__name__)

Schedule = Tuple[Optional[Commitment], ...]


@dataclass(frozen=True)
class ScheduleIndex:
    period_count:     int
    teacher_names:    Tuple[str, ...]
    teacher_schedule: Dict[Tuple[str, str], Schedule]
    workload:         Dict[Tuple[str, str], int]
    weekly_periods:   Dict[str, int]
    subjects:         Dict[str, Tuple[str, ...]]

    def schedule(self, teacher: str, day: str) -> Schedule:
        return self.teacher_schedule.get((teacher, day), (None,) * self.period_count)

    def commitment(self, teacher: str, day: str, period_index: int) -> Optional[Commitment]:
        sched = self.teacher_schedule.get((teacher, day))
        if sched is None or not 0 <= period_index < len(sched):
            return None
        return sched[period_index]

    def workload_for(self, teacher: str, day: str) -> int:
        return self.workload.get((teacher, day), 0)

    def knows(self, teacher: str) -> bool:
        return teacher in self.weekly_periods


def build_index(slots: Iterable[TimetableSlot], period_count: int) -> ScheduleIndex:
    schedule: Dict[Tuple[str, str], List[Optional[Commitment]]] = {}
    workload: Dict[Tuple[str, str], int] = defaultdict(int)
    weekly:   Dict[str, int]             = defaultdict(int)
    subjects: Dict[str, set]             = defaultdict(set)

    for slot in slots:
        for teacher, subject in slot.assignments():
            key = (teacher, slot.day)
            if key not in schedule:
                schedule[key] = [None] * period_count
            row = schedule[key]
            # a class row longer than the header still counts toward workload
            if slot.period_index < len(row):
                row[slot.period_index] = Commitment(subject, slot.class_name)
            else:
                logger.debug("Slot %s/%s period %d beyond header; not indexed",
                             slot.day, slot.class_name, slot.period_index)
            workload[key] += 1
            weekly[teacher] += 1
            subjects[teacher].add(subject)

    return ScheduleIndex(
        period_count     = period_count,
        teacher_names    = tuple(sorted(weekly)),
        teacher_schedule = {k: tuple(v) for k, v in schedule.items()},
        workload         = dict(workload),
        weekly_periods   = dict(weekly),
        subjects         = {t: tuple(sorted(s)) for t, s in subjects.items()},
    )

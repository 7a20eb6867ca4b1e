"""
Data model layer for the timetable substitution planner.

Every domain object is a plain Python dataclass. Timetable facts are frozen
because the base timetable is never edited after load; only DayPlan is
mutable.

Reference: Python Software Foundation. "dataclasses — Data Classes."
https://docs.python.org/3/library/dataclasses.html

Teacher cells as a variant:
  A timetable cell like "Economics/Political Science (Prakash/Pradhyuman)"
  names two teachers sharing one period. Rather than splitting strings in
  every caller, the cell's teacher part is parsed once into a TeacherField
  whose kind is NONE, SINGLE or CO_TAUGHT, and subject_for() holds the one
  alignment rule between teacher names and subject names.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

UNASSIGNED = "--"

_CLASS_NUMBER = re.compile(r"(\d+)")


class TeacherKind(str, Enum):
    NONE      = "none"
    SINGLE    = "single"
    CO_TAUGHT = "co_taught"


@dataclass(frozen=True)
class TeacherField:
    """Teacher part of a timetable cell."""
    kind:  TeacherKind      = TeacherKind.NONE
    names: Tuple[str, ...]  = ()

    @classmethod
    def parse(cls, raw: Optional[str]) -> "TeacherField":
        if not raw or not raw.strip():
            return cls()
        names = tuple(n.strip() for n in raw.split("/"))
        kind  = TeacherKind.SINGLE if len(names) == 1 else TeacherKind.CO_TAUGHT
        return cls(kind=kind, names=names)

    @staticmethod
    def subject_for(k: int, subjects: List[str]) -> str:
        # Extra teachers in a co-taught cell fall back to the first subject.
        return subjects[k] if k < len(subjects) else subjects[0]

    def label(self) -> str:
        return "/".join(self.names)


@dataclass(frozen=True)
class Period:
    """One column of the timetable header, e.g. Period 1 / 8:30 AM - 9:10 AM."""
    name: str
    time: str = ""


@dataclass(frozen=True)
class TimetableSlot:
    day:          str
    class_name:   str
    period_index: int
    subject:      str
    teacher:      TeacherField = field(default_factory=TeacherField)

    def subjects(self) -> List[str]:
        return [s.strip() for s in self.subject.split("/")]

    def assignments(self) -> List[Tuple[str, str]]:
        """(teacher, subject) pairs this slot contributes to the index."""
        subjects = self.subjects()
        return [
            (name, TeacherField.subject_for(k, subjects))
            for k, name in enumerate(self.teacher.names)
        ]


@dataclass(frozen=True)
class Commitment:
    """A teacher's own class at one period."""
    subject:    str
    class_name: str


@dataclass(frozen=True)
class Vacancy:
    class_name:       str
    period_index:     int
    subject:          str
    original_teacher: str


def class_sort_key(class_name: str) -> Tuple[int, str]:
    match = _CLASS_NUMBER.search(class_name or "")
    return (int(match.group(1)) if match else 999, class_name)


@dataclass
class Timetable:
    days:    List[str]                             = field(default_factory=list)
    periods: List[Period]                          = field(default_factory=list)
    # day -> class name -> slots in period order
    slots:   Dict[str, Dict[str, List[TimetableSlot]]] = field(default_factory=dict)

    @property
    def class_names(self) -> List[str]:
        names = set()
        for by_class in self.slots.values():
            names.update(by_class)
        return sorted(names, key=class_sort_key)

    def all_slots(self) -> List[TimetableSlot]:
        return [
            slot
            for day in self.days
            for row in self.slots.get(day, {}).values()
            for slot in row
        ]

    def has_day(self, day: str) -> bool:
        return day in self.slots


@dataclass
class DayPlan:
    """Committed substitutions for one day: class -> period index -> substitute."""
    plan:            Dict[str, Dict[int, str]] = field(default_factory=dict)
    absent_teachers: List[str]                 = field(default_factory=list)

    def copy(self) -> "DayPlan":
        return DayPlan(
            plan            = {c: dict(periods) for c, periods in self.plan.items()},
            absent_teachers = list(self.absent_teachers),
        )

    def substitute(self, class_name: str, period_index: int) -> Optional[str]:
        return self.plan.get(class_name, {}).get(period_index)

    def assign(self, class_name: str, period_index: int, teacher: str) -> None:
        self.plan.setdefault(class_name, {})[period_index] = teacher

    def unassign(self, class_name: str, period_index: int) -> None:
        periods = self.plan.get(class_name)
        if periods is None:
            return
        periods.pop(period_index, None)
        if not periods:
            del self.plan[class_name]

    def assignment_count(self) -> int:
        return sum(len(periods) for periods in self.plan.values())

    def to_dict(self) -> Dict[str, Any]:
        # JSON object keys must be strings.
        return {
            "plan": {
                c: {str(p): t for p, t in sorted(periods.items())}
                for c, periods in self.plan.items()
            },
            "absent_teachers": list(self.absent_teachers),
        }


@dataclass
class Rules:
    """Planning constants kept out of the code; see data/rules.json."""
    special_teachers:         List[str]      = field(default_factory=list)
    # teacher -> first 0-based period index they may cover
    earliest_period:          Dict[str, int] = field(default_factory=dict)
    data_corrections:         Dict[str, str] = field(default_factory=dict)
    refresh_interval_seconds: int            = 30

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> None:
        if self.refresh_interval_seconds < 1:
            raise ValueError("refresh_interval_seconds must be >= 1")
        bad = {t: p for t, p in self.earliest_period.items() if p < 0}
        if bad:
            raise ValueError(f"earliest_period values must be >= 0: {bad}")

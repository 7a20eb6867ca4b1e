"""
The planner context: everything the commands need, created once at start-up
and passed explicitly to each operation.

FreeTeacherCache key design:
  (day, period_index, sorted absentees, plan snapshot)
  The plan snapshot is a sorted tuple of (class, period, teacher) triples,
  so two equal plans always produce the same key regardless of dict order.
  Entries for a day are dropped whenever the store commits or resets that
  day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, Dict, List, Optional, Tuple

from ..io_json import load_rules
from ..io_text import load_timetable
from ..models import Rules, Timetable
from .availability import PlanMapping, find_free_teachers
from .index import ScheduleIndex, build_index
from .store import PlanStore

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, int, Tuple[str, ...], Tuple[Tuple[str, int, str], ...]]


def plan_snapshot(plan: PlanMapping) -> Tuple[Tuple[str, int, str], ...]:
    return tuple(sorted(
        (c, p, t) for c, periods in plan.items() for p, t in periods.items()
    ))


class FreeTeacherCache:
    def __init__(self) -> None:
        self._entries: Dict[CacheKey, Tuple[str, ...]] = {}
        self.hits   = 0
        self.misses = 0

    @staticmethod
    def key(day: str, period_index: int, absent_teachers: Collection[str],
            plan: PlanMapping) -> CacheKey:
        return (day, period_index, tuple(sorted(set(absent_teachers))), plan_snapshot(plan))

    def get(self, key: CacheKey) -> Optional[Tuple[str, ...]]:
        found = self._entries.get(key)
        if found is None:
            self.misses += 1
        else:
            self.hits += 1
        return found

    def put(self, key: CacheKey, value: List[str]) -> None:
        self._entries[key] = tuple(value)

    def invalidate(self, day: str) -> None:
        stale = [k for k in self._entries if k[0] == day]
        for k in stale:
            del self._entries[k]
        if stale:
            logger.debug("Dropped %d cached free-teacher lists for %s", len(stale), day)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class PlannerContext:
    timetable: Timetable
    rules:     Rules
    index:     ScheduleIndex
    store:     PlanStore        = field(init=False)
    cache:     FreeTeacherCache = field(default_factory=FreeTeacherCache)

    def __post_init__(self) -> None:
        self.store = PlanStore(self.timetable.days, on_change=self.cache.invalidate)

    @classmethod
    def from_timetable(cls, timetable: Timetable, rules: Rules) -> "PlannerContext":
        index = build_index(timetable.all_slots(), len(timetable.periods))
        return cls(timetable=timetable, rules=rules, index=index)

    @classmethod
    def load(cls, timetable_path: Optional[str | Path] = None,
             rules_path: Optional[str | Path] = None) -> "PlannerContext":
        """Build a context from files; None means the bundled defaults."""
        rules = load_rules(rules_path)
        return cls.from_timetable(load_timetable(timetable_path, rules), rules)

    def free_teachers(self, day: str, period_index: int,
                      absent_teachers: Collection[str], plan: PlanMapping) -> List[str]:
        key    = self.cache.key(day, period_index, absent_teachers, plan)
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached)
        free = find_free_teachers(self.index, self.rules, day, period_index,
                                  absent_teachers, plan)
        self.cache.put(key, free)
        return free

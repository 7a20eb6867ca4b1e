"""
In-memory store of the committed substitution plan for each day.

The store only ever swaps whole DayPlan objects in and hands out copies, so
a caller holding a plan cannot change what is stored by mutating it.

Writes to one day are serialised with a per-day lock. The CLI and the Tk
GUI are single-threaded, but generate-then-commit for the same day must
stay last-writer-wins if callers ever run it from worker threads.
The locks are re-entrant so the planner can hold a day across read,
compute and commit.
Reference: https://docs.python.org/3/library/threading.html#rlock-objects
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional

from ..models import DayPlan

logger = logging.getLogger(__name__)


class PlanStore:
    def __init__(self, days: Iterable[str],
                 on_change: Optional[Callable[[str], None]] = None) -> None:
        self._plans: Dict[str, DayPlan]        = {d: DayPlan() for d in days}
        self._locks: Dict[str, threading.RLock] = {d: threading.RLock() for d in self._plans}
        self._guard     = threading.Lock()
        self._on_change = on_change

    def days(self) -> List[str]:
        return list(self._plans)

    def lock(self, day: str) -> threading.RLock:
        with self._guard:
            if day not in self._locks:
                self._locks[day] = threading.RLock()
            return self._locks[day]

    def get(self, day: str) -> DayPlan:
        plan = self._plans.get(day)
        return plan.copy() if plan is not None else DayPlan()

    def set(self, day: str, plan: DayPlan, absent_teachers: Iterable[str]) -> None:
        committed = DayPlan(plan=plan.copy().plan, absent_teachers=list(absent_teachers))
        with self.lock(day):
            self._plans[day] = committed
        logger.info("Committed plan for %s: %d substitution(s)",
                    day, committed.assignment_count())
        self._changed(day)

    def clear(self, day: str) -> None:
        with self.lock(day):
            current = self._plans.get(day)
            if current is None:
                return
            self._plans[day] = DayPlan(absent_teachers=list(current.absent_teachers))
        logger.info("Reset plan for %s", day)
        self._changed(day)

    def snapshot(self) -> Dict[str, DayPlan]:
        return {d: p.copy() for d, p in self._plans.items()}

    def _changed(self, day: str) -> None:
        if self._on_change is not None:
            self._on_change(day)

"""
Request checks that run before the planner touches any state.

Catching a bad request here means the caller sees a plain-English message
and the stored plan stays exactly as it was.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import Timetable
from .index import ScheduleIndex


class PlanningError(ValueError):
    """Raised by ensure_ok() and the query commands for invalid requests."""


def precheck_request(
    timetable: Timetable,
    index: ScheduleIndex,
    day: str,
    absent_teachers: Sequence[str] = (),
    period_index: Optional[int] = None,
    require_absentees: bool = True,
) -> Tuple[List[str], List[str]]:
    """Return (errors, warnings). errors = request must not run."""
    errors:   List[str] = []
    warnings: List[str] = []

    if not day:
        errors.append("No day selected.")
    elif not timetable.has_day(day):
        errors.append(
            f"Unknown day '{day}'. Known days: {', '.join(timetable.days) or 'none'}."
        )

    if period_index is not None:
        count = len(timetable.periods)
        if not 0 <= period_index < count:
            errors.append(
                f"Period index {period_index} is out of range "
                f"(timetable has {count} period(s))."
            )

    if require_absentees and not absent_teachers:
        errors.append("Select at least one absent teacher.")

    unknown = [t for t in absent_teachers if not index.knows(t)]
    if unknown:
        warnings.append(
            f"Not in the timetable (nothing to cover): {', '.join(unknown)}"
        )

    if day and timetable.has_day(day):
        idle = [t for t in absent_teachers
                if index.knows(t) and index.workload_for(t, day) == 0]
        if idle:
            warnings.append(f"No classes on {day} for: {', '.join(idle)}")

    return errors, warnings


def ensure_ok(timetable: Timetable, index: ScheduleIndex, day: str,
              absent_teachers: Iterable[str] = (), period_index: Optional[int] = None,
              require_absentees: bool = True) -> None:
    errors, _ = precheck_request(timetable, index, day, list(absent_teachers),
                                 period_index, require_absentees)
    if errors:
        raise PlanningError("\n".join(errors))

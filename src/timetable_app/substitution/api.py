"""
Commands used by the CLI and the Tk GUI. Each takes the PlannerContext
explicitly; nothing here keeps module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from ..clock import current_day, current_period
from ..models import DayPlan
from .availability import PlanMapping
from .context import PlannerContext
from .planner import generate_plan
from .precheck import ensure_ok
from .result import PlanResult


@dataclass(frozen=True)
class FreeNow:
    day:          str
    period_index: int
    teachers:     List[str]


def generate(ctx: PlannerContext, day: str, absent_teachers: Sequence[str]) -> PlanResult:
    return generate_plan(ctx, day, absent_teachers)


def reset(ctx: PlannerContext, day: str) -> DayPlan:
    """Empty the day's plan, keeping its absentee list. Returns the new plan."""
    ensure_ok(ctx.timetable, ctx.index, day, require_absentees=False)
    ctx.store.clear(day)
    return ctx.store.get(day)


def query_free_teachers(ctx: PlannerContext, day: str, period_index: int,
                        absent_teachers: Sequence[str] = (),
                        plan: Optional[PlanMapping] = None) -> List[str]:
    ensure_ok(ctx.timetable, ctx.index, day, absent_teachers,
              period_index=period_index, require_absentees=False)
    return ctx.free_teachers(day, period_index, absent_teachers, plan or {})


def query_free_teachers_now(ctx: PlannerContext,
                            now: Optional[datetime] = None) -> FreeNow:
    """Read-only snapshot for the dashboard; never touches the store."""
    now    = now or datetime.now()
    day    = current_day(ctx.timetable.days, now)
    period = current_period(ctx.timetable.periods, now)
    return FreeNow(day=day, period_index=period,
                   teachers=query_free_teachers(ctx, day, period))

"""
Greedy substitution planner.

For each vacancy, in extraction order, pick the lightest-loaded free
teacher and commit them straight into the working plan. The next vacancy
sees that assignment, so nobody is booked into two classes in the same
period. This is first-fit, not an optimal matching: an early vacancy can
take the only teacher a later one could have used, which then stays
unassigned ("--").

Re-running for the same day and absentees gives the same plan: every stored
entry for these vacancies is removed before assigning. Other entries already
in the day's plan (from an earlier absentee list) are kept, and those
substitutes stay booked for their periods.

The full plan is built on a copy and committed with one store.set() call;
a rejected request never writes.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .context import PlannerContext
from .precheck import precheck_request
from .result import PlanResult, PlanRow
from .vacancies import extract_vacancies

logger = logging.getLogger(__name__)


def _dedupe(names: Sequence[str]) -> List[str]:
    # names match exactly; dict keeps insertion order, so the first mention wins
    return list(dict.fromkeys(n for n in names if n))


def generate_plan(ctx: PlannerContext, day: str,
                  absent_teachers: Sequence[str]) -> PlanResult:
    absent = _dedupe(absent_teachers)
    errors, warnings = precheck_request(ctx.timetable, ctx.index, day, absent)
    if errors:
        logger.warning("Plan request for %r rejected: %s", day, "; ".join(errors))
        return PlanResult(status="REJECTED", day=day,
                          plan=ctx.store.get(day), warnings=errors + warnings)

    with ctx.store.lock(day):
        vacancies = extract_vacancies(ctx.index, day, absent)
        working   = ctx.store.get(day)

        for v in vacancies:
            working.unassign(v.class_name, v.period_index)
        kept = working.assignment_count()
        if kept:
            logger.debug("Keeping %d earlier substitution(s) on %s", kept, day)

        for v in vacancies:
            free = ctx.free_teachers(day, v.period_index, absent, working.plan)
            if free:
                working.assign(v.class_name, v.period_index, free[0])
                logger.debug("%s %s P%d: %s covers for %s (candidates: %s)",
                             day, v.class_name, v.period_index + 1, free[0],
                             v.original_teacher, ", ".join(free))
            else:
                logger.warning("%s %s P%d: no free teacher to cover for %s",
                               day, v.class_name, v.period_index + 1, v.original_teacher)

        ctx.store.set(day, working, absent)
        committed = ctx.store.get(day)

    rows = sorted(
        (PlanRow(v, committed.substitute(v.class_name, v.period_index)) for v in vacancies),
        key=lambda r: r.vacancy.period_index,
    )
    if not vacancies:
        warnings.append(f"No periods to cover on {day} for the selected teachers.")

    status = "PARTIAL" if any(r.substitute is None for r in rows) else "OK"
    return PlanResult(status=status, day=day, plan=committed, rows=rows, warnings=warnings)

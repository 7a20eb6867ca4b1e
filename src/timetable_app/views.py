"""
Rows for the timetable browsing tabs and the full-timetable export.

Every function returns plain strings, one GridRow per table row, so the Tk
tabs only insert them into a Treeview and the same rows can be written to
CSV. Day, class and teacher grids overlay the day's committed plan:

    day / class grid    "Maths (Asha) -> Chitra"
    teacher grid        own period  "Maths, Class 1 [covered by Chitra]"
                        cover duty  "Sub: Hindi, Class 2 for Bala"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from timetable_app.models import Timetable, TimetableSlot
from timetable_app.substitution.context import PlannerContext


@dataclass(frozen=True)
class GridRow:
    label:       str
    cells:       List[str] = field(default_factory=list)
    substituted: bool      = False

    def values(self) -> List[str]:
        return [self.label, *self.cells]


def _slot(timetable: Timetable, day: str, class_name: str,
          period_index: int) -> Optional[TimetableSlot]:
    row = timetable.slots.get(day, {}).get(class_name, [])
    return row[period_index] if 0 <= period_index < len(row) else None


def cell_text(slot: Optional[TimetableSlot], substitute: Optional[str] = None) -> str:
    if slot is None:
        text = ""
    elif slot.teacher.names:
        text = f"{slot.subject} ({slot.teacher.label()})"
    else:
        text = slot.subject
    if substitute:
        return f"{text} -> {substitute}" if text else f"Sub: {substitute}"
    return text


def day_grid(ctx: PlannerContext, day: str) -> List[GridRow]:
    """One row per class that has lessons on `day`."""
    tt   = ctx.timetable
    plan = ctx.store.get(day).plan
    rows = []
    for class_name in tt.class_names:
        if class_name not in tt.slots.get(day, {}):
            continue
        subs  = plan.get(class_name, {})
        cells = [
            cell_text(_slot(tt, day, class_name, p), subs.get(p))
            for p in range(len(tt.periods))
        ]
        rows.append(GridRow(class_name, cells, substituted=bool(subs)))
    return rows


def class_week(ctx: PlannerContext, class_name: str) -> List[GridRow]:
    """One row per day for a single class."""
    tt   = ctx.timetable
    rows = []
    for day in tt.days:
        subs  = ctx.store.get(day).plan.get(class_name, {})
        cells = [
            cell_text(_slot(tt, day, class_name, p), subs.get(p))
            for p in range(len(tt.periods))
        ]
        rows.append(GridRow(day, cells, substituted=bool(subs)))
    return rows


def teacher_week(ctx: PlannerContext, teacher: str) -> List[GridRow]:
    """One row per day: the teacher's own classes and any cover duty."""
    tt   = ctx.timetable
    rows = []
    for day in tt.days:
        plan     = ctx.store.get(day).plan
        schedule = ctx.index.schedule(teacher, day)
        cells: List[str] = []
        substituted = False
        for p in range(len(tt.periods)):
            parts = []
            own = schedule[p] if p < len(schedule) else None
            if own is not None:
                cover = plan.get(own.class_name, {}).get(p)
                text  = f"{own.subject}, {own.class_name}"
                if cover:
                    text += f" [covered by {cover}]"
                    substituted = True
                parts.append(text)
            for class_name, periods in plan.items():
                if periods.get(p) != teacher:
                    continue
                slot = _slot(tt, day, class_name, p)
                if slot is not None:
                    parts.append(f"Sub: {slot.subject}, {class_name} for {slot.teacher.label()}")
                else:
                    parts.append(f"Sub: {class_name}")
                substituted = True
                break
            cells.append(" | ".join(parts))
        rows.append(GridRow(day, cells, substituted=substituted))
    return rows


def timetable_rows(timetable: Timetable) -> List[List[str]]:
    """The whole base timetable, day by day, without substitutions."""
    rows = []
    for day in timetable.days:
        for class_name in timetable.class_names:
            if class_name not in timetable.slots.get(day, {}):
                continue
            rows.append([day, class_name] + [
                cell_text(_slot(timetable, day, class_name, p))
                for p in range(len(timetable.periods))
            ])
    return rows

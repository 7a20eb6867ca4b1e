"""
Write a substitution plan, or the full base timetable, to JSON or CSV.

CSV export uses utf-8-sig (BOM) encoding so Excel opens it correctly
without needing to specify the encoding manually.
Reference: Python csv docs — https://docs.python.org/3/library/csv.html
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Optional, Sequence

from timetable_app.models import Period, Timetable
from timetable_app.substitution.result import PlanResult
from timetable_app.views import timetable_rows

CSV_HEADER = ["Period", "Class", "Subject", "Absent teacher", "Substitute"]


def _period_label(periods: Sequence[Period], index: int) -> str:
    if 0 <= index < len(periods):
        return periods[index].name
    return f"Period {index + 1}"


def plan_rows(result: PlanResult, periods: Sequence[Period] = ()) -> List[List[str]]:
    return [
        [
            _period_label(periods, r.vacancy.period_index),
            r.vacancy.class_name,
            r.vacancy.subject,
            r.vacancy.original_teacher,
            r.display_substitute,
        ]
        for r in result.rows
    ]


def export_plan_json(result: PlanResult, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)


def export_plan_csv(result: PlanResult, path: str | Path,
                    periods: Optional[Sequence[Period]] = None) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", newline="", encoding="utf-8-sig") as f:
        w = csv.writer(f)
        w.writerow(CSV_HEADER)
        w.writerows(plan_rows(result, periods or ()))


def export_timetable_csv(timetable: Timetable, path: str | Path) -> None:
    """Full base timetable, one row per (day, class), for printing."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", newline="", encoding="utf-8-sig") as f:
        w = csv.writer(f)
        w.writerow(["Day", "Class"] + [period.name for period in timetable.periods])
        w.writerows(timetable_rows(timetable))

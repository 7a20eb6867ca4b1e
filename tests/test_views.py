"""Tests for the day / class / teacher grid rows and the full-timetable export."""
import csv
from pathlib import Path

from timetable_app.export import export_timetable_csv
from timetable_app.io_json import load_rules
from timetable_app.io_text import load_timetable, parse_timetable
from timetable_app.models import Rules
from timetable_app.substitution.api import generate
from timetable_app.substitution.context import PlannerContext
from timetable_app.views import cell_text, class_week, day_grid, teacher_week, timetable_rows

TEXT = "\n".join([
    "Monday",
    "Class,Period 1<br>8:30 AM - 9:10 AM,Period 2<br>9:10 AM - 9:50 AM,Period 3<br>9:50 AM - 10:30 AM",
    "Class 1,Maths (Asha),Maths (Asha),Free Period",
    "Class 2,English (Bala),Hindi (Chitra),English (Bala)",
    "Class 3,Science (Dev),Art (Esha),Science (Dev)",
])


def _ctx_with_plan() -> PlannerContext:
    rules = Rules()
    ctx   = PlannerContext.from_timetable(parse_timetable(TEXT, rules), rules)
    # Asha absent: Chitra covers period 1, Bala period 2
    generate(ctx, "Monday", ["Asha"])
    return ctx


def test_day_grid_overlays_substitutes() -> None:
    rows = day_grid(_ctx_with_plan(), "Monday")
    assert [r.label for r in rows] == ["Class 1", "Class 2", "Class 3"]
    assert rows[0].cells == ["Maths (Asha) -> Chitra", "Maths (Asha) -> Bala", "Free Period"]
    assert rows[0].substituted
    assert rows[1].values() == ["Class 2", "English (Bala)", "Hindi (Chitra)", "English (Bala)"]
    assert not rows[1].substituted


def test_day_grid_unknown_day_is_empty() -> None:
    assert day_grid(_ctx_with_plan(), "Sunday") == []


def test_class_week_one_row_per_day() -> None:
    rows = class_week(_ctx_with_plan(), "Class 1")
    assert [r.label for r in rows] == ["Monday"]
    assert rows[0].cells[0] == "Maths (Asha) -> Chitra"


def test_teacher_week_marks_covered_and_cover_duty() -> None:
    ctx = _ctx_with_plan()
    asha = teacher_week(ctx, "Asha")[0]
    assert asha.cells == ["Maths, Class 1 [covered by Chitra]",
                          "Maths, Class 1 [covered by Bala]", ""]
    chitra = teacher_week(ctx, "Chitra")[0]
    assert chitra.cells == ["Sub: Maths, Class 1 for Asha", "Hindi, Class 2", ""]
    assert chitra.substituted
    assert not teacher_week(ctx, "Esha")[0].substituted


def test_cell_text_variants() -> None:
    assert cell_text(None) == ""
    assert cell_text(None, "Esha") == "Sub: Esha"


def test_timetable_rows_ignore_plan() -> None:
    ctx  = _ctx_with_plan()
    rows = timetable_rows(ctx.timetable)
    assert rows[0] == ["Monday", "Class 1", "Maths (Asha)", "Maths (Asha)", "Free Period"]
    assert len(rows) == 3


def test_bundled_class_and_teacher_weeks() -> None:
    rules = load_rules()
    ctx   = PlannerContext.from_timetable(load_timetable(rules=rules), rules)
    generate(ctx, "Monday", ["Bindu"])

    week = class_week(ctx, "Class 1")
    assert len(week) == 6
    assert all(len(r.cells) == 8 for r in week)

    assert teacher_week(ctx, "Bindu")[0].cells[0] == "EVS, Class 1 [covered by Rakesh]"
    assert teacher_week(ctx, "Rakesh")[0].cells[0] == "Sub: EVS, Class 1 for Bindu"


def test_export_timetable_csv(tmp_path: Path) -> None:
    path = tmp_path / "timetable.csv"
    export_timetable_csv(parse_timetable(TEXT), path)
    with path.open(encoding="utf-8-sig", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["Day", "Class", "Period 1", "Period 2", "Period 3"]
    assert rows[3] == ["Monday", "Class 3", "Science (Dev)", "Art (Esha)", "Science (Dev)"]

"""
Parser for the school's comma-separated timetable text.

Layout, one block per day:

    Monday
    Class,Period 1<br>8:30 AM - 9:10 AM,Period 2<br>9:10 AM - 9:50 AM,...
    Class 1,EVS (Bindu),EVS (Bindu),ELGA (Bindu),...
    Class 2,...

Each cell is "Subject (Teacher)". Cells that do not have that shape are
kept as teacher-less slots (e.g. a bare "Assembly") and never raise.
Shared periods are written "Economics/Political Science (Prakash/Pradhyuman)".

The period header is taken from the first day block that has one; every day
is assumed to use the same periods.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from timetable_app.io_json import read_bundled_text
from timetable_app.models import Period, Rules, TeacherField, Timetable, TimetableSlot

logger = logging.getLogger(__name__)

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

_CELL = re.compile(r"^(.+?)\s*\(([^)]+)\)$")


def apply_corrections(text: str, corrections: Dict[str, str]) -> str:
    """Rewrite "(Wrong)" to "(Right)"; an empty replacement drops the token."""
    for wrong, right in corrections.items():
        replacement = f"({right})" if right else ""
        text = text.replace(f"({wrong})", replacement)
    return text


def parse_cell(cell: str, day: str, class_name: str, period_index: int) -> TimetableSlot:
    match = _CELL.match(cell)
    if not match:
        return TimetableSlot(day, class_name, period_index, cell)
    return TimetableSlot(
        day          = day,
        class_name   = class_name,
        period_index = period_index,
        subject      = match.group(1).strip(),
        teacher      = TeacherField.parse(match.group(2)),
    )


def _parse_header(line: str) -> List[Period]:
    periods = []
    for i, part in enumerate(line.split(",")[1:]):
        name, _, time = part.partition("<br>")
        periods.append(Period(name=name.strip() or f"Period {i + 1}", time=time.strip()))
    return periods


def parse_timetable(text: str, rules: Optional[Rules] = None) -> Timetable:
    if rules is not None:
        text = apply_corrections(text, rules.data_corrections)

    lines = [line.strip() for line in text.strip().splitlines()]
    blocks: Dict[str, List[str]] = {}
    current: Optional[str] = None
    for line in lines:
        if not line:
            continue
        if line in DAYS:
            current = line
            blocks[current] = []
        elif current is not None:
            blocks[current].append(line)
        else:
            logger.debug("Ignoring line before first day name: %r", line)

    tt = Timetable()
    for day, block in blocks.items():
        if not block:
            continue
        tt.days.append(day)
        tt.slots[day] = {}
        if "Period 1" not in block[0]:
            logger.warning("No period header for %s; day has no classes", day)
            continue
        if not tt.periods:
            tt.periods = _parse_header(block[0])

        for line in block[1:]:
            columns    = [c.strip() for c in line.split(",")]
            class_name = columns[0]
            if not class_name:
                continue
            tt.slots[day][class_name] = [
                parse_cell(cell, day, class_name, i)
                for i, cell in enumerate(columns[1:])
            ]

    logger.info("Parsed timetable: %d day(s), %d period(s), %d class(es)",
                len(tt.days), len(tt.periods), len(tt.class_names))
    return tt


def load_timetable(path: Optional[str | Path] = None,
                   rules: Optional[Rules] = None) -> Timetable:
    """Parse a timetable file, or the bundled school timetable when path is None."""
    if path is None:
        text = read_bundled_text("timetable.txt")
    else:
        text = Path(path).read_text(encoding="utf-8")
    return parse_timetable(text, rules)

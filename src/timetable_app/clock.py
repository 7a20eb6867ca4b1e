"""
Map wall-clock time onto the timetable: which day and which period is "now".

Period times come from the header row, e.g. "8:30 AM - 9:10 AM". A header
without a readable time range is skipped when matching.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from timetable_app.models import Period

_TIME = re.compile(r"(\d{1,2}):(\d{2})\s*([AaPp][Mm])")


def _minutes(hour: str, minute: str, meridiem: str) -> int:
    h = int(hour) % 12
    if meridiem.upper() == "PM":
        h += 12
    return h * 60 + int(minute)


def period_range(period: Period) -> Optional[Tuple[int, int]]:
    """(start, end) in minutes after midnight, or None if the time is unreadable."""
    found = _TIME.findall(period.time)
    if len(found) < 2:
        return None
    return _minutes(*found[0]), _minutes(*found[1])


def current_day(days: Sequence[str], now: Optional[datetime] = None) -> str:
    now  = now or datetime.now()
    name = now.strftime("%A")
    if name != "Sunday" and name in days:
        return name
    if "Monday" in days or not days:
        return "Monday"
    return days[0]


def current_period(periods: Sequence[Period], now: Optional[datetime] = None) -> int:
    """0-based index of the period running now.

    Before school this is the first period, after school the last one, and
    during a break the period that comes next.
    """
    if not periods:
        return 0
    now = now or datetime.now()
    t   = now.hour * 60 + now.minute

    ranges: List[Tuple[int, Tuple[int, int]]] = []
    for i, p in enumerate(periods):
        r = period_range(p)
        if r is not None:
            ranges.append((i, r))

    for i, (start, end) in ranges:
        if start <= t <= end:
            return i
    for i, (start, _) in ranges:
        if t < start:
            return i
    return len(periods) - 1

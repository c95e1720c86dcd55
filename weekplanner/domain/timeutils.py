"""
Wall-clock arithmetic for the weekly grid.

All ranges are half-open [start, end) spans in minutes since local midnight.
"""

import datetime
from typing import Optional, Tuple

from weekplanner.domain.models import DAYS, DayKey, Task

Range = Tuple[int, int]

# Sort position for tasks without a start time (after any real minute)
UNSCHEDULED_SORT_KEY = 9999


def _to_int(part: str) -> int:
    try:
        return int(part.strip())
    except ValueError:
        return 0


def to_minutes(hhmm: str) -> int:
    """
    Convert "HH:MM" to minutes since midnight.

    Fails soft: non-numeric components count as zero, a missing minute
    component counts as zero. Never raises for string input.
    """
    parts = hhmm.split(":")
    hours = _to_int(parts[0])
    minutes = _to_int(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def minutes_label(minutes: int) -> str:
    """Human duration: 45 -> '45min', 60 -> '1h', 90 -> '1h30'"""
    if minutes < 60:
        return f"{minutes}min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h{rest:02d}" if rest else f"{hours}h"


def format_hhmm(minutes: int) -> str:
    """Render minutes since midnight as HH:MM"""
    hours, rest = divmod(minutes, 60)
    return f"{hours:02d}:{rest:02d}"


def range_label(rng: Range) -> str:
    return f"{format_hhmm(rng[0])}–{format_hhmm(rng[1])}"


def today_key(today: Optional[datetime.date] = None) -> DayKey:
    """Day key for a date (defaults to today)"""
    if today is None:
        today = datetime.date.today()
    # date.weekday(): Monday=0 ... Sunday=6, same order as DAYS
    return DAYS[today.weekday()]


def task_sort_key(task: Task) -> int:
    """Order tasks by start time, unscheduled ones last"""
    if not task.start_time:
        return UNSCHEDULED_SORT_KEY
    return to_minutes(task.start_time)

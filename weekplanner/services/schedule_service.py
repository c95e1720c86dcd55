"""
Schedule Service - Interval arithmetic over one day of tasks.

Resolves task ranges, merges them, and derives free slots, busy minutes and
conflicts. Everything here is pure: no I/O, no hidden state, and no
exceptions for well-formed input.
"""

from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from weekplanner.domain.models import DAYS, DayKey, PlannerSettings, Task
from weekplanner.domain.timeutils import Range, to_minutes
from weekplanner.infra.config import (
    DEFAULT_DURATION_MIN,
    DEFAULT_SUGGESTION_MIN,
    MIN_FREE_SLOT_MIN,
    SUGGESTION_LIMIT,
    SUGGESTION_MIN_DURATIONS,
)

# Period boundaries for slot suggestions
NOON = 12 * 60
EVENING = 18 * 60
PERIODS = ("all", "morning", "afternoon", "night")


class Conflict(BaseModel):
    """An existing task overlapping a candidate range"""
    model_config = ConfigDict(frozen=True)

    task: Task
    range: Range


class SlotSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: DayKey
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


def compute_task_range(task: Task) -> Optional[Range]:
    """
    Effective [start, end) of a task in minutes, or None when unscheduled.

    end_time wins over duration_min; with neither, DEFAULT_DURATION_MIN
    applies.
    """
    if not task.start_time:
        return None
    start = to_minutes(task.start_time)
    if task.end_time:
        return (start, to_minutes(task.end_time))
    if task.duration_min:
        return (start, start + task.duration_min)
    return (start, start + DEFAULT_DURATION_MIN)


def overlaps(a: Range, b: Range) -> bool:
    """Strict half-open overlap: touching endpoints do not overlap"""
    return a[0] < b[1] and b[0] < a[1]


def merge_intervals(ranges: Iterable[Range]) -> List[Range]:
    """
    Coalesce overlapping or touching ranges into a minimal ordered set.

    Sort by start (stable), then sweep once extending the open interval.
    """
    merged: List[List[int]] = []
    for start, end in sorted(ranges, key=lambda r: r[0]):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return [(start, end) for start, end in merged]


def _day_ranges(tasks: Iterable[Task], day: DayKey) -> List[Range]:
    """Resolved, positive-length ranges of the tasks on one day"""
    ranges = []
    for task in tasks:
        if task.day_key != day:
            continue
        rng = compute_task_range(task)
        if rng is None or rng[1] <= rng[0]:
            continue
        ranges.append(rng)
    return ranges


def compute_free_slots(tasks: Sequence[Task], day: DayKey,
                       window_start: int, window_end: int) -> List[Range]:
    """
    Free slots of a day window not covered by any task.

    Slots are ordered, disjoint, and at least MIN_FREE_SLOT_MIN long.
    """
    merged = merge_intervals(_day_ranges(tasks, day))

    slots: List[Range] = []
    cursor = window_start
    for start, end in merged:
        if start > cursor:
            slots.append((cursor, min(start, window_end)))
        cursor = max(cursor, end)
        if cursor >= window_end:
            break
    if cursor < window_end:
        slots.append((cursor, window_end))

    return [(s, e) for s, e in slots if e - s >= MIN_FREE_SLOT_MIN]


def compute_busy_minutes(tasks: Sequence[Task], day: DayKey,
                         window_start: Optional[int] = None,
                         window_end: Optional[int] = None) -> int:
    """
    Total minutes covered by the day's tasks.

    With a window, each merged range is clipped to it first.
    """
    total = 0
    for start, end in merge_intervals(_day_ranges(tasks, day)):
        if window_start is not None and window_end is not None:
            start = max(window_start, min(window_end, start))
            end = max(window_start, min(window_end, end))
        if end > start:
            total += end - start
    return total


def day_occupancy(tasks: Sequence[Task], day: DayKey,
                  window_start: int, window_end: int) -> int:
    """Busy share of the day window as a 0-100 percentage"""
    window = max(1, window_end - window_start)
    busy = compute_busy_minutes(tasks, day, window_start, window_end)
    # Half rounds up (round() would round half to even)
    return max(0, min(100, int(busy * 100 / window + 0.5)))


def find_conflicts(candidate: Range, tasks: Sequence[Task], day: DayKey,
                   exclude_id: Optional[str] = None) -> List[Conflict]:
    """
    Same-day tasks whose range overlaps the candidate, ordered by start.

    Advisory only: callers may still save a conflicting task.
    """
    hits = []
    for task in tasks:
        if task.day_key != day:
            continue
        if exclude_id is not None and task.id == exclude_id:
            continue
        rng = compute_task_range(task)
        if rng is None:
            continue
        if overlaps(candidate, rng):
            hits.append(Conflict(task=task, range=rng))
    hits.sort(key=lambda c: c.range[0])
    return hits


def in_period(start: int, period: str) -> bool:
    """morning < 12:00, afternoon 12:00-17:59, night >= 18:00"""
    if period == "morning":
        return start < NOON
    if period == "afternoon":
        return NOON <= start < EVENING
    if period == "night":
        return start >= EVENING
    return True


def suggest_slots(tasks: Sequence[Task], window_start: int, window_end: int,
                  min_duration: int = DEFAULT_SUGGESTION_MIN,
                  period: str = "all",
                  limit: int = SUGGESTION_LIMIT) -> List[SlotSuggestion]:
    """
    Best free slots across the whole week.

    Longest first, then earliest. `min_duration` is the user's filter and is
    applied on top of the engine's MIN_FREE_SLOT_MIN floor.

    Raises:
        ValueError: If `min_duration` is not one of SUGGESTION_MIN_DURATIONS
            or `period` is unknown
    """
    if min_duration not in SUGGESTION_MIN_DURATIONS:
        raise ValueError(f"Unsupported minimum duration: {min_duration}")
    if period not in PERIODS:
        raise ValueError(f"Unknown period: {period}")

    found = []
    for day in DAYS:
        for start, end in compute_free_slots(tasks, day, window_start, window_end):
            if end - start < min_duration:
                continue
            if not in_period(start, period):
                continue
            found.append(SlotSuggestion(day=day, start=start, end=end))

    found.sort(key=lambda s: (-s.duration, s.start))
    return found[:limit]


class ScheduleService:
    """
    Binds the interval functions to a configured day window.
    """

    def __init__(self, settings: PlannerSettings):
        self.window_start = to_minutes(settings.day_start)
        self.window_end = to_minutes(settings.day_end)

    def free_slots(self, tasks: Sequence[Task], day: DayKey) -> List[Range]:
        return compute_free_slots(tasks, day, self.window_start, self.window_end)

    def busy_minutes(self, tasks: Sequence[Task], day: DayKey) -> int:
        return compute_busy_minutes(tasks, day, self.window_start, self.window_end)

    def occupancy(self, tasks: Sequence[Task], day: DayKey) -> int:
        return day_occupancy(tasks, day, self.window_start, self.window_end)

    def suggestions(self, tasks: Sequence[Task], min_duration: int = DEFAULT_SUGGESTION_MIN,
                    period: str = "all") -> List[SlotSuggestion]:
        return suggest_slots(tasks, self.window_start, self.window_end,
                             min_duration=min_duration, period=period)

"""
Planner Service - State transitions of the planner aggregate.

Every function takes the current AppState and returns a new one; nothing is
mutated in place. Invalid input (empty title, recurring task with no
weekday) leaves the state untouched: the same object is returned.
"""

import datetime
import logging
from typing import List, Optional, Sequence

from pydantic import ValidationError

from weekplanner.domain.models import AppState, DayKey, Goal, Task, default_state
from weekplanner.domain.timeutils import task_sort_key
from weekplanner.i18n import default_quotes, tr
from weekplanner.infra.config import PlannerPreferences, TOP_PIN_LIMIT, clamp_notify_min
from weekplanner.services.repeat_service import (
    apply_group_edit,
    build_recurring_tasks,
    replace_task,
)

logger = logging.getLogger(__name__)


# Tasks

def add_tasks(state: AppState, tasks: Sequence[Task]) -> AppState:
    """Prepend new tasks to the collection"""
    return state.model_copy(update={"tasks": list(tasks) + list(state.tasks)})


def create_task(state: AppState, **fields) -> AppState:
    """
    Validate and add a single task.

    Fields are those of Task. An empty title is rejected without touching the
    state.
    """
    try:
        task = Task(**fields)
    except ValidationError as e:
        logger.warning(f"Rejected task: {e.error_count()} validation error(s)")
        return state
    return add_tasks(state, [task])


def create_recurring(state: AppState, days: Sequence[DayKey], **fields) -> AppState:
    """
    Add a new fixed task occupying every selected weekday.

    Requires a title and at least one weekday; otherwise a no-op.
    """
    if not days:
        logger.warning("Rejected recurring task: no weekday selected")
        return state
    fields.pop("day_key", None)
    fields.pop("repeat", None)
    try:
        template = Task(day_key=days[0], **fields)
    except ValidationError as e:
        logger.warning(f"Rejected recurring task: {e.error_count()} validation error(s)")
        return state
    return add_tasks(state, build_recurring_tasks(template, days))


def save_task_edit(state: AppState, task_id: str, updated: Task,
                   apply_to_group: bool = False) -> AppState:
    """
    Store an edited task.

    With apply_to_group on a fixed task, the whole group is reconciled to the
    edit; otherwise only the task with `task_id` is replaced.
    """
    original = state.get_task(task_id)
    group_id = original.group_id if original else None

    if apply_to_group and group_id:
        tasks = apply_group_edit(state.tasks, group_id, updated)
    else:
        tasks = replace_task(state.tasks, task_id, updated)

    return _prune_pins(state.model_copy(update={"tasks": tasks}))


def toggle_done(state: AppState, task_id: str) -> AppState:
    tasks = [
        t.model_copy(update={"done": not t.done}) if t.id == task_id else t
        for t in state.tasks
    ]
    return state.model_copy(update={"tasks": tasks})


def delete_task(state: AppState, task_id: str) -> AppState:
    """Remove a task and its id from every day's pin list"""
    tasks = [t for t in state.tasks if t.id != task_id]
    return _prune_pins(state.model_copy(update={"tasks": tasks}))


def tasks_for_day(state: AppState, day: DayKey) -> List[Task]:
    """Tasks of one day ordered by start time, unscheduled ones last"""
    return sorted((t for t in state.tasks if t.day_key == day), key=task_sort_key)


# Top-3 pins

def toggle_pin(state: AppState, day: DayKey, task_id: str) -> AppState:
    """
    Pin or unpin a task on a day.

    New pins go first; beyond TOP_PIN_LIMIT the oldest pin is evicted.
    """
    current = state.top3_by_day.get(day, [])
    if task_id in current:
        pins = [pid for pid in current if pid != task_id]
    else:
        pins = ([task_id] + current)[:TOP_PIN_LIMIT]

    top = dict(state.top3_by_day)
    top[day] = pins
    return state.model_copy(update={"top3_by_day": top})


def pinned_tasks(state: AppState, day: DayKey) -> List[Task]:
    """Pinned tasks of a day in pin order; ids of deleted tasks are skipped"""
    by_id = {t.id: t for t in state.tasks}
    return [by_id[pid] for pid in state.top3_by_day.get(day, []) if pid in by_id]


def _prune_pins(state: AppState) -> AppState:
    alive = {t.id for t in state.tasks}
    top = {
        day: [pid for pid in pins if pid in alive]
        for day, pins in state.top3_by_day.items()
    }
    return state.model_copy(update={"top3_by_day": top})


# Goals

def add_goal(state: AppState, goal: Goal) -> AppState:
    return state.model_copy(update={"goals": [goal] + list(state.goals)})


def create_goal(state: AppState, **fields) -> AppState:
    """Validate and add a goal; an empty title is a no-op"""
    try:
        goal = Goal(**fields)
    except ValidationError as e:
        logger.warning(f"Rejected goal: {e.error_count()} validation error(s)")
        return state
    return add_goal(state, goal)


def delete_goal(state: AppState, goal_id: str) -> AppState:
    return state.model_copy(update={"goals": [g for g in state.goals if g.id != goal_id]})


def allocate_goal(state: AppState, goal_id: str, day: DayKey,
                  start_time: Optional[str] = None) -> AppState:
    """
    Turn a goal into a task on `day` and drop it from the goal list.

    The goal's duration only applies when a start time is given; without one
    the task is unscheduled.
    """
    goal = next((g for g in state.goals if g.id == goal_id), None)
    if goal is None:
        return state

    task = Task(
        title=goal.title,
        day_key=day,
        start_time=start_time or None,
        duration_min=goal.duration_min if start_time else None,
        tag=goal.tag or tr("tag.personal"),
        notify=True,
        notify_min=state.settings.default_notify_min,
    )
    state = add_tasks(state, [task])
    return delete_goal(state, goal_id)


# Settings and profile

def update_settings(state: AppState, **patch) -> AppState:
    """Patch the day window / notification defaults, clamping the lead time"""
    if "default_notify_min" in patch:
        patch["default_notify_min"] = clamp_notify_min(patch["default_notify_min"])
    settings = state.settings.model_copy(update=patch)
    return state.model_copy(update={"settings": settings})


def update_profile(state: AppState, **patch) -> AppState:
    """
    Patch the profile.

    A blank name becomes empty; quote lines are stripped and blank lines
    dropped (an empty list means "use the built-in quotes").
    """
    if "name" in patch:
        patch["name"] = (patch["name"] or "").strip()
    if "quotes" in patch:
        patch["quotes"] = [q.strip() for q in patch["quotes"] or [] if q.strip()]
    profile = state.profile.model_copy(update=patch)
    return state.model_copy(update={"profile": profile})


def daily_quote(state: AppState, today: Optional[datetime.date] = None) -> str:
    """Quote of the day: stable for a given date"""
    quotes = state.profile.quotes or default_quotes()
    if today is None:
        today = datetime.date.today()
    seed = sum(ord(c) for c in today.strftime("%a %b %d %Y"))
    return quotes[seed % len(quotes)]


def reset_state(prefs: Optional[PlannerPreferences] = None) -> AppState:
    """
    Fresh starter state, with the configured day window and quotes applied
    when preferences are given.
    """
    state = default_state()
    if prefs is None:
        return state
    state = update_settings(
        state,
        day_start=prefs.day_start,
        day_end=prefs.day_end,
        default_notify_min=prefs.default_notify_min,
    )
    if prefs.quotes:
        state = update_profile(state, quotes=prefs.quotes)
    return state

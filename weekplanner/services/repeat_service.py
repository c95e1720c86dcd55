"""
Repeat Service - Keeps fixed (recurring) task groups consistent.

A fixed task is stored as one Task per weekday, all linked by the same
repeat.group_id. Editing the group "for all members" rewrites the shared
fields on every instance and adds/removes instances so the group covers
exactly the requested weekdays.

Template policy: instances created for newly selected days are cloned from
the first group member in collection order, with `done` reset to False.
"""

import logging
from typing import List, Optional, Sequence

from weekplanner.domain.models import DayKey, RepeatInfo, Task, new_id

logger = logging.getLogger(__name__)

# Fields an "apply to all" edit copies onto every group member
SHARED_FIELDS = ("title", "start_time", "end_time", "duration_min", "tag", "notify", "notify_min")


def _unique_days(days: Sequence[DayKey]) -> List[DayKey]:
    seen = []
    for day in days:
        if day not in seen:
            seen.append(day)
    return seen


def _target_days(patch: Task) -> Optional[List[DayKey]]:
    """Weekdays the patch asks for, or None when it turns recurrence off"""
    if patch.repeat is None or not patch.repeat.enabled:
        return None
    days = _unique_days(patch.repeat.days)
    return days or None


def apply_group_edit(tasks: Sequence[Task], group_id: str, patch: Task) -> List[Task]:
    """
    Apply an "edit all members" change to a recurrence group.

    Args:
        tasks: The full task collection
        group_id: Group being edited
        patch: Task carrying the new shared fields and the new repeat info

    Returns:
        A new collection: synthesized instances, kept group members, then
        every unrelated task in its original order.
    """
    days = _target_days(patch)
    shared = {field: getattr(patch, field) for field in SHARED_FIELDS}
    shared["repeat"] = (
        RepeatInfo(enabled=True, days=days, group_id=group_id) if days else None
    )

    updated = [
        task.model_copy(update=shared) if task.group_id == group_id else task
        for task in tasks
    ]

    if days is None:
        # Recurrence switched off: members stay on their days, unlinked
        logger.info(f"Recurrence disabled for group {group_id}")
        return updated

    unrelated = [t for t in updated if t.group_id != group_id]
    members = [t for t in updated if t.group_id == group_id]
    if not members:
        return updated

    have_days = {t.day_key for t in members}
    kept = [t for t in members if t.day_key in days]

    template = members[0]
    created = [
        template.model_copy(update={
            "id": new_id(),
            "day_key": day,
            "done": False,
            "repeat": RepeatInfo(enabled=True, days=days, group_id=group_id),
        })
        for day in days
        if day not in have_days
    ]

    logger.info(
        f"Group {group_id}: kept {len(kept)}, created {len(created)}, "
        f"dropped {len(members) - len(kept)}"
    )
    return created + kept + unrelated


def replace_task(tasks: Sequence[Task], task_id: str, updated: Task) -> List[Task]:
    """
    Plain by-id replacement.

    Used when a single member of a fixed group is edited; the rest of the
    group keeps its days and group_id.
    """
    return [updated if task.id == task_id else task for task in tasks]


def build_recurring_tasks(template: Task, days: Sequence[DayKey]) -> List[Task]:
    """
    Create a new recurrence group, one instance per selected weekday.

    Raises:
        ValueError: If no weekday is selected
    """
    days = _unique_days(days)
    if not days:
        raise ValueError("A recurring task needs at least one weekday")

    group_id = new_id()
    return [
        template.model_copy(update={
            "id": new_id(),
            "day_key": day,
            "repeat": RepeatInfo(enabled=True, days=days, group_id=group_id),
        })
        for day in days
    ]


def group_members(tasks: Sequence[Task], group_id: str) -> List[Task]:
    return [t for t in tasks if t.group_id == group_id]

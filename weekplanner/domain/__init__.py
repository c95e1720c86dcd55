"""Domain layer - Pure planner entities and time arithmetic"""

from .models import (
    AppState,
    DayKey,
    DAYS,
    Goal,
    PlannerSettings,
    Priority,
    Profile,
    RepeatInfo,
    Task,
    default_state,
    new_id,
)

__all__ = [
    "AppState", "DayKey", "DAYS", "Goal", "PlannerSettings", "Priority",
    "Profile", "RepeatInfo", "Task", "default_state", "new_id",
]

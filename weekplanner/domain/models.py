"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
The whole planner state travels as one JSON blob (local file and remote
record). Pydantic validates that blob on load and serialises it back with the
camelCase keys the stored records use, while Python code works with
snake_case attributes.

Architecture Decision: Why frozen models?
Every planner operation produces a new aggregate from the old one plus a
patch. Freezing the models makes accidental in-place mutation an error.
"""

import time
import uuid
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from weekplanner.i18n.translations import DEFAULT_QUOTES


def new_id() -> str:
    """Generate an opaque unique identifier"""
    return uuid.uuid4().hex


def _now_ms() -> int:
    return int(time.time() * 1000)


class DayKey(str, Enum):
    """Weekday bucket for tasks, Monday first."""
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"


# Display/iteration order of the week grid
DAYS: List[DayKey] = list(DayKey)


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Older records were written with Portuguese priority names
_LEGACY_PRIORITIES = {"baixa": "low", "media": "medium", "alta": "high"}


class _PlannerModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class RepeatInfo(_PlannerModel):
    """
    Recurrence metadata shared by every instance of a fixed task.

    One instance exists per weekday in `days`; all of them carry the same
    `group_id`.
    """
    enabled: bool = True
    days: List[DayKey] = Field(default_factory=list)
    group_id: str = Field(..., min_length=1)


class Task(_PlannerModel):
    """
    A task placed on one weekday.

    Examples: "Gym" on mon 07:00 for 60 minutes, "Call bank" on fri (no time).

    Range rules (see services.schedule_service.compute_task_range):
    - no start_time: unscheduled, excluded from interval computations
    - end_time wins over duration_min
    - neither: default duration
    """
    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1)
    day_key: DayKey
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_min: Optional[int] = None
    tag: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    done: bool = False

    # Stored only; delivery is not implemented
    notify: Optional[bool] = None
    notify_min: Optional[int] = None

    repeat: Optional[RepeatInfo] = None

    @field_validator("start_time", "end_time", "tag", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _legacy_priority(cls, value):
        if isinstance(value, str):
            return _LEGACY_PRIORITIES.get(value, value)
        return value

    @property
    def group_id(self) -> Optional[str]:
        """Recurrence group this task belongs to, if any"""
        return self.repeat.group_id if self.repeat else None


class Goal(_PlannerModel):
    """
    An unscheduled intention with a target duration.

    Goals have no day. Allocating one turns it into a Task and removes it
    from the goal list.
    """
    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1)
    tag: Optional[str] = None
    duration_min: int = Field(default=30, ge=1)
    notes: Optional[str] = None
    created_at: int = Field(default_factory=_now_ms, description="Epoch milliseconds")


class Profile(_PlannerModel):
    name: str = ""
    theme: str = Field(default="light", pattern="^(light|dark)$")
    accent: str = Field(default="orange", pattern="^(orange|blue|green|pink|purple)$")
    quotes: List[str] = Field(default_factory=list)


class PlannerSettings(_PlannerModel):
    """
    User-configurable day window and notification defaults.

    The [day_start, day_end) window bounds every free-slot and busy-time
    computation.
    """
    day_start: str = Field(default="06:00", description="Day window start (HH:MM)")
    day_end: str = Field(default="22:00", description="Day window end (HH:MM)")
    default_notify_min: int = Field(default=10, ge=0, le=240,
                                    description="Default notification lead time in minutes")


class AppState(_PlannerModel):
    """
    The single owned aggregate: profile, settings, tasks, goals and pins.
    """
    profile: Profile = Field(default_factory=Profile)
    settings: PlannerSettings = Field(default_factory=PlannerSettings)
    tasks: List[Task] = Field(default_factory=list)
    goals: List[Goal] = Field(default_factory=list)
    top3_by_day: Dict[DayKey, List[str]] = Field(default_factory=dict, alias="top3ByDay")
    notifications_enabled: bool = False

    def has_content(self) -> bool:
        """True when the state holds anything worth seeding a remote store with"""
        return bool(
            self.tasks
            or self.goals
            or self.profile.name.strip()
            or self.profile.quotes
        )

    def get_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def to_blob(self) -> dict:
        """Serialise to the stored JSON shape (camelCase keys)"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_blob(cls, blob: dict) -> "AppState":
        return cls.model_validate(blob)


def default_state() -> AppState:
    """Starter state for a fresh install"""
    return AppState(
        profile=Profile(quotes=list(DEFAULT_QUOTES["en"])),
        tasks=[
            Task(
                title="Check orders",
                day_key=DayKey.MON,
                start_time="10:00",
                duration_min=30,
                tag="Work",
                notify=True,
                notify_min=10,
            )
        ],
    )

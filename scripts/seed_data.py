"""
Data Seeder for the Week Planner.
Writes a realistic demo state to the local slot for testing and demo purposes.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from weekplanner.domain.models import DayKey, Priority
from weekplanner.infra.config import get_settings
from weekplanner.infra.repository import LocalStateRepository
from weekplanner.services import planner_service as planner


def build_demo_state():
    prefs = get_settings().preferences
    state = planner.reset_state(prefs)
    state = planner.update_profile(state, name="Demo")

    # Fixed gym sessions, one group across three days
    state = planner.create_recurring(
        state,
        [DayKey.MON, DayKey.WED, DayKey.FRI],
        title="Gym",
        start_time="07:00",
        duration_min=60,
        tag="Health",
        notify=True,
        notify_min=prefs.default_notify_min,
    )

    workdays = [DayKey.MON, DayKey.TUE, DayKey.WED, DayKey.THU, DayKey.FRI]
    state = planner.create_recurring(
        state, workdays,
        title="Deep work", start_time="09:00", end_time="11:30", tag="Work",
        priority=Priority.HIGH,
    )
    state = planner.create_recurring(
        state, workdays,
        title="Lunch", start_time="12:30", duration_min=45, tag="Personal",
    )

    state = planner.create_task(state, title="Dentist", day_key=DayKey.TUE,
                                start_time="16:00", end_time="17:00", tag="Health")
    state = planner.create_task(state, title="Call the bank", day_key=DayKey.THU, tag="Admin")
    state = planner.create_task(state, title="Family dinner", day_key=DayKey.SUN,
                                start_time="19:00", duration_min=120, tag="Family")

    state = planner.create_goal(state, title="Read 10 pages", duration_min=30)
    state = planner.create_goal(state, title="Plan the trip", duration_min=90,
                                notes="Flights and hotel")

    for task in planner.tasks_for_day(state, DayKey.TUE)[:2]:
        state = planner.toggle_pin(state, DayKey.TUE, task.id)

    return state


def seed():
    settings = get_settings()
    repo = LocalStateRepository(settings.get_state_path())
    if repo.path.exists():
        print(f"Replacing existing state at: {repo.path}")

    state = build_demo_state()
    repo.save(state)
    print(f"Seeded {len(state.tasks)} tasks and {len(state.goals)} goals into {repo.path}")


if __name__ == "__main__":
    seed()

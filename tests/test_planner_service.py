"""
Tests for planner state transitions.
"""

import datetime

import pytest

from conftest import make_task
from weekplanner.domain.models import AppState, DayKey, RepeatInfo, default_state
from weekplanner.i18n import default_quotes, set_language
from weekplanner.infra.config import PlannerPreferences, TOP_PIN_LIMIT
from weekplanner.services import planner_service as planner
from weekplanner.services.schedule_service import compute_task_range


@pytest.fixture
def state():
    return AppState()


class TestTasks:
    def test_create_task_prepends(self, state):
        state = planner.create_task(state, title="First", day_key=DayKey.MON)
        state = planner.create_task(state, title="Second", day_key=DayKey.MON)
        assert [t.title for t in state.tasks] == ["Second", "First"]

    def test_empty_title_is_a_no_op(self, state):
        assert planner.create_task(state, title="   ", day_key=DayKey.MON) is state

    def test_recurring_without_days_is_a_no_op(self, state):
        assert planner.create_recurring(state, [], title="Gym") is state

    def test_recurring_without_title_is_a_no_op(self, state):
        assert planner.create_recurring(state, [DayKey.MON], title="") is state

    def test_create_recurring(self, state):
        state = planner.create_recurring(state, [DayKey.TUE, DayKey.THU], title="Gym", start_time="07:00")
        assert [t.day_key for t in state.tasks] == [DayKey.TUE, DayKey.THU]
        assert state.tasks[0].group_id == state.tasks[1].group_id

    def test_tasks_for_day_sorted_with_unscheduled_listed(self, state):
        state = planner.create_task(state, title="Loose", day_key=DayKey.MON)
        state = planner.create_task(state, title="Late", day_key=DayKey.MON, start_time="18:00")
        state = planner.create_task(state, title="Early", day_key=DayKey.MON, start_time="07:00")
        state = planner.create_task(state, title="Other day", day_key=DayKey.TUE, start_time="07:00")

        listed = planner.tasks_for_day(state, DayKey.MON)

        assert [t.title for t in listed] == ["Early", "Late", "Loose"]
        assert compute_task_range(listed[-1]) is None

    def test_toggle_done(self, state):
        state = planner.create_task(state, title="A", day_key=DayKey.MON)
        task_id = state.tasks[0].id

        state = planner.toggle_done(state, task_id)
        assert state.tasks[0].done is True
        state = planner.toggle_done(state, task_id)
        assert state.tasks[0].done is False

    def test_state_is_replaced_not_mutated(self, state):
        before = state.model_dump()
        planner.create_task(state, title="A", day_key=DayKey.MON)
        assert state.model_dump() == before


class TestTaskEdit:
    def test_apply_to_group(self, state):
        state = planner.create_recurring(state, [DayKey.MON, DayKey.WED], title="Gym", start_time="07:00")
        first = state.tasks[0]
        patch = first.model_copy(update={
            "title": "Run",
            "repeat": RepeatInfo(days=[DayKey.WED], group_id=first.group_id),
        })

        state = planner.save_task_edit(state, first.id, patch, apply_to_group=True)

        assert [(t.title, t.day_key) for t in state.tasks] == [("Run", DayKey.WED)]

    def test_single_member_edit(self, state):
        state = planner.create_recurring(state, [DayKey.MON, DayKey.WED], title="Gym", start_time="07:00")
        first = state.tasks[0]

        state = planner.save_task_edit(state, first.id, first.model_copy(update={"title": "Run"}))

        assert [t.title for t in state.tasks] == ["Run", "Gym"]
        assert state.tasks[0].group_id == state.tasks[1].group_id

    def test_dropped_group_members_leave_pin_lists(self, state):
        state = planner.create_recurring(state, [DayKey.MON, DayKey.WED], title="Gym", start_time="07:00")
        monday = state.tasks[0]
        state = planner.toggle_pin(state, DayKey.MON, monday.id)
        patch = monday.model_copy(update={"repeat": RepeatInfo(days=[DayKey.WED], group_id=monday.group_id)})

        state = planner.save_task_edit(state, monday.id, patch, apply_to_group=True)

        assert state.top3_by_day[DayKey.MON] == []


class TestPins:
    def test_fourth_pin_evicts_oldest(self, state):
        assert TOP_PIN_LIMIT == 3
        for task_id in ["a", "b", "c", "d"]:
            state = planner.toggle_pin(state, DayKey.MON, task_id)

        assert state.top3_by_day[DayKey.MON] == ["d", "c", "b"]

    def test_toggle_unpins(self, state):
        state = planner.toggle_pin(state, DayKey.MON, "a")
        state = planner.toggle_pin(state, DayKey.MON, "b")
        state = planner.toggle_pin(state, DayKey.MON, "a")
        assert state.top3_by_day[DayKey.MON] == ["b"]

    def test_delete_cascades_to_every_day(self, state):
        state = planner.create_task(state, title="A", day_key=DayKey.MON)
        state = planner.create_task(state, title="B", day_key=DayKey.MON)
        a, b = state.tasks[1], state.tasks[0]
        state = planner.toggle_pin(state, DayKey.MON, a.id)
        state = planner.toggle_pin(state, DayKey.MON, b.id)
        state = planner.toggle_pin(state, DayKey.FRI, a.id)

        state = planner.delete_task(state, a.id)

        assert state.get_task(a.id) is None
        assert state.top3_by_day[DayKey.MON] == [b.id]
        assert state.top3_by_day[DayKey.FRI] == []

    def test_pinned_tasks_skip_stale_ids(self, state):
        state = planner.create_task(state, title="A", day_key=DayKey.MON)
        task = state.tasks[0]
        state = planner.toggle_pin(state, DayKey.MON, "gone")
        state = planner.toggle_pin(state, DayKey.MON, task.id)

        assert planner.pinned_tasks(state, DayKey.MON) == [task]


class TestGoals:
    def test_create_and_delete(self, state):
        state = planner.create_goal(state, title="Read", duration_min=20)
        assert planner.create_goal(state, title="") is state
        goal = state.goals[0]

        state = planner.delete_goal(state, goal.id)
        assert state.goals == []

    def test_allocate_with_start_time(self, state):
        state = planner.update_settings(state, default_notify_min=15)
        state = planner.create_goal(state, title="Read", duration_min=45)
        goal = state.goals[0]

        state = planner.allocate_goal(state, goal.id, DayKey.THU, "20:00")

        assert state.goals == []
        task = state.tasks[0]
        assert (task.title, task.day_key, task.start_time, task.duration_min) == ("Read", DayKey.THU, "20:00", 45)
        assert task.tag == "Personal"
        assert task.notify is True and task.notify_min == 15

    def test_allocate_without_start_time_is_unscheduled(self, state):
        state = planner.create_goal(state, title="Read", tag="Study", duration_min=45)
        state = planner.allocate_goal(state, state.goals[0].id, DayKey.THU)

        task = state.tasks[0]
        assert task.duration_min is None
        assert task.tag == "Study"
        assert compute_task_range(task) is None

    def test_allocate_unknown_goal(self, state):
        assert planner.allocate_goal(state, "missing", DayKey.MON) is state


class TestSettingsAndProfile:
    @pytest.mark.parametrize("value,expected", [(500, 240), (-5, 0), ("abc", 0), (30, 30)])
    def test_notify_lead_clamped(self, state, value, expected):
        state = planner.update_settings(state, default_notify_min=value)
        assert state.settings.default_notify_min == expected

    def test_window_update(self, state):
        state = planner.update_settings(state, day_start="07:00", day_end="23:00")
        assert (state.settings.day_start, state.settings.day_end) == ("07:00", "23:00")

    def test_profile_cleanup(self, state):
        state = planner.update_profile(state, name="  Ana  ", quotes=["  Go  ", "", "   ", "Rest"])
        assert state.profile.name == "Ana"
        assert state.profile.quotes == ["Go", "Rest"]


class TestDailyQuote:
    def test_stable_for_a_date(self):
        state = planner.update_profile(AppState(), quotes=["a", "b", "c"])
        day = datetime.date(2026, 10, 19)
        assert planner.daily_quote(state, day) == planner.daily_quote(state, day)
        assert planner.daily_quote(state, day) in ["a", "b", "c"]

    def test_falls_back_to_defaults(self):
        day = datetime.date(2026, 10, 19)
        assert planner.daily_quote(AppState(), day) in default_quotes()

        set_language("pt")
        assert planner.daily_quote(AppState(), day) in default_quotes()
        assert "Um passo por vez." in default_quotes()


class TestReset:
    def test_reset_is_default_state(self):
        state = planner.reset_state()
        assert state.tasks[0].title == default_state().tasks[0].title

    def test_reset_applies_preferences(self):
        prefs = PlannerPreferences(day_start="07:30", day_end="21:00", default_notify_min=5, quotes=["Go"])

        state = planner.reset_state(prefs)

        assert state.settings.day_start == "07:30"
        assert state.settings.day_end == "21:00"
        assert state.settings.default_notify_min == 5
        assert state.profile.quotes == ["Go"]

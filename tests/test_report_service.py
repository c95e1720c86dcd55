"""
Tests for the week overview report.
"""

import datetime

from weekplanner.domain.models import DayKey, default_state
from weekplanner.i18n import set_language
from weekplanner.services import planner_service as planner
from weekplanner.services.report_service import ReportService


MONDAY = datetime.date(2026, 10, 19)


class TestBuildContext:
    def test_days_cover_whole_week(self):
        context = ReportService().build_context(default_state(), today=MONDAY)

        assert [d["key"] for d in context["days"]] == ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]
        monday = context["days"][0]
        assert monday["busy"] == 30
        assert monday["pct"] == 3
        assert monday["tasks"][0]["when"] == "10:00–10:30"
        assert monday["free"] == [(360, 600), (630, 1320)]

    def test_unscheduled_task_label(self):
        state = planner.create_task(default_state(), title="Call", day_key=DayKey.TUE)
        context = ReportService().build_context(state, today=MONDAY)

        tuesday = context["days"][1]
        assert tuesday["tasks"][0]["when"] == "no time"
        assert tuesday["busy"] == 0

    def test_suggestions_are_capped(self):
        context = ReportService().build_context(default_state(), today=MONDAY)
        assert len(context["suggestions"]) == 5
        assert context["suggestions"][0]["duration"] == 960


class TestRenderWeek:
    def test_render_default_state(self):
        text = ReportService().render_week(default_state(), today=MONDAY)

        assert "Week overview" in text
        assert "Monday" in text
        assert "Check orders" in text
        assert "10:00–10:30" in text
        assert "#Work" in text
        assert "Free slots" in text

    def test_render_pins_and_goals(self):
        state = default_state()
        task_id = state.tasks[0].id
        state = planner.toggle_pin(state, DayKey.MON, task_id)
        state = planner.create_goal(state, title="Read", duration_min=45)

        text = ReportService().render_week(state, today=MONDAY)

        assert "Top 3: Check orders" in text
        assert "Read (45min)" in text

    def test_render_in_portuguese(self):
        set_language("pt")
        text = ReportService().render_week(default_state(), today=MONDAY)
        assert "Segunda-feira" in text

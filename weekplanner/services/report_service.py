"""
Report Generation Service using Jinja2 templates.

Architecture Decision: Template Pattern
The week overview is plain text rendered from a template, so the layout can
change without touching the scheduling code.
"""

import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from weekplanner.domain.models import DAYS, AppState
from weekplanner.domain.timeutils import format_hhmm, minutes_label, range_label
from weekplanner.i18n import day_label, tr
from weekplanner.services.planner_service import daily_quote, pinned_tasks, tasks_for_day
from weekplanner.services.schedule_service import ScheduleService, compute_task_range
from weekplanner.utils import get_resource_path


class ReportService:
    """
    Renders the week overview: per-day occupancy, tasks, pins and free slots.
    """

    TEMPLATE_NAME = "week_overview.txt"

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
        """
        if template_dir is None:
            template_dir = get_resource_path("resources/templates")

        self.template_dir = template_dir

        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            trim_blocks=True,
            lstrip_blocks=True
        )

        # Add custom filters
        self.env.filters['hhmm'] = format_hhmm
        self.env.filters['duration'] = minutes_label
        self.env.globals['tr'] = tr

    def build_context(self, state: AppState, today: Optional[datetime.date] = None,
                      min_duration: int = 30, period: str = "all") -> dict:
        """Collect everything the template needs"""
        schedule = ScheduleService(state.settings)

        days = []
        for day in DAYS:
            items = []
            for task in tasks_for_day(state, day):
                rng = compute_task_range(task)
                items.append({
                    "task": task,
                    "when": range_label(rng) if rng else tr("report.unscheduled"),
                })
            days.append({
                "key": day.value,
                "label": day_label(day, long=True),
                "busy": schedule.busy_minutes(state.tasks, day),
                "pct": schedule.occupancy(state.tasks, day),
                "tasks": items,
                "pinned": pinned_tasks(state, day),
                "free": schedule.free_slots(state.tasks, day),
            })

        suggestions = [
            {
                "day_label": day_label(s.day),
                "start": s.start,
                "end": s.end,
                "duration": s.duration,
            }
            for s in schedule.suggestions(state.tasks, min_duration=min_duration, period=period)
        ]

        return {
            "profile_name": state.profile.name,
            "quote": daily_quote(state, today),
            "day_start": state.settings.day_start,
            "day_end": state.settings.day_end,
            "days": days,
            "suggestions": suggestions[:5],
            "goals": state.goals,
        }

    def render_week(self, state: AppState, template_name: Optional[str] = None,
                    **options) -> str:
        """
        Render the week overview.

        Args:
            state: Planner state to render
            template_name: Template file (defaults to TEMPLATE_NAME)
            **options: Passed to build_context (today, min_duration, period)

        Returns:
            Rendered text
        """
        template = self.env.get_template(template_name or self.TEMPLATE_NAME)
        return template.render(**self.build_context(state, **options))

"""Services layer - Planner logic"""

from .report_service import ReportService
from .schedule_service import ScheduleService
from .sync_service import DebounceTimer, SyncService

__all__ = ["ReportService", "ScheduleService", "DebounceTimer", "SyncService"]

"""Services module for Projexia - Business logic layer."""

from .account_service import AccountService
from .dashboard_service import DashboardService
from .deliverable_service import DeliverableService
from .impact_service import ImpactService
from .project_service import ProjectService
from .task_service import TaskService
from .timesheet_service import TimesheetService, format_hours

__all__ = [
    "AccountService",
    "DashboardService",
    "DeliverableService",
    "ImpactService",
    "ProjectService",
    "TaskService",
    "TimesheetService",
    "format_hours",
]

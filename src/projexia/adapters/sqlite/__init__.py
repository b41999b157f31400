"""SQLite adapter module - local document store implementation."""

from projexia.adapters.sqlite.company_repository import SqliteCompanyRepository
from projexia.adapters.sqlite.deliverable_repository import SqliteDeliverableRepository
from projexia.adapters.sqlite.project_repository import SqliteProjectRepository
from projexia.adapters.sqlite.timesheet_repository import SqliteTimesheetRepository
from projexia.adapters.sqlite.user_repository import SqliteUserRepository

__all__ = [
    "SqliteCompanyRepository",
    "SqliteUserRepository",
    "SqliteProjectRepository",
    "SqliteTimesheetRepository",
    "SqliteDeliverableRepository",
]

"""Timesheet service - Business logic for logged time."""

from __future__ import annotations

from collections import defaultdict
from datetime import date

from projexia.exceptions import PermissionDeniedError
from projexia.models import TimesheetEntry, TimesheetEntryCreate, UserProfile
from projexia.repositories import ProjectRepository, TimesheetRepository
from projexia.utils.permissions import is_manager


def format_hours(hours: float) -> str:
    """Format a duration in hours as ``"1h 30m"``.

    Minutes are rounded; whole hours drop the minutes part (``"2h"``) and
    durations under an hour drop the hours part (``"45m"``).
    """
    total_minutes = round(hours * 60)
    h, m = divmod(total_minutes, 60)
    if h and m:
        return f"{h}h {m}m"
    if h:
        return f"{h}h"
    return f"{m}m"


class TimesheetService:
    """Service for timesheet entries of the acting user's company."""

    def __init__(
        self,
        timesheet_repository: TimesheetRepository,
        project_repository: ProjectRepository,
        user: UserProfile,
    ):
        self.repository = timesheet_repository
        self.project_repository = project_repository
        self.user = user

    async def log_time(
        self,
        project_id: str,
        duration: float,
        task_type: str,
        description: str,
        *,
        entry_date: date | None = None,
        deliverable_id: str | None = None,
        billable: bool = False,
    ) -> TimesheetEntry:
        """Log time for the acting user.

        Raises:
            NotFoundError: If the project is not in the user's company
            ValidationError: If the duration is not positive or a text is blank
        """
        values = {
            "project_id": project_id,
            "duration": duration,
            "task_type": task_type,
            "description": description,
            "deliverable_id": deliverable_id,
            "billable": billable,
        }
        if entry_date is not None:
            values["date"] = entry_date
        entry = TimesheetEntryCreate(**values)

        await self.project_repository.get(self.user.company_id, entry.project_id)
        return await self.repository.add(self.user.company_id, self.user.id, entry)

    async def list_entries(
        self,
        *,
        user_id: str | None = None,
        project_id: str | None = None,
        limit: int | None = None,
    ) -> list[TimesheetEntry]:
        """List entries, newest first.

        Employees only see their own entries; managers may pass ``user_id``
        (or None for everybody).
        """
        if not is_manager(self.user):
            user_id = self.user.id
        return await self.repository.list_entries(
            self.user.company_id, user_id=user_id, project_id=project_id, limit=limit
        )

    async def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry; employees may only delete their own."""
        entry = await self.repository.get(self.user.company_id, entry_id)
        if entry.user_id != self.user.id and not is_manager(self.user):
            raise PermissionDeniedError("You can only delete your own timesheet entries")
        return await self.repository.delete(self.user.company_id, entry_id)

    @staticmethod
    def summary(entries: list[TimesheetEntry]) -> dict:
        """Total and billable hours, overall and per project."""
        per_project: dict[str, dict[str, float]] = defaultdict(
            lambda: {"hours": 0.0, "billable_hours": 0.0}
        )
        for entry in entries:
            bucket = per_project[entry.project_id]
            bucket["hours"] += entry.duration
            if entry.billable:
                bucket["billable_hours"] += entry.duration

        return {
            "total_hours": sum(e.duration for e in entries),
            "billable_hours": sum(e.duration for e in entries if e.billable),
            "entry_count": len(entries),
            "per_project": dict(per_project),
        }


async def get_timesheet_service() -> TimesheetService:
    """Factory function to get a TimesheetService for the active user."""
    from projexia.services.config_service import get_config_service

    config_service = get_config_service()
    context = config_service.storage_strategy_context
    user = await config_service.get_current_user()
    return TimesheetService(context.timesheet_repository, context.project_repository, user)

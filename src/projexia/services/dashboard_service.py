"""Dashboard service - company-wide figures."""

from __future__ import annotations

from projexia.models import ProjectStatus, UserProfile
from projexia.repositories import ProjectRepository


class DashboardService:
    """Aggregates project, task and budget figures for a company."""

    def __init__(self, project_repository: ProjectRepository, user: UserProfile):
        self.repository = project_repository
        self.user = user

    async def overview(self) -> dict:
        """Compute the dashboard figures.

        Returns:
            Dict with ``projects_in_progress``, ``completed_projects``,
            ``open_tasks``, ``total_budget``, ``spent_budget`` and
            ``projects_by_status`` (count per status value, every status present)
        """
        projects = await self.repository.list_all(self.user.company_id)

        by_status = {status.value: 0 for status in ProjectStatus}
        for project in projects:
            by_status[project.status.value] += 1

        return {
            "projects_in_progress": by_status[ProjectStatus.IN_PROGRESS.value],
            "completed_projects": by_status[ProjectStatus.COMPLETED.value],
            "open_tasks": sum(
                1 for project in projects for task in project.tasks if not task.completed
            ),
            "total_budget": sum(project.budget for project in projects),
            "spent_budget": sum(
                expense.amount for project in projects for expense in project.expenses
            ),
            "projects_by_status": by_status,
        }


async def get_dashboard_service() -> DashboardService:
    """Factory function to get a DashboardService for the active user."""
    from projexia.services.config_service import get_config_service

    config_service = get_config_service()
    user = await config_service.get_current_user()
    return DashboardService(config_service.storage_strategy_context.project_repository, user)

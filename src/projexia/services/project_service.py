"""Project service - Business logic for project operations."""

from __future__ import annotations

from datetime import date

from projexia.exceptions import ConflictError
from projexia.models import (
    Expense,
    ExpenseCreate,
    Project,
    ProjectCreate,
    ProjectStatus,
    ProjectUpdate,
    UserProfile,
)
from projexia.repositories import ProjectRepository
from projexia.utils.logger import get_logger
from projexia.utils.permissions import require_manager
from projexia.utils.task_tree import calculate_progress
from projexia.utils.uuid_utils import generate_id


class ProjectService:
    """Service for project business logic.

    Every operation is scoped to the acting user's company. Reads are open to
    every member; writes are reserved to managers.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        user: UserProfile,
        *,
        conflict_retries: int = 3,
    ):
        """Initialize the project service.

        Args:
            project_repository: ProjectRepository implementation for data access
            user: Acting user
            conflict_retries: Attempts for expense writes before a ConflictError surfaces
        """
        self.repository = project_repository
        self.user = user
        self.conflict_retries = max(1, conflict_retries)
        self.logger = get_logger()

    @property
    def company_id(self) -> str:
        return self.user.company_id

    async def list_projects(self, *, status: ProjectStatus | None = None) -> list[Project]:
        """List the company's projects, optionally filtered by status."""
        projects = await self.repository.list_all(self.company_id)
        if status is not None:
            projects = [p for p in projects if p.status == status]
        return projects

    async def get_project(self, project_id: str) -> Project:
        """Get a specific project by ID.

        Raises:
            NotFoundError: If the project is not in the user's company
        """
        return await self.repository.get(self.company_id, project_id)

    async def create_project(
        self,
        name: str,
        *,
        description: str = "",
        goals: str = "",
        budget: float = 0.0,
        start_date: date | None = None,
        end_date: date | None = None,
        status: ProjectStatus = ProjectStatus.NOT_STARTED,
    ) -> Project:
        """Create a new project.

        Args:
            name: Project name (required)
            description: Free-text description
            goals: Free-text goals
            budget: Total budget (>= 0)
            start_date: Planned start date
            end_date: Planned end date, not before ``start_date``
            status: Initial status

        Returns:
            Created Project object
        """
        require_manager(self.user, "create projects")
        project_data = ProjectCreate(
            name=name,
            description=description,
            goals=goals,
            budget=budget,
            start_date=start_date,
            end_date=end_date,
            status=status,
        )
        project = await self.repository.create(self.company_id, project_data)
        self.logger.info("project created: %s (%s)", project.id, project.name)
        return project

    async def update_project(
        self,
        project_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        goals: str | None = None,
        budget: float | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        status: ProjectStatus | None = None,
    ) -> Project:
        """Update an existing project; only provided fields change."""
        require_manager(self.user, "update projects")
        updates = ProjectUpdate(
            name=name,
            description=description,
            goals=goals,
            budget=budget,
            start_date=start_date,
            end_date=end_date,
            status=status,
        )

        if start_date is not None or end_date is not None:
            current = await self.get_project(project_id)
            new_start = start_date or current.start_date
            new_end = end_date or current.end_date
            if new_start and new_end and new_end < new_start:
                raise ValueError("end_date must not be before start_date")

        return await self.repository.update(self.company_id, project_id, updates)

    async def delete_project(self, project_id: str) -> bool:
        """Delete a project together with its tasks and expenses."""
        require_manager(self.user, "delete projects")
        deleted = await self.repository.delete(self.company_id, project_id)
        self.logger.info("project deleted: %s", project_id)
        return deleted

    async def add_expense(
        self,
        project_id: str,
        item: str,
        amount: float,
        *,
        expense_date: date | None = None,
    ) -> Expense:
        """Record an expense against a project's budget.

        Returns:
            The recorded Expense
        """
        require_manager(self.user, "record expenses")
        form = (
            ExpenseCreate(item=item, amount=amount, date=expense_date)
            if expense_date
            else ExpenseCreate(item=item, amount=amount)
        )
        expense = Expense(id=generate_id(), **form.model_dump())

        for attempt in range(1, self.conflict_retries + 1):
            project = await self.get_project(project_id)
            try:
                await self.repository.replace_expenses(
                    self.company_id,
                    project_id,
                    [*project.expenses, expense],
                    project.version,
                )
            except ConflictError:
                self.logger.warning(
                    "add expense: version conflict on project %s (attempt %d/%d)",
                    project_id,
                    attempt,
                    self.conflict_retries,
                )
                if attempt == self.conflict_retries:
                    raise
                continue
            return expense

        raise ConflictError(f"Could not add expense to project {project_id}")

    @staticmethod
    def budget_summary(project: Project) -> dict:
        """Summarize a project's budget consumption.

        Returns:
            Dict with ``budget``, ``spent``, ``remaining`` and ``percent_used``
            (0 when the budget is 0)
        """
        spent = sum(expense.amount for expense in project.expenses)
        percent_used = spent / project.budget * 100 if project.budget > 0 else 0.0
        return {
            "budget": project.budget,
            "spent": spent,
            "remaining": project.budget - spent,
            "percent_used": percent_used,
        }

    @staticmethod
    def progress(project: Project) -> float:
        """Percentage of the project's tasks that are completed."""
        return calculate_progress(project.tasks)


async def get_project_service() -> ProjectService:
    """Factory function to get a ProjectService for the active user."""
    from projexia.services.config_service import get_config_service

    config_service = get_config_service()
    user = await config_service.get_current_user()
    return ProjectService(
        config_service.storage_strategy_context.project_repository,
        user,
        conflict_retries=config_service.config.store.conflict_retries,
    )

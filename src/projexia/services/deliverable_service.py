"""Deliverable service - Business logic for project deliverables."""

from __future__ import annotations

from projexia.models import (
    Deliverable,
    DeliverableCreate,
    DeliverableUpdate,
    UserProfile,
)
from projexia.repositories import DeliverableRepository, ProjectRepository
from projexia.utils.permissions import require_manager


class DeliverableService:
    """Service for deliverables of the acting user's company."""

    def __init__(
        self,
        deliverable_repository: DeliverableRepository,
        project_repository: ProjectRepository,
        user: UserProfile,
    ):
        self.repository = deliverable_repository
        self.project_repository = project_repository
        self.user = user

    async def list_deliverables(self, project_id: str | None = None) -> list[Deliverable]:
        """List deliverables, optionally for one project."""
        return await self.repository.list_all(self.user.company_id, project_id)

    async def get_deliverable(self, deliverable_id: str) -> Deliverable:
        return await self.repository.get(self.user.company_id, deliverable_id)

    async def create_deliverable(self, data: DeliverableCreate) -> Deliverable:
        """Create a deliverable for a project of the user's company.

        Raises:
            PermissionDeniedError: If the user is not a manager
            NotFoundError: If the project does not exist
        """
        require_manager(self.user, "manage deliverables")
        await self.project_repository.get(self.user.company_id, data.project_id)
        return await self.repository.create(self.user.company_id, data)

    async def update_deliverable(
        self, deliverable_id: str, updates: DeliverableUpdate
    ) -> Deliverable:
        """Update a deliverable; only provided fields change."""
        require_manager(self.user, "manage deliverables")
        return await self.repository.update(self.user.company_id, deliverable_id, updates)


async def get_deliverable_service() -> DeliverableService:
    """Factory function to get a DeliverableService for the active user."""
    from projexia.services.config_service import get_config_service

    config_service = get_config_service()
    context = config_service.storage_strategy_context
    user = await config_service.get_current_user()
    return DeliverableService(context.deliverable_repository, context.project_repository, user)

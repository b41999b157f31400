"""Account service - companies, users and the active user."""

from __future__ import annotations

from projexia.models import Company, CompanyUpdate, Role, UserCreate, UserProfile
from projexia.repositories import CompanyRepository, UserRepository
from projexia.services.config_service import ConfigService
from projexia.utils.logger import get_logger
from projexia.utils.permissions import require_manager


class AccountService:
    """Service for sign-up, invitations and switching the active user."""

    def __init__(
        self,
        company_repository: CompanyRepository,
        user_repository: UserRepository,
        config_service: ConfigService,
    ):
        self.company_repository = company_repository
        self.user_repository = user_repository
        self.config_service = config_service
        self.logger = get_logger()

    async def signup(
        self, company_name: str, email: str, display_name: str
    ) -> tuple[Company, UserProfile]:
        """Create a company with its first admin and make that admin active.

        Args:
            company_name: Name of the new company
            email: Admin email (must not be registered yet)
            display_name: Admin display name

        Returns:
            Tuple of (company, admin user)

        Raises:
            ValueError: If the company name is blank or the email is taken
        """
        company_name = company_name.strip()
        if not company_name:
            raise ValueError("Company name must not be empty")

        # Validate before creating the company so a bad email leaves nothing behind
        user_data = UserCreate(email=email, display_name=display_name, role=Role.ADMIN)

        company = await self.company_repository.create(company_name)
        user = await self.user_repository.create(company.id, user_data)
        self.config_service.set_current_user(user.id)
        self.logger.info("company %s created with admin %s", company.id, user.id)
        return company, user

    async def current_user(self) -> UserProfile:
        """Get the active user.

        Raises:
            NotSignedInError: If no user is active
        """
        return await self.config_service.get_current_user()

    async def invite_user(
        self, email: str, display_name: str, role: Role = Role.EMPLOYEE
    ) -> UserProfile:
        """Add a user to the active user's company (managers only)."""
        actor = await self.current_user()
        require_manager(actor, "invite users")
        user_data = UserCreate(email=email, display_name=display_name, role=role)
        user = await self.user_repository.create(actor.company_id, user_data)
        self.logger.info("user %s invited to company %s as %s", user.id, actor.company_id, role)
        return user

    async def list_users(self) -> list[UserProfile]:
        """List the users of the active user's company."""
        actor = await self.current_user()
        return await self.user_repository.list_by_company(actor.company_id)

    async def get_company(self) -> Company:
        """Get the active user's company."""
        actor = await self.current_user()
        return await self.company_repository.get(actor.company_id)

    async def update_company(self, updates: CompanyUpdate) -> Company:
        """Update the active user's company profile (managers only).

        Args:
            updates: Profile fields to change; unset fields are kept

        Returns:
            The updated company

        Raises:
            PermissionDeniedError: If the active user is not a manager
        """
        actor = await self.current_user()
        require_manager(actor, "edit the company profile")
        company = await self.company_repository.update(actor.company_id, updates)
        self.logger.info(
            "company %s profile updated: %s",
            company.id,
            ", ".join(sorted(updates.model_dump(exclude_none=True))) or "no changes",
        )
        return company

    async def switch_user(self, user_id: str) -> UserProfile:
        """Make another user the active user.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repository.get(user_id)
        self.config_service.set_current_user(user.id)
        return user


def get_account_service() -> AccountService:
    """Factory function to get an AccountService instance."""
    from projexia.services.config_service import get_config_service

    config_service = get_config_service()
    context = config_service.storage_strategy_context
    return AccountService(context.company_repository, context.user_repository, config_service)

"""Repository abstraction layer for Projexia.

This module defines the abstract base classes (interfaces) for all repository
types, following the hexagonal architecture (Ports & Adapters) pattern.

Repositories provide an abstraction over the document store, so services stay
independent of the storage backend. Every tenant-owned record is addressed
through its ``company_id``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from projexia.models import (
    Company,
    CompanyUpdate,
    Deliverable,
    DeliverableCreate,
    DeliverableUpdate,
    Expense,
    Project,
    ProjectCreate,
    ProjectUpdate,
    Role,
    Task,
    TimesheetEntry,
    TimesheetEntryCreate,
    UserCreate,
    UserProfile,
)


class CompanyRepository(ABC):
    """Abstract base class for company persistence operations."""

    @abstractmethod
    async def create(self, name: str) -> Company:
        """Create a new company.

        Args:
            name: Company name

        Returns:
            Created Company with generated ID
        """
        raise NotImplementedError(
            "CompanyRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, company_id: str) -> Company:
        """Get a company by ID.

        Raises:
            NotFoundError: If the company does not exist
        """
        raise NotImplementedError(
            "CompanyRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, company_id: str, updates: CompanyUpdate) -> Company:
        """Update the company profile.

        Args:
            company_id: Company to update
            updates: Fields to change (None fields are left as they are)

        Raises:
            NotFoundError: If the company does not exist
        """
        raise NotImplementedError(
            "CompanyRepository.update() must be implemented by adapter"
        )


class UserRepository(ABC):
    """Abstract base class for user profile persistence operations."""

    @abstractmethod
    async def create(
        self, company_id: str, user_data: UserCreate, roles: list[Role] | None = None
    ) -> UserProfile:
        """Create a user inside a company.

        Args:
            company_id: Company the user joins
            user_data: Email, display name and requested role
            roles: Explicit role list, overriding ``user_data.role``

        Returns:
            Created UserProfile

        Raises:
            ValueError: If the email is already registered
        """
        raise NotImplementedError("UserRepository.create() must be implemented by adapter")

    @abstractmethod
    async def get(self, user_id: str) -> UserProfile:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        raise NotImplementedError("UserRepository.get() must be implemented by adapter")

    @abstractmethod
    async def list_by_company(self, company_id: str) -> list[UserProfile]:
        """List the users of a company, ordered by display name."""
        raise NotImplementedError(
            "UserRepository.list_by_company() must be implemented by adapter"
        )

    @abstractmethod
    async def set_roles(self, user_id: str, roles: list[Role]) -> UserProfile:
        """Replace a user's roles."""
        raise NotImplementedError(
            "UserRepository.set_roles() must be implemented by adapter"
        )


class ProjectRepository(ABC):
    """Abstract base class for project document persistence.

    A project document embeds its ``tasks`` and ``expenses`` arrays. Arrays are
    always written back whole; ``version`` increases on every write.
    """

    @abstractmethod
    async def list_all(self, company_id: str) -> list[Project]:
        """List the projects of a company, ordered by name."""
        raise NotImplementedError(
            "ProjectRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, company_id: str, project_id: str) -> Project:
        """Get a project document.

        Raises:
            NotFoundError: If the project does not exist in the company
        """
        raise NotImplementedError(
            "ProjectRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, company_id: str, project_data: ProjectCreate) -> Project:
        """Create a project with empty task and expense arrays."""
        raise NotImplementedError(
            "ProjectRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(
        self, company_id: str, project_id: str, updates: ProjectUpdate
    ) -> Project:
        """Update scalar project fields; only provided fields change."""
        raise NotImplementedError(
            "ProjectRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, company_id: str, project_id: str) -> bool:
        """Delete a project together with its embedded tasks and expenses."""
        raise NotImplementedError(
            "ProjectRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def replace_tasks(
        self,
        company_id: str,
        project_id: str,
        tasks: list[Task],
        expected_version: int,
    ) -> Project:
        """Write the whole task array back if the document is still at ``expected_version``.

        Raises:
            ConflictError: If another writer changed the project since it was read
            NotFoundError: If the project does not exist
            StoreError: If the write fails; nothing is written in that case
        """
        raise NotImplementedError(
            "ProjectRepository.replace_tasks() must be implemented by adapter"
        )

    @abstractmethod
    async def replace_expenses(
        self,
        company_id: str,
        project_id: str,
        expenses: list[Expense],
        expected_version: int,
    ) -> Project:
        """Write the whole expense array back (same contract as ``replace_tasks``)."""
        raise NotImplementedError(
            "ProjectRepository.replace_expenses() must be implemented by adapter"
        )


class TimesheetRepository(ABC):
    """Abstract base class for timesheet entry persistence."""

    @abstractmethod
    async def add(
        self, company_id: str, user_id: str, entry: TimesheetEntryCreate
    ) -> TimesheetEntry:
        """Record a timesheet entry for a user."""
        raise NotImplementedError(
            "TimesheetRepository.add() must be implemented by adapter"
        )

    @abstractmethod
    async def list_entries(
        self,
        company_id: str,
        *,
        user_id: str | None = None,
        project_id: str | None = None,
        limit: int | None = None,
    ) -> list[TimesheetEntry]:
        """List entries, newest date first."""
        raise NotImplementedError(
            "TimesheetRepository.list_entries() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, company_id: str, entry_id: str) -> TimesheetEntry:
        """Get an entry by ID.

        Raises:
            NotFoundError: If the entry does not exist
        """
        raise NotImplementedError(
            "TimesheetRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, company_id: str, entry_id: str) -> bool:
        """Delete an entry."""
        raise NotImplementedError(
            "TimesheetRepository.delete() must be implemented by adapter"
        )


class DeliverableRepository(ABC):
    """Abstract base class for deliverable persistence."""

    @abstractmethod
    async def create(self, company_id: str, data: DeliverableCreate) -> Deliverable:
        """Create a deliverable."""
        raise NotImplementedError(
            "DeliverableRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, company_id: str, deliverable_id: str) -> Deliverable:
        """Get a deliverable by ID.

        Raises:
            NotFoundError: If the deliverable does not exist
        """
        raise NotImplementedError(
            "DeliverableRepository.get() must be implemented by adapter"
        )

    @abstractmethod
    async def update(
        self, company_id: str, deliverable_id: str, updates: DeliverableUpdate
    ) -> Deliverable:
        """Update a deliverable; only provided fields change."""
        raise NotImplementedError(
            "DeliverableRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def list_all(
        self, company_id: str, project_id: str | None = None
    ) -> list[Deliverable]:
        """List deliverables, optionally for one project."""
        raise NotImplementedError(
            "DeliverableRepository.list_all() must be implemented by adapter"
        )

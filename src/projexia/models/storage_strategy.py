"""
Strategy Pattern: Storage Strategy Container

The StorageStrategyContext holds the storage strategy chosen at startup and
hands its repositories to the services. Services never know which backend
they are talking to.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod

from projexia.repositories import (
    CompanyRepository,
    DeliverableRepository,
    ProjectRepository,
    TimesheetRepository,
    UserRepository,
)


class StorageStrategy(ABC):
    """
    Abstract base class for storage strategies.

    A strategy encapsulates ALL repository implementations for a given
    storage backend.
    """

    @abstractmethod
    def get_company_repository(self) -> CompanyRepository:
        """Get company repository implementation for this strategy."""

    @abstractmethod
    def get_user_repository(self) -> UserRepository:
        """Get user repository implementation for this strategy."""

    @abstractmethod
    def get_project_repository(self) -> ProjectRepository:
        """Get project repository implementation for this strategy."""

    @abstractmethod
    def get_timesheet_repository(self) -> TimesheetRepository:
        """Get timesheet repository implementation for this strategy."""

    @abstractmethod
    def get_deliverable_repository(self) -> DeliverableRepository:
        """Get deliverable repository implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""


class LocalStorageStrategy(StorageStrategy):
    """
    Local SQLite storage strategy.

    All repositories share one SQLite vault.
    """

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """
        Initialize local strategy.

        Args:
            db_path: Path to SQLite database file (None for the default location)
            connection: Ready connection shared by all repositories (tests)
        """
        self.db_path = db_path

        # Import here to avoid circular dependencies
        from projexia.adapters.sqlite import (
            SqliteCompanyRepository,
            SqliteDeliverableRepository,
            SqliteProjectRepository,
            SqliteTimesheetRepository,
            SqliteUserRepository,
        )

        self._company_repo = SqliteCompanyRepository(db_path=db_path, connection=connection)
        self._user_repo = SqliteUserRepository(db_path=db_path, connection=connection)
        self._project_repo = SqliteProjectRepository(db_path=db_path, connection=connection)
        self._timesheet_repo = SqliteTimesheetRepository(
            db_path=db_path, connection=connection
        )
        self._deliverable_repo = SqliteDeliverableRepository(
            db_path=db_path, connection=connection
        )

    def get_company_repository(self) -> CompanyRepository:
        return self._company_repo

    def get_user_repository(self) -> UserRepository:
        return self._user_repo

    def get_project_repository(self) -> ProjectRepository:
        return self._project_repo

    def get_timesheet_repository(self) -> TimesheetRepository:
        return self._timesheet_repo

    def get_deliverable_repository(self) -> DeliverableRepository:
        return self._deliverable_repo

    @property
    def storage_type(self) -> str:
        return "local"


class StorageStrategyContext:
    """
    Strategy context that provides access to all repositories.

    Usage:
        strategy = LocalStorageStrategy(db_path="/path/to/db")
        context = StorageStrategyContext(strategy)
        project_repo = context.project_repository
    """

    def __init__(self, strategy: StorageStrategy):
        self._strategy = strategy

    @property
    def company_repository(self) -> CompanyRepository:
        return self._strategy.get_company_repository()

    @property
    def user_repository(self) -> UserRepository:
        return self._strategy.get_user_repository()

    @property
    def project_repository(self) -> ProjectRepository:
        return self._strategy.get_project_repository()

    @property
    def timesheet_repository(self) -> TimesheetRepository:
        return self._strategy.get_timesheet_repository()

    @property
    def deliverable_repository(self) -> DeliverableRepository:
        return self._strategy.get_deliverable_repository()

    @property
    def storage_type(self) -> str:
        """Get storage type (for logging/debugging only)."""
        return self._strategy.storage_type

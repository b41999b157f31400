"""Shared test fixtures and configuration.

Provides an in-memory document store and a config service isolated in a
temporary directory, so tests never touch real user data.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import patch

import pytest
import pytest_asyncio

from projexia.adapters.sqlite.connection import create_memory_connection
from projexia.models import ProjectCreate, Role, UserCreate
from projexia.models.storage_strategy import LocalStorageStrategy, StorageStrategyContext


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def memory_db():
    """A migrated in-memory SQLite connection."""
    conn = create_memory_connection()
    yield conn
    conn.close()


@pytest.fixture()
def storage(memory_db) -> StorageStrategyContext:
    """Storage context whose repositories share the in-memory connection."""
    return StorageStrategyContext(LocalStorageStrategy(connection=memory_db))


@pytest_asyncio.fixture()
async def company(storage):
    return await storage.company_repository.create("Acme")


@pytest_asyncio.fixture()
async def admin(storage, company):
    return await storage.user_repository.create(
        company.id,
        UserCreate(email="ada@acme.com", display_name="Ada", role=Role.ADMIN),
    )


@pytest_asyncio.fixture()
async def employee(storage, company):
    return await storage.user_repository.create(
        company.id,
        UserCreate(email="eve@acme.com", display_name="Eve", role=Role.EMPLOYEE),
    )


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Clears the lru_cache so each test gets a fresh service instance.
    """
    from projexia.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    with patch(
        "projexia.services.config_service.user_config_dir", return_value=str(tmp_path)
    ):
        yield ConfigService()
    get_config_service.cache_clear()


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path):
    """Keep the application log inside the test's temporary directory."""
    import projexia.utils.logger as logger_mod

    logger_mod._logger = None
    with patch("projexia.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    for handler in list(logger_mod.logging.getLogger("projexia").handlers):
        handler.close()
        logger_mod.logging.getLogger("projexia").removeHandler(handler)
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# CLI fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def cli_config(tmp_config, storage):
    """ConfigService wired to the in-memory store and returned by every factory."""
    tmp_config._storage_strategy_context = storage
    with (
        patch("projexia.services.config_service.get_config_service", return_value=tmp_config),
        patch("projexia.commands.helpers.get_config_service", return_value=tmp_config),
        patch("projexia.commands.config.get_config_service", return_value=tmp_config),
    ):
        yield tmp_config


@pytest.fixture()
def workspace(cli_config, storage):
    """A company with an admin, an employee and one project; the admin is active."""

    async def seed() -> SimpleNamespace:
        company = await storage.company_repository.create("Acme")
        admin = await storage.user_repository.create(
            company.id, UserCreate(email="ada@acme.com", display_name="Ada", role=Role.ADMIN)
        )
        employee = await storage.user_repository.create(
            company.id, UserCreate(email="eve@acme.com", display_name="Eve")
        )
        project = await storage.project_repository.create(
            company.id, ProjectCreate(name="Bridge", budget=1000)
        )
        return SimpleNamespace(
            company=company, admin=admin, employee=employee, project=project
        )

    seeded = asyncio.run(seed())
    cli_config.set_current_user(seeded.admin.id)
    return seeded

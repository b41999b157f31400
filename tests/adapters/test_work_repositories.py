"""Tests for the timesheet and deliverable repositories."""

from __future__ import annotations

from datetime import date

import pytest
import pytest_asyncio

from projexia.exceptions import NotFoundError
from projexia.models import (
    DeliverableCreate,
    DeliverableUpdate,
    ProjectCreate,
    TimesheetEntryCreate,
    TimesheetStatus,
)


@pytest_asyncio.fixture
async def project(storage, company):
    return await storage.project_repository.create(company.id, ProjectCreate(name="Bridge"))


def _entry(project_id: str, day: int, hours: float = 1.0, billable: bool = False):
    return TimesheetEntryCreate(
        project_id=project_id,
        date=date(2024, 4, day),
        duration=hours,
        task_type="dev",
        description=f"work on day {day}",
        billable=billable,
    )


# ---------------------------------------------------------------------------
# Timesheets
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_add_and_get_entry(storage, company, admin, project):
    repo = storage.timesheet_repository
    entry = await repo.add(company.id, admin.id, _entry(project.id, 2, 1.5, billable=True))

    assert entry.duration == 1.5
    assert entry.billable is True
    assert entry.status == TimesheetStatus.PENDING
    assert (await repo.get(company.id, entry.id)) == entry


@pytest.mark.asyncio
async def test_list_entries_newest_first_with_filters(storage, company, admin, employee, project):
    repo = storage.timesheet_repository
    await repo.add(company.id, admin.id, _entry(project.id, 1))
    await repo.add(company.id, employee.id, _entry(project.id, 3))
    await repo.add(company.id, admin.id, _entry(project.id, 2))

    all_entries = await repo.list_entries(company.id)
    assert [e.date.day for e in all_entries] == [3, 2, 1]

    mine = await repo.list_entries(company.id, user_id=admin.id)
    assert [e.date.day for e in mine] == [2, 1]

    limited = await repo.list_entries(company.id, limit=1)
    assert len(limited) == 1


@pytest.mark.asyncio
async def test_delete_entry(storage, company, admin, project):
    repo = storage.timesheet_repository
    entry = await repo.add(company.id, admin.id, _entry(project.id, 1))

    assert await repo.delete(company.id, entry.id) is True
    with pytest.raises(NotFoundError):
        await repo.get(company.id, entry.id)


@pytest.mark.asyncio
async def test_entries_removed_with_project(storage, company, admin, project):
    await storage.timesheet_repository.add(company.id, admin.id, _entry(project.id, 1))
    await storage.project_repository.delete(company.id, project.id)

    assert await storage.timesheet_repository.list_entries(company.id) == []


# ---------------------------------------------------------------------------
# Deliverables
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_and_update_deliverable(storage, company, project):
    repo = storage.deliverable_repository
    deliverable = await repo.create(
        company.id,
        DeliverableCreate(project_id=project.id, name="Design doc", sprint_number=1),
    )
    assert deliverable.status == "todo"

    updated = await repo.update(
        company.id, deliverable.id, DeliverableUpdate(status="done", validation_status="ok")
    )
    assert updated.status == "done"
    assert updated.validation_status == "ok"
    assert updated.name == "Design doc"


@pytest.mark.asyncio
async def test_list_deliverables_by_sprint(storage, company, project):
    repo = storage.deliverable_repository
    await repo.create(company.id, DeliverableCreate(project_id=project.id, name="Later"))
    await repo.create(
        company.id, DeliverableCreate(project_id=project.id, name="Second", sprint_number=2)
    )
    await repo.create(
        company.id, DeliverableCreate(project_id=project.id, name="First", sprint_number=1)
    )

    names = [d.name for d in await repo.list_all(company.id, project.id)]
    assert names == ["First", "Second", "Later"]


@pytest.mark.asyncio
async def test_deliverable_missing(storage, company):
    with pytest.raises(NotFoundError):
        await storage.deliverable_repository.get(company.id, "nope")

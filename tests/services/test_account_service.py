"""Unit tests for AccountService."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from projexia.exceptions import NotFoundError, NotSignedInError, PermissionDeniedError
from projexia.models import CompanyUpdate, Role
from projexia.services.account_service import AccountService


@pytest.fixture()
def service(storage, tmp_config) -> AccountService:
    tmp_config._storage_strategy_context = storage
    return AccountService(storage.company_repository, storage.user_repository, tmp_config)


@pytest.mark.asyncio
async def test_signup_creates_admin_and_signs_in(service, tmp_config):
    company, user = await service.signup("Acme", "boss@acme.com", "Boss")

    assert user.company_id == company.id
    assert user.roles == [Role.ADMIN]
    assert tmp_config.config.current_user_id == user.id
    assert await service.current_user() == user


@pytest.mark.asyncio
async def test_signup_bad_email_leaves_nothing(service, storage, memory_db):
    with pytest.raises(ValidationError):
        await service.signup("Acme", "not-an-email", "Boss")
    assert memory_db.execute("SELECT COUNT(*) FROM companies").fetchone()[0] == 0


@pytest.mark.asyncio
async def test_signup_blank_company(service):
    with pytest.raises(ValueError, match="Company name"):
        await service.signup("  ", "boss@acme.com", "Boss")


@pytest.mark.asyncio
async def test_invite_and_list(service):
    await service.signup("Acme", "boss@acme.com", "Boss")
    invited = await service.invite_user("dev@acme.com", "Dev", Role.SCRUM_MASTER)

    assert invited.roles == [Role.SCRUM_MASTER]
    assert [u.display_name for u in await service.list_users()] == ["Boss", "Dev"]


@pytest.mark.asyncio
async def test_employee_cannot_invite(service):
    await service.signup("Acme", "boss@acme.com", "Boss")
    employee = await service.invite_user("dev@acme.com", "Dev")
    await service.switch_user(employee.id)

    with pytest.raises(PermissionDeniedError):
        await service.invite_user("x@acme.com", "X")


@pytest.mark.asyncio
async def test_list_requires_active_user(service):
    with pytest.raises(NotSignedInError):
        await service.list_users()


@pytest.mark.asyncio
async def test_switch_to_unknown_user(service):
    with pytest.raises(NotFoundError):
        await service.switch_user("ghost")


@pytest.mark.asyncio
async def test_update_company_profile(service):
    await service.signup("Acme", "boss@acme.com", "Boss")
    company = await service.update_company(
        CompanyUpdate(creation_year=1998, country="France", currency="EUR", language="fr")
    )

    assert company.name == "Acme"
    assert (company.creation_year, company.country, company.currency, company.language) == (
        1998,
        "France",
        "EUR",
        "fr",
    )
    assert await service.get_company() == company


@pytest.mark.asyncio
async def test_employee_cannot_update_company(service):
    await service.signup("Acme", "boss@acme.com", "Boss")
    employee = await service.invite_user("dev@acme.com", "Dev")
    await service.switch_user(employee.id)

    with pytest.raises(PermissionDeniedError):
        await service.update_company(CompanyUpdate(name="Mine now"))
    assert (await service.get_company()).name == "Acme"


@pytest.mark.parametrize(
    "fields",
    [{"creation_year": 1899}, {"name": "  "}, {"country": ""}, {"currency": ""}, {"language": ""}],
)
def test_company_update_validation(fields):
    with pytest.raises(ValidationError):
        CompanyUpdate(**fields)

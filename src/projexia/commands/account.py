"""Account commands - sign-up, invitations and the active user."""

import typer

from projexia.exceptions import NotSignedInError
from projexia.models import CompanyUpdate, Role
from projexia.services.account_service import get_account_service
from projexia.utils.exit_codes import ERROR_INVALID_ARGS
from projexia.utils.typer_helpers import SuggestingGroup
from projexia.utils.ui.formatters import format_output, format_success
from projexia.utils.uuid_utils import resolve_id, shorten_id

from .decorators import AppError, command_wrapper
from .helpers import resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Account and user commands")


def _parse_role(value: str) -> Role:
    try:
        return Role(value.strip().lower().replace("_", "-"))
    except ValueError as e:
        choices = ", ".join(role.value for role in Role)
        raise AppError(f"Invalid role '{value}'. Choose from: {choices}", ERROR_INVALID_ARGS) from e


def _company_row(company) -> dict:
    return {
        "id": company.id,
        "name": company.name,
        "creation_year": company.creation_year,
        "country": company.country,
        "currency": company.currency,
        "language": company.language,
    }


def _user_row(user) -> dict:
    return {
        "id": user.id,
        "display_name": user.display_name,
        "email": user.email,
        "roles": [role.value for role in user.roles],
    }


@app.command("signup")
@command_wrapper
async def signup(
    company: str = typer.Option(..., "--company", "-c", prompt=True, help="Company name"),
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Your email"),
    name: str = typer.Option(..., "--name", "-n", prompt=True, help="Your display name"),
) -> None:
    """Create a company and become its first admin."""
    account_service = get_account_service()
    created_company, user = await account_service.signup(company, email, name)
    format_success(
        f"Company '{created_company.name}' created; signed in as {user.display_name} (admin)"
    )


@app.command("invite")
@command_wrapper
async def invite(
    email: str = typer.Argument(..., help="Email of the new user"),
    name: str = typer.Argument(..., help="Display name of the new user"),
    role: str = typer.Option("employee", "--role", "-r", help="admin, scrum-master or employee"),
) -> None:
    """Add a user to your company."""
    account_service = get_account_service()
    user = await account_service.invite_user(email, name, _parse_role(role))
    format_success(f"User {user.display_name} added: {shorten_id(user.id)}")


@app.command("users")
@command_wrapper
async def list_users(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List the users of your company."""
    account_service = get_account_service()
    users = await account_service.list_users()
    format_output({"users": [_user_row(u) for u in users]}, resolve_output_format(output))


@app.command("whoami")
@command_wrapper
async def whoami(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show the active user."""
    account_service = get_account_service()
    user = await account_service.current_user()
    company = await account_service.get_company()
    details = _user_row(user)
    details["company"] = company.name
    format_output(details, resolve_output_format(output))


@app.command("switch")
@command_wrapper
async def switch(
    user: str = typer.Argument(..., help="User ID, ID prefix or display name"),
) -> None:
    """Act as another user of your company."""
    account_service = get_account_service()
    try:
        users = await account_service.list_users()
        user_id = resolve_id(user, users, "user")
    except NotSignedInError:
        # Nobody active yet: only a full user ID can be resolved
        user_id = user
    switched = await account_service.switch_user(user_id)
    format_success(f"Now acting as {switched.display_name}")


@app.command("company")
@command_wrapper
async def company_profile(
    name: str | None = typer.Option(None, "--name", help="Company name"),
    creation_year: int | None = typer.Option(None, "--year", help="Year the company was founded"),
    country: str | None = typer.Option(None, "--country", help="Country"),
    currency: str | None = typer.Option(None, "--currency", help="Currency, e.g. EUR"),
    language: str | None = typer.Option(None, "--language", help="Preferred language"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show the company profile, or update it when any field is given."""
    account_service = get_account_service()
    updates = CompanyUpdate(
        name=name,
        creation_year=creation_year,
        country=country,
        currency=currency,
        language=language,
    )
    if not updates.model_dump(exclude_none=True):
        company = await account_service.get_company()
        format_output(_company_row(company), resolve_output_format(output))
        return

    company = await account_service.update_company(updates)
    format_success(f"Company profile of '{company.name}' updated")

"""Project management commands."""

import typer

from projexia.models import Project, ProjectStatus
from projexia.services.project_service import ProjectService, get_project_service
from projexia.utils.exit_codes import ERROR_INVALID_ARGS
from projexia.utils.typer_helpers import SuggestingGroup
from projexia.utils.ui.formatters import format_output, format_success, format_warning
from projexia.utils.uuid_utils import resolve_id, shorten_id

from .decorators import AppError, command_wrapper
from .helpers import parse_date, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


async def _resolve_project(project_service: ProjectService, project_ref: str) -> str:
    projects = await project_service.list_projects()
    return resolve_id(project_ref, projects, "project")


def _parse_status(value: str | None) -> ProjectStatus | None:
    if value is None:
        return None
    try:
        return ProjectStatus(value.strip().lower().replace(" ", "_").replace("-", "_"))
    except ValueError as e:
        choices = ", ".join(status.value for status in ProjectStatus)
        raise AppError(
            f"Invalid status '{value}'. Choose from: {choices}", ERROR_INVALID_ARGS
        ) from e


def project_summary(project: Project) -> dict:
    """Project fields shown in listings (without the embedded arrays)."""
    data = project.model_dump(mode="json", exclude={"tasks", "expenses", "company_id"})
    data["progress"] = round(ProjectService.progress(project), 1)
    data["task_count"] = len(project.tasks)
    return data


@app.command("list")
@command_wrapper
async def list_projects(
    status: str | None = typer.Option(None, "--status", "-s", help="Filter by status"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List the company's projects with their progress."""
    project_service = await get_project_service()

    projects = await project_service.list_projects(status=_parse_status(status))
    result = {"projects": [project_summary(p) for p in projects]}
    format_output(result, resolve_output_format(output))


@app.command("show")
@command_wrapper
async def show_project(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show project details."""
    project_service = await get_project_service()

    project_id = await _resolve_project(project_service, project)
    project_doc = await project_service.get_project(project_id)

    details = project_summary(project_doc)
    details["status_label"] = project_doc.status.label
    details.update(ProjectService.budget_summary(project_doc))
    format_output(details, resolve_output_format(output))


@app.command("create")
@command_wrapper
async def create_project(
    name: str = typer.Argument(..., help="Project name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    goals: str = typer.Option("", "--goals", help="Goals"),
    budget: float = typer.Option(0.0, "--budget", "-b", help="Total budget"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD)"),
    end: str | None = typer.Option(None, "--end", help="End date (YYYY-MM-DD)"),
    status: str = typer.Option("not_started", "--status", "-s", help="Initial status"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Create a new project."""
    project_service = await get_project_service()

    project = await project_service.create_project(
        name,
        description=description,
        goals=goals,
        budget=budget,
        start_date=parse_date(start, "--start"),
        end_date=parse_date(end, "--end"),
        status=_parse_status(status),
    )
    format_success(f"Project created: {shorten_id(project.id)}")
    format_output(project_summary(project), resolve_output_format(output))


@app.command("update")
@command_wrapper
async def update_project(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    name: str | None = typer.Option(None, "--name", help="Project name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    goals: str | None = typer.Option(None, "--goals", help="Goals"),
    budget: float | None = typer.Option(None, "--budget", "-b", help="Total budget"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD)"),
    end: str | None = typer.Option(None, "--end", help="End date (YYYY-MM-DD)"),
    status: str | None = typer.Option(None, "--status", "-s", help="Status"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Update a project."""
    if all(v is None for v in (name, description, goals, budget, start, end, status)):
        raise AppError("No updates specified", ERROR_INVALID_ARGS)

    project_service = await get_project_service()

    project_id = await _resolve_project(project_service, project)
    updated = await project_service.update_project(
        project_id,
        name=name,
        description=description,
        goals=goals,
        budget=budget,
        start_date=parse_date(start, "--start"),
        end_date=parse_date(end, "--end"),
        status=_parse_status(status),
    )
    format_success(f"Project updated: {shorten_id(project_id)}")
    format_output(project_summary(updated), resolve_output_format(output))


@app.command("delete")
@command_wrapper
async def delete_project(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project with all of its tasks and expenses."""
    project_service = await get_project_service()
    project_id = await _resolve_project(project_service, project)

    if not yes and not typer.confirm(
        f"Are you sure you want to delete project {shorten_id(project_id)}?"
    ):
        format_warning("Cancelled")
        raise typer.Exit(0)

    await project_service.delete_project(project_id)
    format_success(f"Project deleted: {shorten_id(project_id)}")


@app.command("expense")
@command_wrapper
async def add_expense(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    item: str = typer.Argument(..., help="What the money was spent on"),
    amount: float = typer.Argument(..., help="Amount spent"),
    date: str | None = typer.Option(None, "--date", help="Expense date (default today)"),
) -> None:
    """Record an expense against a project's budget."""
    project_service = await get_project_service()
    project_id = await _resolve_project(project_service, project)

    expense = await project_service.add_expense(
        project_id, item, amount, expense_date=parse_date(date)
    )
    format_success(f"Expense recorded: {expense.item} ({expense.amount:,.2f})")


@app.command("budget")
@command_wrapper
async def show_budget(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show budget, spending and the list of expenses."""
    project_service = await get_project_service()
    project_id = await _resolve_project(project_service, project)
    project_doc = await project_service.get_project(project_id)

    result = ProjectService.budget_summary(project_doc)
    result["percent_used"] = round(result["percent_used"], 1)
    result["items"] = [e.model_dump(mode="json") for e in project_doc.expenses]
    output_format = resolve_output_format(output)
    if output_format in ("json", "yaml"):
        format_output(result, output_format)
        return

    expenses = result.pop("items")
    format_output(result, output_format)
    if expenses:
        format_output({"items": expenses}, "table")

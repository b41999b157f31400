"""Timesheet commands."""

import typer

from projexia.models import Project
from projexia.services.project_service import get_project_service
from projexia.services.timesheet_service import (
    TimesheetService,
    format_hours,
    get_timesheet_service,
)
from projexia.utils.typer_helpers import SuggestingGroup
from projexia.utils.ui.formatters import format_output, format_success, format_warning
from projexia.utils.uuid_utils import resolve_id, shorten_id

from .decorators import command_wrapper
from .helpers import parse_date, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Timesheet commands")


async def _list_projects() -> list[Project]:
    project_service = await get_project_service()
    return await project_service.list_projects()


@app.command("log")
@command_wrapper
async def log_time(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    hours: float = typer.Argument(..., help="Duration in hours (e.g. 1.5)"),
    task_type: str = typer.Option(..., "--type", "-t", help="Kind of work"),
    description: str = typer.Option(..., "--description", "-d", help="What was done"),
    date: str | None = typer.Option(None, "--date", help="Day worked (default today)"),
    deliverable: str | None = typer.Option(None, "--deliverable", help="Deliverable ID"),
    billable: bool = typer.Option(False, "--billable", help="Billable time"),
) -> None:
    """Log time against a project."""
    projects = await _list_projects()
    names = {p.id: p.name for p in projects}
    project_id = resolve_id(project, projects, "project")

    timesheet_service = await get_timesheet_service()
    entry = await timesheet_service.log_time(
        project_id,
        hours,
        task_type,
        description,
        entry_date=parse_date(date),
        deliverable_id=deliverable,
        billable=billable,
    )
    format_success(
        f"Logged {format_hours(entry.duration)} on {names[project_id]} "
        f"({entry.date.isoformat()})"
    )


@app.command("list")
@command_wrapper
async def list_entries(
    project: str | None = typer.Option(None, "--project", "-p", help="Filter by project"),
    user: str | None = typer.Option(None, "--user", "-u", help="Filter by user ID"),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum entries"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List timesheet entries, newest first."""
    projects = await _list_projects()
    names = {p.id: p.name for p in projects}
    project_id = resolve_id(project, projects, "project") if project else None

    timesheet_service = await get_timesheet_service()
    entries = await timesheet_service.list_entries(
        user_id=user, project_id=project_id, limit=limit
    )

    rows = [
        {
            "id": shorten_id(e.id),
            "date": e.date.isoformat(),
            "project": names.get(e.project_id, e.project_id),
            "duration": format_hours(e.duration),
            "task_type": e.task_type,
            "description": e.description,
            "billable": e.billable,
            "status": e.status.value,
        }
        for e in entries
    ]
    output_format = resolve_output_format(output)
    if output_format == "pretty":
        output_format = "table"
    format_output({"entries": rows}, output_format)


@app.command("delete")
@command_wrapper
async def delete_entry(
    entry: str = typer.Argument(..., help="Entry ID or ID prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a timesheet entry."""
    timesheet_service = await get_timesheet_service()
    entries = await timesheet_service.list_entries()
    entry_id = resolve_id(entry, entries, "entry")

    if not yes and not typer.confirm(f"Delete entry {shorten_id(entry_id)}?"):
        format_warning("Cancelled")
        raise typer.Exit(0)

    await timesheet_service.delete_entry(entry_id)
    format_success(f"Entry deleted: {shorten_id(entry_id)}")


@app.command("summary")
@command_wrapper
async def summary(
    user: str | None = typer.Option(None, "--user", "-u", help="Filter by user ID"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Total and billable hours per project."""
    names = {p.id: p.name for p in await _list_projects()}
    timesheet_service = await get_timesheet_service()
    entries = await timesheet_service.list_entries(user_id=user)
    totals = TimesheetService.summary(entries)

    output_format = resolve_output_format(output)
    if output_format in ("json", "yaml"):
        format_output(totals, output_format)
        return

    rows = [
        {
            "project": names.get(project_id, project_id),
            "hours": format_hours(bucket["hours"]),
            "billable": format_hours(bucket["billable_hours"]),
        }
        for project_id, bucket in totals["per_project"].items()
    ]
    format_output(
        {
            "total": format_hours(totals["total_hours"]),
            "billable": format_hours(totals["billable_hours"]),
            "entries": totals["entry_count"],
        },
        "pretty",
    )
    if rows:
        format_output({"items": rows}, "table")

"""Deliverable commands."""

import typer

from projexia.models import DeliverableCreate, DeliverableUpdate
from projexia.services.deliverable_service import get_deliverable_service
from projexia.services.project_service import get_project_service
from projexia.utils.exit_codes import ERROR_INVALID_ARGS
from projexia.utils.typer_helpers import SuggestingGroup
from projexia.utils.ui.formatters import format_output, format_success
from projexia.utils.uuid_utils import resolve_id, shorten_id

from .decorators import AppError, command_wrapper
from .helpers import resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Deliverable commands")

_LIST_FIELDS = ("id", "name", "status", "type", "sprint_number", "validation_status")


async def _resolve_project(project_ref: str) -> str:
    project_service = await get_project_service()
    return resolve_id(project_ref, await project_service.list_projects(), "project")


@app.command("list")
@command_wrapper
async def list_deliverables(
    project: str | None = typer.Option(None, "--project", "-p", help="Filter by project"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List deliverables."""
    project_id = await _resolve_project(project) if project else None
    deliverable_service = await get_deliverable_service()
    deliverables = await deliverable_service.list_deliverables(project_id)

    output_format = resolve_output_format(output)
    if output_format in ("json", "yaml"):
        rows = [d.model_dump(mode="json") for d in deliverables]
    else:
        rows = [d.model_dump(mode="json", include=set(_LIST_FIELDS)) for d in deliverables]
        for row in rows:
            row["id"] = shorten_id(row["id"])
        output_format = "table"
    format_output({"deliverables": rows}, output_format)


@app.command("create")
@command_wrapper
async def create_deliverable(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    name: str = typer.Argument(..., help="Deliverable name"),
    status: str = typer.Option("todo", "--status", help="Status"),
    kind: str | None = typer.Option(None, "--type", help="Deliverable type"),
    sprint: int | None = typer.Option(None, "--sprint", help="Sprint number"),
    phase: str | None = typer.Option(None, "--phase", help="Project phase"),
    criteria: str | None = typer.Option(None, "--criteria", help="Acceptance criteria"),
) -> None:
    """Create a deliverable for a project."""
    project_id = await _resolve_project(project)
    deliverable_service = await get_deliverable_service()

    deliverable = await deliverable_service.create_deliverable(
        DeliverableCreate(
            project_id=project_id,
            name=name,
            status=status,
            type=kind,
            sprint_number=sprint,
            project_phase=phase,
            acceptance_criteria=criteria,
        )
    )
    format_success(f"Deliverable created: {shorten_id(deliverable.id)}")


@app.command("update")
@command_wrapper
async def update_deliverable(
    deliverable: str = typer.Argument(..., help="Deliverable ID or name"),
    name: str | None = typer.Option(None, "--name", help="Deliverable name"),
    status: str | None = typer.Option(None, "--status", help="Status"),
    kind: str | None = typer.Option(None, "--type", help="Deliverable type"),
    sprint: int | None = typer.Option(None, "--sprint", help="Sprint number"),
    phase: str | None = typer.Option(None, "--phase", help="Project phase"),
    criteria: str | None = typer.Option(None, "--criteria", help="Acceptance criteria"),
    validation: str | None = typer.Option(None, "--validation", help="Validation status"),
) -> None:
    """Update a deliverable."""
    values = {
        "name": name,
        "status": status,
        "type": kind,
        "sprint_number": sprint,
        "project_phase": phase,
        "acceptance_criteria": criteria,
        "validation_status": validation,
    }
    if all(v is None for v in values.values()):
        raise AppError("No updates specified", ERROR_INVALID_ARGS)

    deliverable_service = await get_deliverable_service()
    deliverable_id = resolve_id(
        deliverable, await deliverable_service.list_deliverables(), "deliverable"
    )
    updated = await deliverable_service.update_deliverable(
        deliverable_id, DeliverableUpdate(**values)
    )
    format_success(f"Deliverable updated: {updated.name} [{updated.status}]")

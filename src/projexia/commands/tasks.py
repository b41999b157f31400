"""Task hierarchy commands."""

import typer

from projexia.services.account_service import get_account_service
from projexia.services.task_service import get_task_service
from projexia.utils.exit_codes import ERROR_INVALID_ARGS
from projexia.utils.task_tree import TaskNode
from projexia.utils.typer_helpers import SuggestingGroup
from projexia.utils.ui.formatters import format_output, format_success, format_warning
from projexia.utils.uuid_utils import resolve_id, shorten_id

from .decorators import AppError, command_wrapper
from .helpers import parse_date, resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


async def _resolve_project(task_service, project_ref: str) -> str:
    projects = await task_service.repository.list_all(task_service.company_id)
    return resolve_id(project_ref, projects, "project")


async def _resolve_task(task_service, project_id: str, task_ref: str) -> str:
    project = await task_service.get_project(project_id)
    return resolve_id(task_ref, project.tasks, "task")


async def _resolve_user(user_ref: str) -> str:
    users = await get_account_service().list_users()
    return resolve_id(user_ref, users, "user")


def node_to_dict(node: TaskNode, user_names: dict[str, str]) -> dict:
    """Flatten a tree node for the formatters."""
    task = node.task
    return {
        "id": task.id,
        "name": task.name,
        "completed": task.completed,
        "level": node.level,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "assignee": user_names.get(task.assignee_id, task.assignee_id)
        if task.assignee_id
        else None,
        "parent_id": task.parent_id,
    }


@app.command("tree")
@command_wrapper
async def show_tree(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show a project's tasks as an indented tree."""
    task_service = await get_task_service()
    project_id = await _resolve_project(task_service, project)

    project_doc = await task_service.get_project(project_id)
    nodes = await task_service.list_tree(project_id)
    users = await get_account_service().list_users()
    user_names = {user.id: user.display_name for user in users}

    result = {
        "project_id": project_id,
        "project_name": project_doc.name,
        "nodes": [node_to_dict(node, user_names) for node in nodes],
    }
    format_output(result, resolve_output_format(output))


@app.command("add")
@command_wrapper
async def add_task(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    name: str = typer.Argument(..., help="Task name"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD, default today)"),
    assignee: str | None = typer.Option(None, "--assignee", "-a", help="User ID or name"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Add a root task to a project."""
    task_service = await get_task_service()
    project_id = await _resolve_project(task_service, project)
    assignee_id = await _resolve_user(assignee) if assignee else None

    task = await task_service.add_task(
        project_id, name, due_date=parse_date(due, "--due"), assignee_id=assignee_id
    )
    format_success(f"Task added: {shorten_id(task.id)}")
    format_output(task.model_dump(mode="json"), resolve_output_format(output))


@app.command("subtask")
@command_wrapper
async def add_subtask(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    parent: str = typer.Argument(..., help="Parent task ID, ID prefix or name"),
    name: str = typer.Argument(..., help="Subtask name"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD, default today)"),
    assignee: str | None = typer.Option(None, "--assignee", "-a", help="User ID or name"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Add a subtask under an existing task."""
    task_service = await get_task_service()
    project_id = await _resolve_project(task_service, project)
    parent_id = await _resolve_task(task_service, project_id, parent)
    assignee_id = await _resolve_user(assignee) if assignee else None

    task = await task_service.add_subtask(
        project_id,
        parent_id,
        name,
        due_date=parse_date(due, "--due"),
        assignee_id=assignee_id,
    )
    format_success(f"Subtask added: {shorten_id(task.id)} under {shorten_id(parent_id)}")
    format_output(task.model_dump(mode="json"), resolve_output_format(output))


@app.command("toggle")
@command_wrapper
async def toggle_task(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    task: str = typer.Argument(..., help="Task ID, ID prefix or name"),
    done: bool | None = typer.Option(
        None, "--done/--undone", help="Set the status instead of flipping it"
    ),
) -> None:
    """Flip a task between done and not done."""
    task_service = await get_task_service()
    project_id = await _resolve_project(task_service, project)
    task_id = await _resolve_task(task_service, project_id, task)

    if done is None:
        updated = await task_service.toggle_task(project_id, task_id)
    else:
        updated = await task_service.set_completed(project_id, task_id, done)

    if updated is None:
        format_warning(f"Task {shorten_id(task_id)} no longer exists")
        return
    state = "done" if updated.completed else "not done"
    format_success(f"Task '{updated.name}' marked {state}")


@app.command("assign")
@command_wrapper
async def assign_task(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    task: str = typer.Argument(..., help="Task ID, ID prefix or name"),
    user: str | None = typer.Argument(None, help="User ID or name (omit with --unassign)"),
    unassign: bool = typer.Option(False, "--unassign", help="Remove the assignee"),
) -> None:
    """Assign a task to a user."""
    if user is None and not unassign:
        raise AppError("Give a user or use --unassign", ERROR_INVALID_ARGS)

    task_service = await get_task_service()
    project_id = await _resolve_project(task_service, project)
    task_id = await _resolve_task(task_service, project_id, task)
    assignee_id = None if unassign else await _resolve_user(user)

    updated = await task_service.assign_task(project_id, task_id, assignee_id)
    if updated is None:
        format_warning(f"Task {shorten_id(task_id)} no longer exists")
        return
    if assignee_id is None:
        format_success(f"Task '{updated.name}' unassigned")
    else:
        format_success(f"Task '{updated.name}' assigned to {shorten_id(assignee_id)}")


@app.command("rename")
@command_wrapper
async def rename_task(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    task: str = typer.Argument(..., help="Task ID, ID prefix or name"),
    name: str = typer.Argument(..., help="New name"),
) -> None:
    """Rename a task."""
    task_service = await get_task_service()
    project_id = await _resolve_project(task_service, project)
    task_id = await _resolve_task(task_service, project_id, task)

    updated = await task_service.rename_task(project_id, task_id, name)
    if updated is None:
        format_warning(f"Task {shorten_id(task_id)} no longer exists")
        return
    format_success(f"Task renamed to '{updated.name}'")


@app.command("remove")
@command_wrapper
async def remove_task(
    project: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    task: str = typer.Argument(..., help="Task ID, ID prefix or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Remove a task together with all of its subtasks."""
    task_service = await get_task_service()
    project_id = await _resolve_project(task_service, project)
    task_id = await _resolve_task(task_service, project_id, task)

    if not yes and not typer.confirm(
        f"Remove task {shorten_id(task_id)} and all of its subtasks?"
    ):
        format_warning("Cancelled")
        raise typer.Exit(0)

    removed = await task_service.remove_task(project_id, task_id)
    if not removed:
        format_warning(f"Task {shorten_id(task_id)} no longer exists")
        return
    format_success(f"Removed {len(removed)} task(s)")

"""Tests for project and budget commands."""

import asyncio
import json

from typer.testing import CliRunner

from projexia.commands.projects import app

runner = CliRunner()


def _get(storage, workspace, project_id=None):
    return asyncio.run(
        storage.project_repository.get(workspace.company.id, project_id or workspace.project.id)
    )


def test_list_json(workspace):
    result = runner.invoke(app, ["list", "-o", "json"])

    assert result.exit_code == 0, result.output
    [project] = json.loads(result.output)["projects"]
    assert project["name"] == "Bridge"
    assert project["progress"] == 0.0
    assert project["task_count"] == 0
    assert "tasks" not in project


def test_list_invalid_status(workspace):
    result = runner.invoke(app, ["list", "--status", "sleeping"])
    assert result.exit_code == 2
    assert "Invalid status" in result.output


def test_create_and_show(workspace):
    result = runner.invoke(
        app,
        ["create", "Tower", "--budget", "250", "--start", "2024-01-01", "--status", "in-progress"],
    )
    assert result.exit_code == 0, result.output
    assert "Project created" in result.output

    result = runner.invoke(app, ["show", "Tower", "-o", "json"])
    data = json.loads(result.output)
    assert data["status"] == "in_progress"
    assert data["status_label"] == "In progress"
    assert data["remaining"] == 250.0


def test_create_with_reversed_dates(workspace):
    result = runner.invoke(
        app, ["create", "Tower", "--start", "2024-06-01", "--end", "2024-01-01"]
    )
    assert result.exit_code == 2
    assert "end_date must not be before start_date" in result.output


def test_update(workspace, storage):
    result = runner.invoke(app, ["update", "Bridge", "--status", "on_hold"])
    assert result.exit_code == 0, result.output
    assert _get(storage, workspace).status == "on_hold"


def test_update_without_options(workspace):
    result = runner.invoke(app, ["update", "Bridge"])
    assert result.exit_code == 2
    assert "No updates specified" in result.output


def test_employee_cannot_create(workspace, cli_config):
    cli_config.set_current_user(workspace.employee.id)
    result = runner.invoke(app, ["create", "Mine"])
    assert result.exit_code == 6
    assert "Only admins and scrum-masters" in result.output


def test_expense_and_budget(workspace):
    result = runner.invoke(app, ["expense", "Bridge", "Steel", "400", "--date", "2024-02-02"])
    assert result.exit_code == 0, result.output
    assert "Expense recorded: Steel" in result.output

    result = runner.invoke(app, ["budget", "Bridge", "-o", "json"])
    data = json.loads(result.output)
    assert data["spent"] == 400.0
    assert data["remaining"] == 600.0
    assert data["percent_used"] == 40.0
    assert data["items"][0]["item"] == "Steel"


def test_delete_with_confirmation(workspace, storage):
    result = runner.invoke(app, ["delete", "Bridge"], input="y\n")
    assert result.exit_code == 0, result.output
    assert asyncio.run(storage.project_repository.list_all(workspace.company.id)) == []

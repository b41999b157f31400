"""Tests for timesheet commands."""

import json

from typer.testing import CliRunner

from projexia.commands.timesheet import app

runner = CliRunner()


def _log(*extra):
    return runner.invoke(
        app, ["log", "Bridge", "1.5", "--type", "dev", "--description", "Wiring", *extra]
    )


def test_log(workspace):
    result = _log("--date", "2024-03-04", "--billable")
    assert result.exit_code == 0, result.output
    assert "Logged 1h 30m on Bridge (2024-03-04)" in result.output


def test_log_non_positive_hours(workspace):
    result = runner.invoke(app, ["log", "Bridge", "0", "-t", "dev", "-d", "Nothing"])
    assert result.exit_code == 2


def test_list_json(workspace):
    _log("--date", "2024-03-04")
    _log("--date", "2024-03-05", "--billable")

    result = runner.invoke(app, ["list", "-o", "json"])
    entries = json.loads(result.output)["entries"]
    assert [e["date"] for e in entries] == ["2024-03-05", "2024-03-04"]
    assert entries[0]["project"] == "Bridge"
    assert entries[0]["duration"] == "1h 30m"


def test_summary_json(workspace):
    _log()
    _log("--billable")

    result = runner.invoke(app, ["summary", "-o", "json"])
    data = json.loads(result.output)
    assert data["total_hours"] == 3.0
    assert data["billable_hours"] == 1.5
    assert data["per_project"][workspace.project.id]["hours"] == 3.0


def test_summary_pretty(workspace):
    _log()
    result = runner.invoke(app, ["summary", "-o", "pretty"])
    assert result.exit_code == 0, result.output
    assert "1h 30m" in result.output


def test_delete(workspace):
    _log()
    entry_id = json.loads(runner.invoke(app, ["list", "-o", "json"]).output)["entries"][0]["id"]

    result = runner.invoke(app, ["delete", entry_id, "--yes"])
    assert result.exit_code == 0, result.output
    assert json.loads(runner.invoke(app, ["list", "-o", "json"]).output)["entries"] == []

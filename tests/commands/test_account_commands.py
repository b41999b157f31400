"""Tests for account commands."""

import json

from typer.testing import CliRunner

from projexia.commands.account import app

runner = CliRunner()


def test_signup_then_whoami(cli_config):
    result = runner.invoke(
        app, ["signup", "--company", "Initech", "--email", "pm@initech.com", "--name", "Peter"]
    )
    assert result.exit_code == 0, result.output
    assert "signed in as Peter (admin)" in result.output

    result = runner.invoke(app, ["whoami", "-o", "json"])
    data = json.loads(result.output)
    assert data["company"] == "Initech"
    assert data["roles"] == ["admin"]


def test_signup_prompts(cli_config):
    result = runner.invoke(app, ["signup"], input="Initech\npm@initech.com\nPeter\n")
    assert result.exit_code == 0, result.output


def test_signup_duplicate_email(workspace):
    result = runner.invoke(
        app, ["signup", "-c", "Other", "-e", "ada@acme.com", "-n", "Ada again"]
    )
    assert result.exit_code == 2
    assert "already exists" in result.output


def test_invite_and_users(workspace):
    result = runner.invoke(app, ["invite", "sam@acme.com", "Sam", "--role", "scrum_master"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["users", "-o", "json"])
    users = json.loads(result.output)["users"]
    assert [u["display_name"] for u in users] == ["Ada", "Eve", "Sam"]
    assert users[2]["roles"] == ["scrum-master"]


def test_invite_invalid_role(workspace):
    result = runner.invoke(app, ["invite", "sam@acme.com", "Sam", "--role", "boss"])
    assert result.exit_code == 2
    assert "Invalid role" in result.output


def test_switch_by_name(workspace, cli_config):
    result = runner.invoke(app, ["switch", "Eve"])
    assert result.exit_code == 0, result.output
    assert cli_config.config.current_user_id == workspace.employee.id


def test_switch_when_nobody_active(workspace, cli_config):
    cli_config.set_current_user(None)
    result = runner.invoke(app, ["switch", workspace.employee.id])
    assert result.exit_code == 0, result.output


def test_whoami_not_signed_in(cli_config):
    result = runner.invoke(app, ["whoami"])
    assert result.exit_code == 3


def test_company_update_then_show(workspace):
    result = runner.invoke(
        app,
        ["company", "--year", "1998", "--country", "France", "--currency", "EUR", "--language", "fr"],
    )
    assert result.exit_code == 0, result.output
    assert "Company profile of 'Acme' updated" in result.output

    result = runner.invoke(app, ["company", "-o", "json"])
    data = json.loads(result.output)
    assert data["name"] == "Acme"
    assert data["creation_year"] == 1998
    assert data["country"] == "France"
    assert data["currency"] == "EUR"
    assert data["language"] == "fr"


def test_company_year_too_early(workspace):
    result = runner.invoke(app, ["company", "--year", "1850"])
    assert result.exit_code == 2


def test_company_update_employee_denied(workspace, cli_config):
    cli_config.set_current_user(workspace.employee.id)
    result = runner.invoke(app, ["company", "--name", "Eve Inc"])
    assert result.exit_code == 6

"""Tests for configuration commands."""

from typer.testing import CliRunner

from projexia.commands.config import app

runner = CliRunner()


def test_show_all_yaml(cli_config):
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 0, result.output
    assert "model: gemini-1.5-flash" in result.output
    assert "conflict_retries: 3" in result.output


def test_show_single_value(cli_config):
    result = runner.invoke(app, ["show", "ai.api_key_env"])
    assert result.exit_code == 0
    assert "GOOGLE_API_KEY" in result.output


def test_show_unknown_key(cli_config):
    result = runner.invoke(app, ["show", "ai.nope"])
    assert result.exit_code == 2
    assert "not found" in result.output


def test_set_value(cli_config):
    result = runner.invoke(app, ["set", "store.conflict_retries", "5"])

    assert result.exit_code == 0, result.output
    assert cli_config.config.store.conflict_retries == 5


def test_set_none_clears(cli_config):
    runner.invoke(app, ["set", "store.db_path", "/tmp/x.db"])
    result = runner.invoke(app, ["set", "store.db_path", "none"])

    assert result.exit_code == 0
    assert cli_config.config.store.db_path is None


def test_set_invalid_value(cli_config):
    result = runner.invoke(app, ["set", "output.format", "xml"])
    assert result.exit_code == 2
    assert "output.format" in result.output

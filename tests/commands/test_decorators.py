"""Unit tests for command decorators."""

import pytest
import typer
from pydantic import BaseModel, Field, ValidationError
from typer.testing import CliRunner

from projexia.commands.decorators import (
    AppError,
    command_wrapper,
    exit_code_for,
    validation_message,
)
from projexia.exceptions import (
    ConflictError,
    ImpactGenerationError,
    NotFoundError,
    NotSignedInError,
    PermissionDeniedError,
    StoreError,
)

runner = CliRunner()


class _Form(BaseModel):
    name: str = Field(min_length=1)


def _app(func) -> typer.Typer:
    app = typer.Typer()
    app.command()(command_wrapper(func))
    # A second command keeps typer from collapsing the app into a single command
    app.command("noop")(lambda: None)
    return app


@pytest.mark.parametrize(
    "error, code",
    [
        (NotSignedInError("x"), 3),
        (NotFoundError("x"), 5),
        (PermissionDeniedError("x"), 6),
        (ConflictError("x"), 7),
        (StoreError("x"), 1),
        (ImpactGenerationError("x"), 4),
        (ValueError("x"), 2),
        (RuntimeError("x"), None),
    ],
)
def test_exit_code_for(error, code):
    assert exit_code_for(error) == code


def test_validation_message():
    with pytest.raises(ValidationError) as exc_info:
        _Form(name="")
    assert validation_message(exc_info.value).startswith("name: String should have at least")


def test_sync_command_runs():
    def hello():
        print("hi")

    result = runner.invoke(_app(hello), ["hello"])
    assert result.exit_code == 0
    assert "hi" in result.output


def test_async_command_runs():
    async def hello():
        print("async hi")

    result = runner.invoke(_app(hello), ["hello"])
    assert result.exit_code == 0
    assert "async hi" in result.output


def test_app_error_exit_code():
    async def fail():
        raise AppError("bad input", 2)

    result = runner.invoke(_app(fail), ["fail"])
    assert result.exit_code == 2
    assert "Error: bad input" in result.output


def test_domain_error_mapped():
    async def fail():
        raise PermissionDeniedError("not allowed")

    result = runner.invoke(_app(fail), ["fail"])
    assert result.exit_code == 6
    assert "not allowed" in result.output


def test_validation_error_mapped():
    def fail():
        _Form(name="")

    result = runner.invoke(_app(fail), ["fail"])
    assert result.exit_code == 2
    assert "name:" in result.output


def test_unexpected_error():
    def fail():
        raise RuntimeError("kaboom")

    result = runner.invoke(_app(fail), ["fail"])
    assert result.exit_code == 1
    assert "An unexpected error occurred: kaboom" in result.output


def test_typer_exit_passes_through():
    def stop():
        raise typer.Exit(0)

    result = runner.invoke(_app(stop), ["stop"])
    assert result.exit_code == 0


def test_failures_are_logged(tmp_path):
    async def fail():
        raise NotFoundError("missing thing")

    runner.invoke(_app(fail), ["fail"])
    log_text = (tmp_path / "logs" / "projexia.log").read_text()
    assert "command failed: fail" in log_text
    assert "[ERROR_NOT_FOUND] missing thing" in log_text

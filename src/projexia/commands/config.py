"""Configuration management commands."""

import typer

from projexia.services.config_service import get_config_service
from projexia.utils.exit_codes import ERROR_INVALID_ARGS
from projexia.utils.typer_helpers import SuggestingGroup
from projexia.utils.ui.console import get_console
from projexia.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("show")
@command_wrapper
def show_config(
    key: str | None = typer.Argument(None, help="Configuration key (e.g., ai.model)"),
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """Show the configuration, or one value of it."""
    config_service = get_config_service()
    if key is None:
        format_output(config_service.config.model_dump(mode="json"), output)
        console.print(f"[dim]{config_service.config_path}[/dim]")
        return

    try:
        value = config_service.get_value(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e
    if hasattr(value, "model_dump"):
        format_output(value.model_dump(mode="json"), output)
    else:
        console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., ai.model)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    config_service = get_config_service()

    # "none"/"null" clears optional values; everything else is coerced by the model
    parsed_value: str | None = None if value.lower() in ("none", "null") else value
    try:
        stored = config_service.set_value(key, parsed_value)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{stored}'")

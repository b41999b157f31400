"""Impact indicator commands."""

import sys

import typer

from projexia.services.impact_service import get_impact_service
from projexia.utils.typer_helpers import SuggestingGroup
from projexia.utils.ui.console import get_console
from projexia.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .helpers import resolve_output_format

app = typer.Typer(cls=SuggestingGroup, help="Socio-economic impact indicators")
console = get_console()


@app.command("generate")
@command_wrapper
async def generate(
    description: str | None = typer.Argument(
        None, help="Project description (at least 50 characters); read from stdin if omitted"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Generate impact indicators for a project description."""
    if description is None:
        description = sys.stdin.read()

    impact_service = get_impact_service()
    with console.status("Generating impact indicators..."):
        result = await impact_service.generate(description)

    output_format = resolve_output_format(output)
    if output_format in ("json", "yaml"):
        format_output(result.model_dump(), output_format)
    else:
        console.print(result.indicators)

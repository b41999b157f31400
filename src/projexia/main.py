"""Main entry point for Projexia."""

import typer
from rich.table import Table

from projexia import __version__
from projexia.commands import (
    account,
    config,
    deliverables,
    impact,
    projects,
    tasks,
    timesheet,
)
from projexia.commands.decorators import command_wrapper
from projexia.commands.helpers import resolve_output_format
from projexia.models import ProjectStatus
from projexia.services.dashboard_service import get_dashboard_service
from projexia.utils.typer_helpers import SuggestingGroup
from projexia.utils.ui.console import get_console
from projexia.utils.ui.formatters import format_output

app = typer.Typer(
    name="projexia",
    cls=SuggestingGroup,
    help="Multi-tenant project management: projects, task trees, budgets and timesheets",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(account.app, name="account", help="Sign-up, users and the active user")
app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(tasks.app, name="tasks", help="Task hierarchy commands")
app.add_typer(timesheet.app, name="timesheet", help="Timesheet commands")
app.add_typer(deliverables.app, name="deliverables", help="Deliverable commands")
app.add_typer(impact.app, name="impact", help="Socio-economic impact indicators")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Projexia[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
@command_wrapper
async def dashboard(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show company-wide project, task and budget figures."""
    dashboard_service = await get_dashboard_service()
    overview = await dashboard_service.overview()

    output_format = resolve_output_format(output)
    if output_format != "pretty":
        format_output(overview, output_format)
        return

    figures = Table(show_header=False, box=None)
    figures.add_column("Figure", style="cyan")
    figures.add_column("Value", style="bold")
    figures.add_row("Projects in progress", str(overview["projects_in_progress"]))
    figures.add_row("Completed projects", str(overview["completed_projects"]))
    figures.add_row("Open tasks", str(overview["open_tasks"]))
    figures.add_row("Total budget", f"{overview['total_budget']:,.2f}")
    figures.add_row("Spent budget", f"{overview['spent_budget']:,.2f}")
    console.print(figures)
    console.print()

    by_status = Table(title="Projects by status", header_style="bold magenta")
    by_status.add_column("Status")
    by_status.add_column("Projects", justify="right")
    for status in ProjectStatus:
        by_status.add_row(status.label, str(overview["projects_by_status"][status.value]))
    console.print(by_status)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()

"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.safe_dump(_plain(data), default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def _plain(data: Any) -> Any:
    """Round-trip through JSON so dates and enums become YAML-safe scalars."""
    return json.loads(json.dumps(data, default=str))


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        for key in ("items", "nodes", "tasks", "projects", "users", "entries", "deliverables"):
            if key in data and isinstance(data[key], list):
                format_dict_table(data[key])
                return
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col)) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        if isinstance(value, list) and value and isinstance(value[0], dict):
            value = f"{len(value)} item(s)"
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_pretty(data: Any) -> None:
    """Format data in pretty format."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, dict):
        if "projects" in data:
            format_projects_pretty(data["projects"])
        elif "nodes" in data:
            format_task_tree(data["nodes"], title=data.get("project_name"))
        elif "items" in data:
            format_pretty(data["items"])
        else:
            for key, value in data.items():
                if isinstance(value, list) and value and isinstance(value[0], dict):
                    console.print(f"[cyan]{key.replace('_', ' ').title()}:[/cyan]")
                    format_dict_table(value)
                else:
                    formatted_key = key.replace("_", " ").title()
                    console.print(f"[cyan]{formatted_key}:[/cyan] {_cell(value)}")
    elif isinstance(data, list):
        if isinstance(data[0], dict):
            for item in data:
                label = item.get("name") or item.get("display_name") or item.get("id")
                console.print(f"• {label}", style="bold")
        else:
            for item in data:
                console.print(f"• {item}")
    else:
        console.print(data)


def format_task_tree(nodes: list[dict], title: str | None = None) -> None:
    """Render a flattened task tree, indenting each task by its level.

    Args:
        nodes: Dicts with ``id``, ``name``, ``completed``, ``level`` and
            optionally ``due_date`` and ``assignee``
        title: Optional project name shown in the header
    """
    done = sum(1 for node in nodes if node.get("completed"))

    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    if title:
        header.append(f"· {title} ", style="bold")
    header.append(f"({done}/{len(nodes)} done)", style="dim")
    console.print(header)
    console.print()

    if not nodes:
        console.print("[yellow]No tasks yet[/yellow]")
        return

    for node in nodes:
        line = Text()
        line.append("   " * node.get("level", 0))
        if node.get("level", 0) > 0:
            line.append("↳ ", style="dim")
        if node.get("completed"):
            line.append("☑ ", style="green")
            line.append(node.get("name") or "(unnamed)", style="strike dim")
        else:
            line.append("☐ ", style="")
            line.append(node.get("name") or "(unnamed)", style="bold")
        line.append(f"  #{node['id'][:8]}", style="dim")
        if node.get("assignee"):
            line.append(f"  @{node['assignee']}", style="blue")
        if node.get("due_date"):
            line.append(f"  due {node['due_date']}", style="cyan")
        console.print(line)


def format_projects_pretty(projects: list[dict]) -> None:
    """Format projects with a progress bar per project."""
    header = Text()
    header.append("📁 Projects ", style="bold cyan")
    header.append(f"({len(projects)})", style="dim")
    console.print(header)
    console.print()

    if not projects:
        console.print("[yellow]No projects found[/yellow]")
        return

    for project in projects:
        line = Text()
        line.append(f"  {project.get('name', 'Untitled')}", style="bold")
        line.append(f"  #{project.get('id', '')[:8]}", style="dim")
        if project.get("status"):
            line.append(f"  [{project['status']}]", style="magenta")
        console.print(line)

        pct = float(project.get("progress", 0.0))
        meta = Text()
        meta.append("     └─ ", style="dim")
        meta.append(f"{get_progress_bar(pct)} {pct:.0f}% complete", style=get_completion_color(pct))
        if "task_count" in project:
            meta.append(f"  {project['task_count']} tasks", style="dim")
        console.print(meta)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


# ============================================================================
# Helper Functions
# ============================================================================


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = max(0, min(10, int(percentage / 10)))
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"

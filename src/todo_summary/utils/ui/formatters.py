"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()

ALERT_STYLES = {
    "success": "green",
    "info": "blue",
    "danger": "red",
}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No items found[/yellow]")
            return
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col, "")) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}={_cell(v)}" for k, v in value.items())
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_pretty(data: Any) -> None:
    """Human-friendly output: task lists as checklists, everything else as a table."""
    if isinstance(data, list) and data and isinstance(data[0], dict) and "text" in data[0]:
        format_tasks_pretty(data)
    else:
        format_table(data)


def format_tasks_pretty(tasks: list[dict], positions: list[int] | None = None) -> None:
    """Print tasks as a numbered checklist.

    ``positions`` are the 1-based numbers shown next to each task; they default
    to the order of the list.
    """
    if not tasks:
        console.print("[yellow]No todos found[/yellow]")
        return

    positions = positions or list(range(1, len(tasks) + 1))
    for position, task in zip(positions, tasks):
        if task.get("completed"):
            mark = "[green]✓[/green]"
            text = f"[dim strike]{escape(task.get('text', ''))}[/dim strike]"
        else:
            mark = "[yellow]○[/yellow]"
            text = escape(task.get("text", ""))
        console.print(f"  [dim]{position:>3}.[/dim] {mark} {text}")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


def format_alert(message: str, alert_type: str) -> None:
    """Display a task manager alert in its type's color."""
    style = ALERT_STYLES.get(alert_type, "white")
    console.print(f"[{style}]{message}[/{style}]")


def format_celebration() -> None:
    console.print(
        Panel.fit(
            "🎉 [bold]All todos completed![/bold] 🎉",
            border_style="magenta",
        )
    )


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"


def format_stats(stats: dict, progress: float) -> None:
    """Show task counts with a progress bar."""
    color = get_completion_color(progress)
    console.print(f"Total Tasks: [bold]{stats['total']}[/bold]")
    console.print(f"✅ Completed: {stats['completed']}")
    console.print(f"⏳ Pending: {stats['pending']}")
    console.print(
        f"📈 Progress: [{color}]{get_progress_bar(progress)} {stats['completion_rate']}%[/{color}]"
    )

"""Local task commands - the personal list kept on this machine."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from todo_summary.client import LocalTaskStorage, TaskManager
from todo_summary.config import get_config_manager
from todo_summary.utils import exit_codes
from todo_summary.utils.typer_helpers import SuggestingGroup
from todo_summary.utils.ui.console import get_console
from todo_summary.utils.ui.formatters import (
    format_alert,
    format_celebration,
    format_info,
    format_output,
    format_stats,
    format_tasks_pretty,
)

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Local task management commands")
console = get_console()

FILTERS = ("all", "pending", "completed")


def get_manager(profile: str = "default") -> TaskManager:
    """Build the task manager over the configured local storage."""
    config = get_config_manager(profile).config
    return TaskManager(
        LocalTaskStorage(config.client.storage_key),
        alert_seconds=config.client.alert_seconds,
        on_all_complete=format_celebration,
    )


def _output_format(output: Optional[str], profile: str) -> str:
    if output:
        return output
    return get_config_manager(profile).get("output.format") or "pretty"


def _show_alert(manager: TaskManager) -> None:
    alert = manager.current_alert
    if alert is not None:
        format_alert(alert.message, alert.type)


def _confirm(question: str, yes: bool):
    if yes:
        return None
    return lambda: typer.confirm(question)


ProfileOption = Annotated[str, typer.Option("--profile", help="Profile name")]
PositionArgument = Annotated[int, typer.Argument(help="Todo number as shown by 'list'")]


@app.command("add")
@command_wrapper
def add_task(
    text: Annotated[str, typer.Argument(help="Todo text")],
    profile: ProfileOption = "default",
) -> None:
    """Add a todo."""
    manager = get_manager(profile)
    try:
        manager.add(text)
    finally:
        _show_alert(manager)


@app.command("list")
@command_wrapper
def list_tasks(
    view: Annotated[
        str, typer.Option("--filter", "-f", help="all, pending or completed")
    ] = "all",
    output: Annotated[
        Optional[str], typer.Option("--output", "-o", help="Output format")
    ] = None,
    profile: ProfileOption = "default",
) -> None:
    """List todos."""
    if view not in FILTERS:
        raise AppError(
            f"Unknown filter '{view}' (use {', '.join(FILTERS)})",
            exit_codes.ERROR_INVALID_ARGS,
        )

    manager = get_manager(profile)
    pairs = manager.filtered(view)
    output = _output_format(output, profile)

    if output == "pretty":
        format_tasks_pretty(
            [task.model_dump(mode="json") for _, task in pairs],
            positions=[index + 1 for index, _ in pairs],
        )
        stats = manager.stats
        console.print(f"\n[dim]{stats.completed} of {stats.total} tasks completed[/dim]")
        return

    format_output(
        [{"position": index + 1, **task.model_dump(mode="json")} for index, task in pairs],
        output,
    )


@app.command("done")
@command_wrapper
def toggle_task(position: PositionArgument, profile: ProfileOption = "default") -> None:
    """Toggle a todo between completed and pending."""
    manager = get_manager(profile)
    manager.toggle(position - 1)
    _show_alert(manager)


@app.command("edit")
@command_wrapper
def edit_task(
    position: PositionArgument,
    text: Annotated[str, typer.Argument(help="New todo text")],
    profile: ProfileOption = "default",
) -> None:
    """Replace a todo's text."""
    manager = get_manager(profile)
    manager.begin_edit(position - 1)
    manager.set_draft(text)
    try:
        manager.save_edit()
    finally:
        _show_alert(manager)


@app.command("delete")
@command_wrapper
def delete_task(
    position: PositionArgument,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    profile: ProfileOption = "default",
) -> None:
    """Delete a todo."""
    manager = get_manager(profile)
    if not manager.delete(position - 1, _confirm("Delete this todo?", yes)):
        format_info("Cancelled")
        return
    _show_alert(manager)


@app.command("clear")
@command_wrapper
def clear_tasks(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    profile: ProfileOption = "default",
) -> None:
    """Delete every todo."""
    manager = get_manager(profile)
    if not manager.clear_all(_confirm("Clear all todos?", yes)) and manager.tasks:
        format_info("Cancelled")
        return
    _show_alert(manager)


@app.command("export")
@command_wrapper
def export_tasks(
    directory: Annotated[
        Path, typer.Option("--dir", "-d", help="Directory to write the export to")
    ] = Path("."),
    profile: ProfileOption = "default",
) -> None:
    """Export todos to todos-YYYY-MM-DD.json."""
    manager = get_manager(profile)
    path = manager.export(directory)
    _show_alert(manager)
    console.print(f"[dim]{path}[/dim]")


@app.command("import")
@command_wrapper
def import_tasks(
    path: Annotated[Path, typer.Argument(help="Exported JSON file")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    profile: ProfileOption = "default",
) -> None:
    """Replace the todo list with an exported file."""
    manager = get_manager(profile)
    if manager.tasks and not yes:
        if not typer.confirm(f"Replace {len(manager.tasks)} existing todos?"):
            format_info("Cancelled")
            return
    manager.import_file(path)
    _show_alert(manager)


@app.command("summary")
@command_wrapper
def show_summary(profile: ProfileOption = "default") -> None:
    """Generate a summary report of the local todos."""
    manager = get_manager(profile)
    summary = manager.generate_summary()
    _show_alert(manager)
    if summary:
        console.print()
        console.print(summary, markup=False, highlight=False)


@app.command("stats")
@command_wrapper
def show_stats(
    output: Annotated[
        Optional[str], typer.Option("--output", "-o", help="Output format")
    ] = None,
    profile: ProfileOption = "default",
) -> None:
    """Show completion statistics."""
    manager = get_manager(profile)
    stats = manager.stats.model_dump()
    output = _output_format(output, profile)
    if output == "pretty":
        format_stats(stats, manager.progress)
    else:
        format_output(stats, output)

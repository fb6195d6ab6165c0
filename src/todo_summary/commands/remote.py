"""Remote commands - talk to a running backend over its REST API."""

from typing import Annotated, Optional

import typer

from todo_summary.api.client import get_client
from todo_summary.api.todos import TodosAPI
from todo_summary.config import get_config_manager
from todo_summary.utils import exit_codes
from todo_summary.utils.typer_helpers import SuggestingGroup
from todo_summary.utils.ui.console import get_console
from todo_summary.utils.ui.formatters import (
    format_info,
    format_output,
    format_success,
)

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Backend (REST API) commands")
console = get_console()

ProfileOption = Annotated[str, typer.Option("--profile", help="Profile name")]
OutputOption = Annotated[
    Optional[str], typer.Option("--output", "-o", help="Output format")
]


def _output_format(output: Optional[str], profile: str) -> str:
    if output:
        return output
    return get_config_manager(profile).get("output.format") or "pretty"


@app.command("list")
@command_wrapper
async def list_todos(
    output: OutputOption = None,
    profile: ProfileOption = "default",
) -> None:
    """List todos stored on the backend (newest first)."""
    client = get_client(profile)
    try:
        todos = await TodosAPI(client).list_todos()
    finally:
        await client.close()
    format_output(todos, _output_format(output, profile))


@app.command("add")
@command_wrapper
async def add_todo(
    text: Annotated[str, typer.Argument(help="Todo text")],
    output: OutputOption = None,
    profile: ProfileOption = "default",
) -> None:
    """Create a todo on the backend."""
    client = get_client(profile)
    try:
        todo = await TodosAPI(client).create_todo(text)
    finally:
        await client.close()

    format_success(f"Todo added: {todo['text']}")
    output = _output_format(output, profile)
    if output not in ("pretty", "table"):
        format_output(todo, output)


@app.command("update")
@command_wrapper
async def update_todo(
    todo_id: Annotated[str, typer.Argument(help="Todo ID")],
    text: Annotated[Optional[str], typer.Option("--text", help="New text")] = None,
    completed: Annotated[
        Optional[bool],
        typer.Option("--completed/--pending", help="Set completion status"),
    ] = None,
    output: OutputOption = None,
    profile: ProfileOption = "default",
) -> None:
    """Update a todo's text or completion status."""
    if text is None and completed is None:
        raise AppError(
            "Nothing to update: pass --text and/or --completed/--pending",
            exit_codes.ERROR_INVALID_ARGS,
        )

    client = get_client(profile)
    try:
        todo = await TodosAPI(client).update_todo(
            todo_id, text=text, completed=completed
        )
    finally:
        await client.close()

    format_success(f"Todo updated: {todo['text']}")
    output = _output_format(output, profile)
    if output not in ("pretty", "table"):
        format_output(todo, output)


@app.command("delete")
@command_wrapper
async def delete_todo(
    todo_id: Annotated[str, typer.Argument(help="Todo ID")],
    profile: ProfileOption = "default",
) -> None:
    """Delete a todo on the backend."""
    client = get_client(profile)
    try:
        result = await TodosAPI(client).delete_todo(todo_id)
    finally:
        await client.close()
    format_success(result.get("message", "Todo deleted successfully"))


@app.command("summarize")
@command_wrapper
async def summarize(
    llm: Annotated[
        bool,
        typer.Option("--llm", help="Use the language-model summary when the server has a key"),
    ] = False,
    report: Annotated[
        Optional[str],
        typer.Option("--report", help="Send a daily or weekly report instead"),
    ] = None,
    profile: ProfileOption = "default",
) -> None:
    """Send a summary of the backend's todos to Slack."""
    if report is not None and report not in ("daily", "weekly"):
        raise AppError(
            f"Unknown report type '{report}' (use daily or weekly)",
            exit_codes.ERROR_INVALID_ARGS,
        )

    client = get_client(profile)
    api = TodosAPI(client)
    try:
        if report:
            result = await api.send_report(report)
        elif llm:
            result = await api.send_summary()
        else:
            result = await api.summarize()
    finally:
        await client.close()

    message = result.get("message", "")
    if result.get("summary"):
        format_success(message)
        console.print()
        console.print(result["summary"], markup=False, highlight=False)
    else:
        format_info(message)

"""Main entry point for the todosum CLI."""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import httpx
import typer
import uvicorn

from todo_summary import __version__
from todo_summary.api.client import get_client
from todo_summary.api.todos import TodosAPI
from todo_summary.commands import config, remote, tasks
from todo_summary.commands.decorators import command_wrapper
from todo_summary.config import get_config_manager
from todo_summary.exceptions import ConfigurationError
from todo_summary.server import create_app_from_config
from todo_summary.utils.logger import enable_console_logging
from todo_summary.utils.typer_helpers import SuggestingGroup
from todo_summary.utils.ui.console import get_console

app = typer.Typer(
    name="todosum",
    cls=SuggestingGroup,
    help="Todo Summary Assistant - keep a todo list and send summaries to Slack",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Local task management commands")
app.add_typer(remote.app, name="remote", help="Backend (REST API) commands")
app.add_typer(config.app, name="config", help="Configuration management")


# Add top-level commands
@app.command()
def version(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show version information and backend health."""
    console.print(f"[bold]Todo Summary Assistant[/bold] version [cyan]{__version__}[/cyan]")
    console.print()

    async def check_health():
        client = get_client(profile)
        try:
            result = await TodosAPI(client).health()
            if result.get("status") == "OK":
                console.print(f"[green]✓ Backend is healthy[/green] [dim]({client.base_url})[/dim]")
            else:
                console.print(f"[yellow]⚠ Backend returned {result}[/yellow]")
        except httpx.HTTPError as e:
            console.print(f"[red]✗ Backend health check failed: {str(e)}[/red]")
        finally:
            await client.close()

    try:
        asyncio.run(check_health())
    except ConfigurationError as e:
        console.print(f"[red]✗ {e}[/red]")


@app.command()
@command_wrapper
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", "-p", help="Port")] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Run the REST API server."""
    enable_console_logging()
    settings = get_config_manager(profile).config
    server_app = create_app_from_config(settings)

    host = host or settings.server.host
    port = port or settings.server.port
    console.print(f"[bold]Serving todo API on[/bold] http://{host}:{port}/api")
    uvicorn.run(server_app, host=host, port=port, log_level="info")


@app.command("add")
def add(
    text: Annotated[str, typer.Argument(help="Todo text")],
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Add a local todo (shortcut for 'tasks add')."""
    tasks.add_task(text=text, profile=profile)


@app.command("list")
def list_(
    view: Annotated[
        str, typer.Option("--filter", "-f", help="all, pending or completed")
    ] = "all",
    output: Annotated[
        Optional[str], typer.Option("--output", "-o", help="Output format")
    ] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """List local todos (shortcut for 'tasks list')."""
    tasks.list_tasks(view=view, output=output, profile=profile)


@app.command("done")
def done(
    position: Annotated[int, typer.Argument(help="Todo number as shown by 'list'")],
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Toggle a local todo (shortcut for 'tasks done')."""
    tasks.toggle_task(position=position, profile=profile)


@app.command("export")
def export(
    directory: Annotated[
        Path, typer.Option("--dir", "-d", help="Directory to write the export to")
    ] = Path("."),
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Export local todos (shortcut for 'tasks export')."""
    tasks.export_tasks(directory=directory, profile=profile)


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()

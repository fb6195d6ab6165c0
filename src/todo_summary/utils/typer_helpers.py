"""Typer group that answers a mistyped command with close matches."""

from collections.abc import Iterable
from difflib import get_close_matches

import click
import typer
from typer.core import TyperGroup

from todo_summary.utils import exit_codes
from todo_summary.utils.ui.console import get_console

MAX_SUGGESTIONS = 3
SIMILARITY_CUTOFF = 0.6


def suggest_commands(attempted: str, available: Iterable[str]) -> list[str]:
    """Closest command names to ``attempted``, best match first."""
    return get_close_matches(
        attempted, sorted(available), n=MAX_SUGGESTIONS, cutoff=SIMILARITY_CUTOFF
    )


class SuggestingGroup(TyperGroup):
    """Command group whose unknown-command error lists similar commands.

    With no similar command the usual click usage error is raised unchanged.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if not args:
                raise
            matches = suggest_commands(args[0], self.list_commands(ctx))
            if not matches:
                raise

            console = get_console()
            console.print(
                f"[red]Error:[/red] '{args[0]}' is not a {ctx.info_name} command"
            )
            console.print(
                "Did you mean: " + ", ".join(f"[cyan]{m}[/cyan]" for m in matches)
            )
            raise typer.Exit(exit_codes.ERROR_INVALID_ARGS) from e

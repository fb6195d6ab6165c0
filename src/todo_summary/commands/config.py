"""Configuration management commands."""

import json
from typing import Any, Optional

import typer
from pydantic import ValidationError

from todo_summary.config import get_config_manager
from todo_summary.utils import exit_codes
from todo_summary.utils.ui.console import get_console
from todo_summary.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()

_SECRET_KEYS = {"key", "api_key", "webhook_url"}


def _mask(config: dict[str, Any]) -> dict[str, Any]:
    """Hide credentials when printing the whole configuration."""
    masked: dict[str, Any] = {}
    for section, values in config.items():
        masked[section] = {
            k: ("****" if k in _SECRET_KEYS and v else v) for k, v in values.items()
        }
    return masked


def parse_value(value: str) -> Any:
    """Interpret a command-line value as JSON when possible, else as a string."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return json.loads(value)
    except ValueError:
        return value


@app.command("view")
@command_wrapper
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
    show_secrets: bool = typer.Option(False, "--show-secrets", help="Print credentials"),
) -> None:
    """View the effective configuration (file plus environment overrides)."""
    config_dict = get_config_manager(profile).config.model_dump()
    format_output(config_dict if show_secrets else _mask(config_dict), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., server.port)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager(profile).get(key)
    if value is None:
        raise AppError(f"Configuration key '{key}' not found", exit_codes.ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., server.port)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    parsed_value = parse_value(value)
    try:
        get_config_manager(profile).set(key, parsed_value)
    except KeyError as e:
        raise AppError(
            f"Unknown configuration key '{key}'", exit_codes.ERROR_INVALID_ARGS
        ) from e
    except ValidationError as e:
        raise AppError(
            f"Invalid value for '{key}': {e.errors()[0]['msg']}",
            exit_codes.ERROR_INVALID_ARGS,
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            console.print("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_manager(profile).reset(key)
    except KeyError as e:
        raise AppError(
            f"Unknown configuration key '{key}'", exit_codes.ERROR_INVALID_ARGS
        ) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")

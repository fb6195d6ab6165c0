"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import httpx
import typer

from todo_summary.api.client import error_message
from todo_summary.exceptions import (
    ConfigurationError,
    NotificationError,
    TaskNotFoundError,
    TaskValidationError,
    TodoSummaryError,
)
from todo_summary.utils import exit_codes
from todo_summary.utils.logger import get_logger
from todo_summary.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _domain_exit_code(error: TodoSummaryError) -> int:
    if isinstance(error, TaskValidationError):
        return exit_codes.ERROR_INVALID_ARGS
    if isinstance(error, TaskNotFoundError):
        return exit_codes.ERROR_NOT_FOUND
    if isinstance(error, ConfigurationError):
        return exit_codes.ERROR_CONFIG
    if isinstance(error, NotificationError):
        return exit_codes.ERROR_NETWORK
    return exit_codes.ERROR_GENERAL


def _http_exit_code(error: httpx.HTTPStatusError) -> int:
    status = error.response.status_code
    if status == 404:
        return exit_codes.ERROR_NOT_FOUND
    if status == 400:
        return exit_codes.ERROR_INVALID_ARGS
    return exit_codes.ERROR_NETWORK


def command_wrapper(func: Callable):
    """Decorator to wrap command functions with common functionality."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)

        def failed(message: str, exit_code: int, error: Exception) -> typer.Exit:
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                time.monotonic() - start,
                exit_codes.get_exit_code_name(exit_code),
                str(error),
            )
            format_error(message)
            return typer.Exit(code=exit_code)

        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except AppError as e:
            raise failed(str(e), e.exit_code, e) from e

        except TodoSummaryError as e:
            raise failed(str(e), _domain_exit_code(e), e) from e

        except httpx.HTTPStatusError as e:
            raise failed(error_message(e), _http_exit_code(e), e) from e

        except httpx.RequestError as e:
            raise failed(
                f"Cannot reach the backend: {e}", exit_codes.ERROR_NETWORK, e
            ) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                str(e),
                traceback.format_exc(),
            )
            # Generic fallback for unexpected crashes
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper

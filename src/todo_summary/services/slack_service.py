"""Slack webhook notifier.

Delivers pre-formatted messages to a configured incoming-webhook URL.
Failures are logged (with the response body when there is one) and re-raised;
nothing is retried.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime
from typing import Any, Literal, TypeVar

import httpx

from todo_summary.exceptions import ConfigurationError, NotificationError
from todo_summary.models import Task
from todo_summary.services import formatter

logger = logging.getLogger(__name__)

T = TypeVar("T")

ReportType = Literal["daily", "weekly"]


class SlackNotifier:
    """Sends messages to a Slack incoming webhook."""

    def __init__(
        self,
        webhook_url: str | None,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the notifier.

        Args:
            webhook_url: Incoming webhook URL; may be None, in which case every
                send fails with ConfigurationError
            timeout: Request timeout in seconds
            client: Optional pre-built httpx client
            clock: Source of local "now" for message dates
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.clock = clock
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.webhook_url and self.webhook_url.strip())

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send(self, payload: dict[str, Any]) -> None:
        """POST a JSON payload to the webhook.

        Raises:
            ConfigurationError: If no webhook URL is configured (no request is made)
            NotificationError: If the request fails or Slack rejects it
        """
        if not self.configured:
            raise ConfigurationError("SLACK_WEBHOOK_URL is not configured")

        logger.debug("Slack payload: %s", json.dumps(payload, ensure_ascii=False))
        client = await self._get_client()
        try:
            response = await client.post(self.webhook_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Slack request failed with %s: %s",
                e.response.status_code,
                e.response.text,
            )
            raise NotificationError(
                f"Slack rejected the message ({e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            logger.error("Slack request failed: %s", e)
            raise NotificationError(f"Slack request failed: {e}") from e

    async def send_text(self, message: str) -> None:
        """Send a free-form summary as a plain text message."""
        await self.send(formatter.build_text_message(message))

    async def send_summary(self, tasks: Sequence[Task]) -> None:
        """Send the structured summary report for a task collection."""
        await self.send(formatter.build_summary_message(tasks, self.clock()))

    async def send_action(
        self,
        action: str,
        todo_text: str | None = None,
        additional_info: str | None = None,
    ) -> None:
        """Send a one-line notification about a single task action."""
        await self.send(
            formatter.build_action_message(
                action, self.clock(), todo_text, additional_info
            )
        )

    async def send_simple(self, title: str, message: str, emoji: str = "📋") -> None:
        """Send a titled notification."""
        await self.send(
            formatter.build_simple_message(title, message, self.clock(), emoji)
        )

    async def send_report(
        self, tasks: Sequence[Task], report_type: ReportType = "daily"
    ) -> None:
        """Send a periodic report; an empty period gets a short notice instead."""
        if not tasks:
            await self.send_simple(
                f"{report_type.capitalize()} Todo Report",
                "No todos found for this period.",
            )
            return
        await self.send_summary(tasks)

    async def safe_operation(
        self,
        operation: Callable[[], Awaitable[T]],
        fallback_message: str = "Slack operation failed",
    ) -> T | None:
        """Run an operation, reporting any failure to Slack instead of raising.

        Returns:
            The operation's result, or None if it failed
        """
        try:
            return await operation()
        except Exception as error:
            logger.error("%s: %s", fallback_message, error)
            try:
                await self.send_simple(
                    "Todo App Error", f"{fallback_message}: {error}", "⚠️"
                )
            except Exception as notify_error:
                logger.error(
                    "Failed to send error notification to Slack: %s", notify_error
                )
            return None

"""Wire configuration into repositories, services and the FastAPI app."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import FastAPI

from todo_summary.adapters import SqliteTaskRepository, SupabaseTaskRepository
from todo_summary.config import Config
from todo_summary.repositories import TaskRepository
from todo_summary.server.app import create_app
from todo_summary.services import (
    LLMSummarizer,
    SlackNotifier,
    SummaryService,
    TaskService,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    task_service: TaskService
    summary_service: SummaryService

    async def aclose(self) -> None:
        """Release the store connection and the webhook HTTP client."""
        await self.task_service.repository.aclose()
        await self.summary_service.notifier.aclose()
        logger.info("Services closed")


def build_repository(config: Config) -> TaskRepository:
    """Create the configured task store.

    Raises:
        ConfigurationError: If the Supabase backend is selected without url/key
    """
    store = config.store
    if store.backend == "supabase":
        logger.info("Using Supabase store (table=%s)", store.table)
        return SupabaseTaskRepository(store.url, store.key, table=store.table)

    logger.info("Using SQLite store (%s)", store.db_path or "default location")
    return SqliteTaskRepository(store.db_path)


def build_services(config: Config) -> Services:
    repository = build_repository(config)
    notifier = SlackNotifier(config.slack.webhook_url, timeout=config.slack.timeout)
    if not notifier.configured:
        logger.warning("SLACK_WEBHOOK_URL is not configured; summaries will fail")

    summarizer = None
    if config.llm.api_key:
        summarizer = LLMSummarizer(
            config.llm.api_key,
            model=config.llm.model,
            max_tokens=config.llm.max_tokens,
            temperature=config.llm.temperature,
        )

    return Services(
        task_service=TaskService(
            repository, notifier, notify_actions=config.slack.notify_actions
        ),
        summary_service=SummaryService(repository, notifier, summarizer),
    )


def create_app_from_config(config: Config) -> FastAPI:
    services = build_services(config)
    return create_app(
        services.task_service,
        services.summary_service,
        cors_origins=config.server.cors_origins,
        on_shutdown=services.aclose,
    )

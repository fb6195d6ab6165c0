"""Summary orchestration: fetch tasks, build a summary, deliver it to Slack."""

from __future__ import annotations

import logging

from todo_summary.exceptions import ConfigurationError
from todo_summary.models import SummaryResult
from todo_summary.repositories import TaskRepository
from todo_summary.services import formatter
from todo_summary.services.llm_service import LLMSummarizer
from todo_summary.services.slack_service import ReportType, SlackNotifier

logger = logging.getLogger(__name__)

NOTHING_TO_SUMMARIZE = "No todos to summarize"
SENT = "Summary sent to Slack successfully"


class SummaryService:
    """Runs the summarize pipeline against one repository and one notifier."""

    def __init__(
        self,
        task_repository: TaskRepository,
        notifier: SlackNotifier,
        summarizer: LLMSummarizer | None = None,
    ):
        self.repository = task_repository
        self.notifier = notifier
        self.summarizer = summarizer

    @property
    def llm_available(self) -> bool:
        return self.summarizer is not None

    async def summarize(self, *, use_llm: bool = False) -> SummaryResult:
        """Summarize all tasks and send the result to Slack.

        With ``use_llm`` the prose summary from the language model is sent as
        a text message; otherwise the structured block report is sent.
        The returned summary is the prose, or the plain checklist of the same
        tasks when the block report was sent.
        An empty collection returns early without contacting Slack.

        Raises:
            ConfigurationError: If ``use_llm`` is set but no summarizer is configured
        """
        if use_llm and self.summarizer is None:
            raise ConfigurationError("OPENAI_API_KEY is not configured")

        tasks = await self.repository.list_all()
        if not tasks:
            logger.info("Summary requested with no todos")
            return SummaryResult(message=NOTHING_TO_SUMMARIZE, sent=False)

        if use_llm:
            summary = await self.summarizer.summarize(tasks)
            await self.notifier.send_text(summary)
        else:
            summary = formatter.format_checklist(tasks)
            await self.notifier.send_summary(tasks)

        logger.info("Sent summary of %d todos (llm=%s)", len(tasks), use_llm)
        return SummaryResult(message=SENT, summary=summary, sent=True)

    async def send_report(self, report_type: ReportType = "daily") -> SummaryResult:
        """Send the periodic report for the current collection."""
        tasks = await self.repository.list_all()
        await self.notifier.send_report(tasks, report_type)
        logger.info("Sent %s report of %d todos", report_type, len(tasks))
        return SummaryResult(
            message=f"{report_type.capitalize()} report sent to Slack successfully",
            summary=formatter.format_checklist(tasks) if tasks else None,
            sent=True,
        )

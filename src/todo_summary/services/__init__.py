"""Services module for Todo Summary Assistant - Business logic layer."""

from .llm_service import LLMSummarizer
from .slack_service import SlackNotifier
from .summary_service import SummaryService
from .task_service import TaskService

__all__ = [
    "TaskService",
    "SummaryService",
    "SlackNotifier",
    "LLMSummarizer",
]

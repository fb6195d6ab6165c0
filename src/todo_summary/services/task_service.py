"""Task service - Business logic for task operations.

This service layer sits between the HTTP surface and the repository,
enforcing the text rules and optionally announcing each change to Slack.
"""

from __future__ import annotations

import logging

from todo_summary.exceptions import TaskValidationError
from todo_summary.models import Task, TaskCreate, TaskUpdate
from todo_summary.repositories import TaskRepository
from todo_summary.services.slack_service import SlackNotifier

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task business logic.

    This service validates input, delegates persistence to the repository
    and, when enabled, sends a best-effort action notification after each
    successful mutation.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        notifier: SlackNotifier | None = None,
        *,
        notify_actions: bool = False,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            notifier: Slack notifier used for action notifications
            notify_actions: Whether to announce add/update/delete to Slack
        """
        self.repository = task_repository
        self.notifier = notifier
        self.notify_actions = notify_actions and notifier is not None

    async def _announce(self, action: str, todo_text: str | None = None) -> None:
        if not self.notify_actions:
            return
        await self.notifier.safe_operation(
            lambda: self.notifier.send_action(action, todo_text),
            f"Failed to send '{action}' notification",
        )

    async def list_tasks(self) -> list[Task]:
        """List all tasks, newest first."""
        return await self.repository.list_all()

    async def add_task(self, text: str | None) -> Task:
        """Create a new task.

        Args:
            text: Task text; surrounding whitespace is removed

        Returns:
            Created Task object

        Raises:
            TaskValidationError: If the text is missing or blank
        """
        text = (text or "").strip()
        if not text:
            raise TaskValidationError("Todo text is required")

        task = await self.repository.add(TaskCreate(text=text))
        logger.info("Added todo %s", task.id)
        await self._announce("added", task.text)
        return task

    async def update_task(
        self,
        task_id: str,
        *,
        text: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        """Update a task's text and/or completion flag.

        Raises:
            TaskValidationError: If text is given but blank
            TaskNotFoundError: If no task has this id
        """
        if text is not None:
            text = text.strip()
            if not text:
                raise TaskValidationError("Todo text cannot be empty")

        task = await self.repository.update(
            task_id, TaskUpdate(text=text, completed=completed)
        )
        logger.info("Updated todo %s", task_id)

        if completed is not None and text is None:
            await self._announce("completed" if completed else "uncompleted", task.text)
        else:
            await self._announce("updated", task.text)
        return task

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task. Deleting an unknown id is not an error.

        Returns:
            True if a task was removed
        """
        deleted = await self.repository.delete(task_id)
        logger.info("Deleted todo %s (matched=%s)", task_id, deleted)
        if deleted:
            await self._announce("deleted")
        return deleted

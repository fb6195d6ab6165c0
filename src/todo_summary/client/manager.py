"""Local task manager - the client-side collection with durable storage.

Positions are 0-based here. Every mutation is saved immediately and records a
short-lived alert describing what happened.
"""

from __future__ import annotations

import json
import logging
import random
import string
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from todo_summary.client.storage import TaskStorage, encode_tasks
from todo_summary.exceptions import TaskNotFoundError, TaskValidationError
from todo_summary.models import Task, TaskFilter, TaskStats
from todo_summary.services import formatter

logger = logging.getLogger(__name__)

AlertType = Literal["success", "info", "danger"]
Confirm = Callable[[], bool]

_BASE36 = string.digits + string.ascii_lowercase


def generate_client_id(now: datetime | None = None) -> str:
    """Epoch milliseconds followed by 9 random base36 characters."""
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"{millis}{''.join(random.choices(_BASE36, k=9))}"


def export_filename(now: datetime) -> str:
    return f"todos-{now.astimezone(timezone.utc):%Y-%m-%d}.json"


@dataclass
class Alert:
    message: str
    type: AlertType
    shown_at: float = 0.0


@dataclass
class EditSession:
    """An in-progress edit; the draft is not visible until saved."""

    task_id: str
    draft: str = field(default="")


class TaskManager:
    """Owns the local task collection and its persistence."""

    def __init__(
        self,
        storage: TaskStorage,
        *,
        alert_seconds: float = 3.0,
        on_all_complete: Callable[[], None] | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        monotonic: Callable[[], float] = time.monotonic,
    ):
        """Load the stored collection.

        Args:
            storage: Where the collection is persisted
            alert_seconds: How long an alert stays current
            on_all_complete: Called when a mutation leaves every task completed
            clock: Source of "now" for task timestamps and export names
            monotonic: Source of time for alert expiry
        """
        self.storage = storage
        self.alert_seconds = alert_seconds
        self.on_all_complete = on_all_complete
        self.clock = clock
        self.monotonic = monotonic

        self.tasks: list[Task] = storage.load()
        self.editing: EditSession | None = None
        self.summary: str | None = None
        self._alert: Alert | None = None

    # ------------------------------------------------------------------
    # Alerts and persistence
    # ------------------------------------------------------------------

    def _alert_with(self, message: str, alert_type: AlertType) -> None:
        self._alert = Alert(message, alert_type, self.monotonic())

    @property
    def current_alert(self) -> Alert | None:
        """The latest alert, or None once it has expired."""
        if self._alert is None:
            return None
        if self.monotonic() - self._alert.shown_at >= self.alert_seconds:
            self._alert = None
        return self._alert

    def _commit(self, tasks: list[Task]) -> None:
        was_complete = self.all_complete
        self.tasks = tasks
        self.storage.save(self.tasks)
        if self.all_complete and not was_complete and self.on_all_complete:
            self.on_all_complete()

    def _position(self, index: int) -> Task:
        if not 0 <= index < len(self.tasks):
            raise TaskNotFoundError(f"No todo at position {index + 1}")
        return self.tasks[index]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, text: str | None) -> Task:
        """Append a new task.

        Raises:
            TaskValidationError: If the text is blank
        """
        text = (text or "").strip()
        if not text:
            self._alert_with("Please enter a todo item!", "info")
            raise TaskValidationError("Todo text is required")

        now = self.clock()
        task = Task(
            id=generate_client_id(now),
            text=text,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self._commit([*self.tasks, task])
        self._alert_with("Todo Added Successfully!", "success")
        logger.info("Added local todo %s", task.id)
        return task

    def toggle(self, index: int) -> Task:
        """Flip the completion flag of the task at ``index``."""
        current = self._position(index)
        task = current.model_copy(
            update={"completed": not current.completed, "updated_at": self.clock()}
        )
        tasks = list(self.tasks)
        tasks[index] = task
        self._commit(tasks)

        if task.completed:
            self._alert_with("Task completed! 🎉", "success")
        else:
            self._alert_with("Task marked as pending", "info")
        return task

    def begin_edit(self, index: int) -> EditSession:
        """Start editing the task at ``index`` with its current text as draft."""
        task = self._position(index)
        self.editing = EditSession(task_id=task.id, draft=task.text)
        return self.editing

    def set_draft(self, text: str) -> None:
        if self.editing is None:
            raise TaskValidationError("No todo is being edited")
        self.editing.draft = text

    def cancel_edit(self) -> None:
        self.editing = None

    def save_edit(self) -> Task:
        """Commit the draft text.

        Raises:
            TaskValidationError: If nothing is being edited or the draft is blank
            TaskNotFoundError: If the edited task no longer exists
        """
        if self.editing is None:
            raise TaskValidationError("No todo is being edited")

        text = self.editing.draft.strip()
        if not text:
            self._alert_with("Todo text cannot be empty!", "info")
            raise TaskValidationError("Todo text cannot be empty")

        for index, task in enumerate(self.tasks):
            if task.id == self.editing.task_id:
                break
        else:
            self.editing = None
            raise TaskNotFoundError("The edited todo no longer exists")

        updated = task.model_copy(update={"text": text, "updated_at": self.clock()})
        tasks = list(self.tasks)
        tasks[index] = updated
        self._commit(tasks)
        self.editing = None
        self._alert_with("Todo updated successfully!", "success")
        return updated

    def delete(self, index: int, confirm: Confirm | None = None) -> bool:
        """Remove the task at ``index`` if confirmed.

        Returns:
            True if the task was removed
        """
        task = self._position(index)
        if confirm is not None and not confirm():
            return False

        self._commit([t for i, t in enumerate(self.tasks) if i != index])
        if self.editing and self.editing.task_id == task.id:
            self.editing = None
        self._alert_with("Todo Deleted!", "success")
        logger.info("Deleted local todo %s", task.id)
        return True

    def clear_all(self, confirm: Confirm | None = None) -> bool:
        """Remove every task if confirmed. An empty collection is a no-op."""
        if not self.tasks:
            self._alert_with("No todos to clear!", "info")
            return False
        if confirm is not None and not confirm():
            return False

        self._commit([])
        self.editing = None
        self.summary = None
        self._alert_with("All Todos Cleared!", "success")
        return True

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------

    def export(self, directory: str | Path) -> Path:
        """Write the collection to ``todos-YYYY-MM-DD.json`` in ``directory``."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / export_filename(self.clock())
        path.write_text(encode_tasks(self.tasks), encoding="utf-8")
        self._alert_with("Todos exported successfully! 📥", "success")
        logger.info("Exported %d todos to %s", len(self.tasks), path)
        return path

    def import_file(self, path: str | Path) -> list[Task]:
        """Replace the collection with the tasks in an exported file.

        Raises:
            TaskValidationError: If the file is not a todo export
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, list):
                raise TaskValidationError(f"{path.name} does not contain a todo list")
            tasks = [Task.model_validate(item) for item in data]
        except (OSError, ValueError) as e:
            # ValidationError is a ValueError
            raise TaskValidationError(f"Cannot import {path.name}: {e}") from e

        if len({task.id for task in tasks}) != len(tasks):
            raise TaskValidationError(f"{path.name} contains duplicate todo ids")

        self.editing = None
        self._commit(tasks)
        self._alert_with(f"Imported {len(tasks)} todos! 📤", "success")
        return tasks

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def filtered(self, view: TaskFilter = "all") -> list[tuple[int, Task]]:
        """Tasks in the given view, paired with their positions."""
        pairs = list(enumerate(self.tasks))
        if view == "pending":
            return [(i, t) for i, t in pairs if not t.completed]
        if view == "completed":
            return [(i, t) for i, t in pairs if t.completed]
        return pairs

    @property
    def stats(self) -> TaskStats:
        return formatter.compute_stats(self.tasks)

    @property
    def progress(self) -> float:
        """Completed share as an unrounded percentage."""
        if not self.tasks:
            return 0.0
        return sum(1 for t in self.tasks if t.completed) / len(self.tasks) * 100

    @property
    def all_complete(self) -> bool:
        return bool(self.tasks) and all(t.completed for t in self.tasks)

    def generate_summary(self, now: datetime | None = None) -> str | None:
        """Build the plain-text report locally. Returns None for an empty list."""
        if not self.tasks:
            self._alert_with("No todos to summarize!", "info")
            return None

        self.summary = formatter.format_text_report(self.tasks, now or datetime.now())
        self._alert_with("Summary generated successfully! 📋✨", "success")
        return self.summary

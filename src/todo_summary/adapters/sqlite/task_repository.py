"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from todo_summary.adapters.sqlite.connection import get_connection
from todo_summary.adapters.sqlite.utils import (
    build_update_clause,
    generate_uuid,
    row_to_dict,
    to_iso,
    utc_now,
)
from todo_summary.exceptions import StoreError, TaskNotFoundError
from todo_summary.models import Task, TaskCreate, TaskUpdate
from todo_summary.repositories import TaskRepository

logger = logging.getLogger(__name__)


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            clock: Source of "now" for timestamps.
        """
        self.db_path = db_path
        self.clock = clock
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def close(self) -> None:
        """Close the underlying connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    async def aclose(self) -> None:
        self.close()

    @staticmethod
    def _to_task(row: sqlite3.Row) -> Task:
        task_dict = row_to_dict(row)
        task_dict["completed"] = bool(task_dict["completed"])
        return Task(**task_dict)

    def _fetch_one(self, task_id: str) -> sqlite3.Row | None:
        cursor = self.connection.execute("SELECT * FROM todos WHERE id = ?", (task_id,))
        return cursor.fetchone()

    async def list_all(self) -> list[Task]:
        """List all tasks, newest first."""
        try:
            cursor = self.connection.execute(
                "SELECT * FROM todos ORDER BY created_at DESC, rowid DESC"
            )
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error("Failed to list todos: %s", e)
            raise StoreError(f"Failed to list todos: {e}") from e
        return [self._to_task(row) for row in rows]

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        try:
            row = self._fetch_one(task_id)
        except sqlite3.Error as e:
            raise StoreError(f"Failed to read todo {task_id}: {e}") from e

        if not row:
            raise TaskNotFoundError(f"Task not found: {task_id}")
        return self._to_task(row)

    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task with both timestamps set to the same instant."""
        task_id = generate_uuid()
        now = to_iso(self.clock())

        try:
            self.connection.execute(
                """
                INSERT INTO todos (id, text, completed, created_at, updated_at)
                VALUES (?, ?, 0, ?, ?)
                """,
                (task_id, task_data.text, now, now),
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            logger.error("Failed to insert todo: %s", e)
            raise StoreError(f"Failed to insert todo: {e}") from e

        logger.debug("Inserted todo %s", task_id)
        return await self.get(task_id)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task."""
        changes = updates.changes()
        if "completed" in changes:
            changes["completed"] = int(changes["completed"])
        changes["updated_at"] = to_iso(self.clock())

        set_clause, params = build_update_clause(changes)
        params.append(task_id)

        try:
            cursor = self.connection.execute(
                f"UPDATE todos SET {set_clause} WHERE id = ?", params
            )
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            logger.error("Failed to update todo %s: %s", task_id, e)
            raise StoreError(f"Failed to update todo {task_id}: {e}") from e

        if cursor.rowcount == 0:
            raise TaskNotFoundError(f"Task not found: {task_id}")
        return await self.get(task_id)

    async def delete(self, task_id: str) -> bool:
        """Delete a task. Returns False when no row matched."""
        try:
            cursor = self.connection.execute("DELETE FROM todos WHERE id = ?", (task_id,))
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            logger.error("Failed to delete todo %s: %s", task_id, e)
            raise StoreError(f"Failed to delete todo {task_id}: {e}") from e
        return cursor.rowcount > 0

"""Repository abstraction layer for Todo Summary Assistant.

This module defines the abstract base class (interface) for task persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

The repository is a gateway: it owns no state itself and translates CRUD calls
into queries against an external store (Supabase, local SQLite, ...).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todo_summary.models import Task, TaskCreate, TaskUpdate


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    This interface defines all CRUD operations for tasks, ensuring that
    different storage backends implement a consistent contract.
    """

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """List every task, newest first.

        Returns:
            List of Task objects ordered by created_at descending

        Raises:
            StoreError: If the store cannot be queried
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object

        Raises:
            TaskNotFoundError: If task does not exist
            StoreError: If the store cannot be queried
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            task_data: TaskCreate object with the trimmed text

        Returns:
            Created Task with its assigned ID, completed=False and
            created_at == updated_at

        Raises:
            StoreError: If the insert fails
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task and refresh its updated_at.

        Args:
            task_id: Unique identifier for the task
            updates: TaskUpdate object with fields to update

        Returns:
            Updated Task object

        Raises:
            TaskNotFoundError: If task does not exist
            StoreError: If the update fails
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task.

        Args:
            task_id: Unique identifier for the task

        Returns:
            True if a row was removed, False if nothing matched

        Raises:
            StoreError: If the delete fails
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    async def aclose(self) -> None:
        """Release connections held by the adapter. Default: nothing to release."""
        return None

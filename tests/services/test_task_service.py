"""Unit tests for TaskService with a mocked repository."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from todo_summary.exceptions import TaskNotFoundError, TaskValidationError
from todo_summary.models import TaskCreate
from todo_summary.services.task_service import TaskService


@pytest.fixture
def repo(make_task):
    repository = MagicMock()
    repository.list_all = AsyncMock(return_value=[])
    repository.add = AsyncMock(side_effect=lambda data: make_task(data.text))
    repository.update = AsyncMock(
        side_effect=lambda task_id, updates: make_task(
            updates.text or "Buy milk", completed=bool(updates.completed), id=task_id
        )
    )
    repository.delete = AsyncMock(return_value=True)
    return repository


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.safe_operation = AsyncMock(return_value=None)
    return notifier


# ---------------------------------------------------------------------------
# add_task
# ---------------------------------------------------------------------------


class TestAddTask:
    @pytest.mark.asyncio
    async def test_trims_text(self, repo):
        task = await TaskService(repo).add_task("  Buy milk  ")

        repo.add.assert_awaited_once_with(TaskCreate(text="Buy milk"))
        assert task.text == "Buy milk"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    async def test_blank_text_rejected_without_persisting(self, repo, text):
        with pytest.raises(TaskValidationError, match="Todo text is required"):
            await TaskService(repo).add_task(text)
        repo.add.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_announces_when_enabled(self, repo, notifier):
        await TaskService(repo, notifier, notify_actions=True).add_task("Buy milk")
        notifier.safe_operation.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_silent_by_default(self, repo, notifier):
        await TaskService(repo, notifier).add_task("Buy milk")
        notifier.safe_operation.assert_not_awaited()


# ---------------------------------------------------------------------------
# update_task
# ---------------------------------------------------------------------------


class TestUpdateTask:
    @pytest.mark.asyncio
    async def test_blank_text_rejected(self, repo):
        with pytest.raises(TaskValidationError, match="cannot be empty"):
            await TaskService(repo).update_task("task-1", text="  ")
        repo.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_passes_only_provided_fields(self, repo):
        await TaskService(repo).update_task("task-1", completed=True)

        task_id, updates = repo.update.await_args.args
        assert task_id == "task-1"
        assert updates.changes() == {"completed": True}

    @pytest.mark.asyncio
    async def test_trims_new_text(self, repo):
        await TaskService(repo).update_task("task-1", text="  New text ")
        assert repo.update.await_args.args[1].changes() == {"text": "New text"}

    @pytest.mark.asyncio
    async def test_not_found_propagates(self, repo):
        repo.update.side_effect = TaskNotFoundError("missing")
        with pytest.raises(TaskNotFoundError):
            await TaskService(repo).update_task("missing", completed=True)


# ---------------------------------------------------------------------------
# delete_task
# ---------------------------------------------------------------------------


class TestDeleteTask:
    @pytest.mark.asyncio
    async def test_unknown_id_is_not_an_error(self, repo, notifier):
        repo.delete.return_value = False
        service = TaskService(repo, notifier, notify_actions=True)

        assert await service.delete_task("missing") is False
        notifier.safe_operation.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_announces_removal(self, repo, notifier):
        service = TaskService(repo, notifier, notify_actions=True)
        assert await service.delete_task("task-1") is True
        notifier.safe_operation.assert_awaited_once()

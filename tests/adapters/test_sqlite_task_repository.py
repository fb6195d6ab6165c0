"""Unit tests for SqliteTaskRepository.

Uses a real SQLite database file in tmp_path with the schema applied, so we
test the real SQL without touching user data.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from todo_summary.adapters.sqlite.connection import get_connection
from todo_summary.adapters.sqlite.task_repository import SqliteTaskRepository
from todo_summary.exceptions import StoreError, TaskNotFoundError
from todo_summary.models import TaskCreate, TaskUpdate


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "todos.db"


@pytest.fixture
def repo(db_path, clock):
    repository = SqliteTaskRepository(db_path, clock=clock)
    yield repository
    repository.close()


# ---------------------------------------------------------------------------
# Connection / schema
# ---------------------------------------------------------------------------


def test_connection_creates_schema(db_path):
    conn = get_connection(db_path)
    tables = {
        row["name"]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }
    conn.close()
    assert {"todos", "schema_version"} <= tables


def test_in_memory_connection():
    conn = get_connection(":memory:")
    assert conn.execute("SELECT COUNT(*) FROM todos").fetchone()[0] == 0
    conn.close()


# ---------------------------------------------------------------------------
# add / get
# ---------------------------------------------------------------------------


class TestAdd:
    @pytest.mark.asyncio
    async def test_add_sets_both_timestamps_from_one_instant(self, repo):
        task = await repo.add(TaskCreate(text="Buy milk"))

        assert task.text == "Buy milk"
        assert task.completed is False
        assert task.created_at == task.updated_at
        assert task.id

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, repo):
        first = await repo.add(TaskCreate(text="a"))
        second = await repo.add(TaskCreate(text="b"))
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_blank_text_rejected_by_schema(self, repo):
        with pytest.raises(StoreError):
            await repo.add(TaskCreate(text="   "))
        assert await repo.list_all() == []

    @pytest.mark.asyncio
    async def test_get_unknown_raises(self, repo):
        with pytest.raises(TaskNotFoundError):
            await repo.get("missing")

    @pytest.mark.asyncio
    async def test_data_survives_reopen(self, db_path, repo):
        task = await repo.add(TaskCreate(text="Persist me"))
        repo.close()

        reopened = SqliteTaskRepository(db_path)
        try:
            assert (await reopened.get(task.id)).text == "Persist me"
        finally:
            reopened.close()


# ---------------------------------------------------------------------------
# list_all
# ---------------------------------------------------------------------------


class TestListAll:
    @pytest.mark.asyncio
    async def test_newest_first(self, repo):
        for text in ("first", "second", "third"):
            await repo.add(TaskCreate(text=text))

        tasks = await repo.list_all()
        assert [t.text for t in tasks] == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_ties_broken_by_insertion_order(self, db_path, clock):
        fixed = clock()
        repository = SqliteTaskRepository(db_path, clock=lambda: fixed)
        try:
            for text in ("a", "b", "c"):
                await repository.add(TaskCreate(text=text))
            assert [t.text for t in await repository.list_all()] == ["c", "b", "a"]
        finally:
            repository.close()

    @pytest.mark.asyncio
    async def test_empty(self, repo):
        assert await repo.list_all() == []


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class TestUpdate:
    @pytest.mark.asyncio
    async def test_toggle_changes_only_completed_and_updated_at(self, repo):
        task = await repo.add(TaskCreate(text="Buy milk"))

        updated = await repo.update(task.id, TaskUpdate(completed=True))

        assert updated.completed is True
        assert updated.text == task.text
        assert updated.created_at == task.created_at
        assert updated.updated_at > task.updated_at

    @pytest.mark.asyncio
    async def test_update_text(self, repo):
        task = await repo.add(TaskCreate(text="Old"))
        updated = await repo.update(task.id, TaskUpdate(text="New"))
        assert updated.text == "New"
        assert updated.completed is False

    @pytest.mark.asyncio
    async def test_update_unknown_id_leaves_collection_unchanged(self, repo):
        task = await repo.add(TaskCreate(text="Keep"))
        before = await repo.list_all()

        with pytest.raises(TaskNotFoundError):
            await repo.update("missing", TaskUpdate(completed=True))

        assert await repo.list_all() == before
        assert (await repo.get(task.id)).completed is False

    @pytest.mark.asyncio
    async def test_updated_at_never_before_created_at(self, db_path, clock):
        repository = SqliteTaskRepository(db_path, clock=clock)
        try:
            task = await repository.add(TaskCreate(text="x"))
            clock.current += timedelta(hours=1)
            updated = await repository.update(task.id, TaskUpdate(text="y"))
            assert updated.updated_at - updated.created_at >= timedelta(hours=1)
        finally:
            repository.close()


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_existing(self, repo):
        task = await repo.add(TaskCreate(text="Gone soon"))
        assert await repo.delete(task.id) is True
        assert await repo.list_all() == []

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, repo):
        task = await repo.add(TaskCreate(text="Gone soon"))
        await repo.delete(task.id)
        assert await repo.delete(task.id) is False
        assert await repo.delete("never-existed") is False

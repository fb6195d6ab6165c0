"""Tests for the local TaskManager."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from todo_summary.client.manager import TaskManager, export_filename, generate_client_id
from todo_summary.client.storage import InMemoryTaskStorage, encode_tasks
from todo_summary.exceptions import TaskNotFoundError, TaskValidationError


class FakeMonotonic:
    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def monotonic():
    return FakeMonotonic()


@pytest.fixture
def storage():
    return InMemoryTaskStorage()


@pytest.fixture
def manager(storage, clock, monotonic):
    return TaskManager(storage, clock=clock, monotonic=monotonic)


def _filled(manager, *texts):
    for text in texts:
        manager.add(text)
    return manager


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def test_client_id_format():
    now = datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)
    client_id = generate_client_id(now)
    assert re.fullmatch(rf"{int(now.timestamp() * 1000)}[0-9a-z]{{9}}", client_id)


def test_export_filename_uses_utc_date():
    now = datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc)
    assert export_filename(now) == "todos-2026-10-19.json"


# ---------------------------------------------------------------------------
# Loading and adding
# ---------------------------------------------------------------------------


class TestAdd:
    def test_loads_stored_collection(self, make_task, clock):
        storage = InMemoryTaskStorage(encode_tasks([make_task("Stored")]))
        assert [t.text for t in TaskManager(storage, clock=clock).tasks] == ["Stored"]

    def test_corrupt_storage_starts_empty(self, clock):
        assert TaskManager(InMemoryTaskStorage("garbage"), clock=clock).tasks == []

    def test_add_appends_and_persists(self, manager, storage):
        _filled(manager, "first", " second ")

        assert [t.text for t in manager.tasks] == ["first", "second"]
        assert [t["text"] for t in json.loads(storage.raw)] == ["first", "second"]
        assert manager.current_alert.message == "Todo Added Successfully!"

    def test_blank_rejected_with_alert(self, manager, storage):
        with pytest.raises(TaskValidationError):
            manager.add("   ")

        assert manager.tasks == []
        assert storage.raw is None
        assert manager.current_alert.message == "Please enter a todo item!"
        assert manager.current_alert.type == "info"


# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------


def test_alert_expires(manager, monotonic):
    manager.add("Buy milk")
    monotonic.now += 2.9
    assert manager.current_alert is not None
    monotonic.now += 0.2
    assert manager.current_alert is None


def test_new_alert_replaces_previous(manager):
    manager.add("Buy milk")
    manager.toggle(0)
    assert manager.current_alert.message == "Task completed! 🎉"


# ---------------------------------------------------------------------------
# Toggle / edit / delete / clear
# ---------------------------------------------------------------------------


class TestMutations:
    def test_toggle_round_trip(self, manager):
        _filled(manager, "Buy milk")
        created = manager.tasks[0]

        done = manager.toggle(0)
        assert done.completed is True
        assert done.updated_at > created.updated_at
        assert done.created_at == created.created_at

        assert manager.toggle(0).completed is False
        assert manager.current_alert.message == "Task marked as pending"

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_bad_position(self, manager, index):
        _filled(manager, "only")
        with pytest.raises(TaskNotFoundError):
            manager.toggle(index)

    def test_edit_draft_hidden_until_saved(self, manager):
        _filled(manager, "Old text")
        session = manager.begin_edit(0)
        assert session.draft == "Old text"

        manager.set_draft("  New text ")
        assert manager.tasks[0].text == "Old text"

        updated = manager.save_edit()
        assert updated.text == "New text"
        assert manager.tasks[0].text == "New text"
        assert manager.editing is None

    def test_edit_blank_keeps_session(self, manager):
        _filled(manager, "Keep")
        manager.begin_edit(0)
        manager.set_draft("   ")

        with pytest.raises(TaskValidationError):
            manager.save_edit()

        assert manager.tasks[0].text == "Keep"
        assert manager.editing is not None
        assert manager.current_alert.message == "Todo text cannot be empty!"

    def test_cancel_edit(self, manager):
        _filled(manager, "Keep")
        manager.begin_edit(0)
        manager.set_draft("Discarded")
        manager.cancel_edit()

        assert manager.editing is None
        assert manager.tasks[0].text == "Keep"

    def test_save_without_session(self, manager):
        with pytest.raises(TaskValidationError):
            manager.save_edit()

    def test_delete_requires_confirmation(self, manager):
        _filled(manager, "a", "b")

        assert manager.delete(0, confirm=lambda: False) is False
        assert len(manager.tasks) == 2

        assert manager.delete(0, confirm=lambda: True) is True
        assert [t.text for t in manager.tasks] == ["b"]

    def test_delete_ends_edit_of_that_task(self, manager):
        _filled(manager, "a")
        manager.begin_edit(0)
        manager.delete(0)
        assert manager.editing is None

    def test_clear_all(self, manager, storage):
        _filled(manager, "a", "b")
        assert manager.clear_all(confirm=lambda: True) is True
        assert manager.tasks == []
        assert json.loads(storage.raw) == []

    def test_clear_all_empty(self, manager):
        assert manager.clear_all() is False
        assert manager.current_alert.message == "No todos to clear!"


# ---------------------------------------------------------------------------
# Celebration
# ---------------------------------------------------------------------------


def test_celebration_fires_on_transition_to_all_complete(storage, clock):
    celebrate = MagicMock()
    manager = TaskManager(storage, clock=clock, on_all_complete=celebrate)
    _filled(manager, "a", "b")

    manager.toggle(0)
    celebrate.assert_not_called()

    manager.toggle(1)
    celebrate.assert_called_once()

    manager.begin_edit(0)
    manager.set_draft("renamed")
    manager.save_edit()
    celebrate.assert_called_once()


# ---------------------------------------------------------------------------
# Export / import
# ---------------------------------------------------------------------------


class TestExportImport:
    def test_export_then_import(self, manager, tmp_path, clock):
        _filled(manager, "a", "b")
        manager.toggle(1)

        path = manager.export(tmp_path / "out")
        assert path.name == "todos-2026-10-19.json"

        other = TaskManager(InMemoryTaskStorage(), clock=clock)
        imported = other.import_file(path)

        assert imported == manager.tasks
        assert other.current_alert.message == "Imported 2 todos! 📤"

    @pytest.mark.parametrize(
        "content", ["not json", '{"text": "x"}', '[{"text": "missing id"}]']
    )
    def test_import_rejects_bad_files(self, manager, tmp_path, content):
        _filled(manager, "existing")
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(TaskValidationError):
            manager.import_file(path)
        assert [t.text for t in manager.tasks] == ["existing"]

    def test_import_rejects_duplicate_ids(self, manager, tmp_path, make_task):
        task = make_task()
        path = tmp_path / "dup.json"
        path.write_text(encode_tasks([task, task]), encoding="utf-8")

        with pytest.raises(TaskValidationError, match="duplicate"):
            manager.import_file(path)

    def test_import_missing_file(self, manager, tmp_path):
        with pytest.raises(TaskValidationError):
            manager.import_file(tmp_path / "nope.json")

    @pytest.mark.parametrize(
        "row",
        [
            {
                "text": "   ",
                "created_at": "2026-10-19T10:00:00Z",
                "updated_at": "2026-10-19T10:00:00Z",
            },
            {
                "text": "Buy milk",
                "created_at": "2026-10-19T10:00:00Z",
                "updated_at": "2026-10-18T10:00:00Z",
            },
            {
                "text": "Buy milk",
                "created_at": "2026-10-19T10:00:00",
                "updated_at": "2026-10-19T11:00:00Z",
            },
        ],
        ids=["blank-text", "updated-before-created", "mixed-timezones"],
    )
    def test_import_rejects_broken_tasks(self, manager, tmp_path, row):
        _filled(manager, "existing")
        path = tmp_path / "broken.json"
        path.write_text(json.dumps([{"id": "a", "completed": False, **row}]), encoding="utf-8")

        with pytest.raises(TaskValidationError):
            manager.import_file(path)
        assert [t.text for t in manager.tasks] == ["existing"]

    def test_import_trims_text(self, manager, tmp_path):
        path = tmp_path / "padded.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "a",
                        "text": "  Buy milk ",
                        "completed": False,
                        "created_at": "2026-10-19T10:00:00Z",
                        "updated_at": "2026-10-19T10:00:00Z",
                    }
                ]
            ),
            encoding="utf-8",
        )

        assert manager.import_file(path)[0].text == "Buy milk"


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


class TestViews:
    def test_filtered_keeps_positions(self, manager):
        _filled(manager, "a", "b", "c")
        manager.toggle(1)

        assert [(i, t.text) for i, t in manager.filtered("pending")] == [(0, "a"), (2, "c")]
        assert [(i, t.text) for i, t in manager.filtered("completed")] == [(1, "b")]
        assert len(manager.filtered()) == 3

    def test_stats_and_progress(self, manager):
        _filled(manager, "a", "b", "c")
        manager.toggle(0)

        stats = manager.stats
        assert (stats.total, stats.completed, stats.pending) == (3, 1, 2)
        assert stats.completion_rate == 33
        assert manager.progress == pytest.approx(100 / 3)

    def test_empty_progress(self, manager):
        assert manager.progress == 0.0
        assert manager.all_complete is False

    def test_generate_summary(self, manager):
        _filled(manager, "a", "b")
        manager.toggle(0)

        report = manager.generate_summary(datetime(2026, 10, 19, 14, 30))

        assert report.startswith("📋 Todo Summary Report - Monday, October 19, 2026 at 02:30 PM")
        assert "📈 Progress: 50%" in report
        assert manager.summary == report

    def test_generate_summary_empty(self, manager):
        assert manager.generate_summary() is None
        assert manager.current_alert.message == "No todos to summarize!"

"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/environment state.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from todo_summary.config import ENV_OVERRIDES
from todo_summary.models import Task

BASE_TIME = datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)


class TickingClock:
    """Callable clock that advances by ``step`` on every call."""

    def __init__(self, start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point config, data and log directories at tmp_path and clear env overrides."""
    monkeypatch.setattr(
        "todo_summary.config.user_config_dir", lambda *_: str(tmp_path / "config")
    )
    monkeypatch.setattr(
        "todo_summary.config.user_data_dir", lambda *_: str(tmp_path / "data")
    )
    monkeypatch.setattr(
        "todo_summary.client.storage.user_data_dir", lambda *_: str(tmp_path / "data")
    )
    monkeypatch.setattr(
        "todo_summary.adapters.sqlite.connection.user_data_dir",
        lambda *_: str(tmp_path / "data"),
    )
    monkeypatch.setattr(
        "todo_summary.utils.logger.user_log_dir", lambda *_: str(tmp_path / "logs")
    )
    monkeypatch.setattr("todo_summary.config._config_manager", None)
    for var in ENV_OVERRIDES:
        monkeypatch.delenv(var, raising=False)
    yield tmp_path


# ---------------------------------------------------------------------------
# Task helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def make_task():
    """Factory for Task objects with deterministic ids and timestamps."""
    counter = {"n": 0}

    def _make(text: str = "Buy milk", completed: bool = False, **overrides) -> Task:
        counter["n"] += 1
        created = BASE_TIME + timedelta(minutes=counter["n"])
        data = {
            "id": f"task-{counter['n']}",
            "text": text,
            "completed": completed,
            "created_at": created,
            "updated_at": created,
        }
        data.update(overrides)
        return Task(**data)

    return _make


@pytest.fixture
def three_of_four(make_task) -> list[Task]:
    """Four tasks, three of them completed."""
    return [
        make_task("Write report", completed=True),
        make_task("Book flights", completed=True),
        make_task("Pay rent", completed=True),
        make_task("Call plumber"),
    ]

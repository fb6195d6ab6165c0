"""Durable storage for the local task collection.

The collection is kept as one JSON array under one key. Reading a missing,
corrupt or non-array payload yields an empty collection.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError

from todo_summary.models import Task

logger = logging.getLogger(__name__)

DEFAULT_KEY = "todos"


def decode_tasks(raw: str | None) -> list[Task]:
    """Parse a stored JSON array into tasks; anything unreadable becomes []."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning("Stored todos are not valid JSON, starting empty: %s", e)
        return []
    if not isinstance(data, list):
        logger.warning("Stored todos are not a JSON array, starting empty")
        return []
    try:
        return [Task.model_validate(item) for item in data]
    except ValidationError as e:
        logger.warning("Stored todos failed validation, starting empty: %s", e)
        return []


def encode_tasks(tasks: list[Task]) -> str:
    return json.dumps([task.model_dump(mode="json") for task in tasks], indent=2)


class TaskStorage(ABC):
    """Key/value style storage holding the serialized collection."""

    @abstractmethod
    def load(self) -> list[Task]:
        """Read the stored collection."""
        pass

    @abstractmethod
    def save(self, tasks: list[Task]) -> None:
        """Replace the stored collection."""
        pass


class InMemoryTaskStorage(TaskStorage):
    """Storage that keeps the serialized payload in memory."""

    def __init__(self, raw: str | None = None):
        self.raw = raw

    def load(self) -> list[Task]:
        return decode_tasks(self.raw)

    def save(self, tasks: list[Task]) -> None:
        self.raw = encode_tasks(tasks)


class LocalTaskStorage(TaskStorage):
    """Storage backed by ``<key>.json`` in the user data directory."""

    def __init__(self, key: str = DEFAULT_KEY, directory: Path | None = None):
        self.directory = Path(directory or user_data_dir("todo_summary"))
        self.path = self.directory / f"{key}.json"

    def load(self) -> list[Task]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot read %s, starting empty: %s", self.path, e)
            return []
        return decode_tasks(raw)

    def save(self, tasks: list[Task]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path.write_text(encode_tasks(tasks), encoding="utf-8")
        logger.debug("Saved %d todos to %s", len(tasks), self.path)

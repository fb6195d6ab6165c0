"""Local client: task manager and its storage."""

from .manager import Alert, EditSession, TaskManager, generate_client_id
from .storage import InMemoryTaskStorage, LocalTaskStorage, TaskStorage

__all__ = [
    "TaskManager",
    "Alert",
    "EditSession",
    "generate_client_id",
    "TaskStorage",
    "InMemoryTaskStorage",
    "LocalTaskStorage",
]

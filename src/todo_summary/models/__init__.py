"""Data models for Todo Summary Assistant."""

from .task import SummaryResult, Task, TaskCreate, TaskFilter, TaskStats, TaskUpdate

__all__ = [
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStats",
    "TaskFilter",
    "SummaryResult",
]

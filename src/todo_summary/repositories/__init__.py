"""Repository interfaces for Todo Summary Assistant.

This package contains the abstract base class that defines the contract
for task persistence. This is the "Port" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- todo_summary.adapters.sqlite (local storage)
- todo_summary.adapters.supabase (managed PostgREST store)
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]

"""Storage adapters implementing the TaskRepository port.

Available adapters:
- SqliteTaskRepository: local SQLite file (default, no credentials needed)
- SupabaseTaskRepository: managed Postgres exposed through PostgREST
"""

from .sqlite import SqliteTaskRepository
from .supabase import SupabaseTaskRepository

__all__ = ["SqliteTaskRepository", "SupabaseTaskRepository"]

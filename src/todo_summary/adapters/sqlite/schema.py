"""Database schema definitions for the local SQLite store.

The table mirrors the managed store's `todos` table so both backends
return the same shape.
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

CREATE_TODOS_TABLE = """
CREATE TABLE IF NOT EXISTS todos (
    id TEXT PRIMARY KEY,
    text TEXT NOT NULL CHECK (length(trim(text)) > 0),
    completed BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

CREATE_SCHEMA_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at DATETIME NOT NULL
)
"""

ALL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_todos_created_at ON todos(created_at)",
]

ALL_TABLES = [
    CREATE_SCHEMA_VERSION_TABLE,
    CREATE_TODOS_TABLE,
]

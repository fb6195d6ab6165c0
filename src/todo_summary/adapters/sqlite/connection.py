"""Database connection management for the local SQLite store.

Opens a configured connection (WAL mode, dict-like rows, owner-only file
permissions) and makes sure the schema exists before first use.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todo_summary.adapters.sqlite import schema
from todo_summary.adapters.sqlite.utils import to_iso, utc_now

_APP_NAME = "todo_summary"
_DEFAULT_DB_FILE = "todos.db"


def default_db_path() -> Path:
    """Default database location inside the platform data directory."""
    return Path(user_data_dir(_APP_NAME)) / _DEFAULT_DB_FILE


def initialize_schema(connection: sqlite3.Connection) -> None:
    """Create tables and indexes if they do not exist yet."""
    for table_sql in schema.ALL_TABLES:
        connection.execute(table_sql)
    for index_sql in schema.ALL_INDEXES:
        connection.execute(index_sql)
    connection.execute(
        "INSERT OR IGNORE INTO schema_version (version, applied_at) VALUES (?, ?)",
        (schema.SCHEMA_VERSION, to_iso(utc_now())),
    )
    connection.commit()


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Open a database connection with the schema applied.

    Args:
        db_path: Path to database file. If None, uses default location.
            ":memory:" opens a private in-memory database.

    Returns:
        sqlite3.Connection configured for task storage
    """
    if str(db_path) == ":memory:":
        connection = sqlite3.connect(":memory:", check_same_thread=False)
        connection.row_factory = sqlite3.Row
        initialize_schema(connection)
        return connection

    path = default_db_path() if db_path is None else Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    is_new_database = not path.exists()

    connection = sqlite3.connect(
        str(path),
        check_same_thread=False,  # FastAPI may run handlers on worker threads
        timeout=30.0,
    )
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA journal_mode = WAL")

    if is_new_database:
        os.chmod(path, 0o600)

    initialize_schema(connection)
    return connection

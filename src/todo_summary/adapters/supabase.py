"""Supabase adapter - TaskRepository over the PostgREST interface.

Talks to `<SUPABASE_URL>/rest/v1/<table>` with httpx. Filters use PostgREST
syntax (`id=eq.<id>`, `order=created_at.desc`) and writes ask for the
affected rows back with `Prefer: return=representation`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx

from todo_summary.adapters.sqlite.utils import to_iso, utc_now
from todo_summary.exceptions import ConfigurationError, StoreError, TaskNotFoundError
from todo_summary.models import Task, TaskCreate, TaskUpdate
from todo_summary.repositories import TaskRepository

logger = logging.getLogger(__name__)

_RETURN_REPRESENTATION = {"Prefer": "return=representation"}


class SupabaseTaskRepository(TaskRepository):
    """Task repository implementation backed by a Supabase table."""

    def __init__(
        self,
        url: str | None,
        key: str | None,
        *,
        table: str = "todos",
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the Supabase repository.

        Args:
            url: Project URL (SUPABASE_URL)
            key: Service or anon key (SUPABASE_KEY)
            table: Table holding the tasks
            timeout: Request timeout in seconds
            client: Optional pre-built httpx client (tests inject a mock transport)
            clock: Source of "now" for timestamps

        Raises:
            ConfigurationError: If url or key is missing
        """
        if not url or not url.strip():
            raise ConfigurationError("SUPABASE_URL is not defined in environment variables")
        if not key or not key.strip():
            raise ConfigurationError("SUPABASE_KEY is not defined in environment variables")

        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self.table = table
        self.clock = clock
        self._headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout
        )

    async def aclose(self) -> None:
        """Close the HTTP client if this repository created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        """Send one request to the table endpoint and return the JSON rows."""
        request_headers = dict(self._headers)
        if headers:
            request_headers.update(headers)

        try:
            response = await self._client.request(
                method,
                f"{self.base_url}/{self.table}",
                params=params,
                json=json,
                headers=request_headers,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Supabase %s %s failed with %s: %s",
                method,
                self.table,
                e.response.status_code,
                e.response.text,
            )
            raise StoreError(f"Supabase error {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Supabase %s %s failed: %s", method, self.table, e)
            raise StoreError(f"Supabase request failed: {e}") from e

        if not response.content:
            return []
        data = response.json()
        return data if isinstance(data, list) else [data]

    async def list_all(self) -> list[Task]:
        """List all tasks, newest first."""
        rows = await self._request(
            "GET", params={"select": "*", "order": "created_at.desc"}
        )
        return [Task(**row) for row in rows]

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        rows = await self._request(
            "GET", params={"select": "*", "id": f"eq.{task_id}"}
        )
        if not rows:
            raise TaskNotFoundError(f"Task not found: {task_id}")
        return Task(**rows[0])

    async def add(self, task_data: TaskCreate) -> Task:
        """Insert a new task and return the stored row."""
        now = to_iso(self.clock())
        rows = await self._request(
            "POST",
            json=[
                {
                    "text": task_data.text,
                    "completed": False,
                    "created_at": now,
                    "updated_at": now,
                }
            ],
            headers=_RETURN_REPRESENTATION,
        )
        if not rows:
            raise StoreError("Supabase returned no row for insert")
        return Task(**rows[0])

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update a task; an empty representation means the id did not match."""
        payload = updates.changes()
        payload["updated_at"] = to_iso(self.clock())

        rows = await self._request(
            "PATCH",
            params={"id": f"eq.{task_id}"},
            json=payload,
            headers=_RETURN_REPRESENTATION,
        )
        if not rows:
            raise TaskNotFoundError(f"Task not found: {task_id}")
        return Task(**rows[0])

    async def delete(self, task_id: str) -> bool:
        """Delete a task. Returns False when no row matched."""
        rows = await self._request(
            "DELETE",
            params={"id": f"eq.{task_id}"},
            headers=_RETURN_REPRESENTATION,
        )
        return bool(rows)

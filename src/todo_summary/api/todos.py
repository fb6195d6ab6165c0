"""Todo API endpoints."""

from typing import Any, Literal, Optional

from todo_summary.api.client import APIClient
from todo_summary.exceptions import TaskValidationError


def _clean_text(text: Optional[str], message: str) -> str:
    text = (text or "").strip()
    if not text:
        raise TaskValidationError(message)
    return text


class TodosAPI:
    """Todos API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_todos(self) -> list[dict]:
        """List all todos, newest first."""
        response = await self.client.get("/todos")
        return response.json()

    async def create_todo(self, text: str) -> dict:
        """Create a new todo. Blank text is rejected before any request."""
        text = _clean_text(text, "Todo text is required")
        response = await self.client.post("/todos", json={"text": text})
        return response.json()

    async def update_todo(
        self,
        todo_id: str,
        *,
        text: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> dict:
        """Update a todo's text and/or completion flag."""
        data: dict[str, Any] = {}
        if text is not None:
            data["text"] = _clean_text(text, "Todo text cannot be empty")
        if completed is not None:
            data["completed"] = completed

        response = await self.client.put(f"/todos/{todo_id}", json=data)
        return response.json()

    async def delete_todo(self, todo_id: str) -> dict:
        """Delete a todo."""
        response = await self.client.delete(f"/todos/{todo_id}")
        return response.json()

    async def summarize(self) -> dict:
        """Send the structured summary to Slack."""
        response = await self.client.post("/todos/summarize")
        return response.json()

    async def send_summary(self) -> dict:
        """Send the summary (LLM prose when the server has a key) to Slack."""
        response = await self.client.post("/summary")
        return response.json()

    async def send_report(self, report_type: Literal["daily", "weekly"] = "daily") -> dict:
        """Send the periodic report to Slack."""
        response = await self.client.post(
            "/summary/report", params={"report_type": report_type}
        )
        return response.json()

    async def health(self) -> dict:
        """Check backend health."""
        response = await self.client.get("/health")
        return response.json()

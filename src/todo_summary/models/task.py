"""Task data models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

TaskFilter = Literal["all", "pending", "completed"]


class Task(BaseModel):
    """Task model representing a single to-do item.

    Attributes:
        id: Opaque unique identifier (server-, database- or client-assigned)
        text: Trimmed, non-empty task text
        completed: Completion status
        created_at: Creation timestamp, never changes
        updated_at: Refreshed on every text or completion change
    """

    id: str
    text: str
    completed: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> str:
        """Stores with integer identity columns return numeric ids."""
        return str(v)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        text = v.strip()
        if not text:
            raise ValueError("text must not be blank")
        return text

    @model_validator(mode="after")
    def check_timestamps(self) -> Task:
        try:
            out_of_order = self.updated_at < self.created_at
        except TypeError as e:
            # naive and aware timestamps cannot be ordered
            raise ValueError("created_at and updated_at must share a timezone") from e
        if out_of_order:
            raise ValueError("updated_at must not be earlier than created_at")
        return self


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        text: Task text (already trimmed by the service layer)
    """

    text: str = Field(min_length=1)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only provided fields will be updated.

    Attributes:
        text: New task text
        completed: New completion status
    """

    text: str | None = None
    completed: bool | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields that were provided."""
        return self.model_dump(exclude_none=True)


class TaskStats(BaseModel):
    """Derived counts for a task collection."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: int = 0


class SummaryResult(BaseModel):
    """Outcome of a summarize request.

    Attributes:
        message: Status message for the caller
        summary: Plain-text form of what was sent, if anything: the LLM prose,
            or the checklist rendering of the structured block message
        sent: Whether a notification was delivered
    """

    message: str
    summary: str | None = None
    sent: bool = False

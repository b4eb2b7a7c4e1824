"""Core task models for Synaptik MCP."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from synaptik_mcp.enums import Priority, SortField, SortOrder, TaskStatus
from synaptik_mcp.utils.tags import normalize_tags


class TaskAnnotation(BaseModel):
    """Model for task annotations (notes)."""

    timestamp: str | None = None
    description: str = ""


class TaskModel(BaseModel):
    """A stored task with all its attributes."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    id: str | None = None
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.NONE
    urgency: float = Field(default=0.0, ge=0, le=100)
    project: str | None = None
    assignee: str | None = None
    due_date: str | None = None
    wait_until: str | None = None
    scheduled_date: str | None = None
    tags: list[str] = Field(default_factory=list)
    annotations: list[TaskAnnotation] = Field(default_factory=list)
    depends: list[str] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def normalize(cls, v: list[str] | None) -> list[str]:
        return normalize_tags(v)


class TaskDraft(BaseModel):
    """
    Structured result of parsing a quick-capture string.

    Date fields hold the raw expressions ("tomorrow", "3d", "2025-01-31");
    they are resolved when the draft is turned into a task. Tags are kept
    exactly as typed, duplicates included.
    """

    title: str = ""
    description: str | None = None
    priority: Priority | None = None
    project: str | None = None
    assignee: str | None = None
    due: str | None = None
    scheduled: str | None = None
    wait: str | None = None
    tags: list[str] = Field(default_factory=list)
    depends: list[str] = Field(default_factory=list)


class TaskFilter(BaseModel):
    """Criteria for listing tasks; empty criteria match everything but deleted tasks."""

    status: list[TaskStatus] | None = None
    priority: list[Priority] | None = None
    project: str | None = None
    tags: list[str] | None = None
    assignee: str | None = None
    due_before: datetime | None = None
    due_after: datetime | None = None
    depends: str | None = None
    limit: int = Field(default=100, ge=1)
    sort_by: SortField = SortField.URGENCY
    sort_order: SortOrder = SortOrder.DESC

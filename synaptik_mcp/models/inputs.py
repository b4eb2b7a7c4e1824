"""Input models for Synaptik MCP tools."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from synaptik_mcp.enums import Priority, ResponseFormat, SortField, SortOrder, TaskStatus
from synaptik_mcp.utils.tags import parse_tag_input

# ============================================================================
# Core Tool Input Models
# ============================================================================


class CaptureTaskInput(BaseModel):
    """Input model for quick capture."""

    model_config = ConfigDict(str_strip_whitespace=True)

    input: str = Field(
        ...,
        description="TaskWarrior-style input, e.g. 'Buy groceries due:tomorrow +shopping priority:H'",
        min_length=1,
        max_length=500,
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class AddTaskInput(BaseModel):
    """Input model for adding a new task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., description="Task title (required)", min_length=1, max_length=200)
    description: str | None = Field(default=None, description="Longer task description", max_length=1000)
    project: str | None = Field(default=None, description="Project name to assign the task to")
    assignee: str | None = Field(default=None, description="Person responsible for the task")
    priority: Priority | None = Field(default=None, description="Task priority: H (high), M (medium), L (low)")
    due: str | None = Field(
        default=None,
        description="Due date (e.g., 'today', 'tomorrow', 'friday', '3d', '2w', 'eom', '2025-12-31')",
    )
    wait: str | None = Field(default=None, description="Hide the task until this date (same formats as due)")
    scheduled: str | None = Field(default=None, description="Date work is scheduled to begin")
    tags: list[str] | None = Field(
        default=None,
        description="Tags to apply, as a list or a comma-separated string (without '+' prefix)",
        max_length=20,
    )
    depends: str | None = Field(default=None, description="Task ID(s) this task depends on (comma-separated)")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: list[str] | str | None) -> list[str] | None:
        return parse_tag_input(v) if isinstance(v, str) else v


class ListTasksInput(BaseModel):
    """Input model for listing tasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    status: list[TaskStatus] | None = Field(
        default=None,
        description="Statuses to include; default is every status except deleted",
    )
    priority: list[Priority] | None = Field(default=None, description="Priorities to include: H, M, L")
    project: str | None = Field(default=None, description="Only tasks in this project")
    assignee: str | None = Field(default=None, description="Only tasks assigned to this person")
    tags: list[str] | None = Field(default=None, description="Only tasks carrying any of these tags")
    due_before: str | None = Field(default=None, description="Due on or before this date expression")
    due_after: str | None = Field(default=None, description="Due on or after this date expression")
    depends: str | None = Field(default=None, description="Only tasks that depend on this task ID")
    sort_by: SortField = Field(default=SortField.URGENCY, description="urgency, due, priority, entry or modified")
    sort_order: SortOrder = Field(default=SortOrder.DESC, description="asc or desc (urgency is always desc)")
    limit: int = Field(default=50, description="Maximum number of tasks to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class GetTaskInput(BaseModel):
    """Input model for getting a single task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID (or a unique prefix of at least 4 characters)", min_length=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class ModifyTaskInput(BaseModel):
    """Input model for modifying a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID to modify", min_length=1)
    title: str | None = Field(default=None, description="New task title")
    description: str | None = Field(default=None, description="New description (use empty string to remove)")
    status: TaskStatus | None = Field(default=None, description="New status")
    priority: Priority | None = Field(default=None, description="New priority: H, M, L, or empty to remove")
    project: str | None = Field(default=None, description="New project name (use empty string to remove)")
    assignee: str | None = Field(default=None, description="New assignee (use empty string to remove)")
    due: str | None = Field(default=None, description="New due date (use empty string to remove)")
    wait: str | None = Field(default=None, description="New wait date (use empty string to remove)")
    scheduled: str | None = Field(default=None, description="New scheduled date (use empty string to remove)")
    add_tags: list[str] | None = Field(default=None, description="Tags to add (list or comma-separated)")
    remove_tags: list[str] | None = Field(default=None, description="Tags to remove (list or comma-separated)")
    depends: str | None = Field(default=None, description="Replace dependencies (comma-separated IDs, empty to clear)")

    @field_validator("add_tags", "remove_tags", mode="before")
    @classmethod
    def split_tags(cls, v: list[str] | str | None) -> list[str] | None:
        return parse_tag_input(v) if isinstance(v, str) else v


class TaskIdInput(BaseModel):
    """Input model for tools that act on one task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: str = Field(..., description="Task ID (or a unique prefix of at least 4 characters)", min_length=1)


class StartTaskInput(TaskIdInput):
    """Input model for starting a task."""


class StopTaskInput(TaskIdInput):
    """Input model for stopping a task."""


class CompleteTaskInput(TaskIdInput):
    """Input model for completing a task."""


class UndoneTaskInput(TaskIdInput):
    """Input model for reopening a completed task."""


class DeleteTaskInput(TaskIdInput):
    """Input model for deleting a task."""

    purge: bool = Field(
        default=False,
        description="Remove the task from the store instead of marking it deleted",
    )


class AnnotateTaskInput(TaskIdInput):
    """Input model for adding an annotation to a task."""

    annotation: str = Field(..., description="Annotation text to add", min_length=1, max_length=2000)


class ListProjectsInput(BaseModel):
    """Input model for listing projects."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class ListTagsInput(BaseModel):
    """Input model for listing tags."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


class DashboardInput(BaseModel):
    """Input model for the dashboard overview."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable",
    )


# ============================================================================
# View Tool Input Models
# ============================================================================


class ViewInput(BaseModel):
    """Input model for the predefined task views (pending, active, overdue, today)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    limit: int = Field(default=20, description="Maximum number of tasks to return", ge=1, le=200)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'concise', 'markdown' or 'json'"
    )


class NextTaskInput(BaseModel):
    """Input model for the next-task view."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'concise', 'markdown' or 'json'"
    )

"""
MCP Server for Synaptik task management.

This server provides tools for TaskWarrior-style task management backed by a
local JSON task store: quick capture, urgency scoring, listing, updating and
organizing tasks with projects, assignees and tags.
"""

# Re-export enums
from synaptik_mcp.enums import Priority, ResponseFormat, SortField, SortOrder, TaskStatus

# Re-export errors
from synaptik_mcp.errors import (
    InvalidDateError,
    StoreError,
    SynaptikError,
    TaskNotFoundError,
    ValidationError,
)

# Re-export models
from synaptik_mcp.models import (
    AddTaskInput,
    AnnotateTaskInput,
    CaptureTaskInput,
    CompleteTaskInput,
    DashboardInput,
    DeleteTaskInput,
    GetTaskInput,
    ListProjectsInput,
    ListTagsInput,
    ListTasksInput,
    ModifyTaskInput,
    NextTaskInput,
    StartTaskInput,
    StopTaskInput,
    TaskAnnotation,
    TaskDraft,
    TaskFilter,
    TaskModel,
    UndoneTaskInput,
    ViewInput,
)

# Re-export MCP server instance
from synaptik_mcp.server import mcp

# Re-export service layer
from synaptik_mcp.service import TaskService, get_service
from synaptik_mcp.store import TaskStore

# Re-export tools
from synaptik_mcp.tools import (
    synaptik_active,
    synaptik_add,
    synaptik_annotate,
    synaptik_capture,
    synaptik_dashboard,
    synaptik_delete,
    synaptik_done,
    synaptik_get,
    synaptik_list,
    synaptik_modify,
    synaptik_next,
    synaptik_overdue,
    synaptik_pending,
    synaptik_projects,
    synaptik_refresh_urgency,
    synaptik_start,
    synaptik_stop,
    synaptik_tags,
    synaptik_today,
    synaptik_undone,
)

# Re-export core functions
from synaptik_mcp.utils.dates import resolve_date
from synaptik_mcp.utils.parsers import parse_quick_capture
from synaptik_mcp.utils.urgency import compute_urgency, urgency_or_default

__all__ = [
    # Enums
    "ResponseFormat",
    "TaskStatus",
    "Priority",
    "SortField",
    "SortOrder",
    # Errors
    "SynaptikError",
    "TaskNotFoundError",
    "ValidationError",
    "StoreError",
    "InvalidDateError",
    # Task models
    "TaskAnnotation",
    "TaskModel",
    "TaskDraft",
    "TaskFilter",
    # Input models
    "CaptureTaskInput",
    "AddTaskInput",
    "ListTasksInput",
    "GetTaskInput",
    "ModifyTaskInput",
    "StartTaskInput",
    "StopTaskInput",
    "CompleteTaskInput",
    "UndoneTaskInput",
    "DeleteTaskInput",
    "AnnotateTaskInput",
    "ListProjectsInput",
    "ListTagsInput",
    "DashboardInput",
    "ViewInput",
    "NextTaskInput",
    # Core functions
    "compute_urgency",
    "urgency_or_default",
    "parse_quick_capture",
    "resolve_date",
    # Service layer
    "TaskStore",
    "TaskService",
    "get_service",
    # Core tools
    "synaptik_capture",
    "synaptik_add",
    "synaptik_list",
    "synaptik_get",
    "synaptik_modify",
    "synaptik_start",
    "synaptik_stop",
    "synaptik_done",
    "synaptik_undone",
    "synaptik_delete",
    "synaptik_annotate",
    "synaptik_projects",
    "synaptik_tags",
    "synaptik_dashboard",
    # View tools
    "synaptik_pending",
    "synaptik_active",
    "synaptik_next",
    "synaptik_overdue",
    "synaptik_today",
    "synaptik_refresh_urgency",
    # MCP server instance
    "mcp",
]

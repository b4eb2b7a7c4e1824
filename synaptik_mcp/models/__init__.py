"""Pydantic models for Synaptik MCP."""

from synaptik_mcp.models.inputs import (
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
    TaskIdInput,
    UndoneTaskInput,
    ViewInput,
)
from synaptik_mcp.models.task import TaskAnnotation, TaskDraft, TaskFilter, TaskModel

__all__ = [
    # Task models
    "TaskAnnotation",
    "TaskModel",
    "TaskDraft",
    "TaskFilter",
    # Core input models
    "CaptureTaskInput",
    "AddTaskInput",
    "ListTasksInput",
    "GetTaskInput",
    "ModifyTaskInput",
    "TaskIdInput",
    "StartTaskInput",
    "StopTaskInput",
    "CompleteTaskInput",
    "UndoneTaskInput",
    "DeleteTaskInput",
    "AnnotateTaskInput",
    "ListProjectsInput",
    "ListTagsInput",
    "DashboardInput",
    # View input models
    "ViewInput",
    "NextTaskInput",
]

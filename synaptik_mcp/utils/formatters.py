"""Formatting utilities for task output."""

import json
from typing import Any

from synaptik_mcp.enums import ResponseFormat
from synaptik_mcp.models.task import TaskModel

PRIORITY_NAMES = {"H": "High", "M": "Medium", "L": "Low"}
STATUS_ICONS = {"pending": "○", "waiting": "⏸", "active": "▶", "completed": "✓", "deleted": "✗"}


def _short_id(task: TaskModel) -> str:
    return task.id[:8] if task.id else "?"


def _format_task_concise(task: TaskModel) -> str:
    """
    Format a single task in concise format for token efficiency.

    Output: "#1a2b3c4d: Title (H, due:2024-12-31, proj:work, u:8.40)"
    """
    title = task.title[:50]

    meta = []
    if task.priority.value:
        meta.append(task.priority.value)
    if task.status.value != "pending":
        meta.append(task.status.value)
    if task.due_date:
        meta.append(f"due:{task.due_date[:10]}")
    if task.project:
        meta.append(f"proj:{task.project}")
    meta.append(f"u:{task.urgency:.2f}")

    return f"#{_short_id(task)}: {title} ({', '.join(meta)})"


def _format_tasks_concise(tasks: list[TaskModel], title: str | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | overdue
    #1a2b3c4d: Task one (H, due:2024-12-31, u:14.20)
    #5e6f7a8b: Task two (M, u:3.90)
    """
    if not tasks:
        return "0 tasks"

    header = f"{len(tasks)} task(s)"
    if title:
        header = f"{len(tasks)} task(s) | {title}"

    return "\n".join([header] + [_format_task_concise(task) for task in tasks])


def _format_task_markdown(task: TaskModel) -> str:
    """Format a single task as markdown."""
    lines = []

    icon = STATUS_ICONS.get(task.status.value, "")
    lines.append(f"### {icon} [{_short_id(task)}] {task.title}")

    details = [f"**Status**: {task.status.value}", f"**Urgency**: {task.urgency:.2f}"]
    if task.priority.value:
        details.append(f"**Priority**: {PRIORITY_NAMES.get(task.priority.value, task.priority.value)}")
    if task.project:
        details.append(f"**Project**: {task.project}")
    if task.assignee:
        details.append(f"**Assignee**: {task.assignee}")
    if task.due_date:
        details.append(f"**Due**: {task.due_date[:10]}")
    if task.wait_until:
        details.append(f"**Wait**: {task.wait_until[:10]}")
    if task.scheduled_date:
        details.append(f"**Scheduled**: {task.scheduled_date[:10]}")
    if task.tags:
        details.append(f"**Tags**: {', '.join(task.tags)}")
    lines.append(" | ".join(details))

    if task.description:
        lines.append("")
        lines.append(task.description)

    if task.depends:
        lines.append(f"**Depends on**: {', '.join(d[:8] for d in task.depends)}")

    if task.annotations:
        lines.append("**Notes:**")
        for ann in task.annotations:
            stamp = ann.timestamp[:10] if ann.timestamp else ""
            lines.append(f"  - [{stamp}] {ann.description}")

    return "\n".join(lines)


def _format_tasks_markdown(tasks: list[TaskModel], title: str = "Tasks") -> str:
    """Format a list of tasks as markdown."""
    if not tasks:
        return f"# {title}\n\nNo tasks found."

    lines = [f"# {title}", f"*{len(tasks)} task(s)*", ""]

    for task in tasks:
        lines.append(_format_task_markdown(task))
        lines.append("")

    return "\n".join(lines)


def _format_tasks(tasks: list[TaskModel], response_format: ResponseFormat, title: str, **extra: Any) -> str:
    """Render a task list in the requested format."""
    if response_format == ResponseFormat.JSON:
        return json.dumps(
            {**extra, "count": len(tasks), "tasks": [t.model_dump(mode="json") for t in tasks]},
            indent=2,
        )
    if response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(tasks, title.lower())
    return _format_tasks_markdown(tasks, title)


def _format_task(task: TaskModel, response_format: ResponseFormat, message: str | None = None) -> str:
    """Render a single task in the requested format, optionally after a status message."""
    if response_format == ResponseFormat.JSON:
        data: dict[str, Any] = {"task": task.model_dump(mode="json")}
        if message:
            data["message"] = message
        return json.dumps(data, indent=2)

    body = _format_task_concise(task) if response_format == ResponseFormat.CONCISE else _format_task_markdown(task)
    return f"{message}\n{body}" if message else body


def _format_error(error: Exception) -> str:
    """Render a domain error as an 'Error: ...' message with an optional tip."""
    tip = getattr(error, "tip", None)
    if tip:
        return f"Error: {error}\nTip: {tip}"
    return f"Error: {error}"

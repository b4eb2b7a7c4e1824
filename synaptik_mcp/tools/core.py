"""Core MCP tool definitions for Synaptik tasks."""

import json
import logging

from mcp.types import ToolAnnotations

from synaptik_mcp.enums import ResponseFormat
from synaptik_mcp.errors import SynaptikError
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
    StartTaskInput,
    StopTaskInput,
    UndoneTaskInput,
)
from synaptik_mcp.models.task import TaskFilter
from synaptik_mcp.server import mcp
from synaptik_mcp.service import get_service
from synaptik_mcp.utils.dates import resolve_date
from synaptik_mcp.utils.formatters import _format_error, _format_task, _format_tasks

logger = logging.getLogger(__name__)


def _split_ids(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


@mcp.tool(
    name="synaptik_capture",
    annotations=ToolAnnotations(
        title="Quick Capture Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def synaptik_capture(params: CaptureTaskInput) -> str:
    """
    Create a task from a single TaskWarrior-style line.

    USE THIS WHEN:
    - The user dictates a task in one sentence with inline attributes
    - You want the fastest way to record a task

    DO NOT USE WHEN:
    - You already have structured fields → use synaptik_add instead
    - Updating an existing task → use synaptik_modify instead

    SYNTAX:
    - Free text becomes the title
    - priority:H|M|L, project:name, assignee:name
    - due:, scheduled:, wait: accept today, tomorrow, yesterday, monday..sunday,
      eom, eoy, 3d, 2w, 2025-12-31
    - depends:id1,id2 and +tag

    Args:
        params: CaptureTaskInput containing the input line

    Returns:
        The created task, or an error message

    Examples:
        - "Buy groceries due:tomorrow +shopping"
        - "Fix bug priority:H project:webapp"
        - "Call mom scheduled:friday"
    """
    try:
        task = get_service().capture(params.input)
    except SynaptikError as e:
        return _format_error(e)

    return _format_task(task, params.response_format, f'Task captured: "{task.title}"')


@mcp.tool(
    name="synaptik_add",
    annotations=ToolAnnotations(
        title="Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def synaptik_add(params: AddTaskInput) -> str:
    """
    Create a new task from structured fields.

    USE THIS WHEN:
    - Adding a task with explicit metadata (project, priority, dates, tags)

    DO NOT USE WHEN:
    - You have a single free-form line → use synaptik_capture instead
    - Adding notes to a task → use synaptik_annotate instead

    Args:
        params: AddTaskInput containing title and optional attributes

    Returns:
        Confirmation message with the created task

    Examples:
        - Simple task: params with title="Buy groceries"
        - High priority task: params with title="Fix bug", priority="H"
        - Task with due date: params with title="Submit report", due="friday"
    """
    try:
        task = get_service().create(
            params.title,
            description=params.description,
            priority=params.priority,
            project=params.project,
            assignee=params.assignee,
            due=params.due,
            wait=params.wait,
            scheduled=params.scheduled,
            tags=params.tags,
            depends=_split_ids(params.depends),
        )
    except SynaptikError as e:
        return _format_error(e)

    return _format_task(task, ResponseFormat.MARKDOWN, "Task created successfully.")


@mcp.tool(
    name="synaptik_list",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_list(params: ListTasksInput) -> str:
    """
    Search and filter tasks, sorted by urgency by default.

    USE THIS WHEN:
    - Searching for tasks matching criteria (status, project, tags, due date)
    - Exploring tasks you don't know the IDs of

    DO NOT USE WHEN:
    - You have a specific task ID → use synaptik_get instead
    - You want the single most urgent task → use synaptik_next
    - You want overdue or due-today tasks → use synaptik_overdue or synaptik_today

    Args:
        params: ListTasksInput containing filters, sorting, limit and response_format

    Returns:
        Formatted list of tasks (concise, markdown or JSON)

    Examples:
        - Tasks for a project: params with project="work"
        - Urgent tasks: params with tags=["urgent"]
        - Completed tasks: params with status=["completed"]
        - Due this week: params with due_before="sunday"
    """
    service = get_service()
    try:
        now = service.now()
        due_before = resolve_date(params.due_before, now) if params.due_before else None
        due_after = resolve_date(params.due_after, now) if params.due_after else None
        tasks = service.list_tasks(
            TaskFilter(
                status=params.status,
                priority=params.priority,
                project=params.project,
                assignee=params.assignee,
                tags=params.tags,
                due_before=due_before,
                due_after=due_after,
                depends=params.depends,
                sort_by=params.sort_by,
                sort_order=params.sort_order,
                limit=params.limit,
            )
        )
    except SynaptikError as e:
        return _format_error(e)

    title = "Tasks"
    if params.project:
        title = f"Tasks in project '{params.project}'"
    if params.status:
        title += f" ({', '.join(s.value for s in params.status)})"

    return _format_tasks(tasks, params.response_format, title)


@mcp.tool(
    name="synaptik_get",
    annotations=ToolAnnotations(
        title="Get Task Details",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_get(params: GetTaskInput) -> str:
    """
    Retrieve full details for a single task by ID.

    ACCEPTS: the full task ID or a unique prefix of at least 4 characters
    (the 8-character IDs shown in listings work).

    Args:
        params: GetTaskInput containing task_id and response_format

    Returns:
        Detailed task information (concise, markdown or JSON)
    """
    try:
        task = get_service().get(params.task_id)
    except SynaptikError as e:
        return _format_error(e)

    return _format_task(task, params.response_format)


@mcp.tool(
    name="synaptik_modify",
    annotations=ToolAnnotations(
        title="Modify Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_modify(params: ModifyTaskInput) -> str:
    """
    Update an existing task's attributes. Urgency is recomputed afterwards.

    USE THIS WHEN:
    - Changing title, description, project, assignee, priority, dates or tags

    DO NOT USE WHEN:
    - Marking a task complete → use synaptik_done instead
    - Starting/stopping work → use synaptik_start or synaptik_stop
    - Adding notes → use synaptik_annotate instead

    CLEARING VALUES: Use empty string to clear a field (e.g., due="" removes due date)

    Args:
        params: ModifyTaskInput containing task_id and attributes to modify

    Returns:
        Confirmation message with updated task info

    Examples:
        - Set priority: params with task_id="1a2b3c4d", priority="H"
        - Add tags: params with task_id="1a2b3c4d", add_tags=["urgent"]
        - Remove due date: params with task_id="1a2b3c4d", due=""
    """
    try:
        task = get_service().update(
            params.task_id,
            title=params.title,
            description=params.description,
            status=params.status,
            priority=params.priority,
            project=params.project,
            assignee=params.assignee,
            due=params.due,
            wait=params.wait,
            scheduled=params.scheduled,
            add_tags=params.add_tags,
            remove_tags=params.remove_tags,
            depends=_split_ids(params.depends),
        )
    except SynaptikError as e:
        return _format_error(e)

    return _format_task(task, ResponseFormat.MARKDOWN, f"Task {params.task_id} modified successfully.")


@mcp.tool(
    name="synaptik_start",
    annotations=ToolAnnotations(
        title="Start Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_start(params: StartTaskInput) -> str:
    """
    Start working on a task (status becomes active, urgency +4).

    Args:
        params: StartTaskInput containing the task_id to start

    Returns:
        Confirmation message
    """
    try:
        task = get_service().start(params.task_id)
    except SynaptikError as e:
        return _format_error(e)

    return _format_task(task, ResponseFormat.CONCISE, f'Task "{task.title}" started.')


@mcp.tool(
    name="synaptik_stop",
    annotations=ToolAnnotations(
        title="Stop Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_stop(params: StopTaskInput) -> str:
    """
    Stop working on an active task (status returns to pending).

    Args:
        params: StopTaskInput containing the task_id to stop

    Returns:
        Confirmation message
    """
    try:
        task = get_service().stop(params.task_id)
    except SynaptikError as e:
        return _format_error(e)

    return _format_task(task, ResponseFormat.CONCISE, f'Task "{task.title}" stopped.')


@mcp.tool(
    name="synaptik_done",
    annotations=ToolAnnotations(
        title="Complete Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_done(params: CompleteTaskInput) -> str:
    """
    Mark a task as completed.

    Args:
        params: CompleteTaskInput containing the task_id to complete

    Returns:
        Confirmation message
    """
    try:
        task = get_service().done(params.task_id)
    except SynaptikError as e:
        return _format_error(e)

    return _format_task(task, ResponseFormat.CONCISE, f'Task "{task.title}" marked as complete.')


@mcp.tool(
    name="synaptik_undone",
    annotations=ToolAnnotations(
        title="Reopen Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_undone(params: UndoneTaskInput) -> str:
    """
    Reopen a completed task (status returns to pending).

    Args:
        params: UndoneTaskInput containing the task_id to reopen

    Returns:
        Confirmation message
    """
    try:
        task = get_service().undone(params.task_id)
    except SynaptikError as e:
        return _format_error(e)

    return _format_task(task, ResponseFormat.CONCISE, f'Task "{task.title}" marked as not done.')


@mcp.tool(
    name="synaptik_delete",
    annotations=ToolAnnotations(
        title="Delete Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_delete(params: DeleteTaskInput) -> str:
    """
    Delete a task.

    By default the task is marked as deleted and can be reopened with
    synaptik_undone. With purge=True it is removed from the store for good.

    Args:
        params: DeleteTaskInput containing the task_id and purge flag

    Returns:
        Confirmation message
    """
    service = get_service()
    try:
        task = service.purge(params.task_id) if params.purge else service.delete(params.task_id)
    except SynaptikError as e:
        return _format_error(e)

    if params.purge:
        return f'Task "{task.title}" permanently removed.'
    return f'Task "{task.title}" deleted.'


@mcp.tool(
    name="synaptik_annotate",
    annotations=ToolAnnotations(
        title="Annotate Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def synaptik_annotate(params: AnnotateTaskInput) -> str:
    """
    Add an annotation (note) to a task.

    Args:
        params: AnnotateTaskInput containing task_id and annotation text

    Returns:
        Confirmation message
    """
    try:
        task = get_service().annotate(params.task_id, params.annotation)
    except SynaptikError as e:
        return _format_error(e)

    return f'Annotation added to "{task.title}".'


@mcp.tool(
    name="synaptik_projects",
    annotations=ToolAnnotations(
        title="List Projects",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_projects(params: ListProjectsInput) -> str:
    """
    List all projects with open (pending or active) task counts.

    Args:
        params: ListProjectsInput with response_format

    Returns:
        List of projects with task counts
    """
    try:
        tasks = get_service().pending()
    except SynaptikError as e:
        return _format_error(e)

    project_counts: dict[str, int] = {}
    for task in tasks:
        project = task.project or "(none)"
        project_counts[project] = project_counts.get(project, 0) + 1

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {"projects": [{"name": name, "task_count": count} for name, count in sorted(project_counts.items())]},
            indent=2,
        )

    lines = ["# Projects", ""]
    if not project_counts:
        lines.append("No projects found.")
    else:
        for name, count in sorted(project_counts.items()):
            lines.append(f"- **{name}**: {count} task(s)")

    return "\n".join(lines)


@mcp.tool(
    name="synaptik_tags",
    annotations=ToolAnnotations(
        title="List Tags",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_tags(params: ListTagsInput) -> str:
    """
    List all tags on open tasks and their usage counts.

    Args:
        params: ListTagsInput with response_format

    Returns:
        List of tags with usage counts
    """
    try:
        tasks = get_service().pending()
    except SynaptikError as e:
        return _format_error(e)

    tag_counts: dict[str, int] = {}
    for task in tasks:
        for tag in task.tags:
            tag_counts[tag] = tag_counts.get(tag, 0) + 1

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {"tags": [{"name": name, "task_count": count} for name, count in sorted(tag_counts.items())]},
            indent=2,
        )

    lines = ["# Tags", ""]
    if not tag_counts:
        lines.append("No tags found.")
    else:
        for name, count in sorted(tag_counts.items()):
            lines.append(f"- **+{name}**: {count} task(s)")

    return "\n".join(lines)


@mcp.tool(
    name="synaptik_dashboard",
    annotations=ToolAnnotations(
        title="Task Dashboard",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_dashboard(params: DashboardInput) -> str:
    """
    Get an overview of task statistics in one call.

    USE THIS WHEN:
    - Starting a session and need to understand the task landscape
    - Answering "how many tasks do I have?" or "what's overdue?"

    Args:
        params: DashboardInput with response_format

    Returns:
        Counts by status and priority, overdue and due-today counts,
        top projects and tags
    """
    try:
        stats = get_service().dashboard()
    except SynaptikError as e:
        return _format_error(e)

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(stats, indent=2)

    by_status = stats["by_status"]
    by_priority = stats["by_priority"]
    lines = [
        "# Task Dashboard",
        "",
        f"**Total**: {stats['total']} | **Pending**: {by_status['pending']} | "
        f"**Active**: {by_status['active']} | **Waiting**: {by_status['waiting']} | "
        f"**Completed**: {by_status['completed']}",
        f"**Overdue**: {stats['overdue']} | **Due today**: {stats['due_today']}",
        f"**Priority**: H:{by_priority['H']} M:{by_priority['M']} L:{by_priority['L']} none:{by_priority['']}",
    ]

    if stats["top_projects"]:
        lines.extend(["", "## Top Projects"])
        for name, count in stats["top_projects"]:
            lines.append(f"- {name}: {count}")

    if stats["top_tags"]:
        lines.extend(["", "## Top Tags"])
        for name, count in stats["top_tags"]:
            lines.append(f"- +{name}: {count}")

    return "\n".join(lines)

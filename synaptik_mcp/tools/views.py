"""TaskWarrior-style view tools: pending, active, next, overdue and today."""

import json

from mcp.types import ToolAnnotations

from synaptik_mcp.enums import ResponseFormat
from synaptik_mcp.errors import SynaptikError
from synaptik_mcp.models.inputs import NextTaskInput, ViewInput
from synaptik_mcp.server import mcp
from synaptik_mcp.service import get_service
from synaptik_mcp.utils.formatters import _format_error, _format_task, _format_tasks

_READ_ONLY = ToolAnnotations(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=False,
)


@mcp.tool(name="synaptik_pending", annotations=_READ_ONLY.model_copy(update={"title": "Pending Tasks"}))
async def synaptik_pending(params: ViewInput) -> str:
    """
    List open tasks (pending and active), most urgent first.

    USE THIS WHEN:
    - Answering "what's on my plate?"
    - You want the default TaskWarrior-style task list

    DO NOT USE WHEN:
    - You need filters → use synaptik_list
    - You only want the single top task → use synaptik_next

    Args:
        params: ViewInput with limit and response_format

    Returns:
        Open tasks sorted by urgency
    """
    try:
        tasks = get_service().pending()
    except SynaptikError as e:
        return _format_error(e)

    return _format_tasks(tasks[: params.limit], params.response_format, "Pending Tasks", total=len(tasks))


@mcp.tool(name="synaptik_active", annotations=_READ_ONLY.model_copy(update={"title": "Active Tasks"}))
async def synaptik_active(params: ViewInput) -> str:
    """
    List tasks currently being worked on (started with synaptik_start).

    Args:
        params: ViewInput with limit and response_format

    Returns:
        Active tasks sorted by urgency
    """
    try:
        tasks = get_service().active()
    except SynaptikError as e:
        return _format_error(e)

    return _format_tasks(tasks[: params.limit], params.response_format, "Active Tasks", total=len(tasks))


@mcp.tool(name="synaptik_next", annotations=_READ_ONLY.model_copy(update={"title": "Next Task"}))
async def synaptik_next(params: NextTaskInput) -> str:
    """
    Get the single most urgent pending task.

    USE THIS WHEN:
    - The user asks "what should I do next?"

    Args:
        params: NextTaskInput with response_format

    Returns:
        The highest-urgency pending task, or a message when there is none
    """
    try:
        task = get_service().next_task()
    except SynaptikError as e:
        return _format_error(e)

    if task is None:
        if params.response_format == ResponseFormat.JSON:
            return json.dumps({"task": None, "message": "No pending tasks"})
        return "No pending tasks. Nothing to do next!"

    return _format_task(task, params.response_format, "Next task:")


@mcp.tool(name="synaptik_overdue", annotations=_READ_ONLY.model_copy(update={"title": "Overdue Tasks"}))
async def synaptik_overdue(params: ViewInput) -> str:
    """
    List open tasks whose due date has passed, oldest due date first.

    Args:
        params: ViewInput with limit and response_format

    Returns:
        Overdue tasks
    """
    try:
        tasks = get_service().overdue()
    except SynaptikError as e:
        return _format_error(e)

    return _format_tasks(tasks[: params.limit], params.response_format, "Overdue Tasks", total=len(tasks))


@mcp.tool(name="synaptik_today", annotations=_READ_ONLY.model_copy(update={"title": "Due Today"}))
async def synaptik_today(params: ViewInput) -> str:
    """
    List open tasks due today, most urgent first.

    Args:
        params: ViewInput with limit and response_format

    Returns:
        Tasks due today
    """
    try:
        tasks = get_service().today()
    except SynaptikError as e:
        return _format_error(e)

    return _format_tasks(tasks[: params.limit], params.response_format, "Due Today", total=len(tasks))


@mcp.tool(
    name="synaptik_refresh_urgency",
    annotations=ToolAnnotations(
        title="Refresh Urgency",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def synaptik_refresh_urgency() -> str:
    """
    Recompute urgency for every task that is not deleted.

    Urgency is a snapshot taken when a task is saved; due dates and task age
    move it over time. Run this before relying on urgency ordering after a
    long idle period.

    Returns:
        How many tasks changed
    """
    try:
        changed = get_service().refresh_urgency()
    except SynaptikError as e:
        return _format_error(e)

    return f"Urgency refreshed. {changed} task(s) changed."

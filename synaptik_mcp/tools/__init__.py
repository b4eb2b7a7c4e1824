"""MCP tool definitions for Synaptik."""

# Import all tools to register them with the MCP server
from synaptik_mcp.tools.core import (
    synaptik_add,
    synaptik_annotate,
    synaptik_capture,
    synaptik_dashboard,
    synaptik_delete,
    synaptik_done,
    synaptik_get,
    synaptik_list,
    synaptik_modify,
    synaptik_projects,
    synaptik_start,
    synaptik_stop,
    synaptik_tags,
    synaptik_undone,
)
from synaptik_mcp.tools.views import (
    synaptik_active,
    synaptik_next,
    synaptik_overdue,
    synaptik_pending,
    synaptik_refresh_urgency,
    synaptik_today,
)

__all__ = [
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
]

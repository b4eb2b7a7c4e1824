"""Enums for Synaptik MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per task, for chaining
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""

    PENDING = "pending"
    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"
    DELETED = "deleted"


class Priority(str, Enum):
    """Task priority levels."""

    HIGH = "H"
    MEDIUM = "M"
    LOW = "L"
    NONE = ""


class SortField(str, Enum):
    """Fields a task listing can be ordered by."""

    URGENCY = "urgency"
    DUE = "due"
    PRIORITY = "priority"
    ENTRY = "entry"
    MODIFIED = "modified"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

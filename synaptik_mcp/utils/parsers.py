"""Parser helpers: quick-capture strings and stored task documents."""

from typing import Any

from synaptik_mcp.enums import Priority
from synaptik_mcp.models.task import TaskDraft, TaskModel

_CAPTURE_PRIORITIES = {"H": Priority.HIGH, "M": Priority.MEDIUM, "L": Priority.LOW}

# attribute prefix -> TaskDraft field holding the raw value
_ATTRIBUTE_FIELDS = {
    "project:": "project",
    "assignee:": "assignee",
    "due:": "due",
    "scheduled:": "scheduled",
    "wait:": "wait",
}


def parse_quick_capture(text: str) -> TaskDraft:
    """
    Parse a TaskWarrior-style quick-capture string into a draft.

    Format: "Task title attribute:value +tag project:name"

    Recognized tokens are priority:, project:, assignee:, due:, scheduled:,
    wait:, depends: (comma-separated) and +tag. Every other token is part of
    the title. Unknown priorities are dropped, dates stay unresolved.

    Args:
        text: Raw input, e.g. "Buy milk due:tomorrow +shopping priority:H"

    Returns:
        TaskDraft with the recognized fields
    """
    fields: dict[str, Any] = {}
    tags: list[str] = []
    title_tokens: list[str] = []

    for token in text.split():
        if token.startswith("priority:"):
            priority = _CAPTURE_PRIORITIES.get(token[len("priority:") :].upper())
            if priority is not None:
                fields["priority"] = priority
            continue

        if token.startswith("depends:"):
            fields["depends"] = token[len("depends:") :].split(",")
            continue

        if token.startswith("+"):
            tags.append(token[1:])
            continue

        for prefix, field in _ATTRIBUTE_FIELDS.items():
            if token.startswith(prefix):
                fields[field] = token[len(prefix) :]
                break
        else:
            title_tokens.append(token)

    return TaskDraft(title=" ".join(title_tokens).strip(), tags=tags, **fields)


def _parse_task(task_dict: dict[str, Any]) -> TaskModel:
    """
    Parse a stored task document into a TaskModel.

    Args:
        task_dict: Dictionary from the JSON task store

    Returns:
        TaskModel instance with validated data
    """
    return TaskModel.model_validate(task_dict)

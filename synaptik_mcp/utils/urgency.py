"""TaskWarrior-inspired urgency scoring."""

import logging
import math
from datetime import datetime

from synaptik_mcp.enums import Priority, TaskStatus
from synaptik_mcp.models.task import TaskModel
from synaptik_mcp.utils.dates import parse_stored_date, to_local_naive

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

PRIORITY_WEIGHTS = {
    Priority.HIGH: 6.0,
    Priority.MEDIUM: 3.9,
    Priority.LOW: 1.8,
    Priority.NONE: 0.0,
}
STATUS_WEIGHTS = {
    TaskStatus.ACTIVE: 4.0,
    TaskStatus.WAITING: -3.0,
}
TAG_WEIGHTS = {
    "urgent": 5.0,
    "important": 3.0,
}

AGE_COEFFICIENT = 0.01
FALLBACK_URGENCY = 5.0
MIN_URGENCY = 0.0
MAX_URGENCY = 100.0


def _round_score(value: float) -> float:
    # Two decimals, halves rounded up
    return math.floor(value * 100 + 0.5) / 100


def _days_between(later: datetime, earlier: datetime) -> int:
    return math.ceil((later - earlier).total_seconds() / SECONDS_PER_DAY)


def _due_date_component(task: TaskModel, now: datetime) -> float:
    if not task.due_date:
        return 0.0

    try:
        due = parse_stored_date(task.due_date)
    except ValueError:
        logger.warning("Task %s: invalid due date %r, ignoring it for urgency", task.id or task.title, task.due_date)
        return 0.0

    days_until_due = _days_between(due, now)
    if days_until_due < 0:
        # Overdue, keeps growing
        return 12 + abs(days_until_due) * 0.2
    if days_until_due <= 7:
        return 12 - days_until_due * 1.4
    if days_until_due <= 14:
        return 5 - days_until_due * 0.3
    return 0.0


def _age_component(task: TaskModel, now: datetime) -> float:
    if not task.created_at:
        return 0.0
    return _days_between(now, parse_stored_date(task.created_at)) * AGE_COEFFICIENT


def compute_urgency(task: TaskModel, now: datetime) -> float:
    """
    Calculate a task's urgency score.

    The score adds up priority, due-date proximity, age, status and tag
    terms, is rounded to two decimals and clamped to [0, 100].

    Args:
        task: Task to score
        now: Reference time for the due-date and age terms

    Returns:
        Urgency in [0, 100]

    Raises:
        ValueError: if ``created_at`` is not a valid ISO-8601 string
    """
    now = to_local_naive(now)

    urgency = PRIORITY_WEIGHTS.get(Priority(task.priority), 0.0)
    urgency += _due_date_component(task, now)
    urgency += _age_component(task, now)
    urgency += STATUS_WEIGHTS.get(TaskStatus(task.status), 0.0)
    urgency += sum(weight for tag, weight in TAG_WEIGHTS.items() if tag in task.tags)

    return min(MAX_URGENCY, max(MIN_URGENCY, _round_score(urgency)))


def urgency_or_default(task: TaskModel, now: datetime) -> float:
    """Like compute_urgency, but falls back to a neutral score instead of raising."""
    try:
        return compute_urgency(task, now)
    except Exception as e:
        logger.warning(
            "Task %s: error calculating urgency, using %s: %s",
            task.id or task.title,
            FALLBACK_URGENCY,
            e,
        )
        return FALLBACK_URGENCY

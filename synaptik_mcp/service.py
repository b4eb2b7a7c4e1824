"""Task service: quick capture, lifecycle operations and filtered views."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from synaptik_mcp.config import get_settings
from synaptik_mcp.enums import Priority, SortField, SortOrder, TaskStatus
from synaptik_mcp.errors import ValidationError
from synaptik_mcp.models.task import TaskAnnotation, TaskDraft, TaskFilter, TaskModel
from synaptik_mcp.store import TaskStore
from synaptik_mcp.utils.dates import (
    format_stored_date,
    is_plausible_date,
    parse_stored_date,
    resolve_date,
    start_of_day,
    to_local_naive,
)
from synaptik_mcp.utils.parsers import parse_quick_capture
from synaptik_mcp.utils.urgency import urgency_or_default

logger = logging.getLogger(__name__)

PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1, Priority.NONE: 0}
OPEN_STATUSES = [TaskStatus.PENDING, TaskStatus.ACTIVE]
DATE_FIELDS = ("due_date", "wait_until", "scheduled_date")


class TaskService:
    """
    Task operations on top of a TaskStore.

    Every save clears implausible dates, stamps timestamps and recomputes
    urgency against the injected clock.
    """

    def __init__(self, store: TaskStore, clock: Callable[[], datetime] = datetime.now, default_limit: int = 100):
        self.store = store
        self.clock = clock
        self.default_limit = default_limit

    def now(self) -> datetime:
        return to_local_naive(self.clock())

    # ------------------------------------------------------------------
    # Persistence pipeline
    # ------------------------------------------------------------------

    def _clear_implausible_dates(self, task: TaskModel) -> None:
        for field in DATE_FIELDS:
            value = getattr(task, field)
            if value is None:
                continue
            if not value.strip() or not is_plausible_date(value):
                logger.warning("Task %s: invalid %s %r, clearing it", task.title, field, value)
                setattr(task, field, None)

    def _save(self, task: TaskModel) -> TaskModel:
        now = self.now()
        stamp = format_stored_date(now)
        self._clear_implausible_dates(task)
        if task.created_at is None:
            task.created_at = stamp
        task.updated_at = stamp
        task.urgency = urgency_or_default(task, now)
        return self.store.put(task)

    def _resolve(self, expression: str | None) -> str | None:
        if not expression:
            return None
        return format_stored_date(resolve_date(expression, self.now()))

    def _build(self, **fields: Any) -> TaskModel:
        try:
            return TaskModel(**fields)
        except PydanticValidationError as e:
            raise ValidationError(_first_error(e)) from e

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create(
        self,
        title: str,
        *,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
        priority: Priority | None = None,
        project: str | None = None,
        assignee: str | None = None,
        due: str | None = None,
        wait: str | None = None,
        scheduled: str | None = None,
        tags: list[str] | None = None,
        depends: list[str] | None = None,
    ) -> TaskModel:
        """
        Create and persist a task.

        Date arguments accept any expression understood by resolve_date.

        Raises:
            ValidationError: if the title is empty or a field is out of range
            InvalidDateError: if a date expression cannot be resolved
        """
        if not title or not title.strip():
            raise ValidationError("Task title cannot be empty", tip="Put some free text before the attributes.")

        task = self._build(
            title=title,
            description=description,
            status=status,
            priority=priority or Priority.NONE,
            project=project or None,
            assignee=assignee or None,
            due_date=self._resolve(due),
            wait_until=self._resolve(wait),
            scheduled_date=self._resolve(scheduled),
            tags=tags or [],
            depends=[d for d in depends or [] if d],
        )
        with self.store.lock:
            saved = self._save(task)
        logger.info("Created task %s (%s), urgency %.2f", saved.id, saved.title, saved.urgency)
        return saved

    def capture(self, text: str | TaskDraft) -> TaskModel:
        """Create a pending task from a quick-capture string or a parsed draft."""
        draft = parse_quick_capture(text) if isinstance(text, str) else text
        return self.create(
            draft.title,
            description=draft.description,
            priority=draft.priority,
            project=draft.project,
            assignee=draft.assignee,
            due=draft.due,
            wait=draft.wait,
            scheduled=draft.scheduled,
            tags=draft.tags,
            depends=draft.depends,
        )

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def get(self, task_id: str) -> TaskModel:
        return self.store.get(task_id)

    def update(
        self,
        task_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        status: TaskStatus | None = None,
        priority: Priority | None = None,
        project: str | None = None,
        assignee: str | None = None,
        due: str | None = None,
        wait: str | None = None,
        scheduled: str | None = None,
        tags: list[str] | None = None,
        add_tags: list[str] | None = None,
        remove_tags: list[str] | None = None,
        depends: list[str] | None = None,
    ) -> TaskModel:
        """
        Apply changes to a task. None leaves a field unchanged; an empty
        string clears description, project, assignee and dates.
        """
        with self.store.lock:
            task = self.get(task_id)
            changes: dict[str, Any] = {}
            if title is not None:
                if not title.strip():
                    raise ValidationError("Task title cannot be empty")
                changes["title"] = title
            if description is not None:
                changes["description"] = description or None
            if status is not None:
                changes["status"] = status
            if priority is not None:
                changes["priority"] = priority
            if project is not None:
                changes["project"] = project or None
            if assignee is not None:
                changes["assignee"] = assignee or None
            for field, expression in (("due_date", due), ("wait_until", wait), ("scheduled_date", scheduled)):
                if expression is not None:
                    changes[field] = self._resolve(expression)
            if depends is not None:
                changes["depends"] = [d for d in depends if d]

            new_tags = list(tags) if tags is not None else list(task.tags)
            if add_tags:
                new_tags.extend(add_tags)
            if remove_tags:
                dropped = {t.strip().lower() for t in remove_tags}
                new_tags = [t for t in new_tags if t.strip().lower() not in dropped]
            if tags is not None or add_tags or remove_tags:
                changes["tags"] = new_tags

            try:
                updated = task.model_copy(update=changes)
                updated = TaskModel.model_validate(updated.model_dump())
            except PydanticValidationError as e:
                raise ValidationError(_first_error(e)) from e
            saved = self._save(updated)
        logger.info("Updated task %s: %s", saved.id, ", ".join(sorted(changes)) or "no changes")
        return saved

    def _transition(self, task_id: str, status: TaskStatus, note: str, only_from: TaskStatus | None = None) -> TaskModel:
        with self.store.lock:
            task = self.get(task_id)
            if only_from is None or task.status == only_from:
                task.status = status
                task.annotations.append(TaskAnnotation(timestamp=format_stored_date(self.now()), description=note))
            saved = self._save(task)
        logger.info("Task %s is now %s", saved.id, saved.status.value)
        return saved

    def start(self, task_id: str) -> TaskModel:
        return self._transition(task_id, TaskStatus.ACTIVE, "Task started")

    def stop(self, task_id: str) -> TaskModel:
        """Return an active task to pending; other statuses are left as they are."""
        return self._transition(task_id, TaskStatus.PENDING, "Task stopped", only_from=TaskStatus.ACTIVE)

    def done(self, task_id: str) -> TaskModel:
        return self._transition(task_id, TaskStatus.COMPLETED, "Task completed")

    def undone(self, task_id: str) -> TaskModel:
        return self._transition(task_id, TaskStatus.PENDING, "Task marked as not done")

    def delete(self, task_id: str) -> TaskModel:
        """Soft delete: the task stays in the store with status 'deleted'."""
        return self._transition(task_id, TaskStatus.DELETED, "Task deleted")

    def purge(self, task_id: str) -> TaskModel:
        removed = self.store.remove(task_id)
        logger.info("Purged task %s (%s)", removed.id, removed.title)
        return removed

    def annotate(self, task_id: str, text: str) -> TaskModel:
        if not text or not text.strip():
            raise ValidationError("Annotation description is required")
        with self.store.lock:
            task = self.get(task_id)
            task.annotations.append(TaskAnnotation(timestamp=format_stored_date(self.now()), description=text.strip()))
            return self._save(task)

    def refresh_urgency(self) -> int:
        """Recompute urgency for every task that is not deleted; returns how many changed."""
        now = self.now()
        changed = 0
        with self.store.lock:
            tasks = self.store.load()
            for task in tasks.values():
                if task.status == TaskStatus.DELETED:
                    continue
                urgency = urgency_or_default(task, now)
                if urgency != task.urgency:
                    task.urgency = urgency
                    changed += 1
            if changed:
                self.store.save_all(tasks)
        logger.info("Refreshed urgency, %d task(s) changed", changed)
        return changed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_tasks(self, criteria: TaskFilter | None = None) -> list[TaskModel]:
        """Filter, sort and limit tasks. Deleted tasks only appear when asked for by status."""
        criteria = criteria or TaskFilter(limit=self.default_limit)
        tasks = [t for t in self.store.all() if _matches(t, criteria)]
        return _sort(tasks, criteria.sort_by, criteria.sort_order)[: criteria.limit]

    def pending(self) -> list[TaskModel]:
        return self.list_tasks(TaskFilter(status=OPEN_STATUSES, limit=self.default_limit))

    def active(self) -> list[TaskModel]:
        return self.list_tasks(TaskFilter(status=[TaskStatus.ACTIVE], limit=self.default_limit))

    def next_task(self) -> TaskModel | None:
        """Highest-urgency pending task, or None."""
        tasks = self.list_tasks(TaskFilter(status=[TaskStatus.PENDING], limit=1))
        return tasks[0] if tasks else None

    def overdue(self) -> list[TaskModel]:
        return self.list_tasks(
            TaskFilter(
                status=OPEN_STATUSES,
                due_before=self.now(),
                sort_by=SortField.DUE,
                sort_order=SortOrder.ASC,
                limit=self.default_limit,
            )
        )

    def today(self) -> list[TaskModel]:
        start = start_of_day(self.now())
        end = start + timedelta(days=1) - timedelta(microseconds=1)
        return self.list_tasks(TaskFilter(status=OPEN_STATUSES, due_after=start, due_before=end, limit=self.default_limit))

    def dashboard(self) -> dict[str, Any]:
        """Aggregate counts for an at-a-glance overview."""
        tasks = [t for t in self.store.all() if t.status != TaskStatus.DELETED]
        now = self.now()
        start = start_of_day(now)
        end = start + timedelta(days=1)

        overdue = due_today = 0
        for task in tasks:
            if task.status not in OPEN_STATUSES:
                continue
            due = _due_of(task)
            if due is None:
                continue
            if due < now:
                overdue += 1
            if start <= due < end:
                due_today += 1

        open_tasks = [t for t in tasks if t.status in OPEN_STATUSES]
        by_status = Counter(t.status.value for t in tasks)
        by_priority = Counter(t.priority.value for t in open_tasks)
        projects = Counter(t.project or "(none)" for t in open_tasks)
        tags = Counter(tag for t in open_tasks for tag in t.tags)

        return {
            "total": len(tasks),
            "by_status": {s.value: by_status.get(s.value, 0) for s in TaskStatus if s != TaskStatus.DELETED},
            "by_priority": {p.value: by_priority.get(p.value, 0) for p in Priority},
            "overdue": overdue,
            "due_today": due_today,
            "top_projects": projects.most_common(5),
            "top_tags": tags.most_common(5),
        }


def _first_error(e: PydanticValidationError) -> str:
    err = e.errors()[0]
    location = ".".join(str(part) for part in err.get("loc", ()))
    return f"{location}: {err.get('msg')}" if location else str(err.get("msg"))


def _due_of(task: TaskModel) -> datetime | None:
    if not task.due_date:
        return None
    try:
        return parse_stored_date(task.due_date)
    except ValueError:
        return None


def _matches(task: TaskModel, criteria: TaskFilter) -> bool:
    if criteria.status:
        if task.status not in criteria.status:
            return False
    elif task.status == TaskStatus.DELETED:
        return False

    if criteria.priority and task.priority not in criteria.priority:
        return False
    if criteria.project and task.project != criteria.project:
        return False
    if criteria.assignee and task.assignee != criteria.assignee:
        return False
    if criteria.tags:
        wanted = {t.strip().lower() for t in criteria.tags}
        if not wanted.intersection(task.tags):
            return False
    if criteria.depends and criteria.depends not in task.depends:
        return False

    if criteria.due_before or criteria.due_after:
        due = _due_of(task)
        if due is None:
            return False
        if criteria.due_before and due > to_local_naive(criteria.due_before):
            return False
        if criteria.due_after and due < to_local_naive(criteria.due_after):
            return False
    return True


def _sort(tasks: list[TaskModel], sort_by: SortField, order: SortOrder) -> list[TaskModel]:
    if sort_by == SortField.URGENCY:
        # Highest urgency first regardless of order, then by priority
        return sorted(tasks, key=lambda t: (t.urgency, PRIORITY_RANK[t.priority]), reverse=True)

    reverse = order == SortOrder.DESC
    if sort_by == SortField.PRIORITY:
        return sorted(tasks, key=lambda t: PRIORITY_RANK[t.priority], reverse=reverse)

    def sort_value(task: TaskModel) -> datetime | None:
        if sort_by == SortField.DUE:
            return _due_of(task)
        stamp = task.created_at if sort_by == SortField.ENTRY else task.updated_at
        try:
            return parse_stored_date(stamp) if stamp else None
        except ValueError:
            return None

    keyed = [(sort_value(t), t) for t in tasks]
    present = sorted((pair for pair in keyed if pair[0] is not None), key=lambda pair: pair[0], reverse=reverse)
    # Tasks without a value go last in either order
    return [t for _, t in present] + [t for value, t in keyed if value is None]


@lru_cache(maxsize=1)
def get_service() -> TaskService:
    """Return the process-wide TaskService built from settings."""
    settings = get_settings()
    return TaskService(TaskStore(settings.store_path), default_limit=settings.default_limit)

"""JSON file persistence for tasks."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from synaptik_mcp.errors import StoreError, TaskNotFoundError
from synaptik_mcp.models.task import TaskModel
from synaptik_mcp.utils.parsers import _parse_task

logger = logging.getLogger(__name__)

MIN_ID_PREFIX = 4


class TaskStore:
    """Reads and writes the task database (a single JSON file)."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self.lock = threading.RLock()

    def load(self) -> dict[str, TaskModel]:
        """Return {task_id: TaskModel}; a missing file is an empty store."""
        with self.lock:
            if not self.path.exists():
                return {}

            try:
                raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
            except (OSError, json.JSONDecodeError) as e:
                raise StoreError(f"Failed to read task store {self.path}: {e}") from e

            documents = raw.get("tasks", {}) if isinstance(raw, dict) else None
            if not isinstance(documents, dict):
                raise StoreError(f"Task store {self.path} is malformed: expected an object with a 'tasks' mapping")

            tasks: dict[str, TaskModel] = {}
            for task_id, doc in documents.items():
                if not isinstance(doc, dict):
                    raise StoreError(f"Task {task_id} in {self.path} is invalid: not an object")
                try:
                    tasks[task_id] = _parse_task({**doc, "id": task_id})
                except PydanticValidationError as e:
                    raise StoreError(f"Task {task_id} in {self.path} is invalid: {e}") from e
            return tasks

    def save_all(self, tasks: dict[str, TaskModel]) -> None:
        """Persist all tasks, replacing the file atomically."""
        raw = {
            "tasks": {
                task_id: task.model_dump(mode="json", exclude={"id"}) for task_id, task in tasks.items()
            }
        }
        with self.lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".tasks-", suffix=".json")
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(raw, fh, indent=2)
                os.replace(tmp_name, self.path)
            except OSError as e:
                raise StoreError(f"Failed to write task store {self.path}: {e}") from e
        logger.debug("Wrote %d task(s) to %s", len(tasks), self.path)

    def all(self) -> list[TaskModel]:
        return list(self.load().values())

    def resolve_id(self, task_id: str, tasks: dict[str, TaskModel]) -> str:
        """Match a full id or a unique id prefix (at least 4 characters)."""
        task_id = task_id.strip()
        if task_id in tasks:
            return task_id
        if len(task_id) >= MIN_ID_PREFIX:
            matches = [tid for tid in tasks if tid.startswith(task_id)]
            if len(matches) == 1:
                return matches[0]
        raise TaskNotFoundError(task_id)

    def get(self, task_id: str) -> TaskModel:
        tasks = self.load()
        return tasks[self.resolve_id(task_id, tasks)]

    def put(self, task: TaskModel) -> TaskModel:
        """Insert or replace a task, assigning an id to new tasks."""
        with self.lock:
            tasks = self.load()
            if task.id is None:
                task.id = uuid.uuid4().hex
            tasks[task.id] = task
            self.save_all(tasks)
        return task

    def remove(self, task_id: str) -> TaskModel:
        with self.lock:
            tasks = self.load()
            removed = tasks.pop(self.resolve_id(task_id, tasks))
            self.save_all(tasks)
        return removed

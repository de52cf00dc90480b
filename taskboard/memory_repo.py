"""Task repository interface and its in-memory implementation."""

from __future__ import annotations

import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone

from .domain import Task, TaskNotFoundError


class TaskRepository(ABC):
    """Storage for tasks."""

    @abstractmethod
    def create_task(self, task: Task) -> Task:
        """Store a new task, assigning its id and timestamps."""

    @abstractmethod
    def get_task(self, task_id: str) -> Task:
        """Return the task with this id or raise TaskNotFoundError."""

    @abstractmethod
    def update_task(self, task: Task) -> Task:
        """Replace an existing task or raise TaskNotFoundError."""

    @abstractmethod
    def delete_task(self, task_id: str) -> None:
        """Remove a task or raise TaskNotFoundError."""

    @abstractmethod
    def get_all_tasks(self) -> list[Task]:
        """Return every stored task."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryTaskRepository(TaskRepository):
    """Thread-safe task storage held in a dictionary."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._lock = threading.Lock()

    def create_task(self, task: Task) -> Task:
        now = _now()
        created = replace(task, id=str(uuid.uuid4()), created_at=now, updated_at=now)
        with self._lock:
            self._tasks[created.id] = created
        return created

    def get_task(self, task_id: str) -> Task:
        with self._lock:
            try:
                return self._tasks[task_id]
            except KeyError:
                raise TaskNotFoundError() from None

    def update_task(self, task: Task) -> Task:
        with self._lock:
            if task.id not in self._tasks:
                raise TaskNotFoundError()
            updated = replace(task, updated_at=_now())
            self._tasks[task.id] = updated
        return updated

    def delete_task(self, task_id: str) -> None:
        with self._lock:
            if self._tasks.pop(task_id, None) is None:
                raise TaskNotFoundError()

    def get_all_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())
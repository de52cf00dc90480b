"""Task service: repository operations with logging around them."""

from __future__ import annotations

from .domain import Task
from .logger import Logger
from .memory_repo import TaskRepository


class TaskService:
    """Coordinates task operations against a repository."""

    def __init__(self, repo: TaskRepository, logger: Logger | None = None) -> None:
        self._repo = repo
        self._logger = logger if logger is not None else Logger()

    def create_task(self, task: Task) -> Task:
        self._logger.debug("Creating new task", title=task.title)
        try:
            created = self._repo.create_task(task)
        except Exception as exc:
            self._logger.error(
                "Failed to create task in repository", error=str(exc), title=task.title
            )
            raise
        self._logger.info(
            "Task created successfully", task_id=created.id, title=created.title
        )
        return created

    def get_task(self, task_id: str) -> Task:
        self._logger.debug("Getting task", task_id=task_id)
        try:
            task = self._repo.get_task(task_id)
        except Exception as exc:
            self._logger.error(
                "Failed to get task from repository", error=str(exc), task_id=task_id
            )
            raise
        self._logger.debug("Task retrieved successfully", task_id=task.id, title=task.title)
        return task

    def update_task(self, task: Task) -> Task:
        self._logger.debug("Updating task", task_id=task.id, title=task.title)
        try:
            updated = self._repo.update_task(task)
        except Exception as exc:
            self._logger.error(
                "Failed to update task in repository", error=str(exc), task_id=task.id
            )
            raise
        self._logger.info(
            "Task updated successfully", task_id=updated.id, title=updated.title
        )
        return updated

    def delete_task(self, task_id: str) -> None:
        self._logger.debug("Deleting task", task_id=task_id)
        try:
            self._repo.delete_task(task_id)
        except Exception as exc:
            self._logger.error(
                "Failed to delete task from repository", error=str(exc), task_id=task_id
            )
            raise
        self._logger.info("Task deleted successfully", task_id=task_id)

    def get_all_tasks(self) -> list[Task]:
        self._logger.debug("Getting all tasks")
        tasks = self._repo.get_all_tasks()
        self._logger.debug("Retrieved all tasks", count=len(tasks))
        return tasks
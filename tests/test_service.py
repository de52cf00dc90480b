import io
import json
from dataclasses import replace

import pytest

from taskboard.domain import Task, TaskNotFoundError
from taskboard.logger import LogLevel, Logger
from taskboard.memory_repo import MemoryTaskRepository
from taskboard.service import TaskService


def setup_test_service(stream=None):
    return TaskService(MemoryTaskRepository(), Logger(stream=stream or io.StringIO()))


def test_task_service_crud():
    service = setup_test_service()
    task = Task(title="Test Task", description="Test Description", status=False)

    created = service.create_task(task)
    assert created.id != ""
    assert created.title == task.title

    retrieved = service.get_task(created.id)
    assert retrieved.id == created.id

    retrieved = replace(retrieved, title="Updated Title", description="Updated Description")
    updated = service.update_task(retrieved)
    assert updated.title == "Updated Title"

    service.delete_task(updated.id)
    with pytest.raises(TaskNotFoundError):
        service.get_task(updated.id)


def test_task_service_get_all_tasks():
    service = setup_test_service()
    tasks = [
        Task(title="Task 1", description="Description 1"),
        Task(title="Task 2", description="Description 2"),
        Task(title="Task 3", description="Description 3"),
    ]
    for task in tasks:
        service.create_task(task)

    all_tasks = service.get_all_tasks()
    assert len(all_tasks) == len(tasks)
    for got, expected in zip(all_tasks, tasks):
        assert got.title == expected.title
        assert got.description == expected.description


def test_task_service_error_cases():
    service = setup_test_service()
    with pytest.raises(TaskNotFoundError):
        service.get_task("non-existent-id")
    with pytest.raises(TaskNotFoundError):
        service.update_task(
            Task(id="non-existent-id", title="Test Task", description="Test Description")
        )
    with pytest.raises(TaskNotFoundError):
        service.delete_task("non-existent-id")


def test_service_logs_creation_at_debug_level():
    buffer = io.StringIO()
    service = TaskService(MemoryTaskRepository(), Logger(stream=buffer, level=LogLevel.DEBUG))
    created = service.create_task(Task(title="Test Task"))
    records = [json.loads(line) for line in buffer.getvalue().splitlines()]
    assert [r["msg"] for r in records] == ["Creating new task", "Task created successfully"]
    assert records[1]["task_id"] == created.id


def test_service_logs_repository_failure():
    buffer = io.StringIO()
    service = setup_test_service(buffer)
    with pytest.raises(TaskNotFoundError):
        service.get_task("non-existent-id")
    [record] = [json.loads(line) for line in buffer.getvalue().splitlines()]
    assert record["msg"] == "Failed to get task from repository"
    assert record["error"] == "task not found"
    assert record["task_id"] == "non-existent-id"
"""HTTP handlers for tasks and the router that dispatches to them."""

from __future__ import annotations

import functools
import json
import uuid
from typing import Any, Callable, Mapping

from werkzeug.wrappers import Request, Response

from .domain import Task, TaskNotFoundError
from .logger import Logger
from .service import TaskService

CONTEXT_KEY = "taskboard.context"

View = Callable[[Request], Response]

_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _json_response(payload: Any, status: int = 200) -> Response:
    body = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _ESCAPES:
        body = body.replace(char, escaped)
    return Response(body + "\n", status=status, content_type="application/json")


def _error(message: str, status: int) -> Response:
    return Response(
        message + "\n",
        status=status,
        content_type="text/plain; charset=utf-8",
        headers={"X-Content-Type-Options": "nosniff"},
    )


def _decode_task(request: Request) -> Task:
    body = request.get_data().decode("utf-8", errors="replace").lstrip(" \t\r\n")
    data, _ = json.JSONDecoder().raw_decode(body)
    if data is None:
        return Task()
    return Task.from_dict(data)


def _context(request: Request) -> Mapping[str, Any]:
    return request.environ.get(CONTEXT_KEY, {})


def add_request_id(handler: View) -> View:
    """Wrap a handler so each request carries a fresh request id in its context."""

    @functools.wraps(handler)
    def wrapper(request: Request) -> Response:
        context = dict(_context(request))
        context["request_id"] = str(uuid.uuid4())
        request.environ[CONTEXT_KEY] = context
        return handler(request)

    return wrapper


class TaskHandler:
    """Turns HTTP requests into task service calls."""

    def __init__(self, service: TaskService, logger: Logger | None = None) -> None:
        self._service = service
        self._logger = logger if logger is not None else Logger()

    def create_task(self, request: Request) -> Response:
        log = self._logger.with_context(_context(request))
        try:
            task = _decode_task(request)
        except (ValueError, TypeError) as exc:
            log.error("Failed to decode request body", error=str(exc))
            return _error("Invalid request body", 400)
        try:
            created = self._service.create_task(task)
        except Exception as exc:
            log.error("Failed to create task", error=str(exc), title=task.title)
            return _error(str(exc), 500)
        log.info("Task created successfully", task_id=created.id, title=created.title)
        return _json_response(created.to_dict())

    def get_task(self, request: Request) -> Response:
        task_id = request.args.get("id", "")
        if not task_id:
            self._logger.warn("Missing task ID in request")
            return _error("Task ID is required", 400)
        try:
            task = self._service.get_task(task_id)
        except TaskNotFoundError:
            self._logger.warn("Task not found", task_id=task_id)
            return _error("Task not found", 404)
        except Exception as exc:
            self._logger.error("Failed to get task", error=str(exc), task_id=task_id)
            return _error(str(exc), 500)
        self._logger.info("Task retrieved successfully", task_id=task.id, title=task.title)
        return _json_response(task.to_dict())

    def update_task(self, request: Request) -> Response:
        try:
            task = _decode_task(request)
        except (ValueError, TypeError) as exc:
            self._logger.error("Failed to decode request body", error=str(exc))
            return _error("Invalid request body", 400)
        try:
            updated = self._service.update_task(task)
        except TaskNotFoundError:
            self._logger.warn("Task not found for update", task_id=task.id)
            return _error("Task not found", 404)
        except Exception as exc:
            self._logger.error("Failed to update task", error=str(exc), task_id=task.id)
            return _error(str(exc), 500)
        self._logger.info("Task updated successfully", task_id=updated.id, title=updated.title)
        return _json_response(updated.to_dict())

    def delete_task(self, request: Request) -> Response:
        task_id = request.args.get("id", "")
        if not task_id:
            self._logger.warn("Missing task ID in request")
            return _error("Task ID is required", 400)
        try:
            self._service.delete_task(task_id)
        except TaskNotFoundError:
            self._logger.warn("Task not found for deletion", task_id=task_id)
            return _error("Task not found", 404)
        except Exception as exc:
            self._logger.error("Failed to delete task", error=str(exc), task_id=task_id)
            return _error(str(exc), 500)
        self._logger.info("Task deleted successfully", task_id=task_id)
        return Response(status=204)

    def get_all_tasks(self, request: Request) -> Response:
        tasks = self._service.get_all_tasks()
        self._logger.info("Retrieved all tasks", count=len(tasks))
        return _json_response([task.to_dict() for task in tasks])


def setup_router(task_handler: TaskHandler) -> Callable[..., Any]:
    """Return a WSGI application routing exact paths to the task handler."""
    routes: dict[str, View] = {
        "/tasks": add_request_id(task_handler.create_task),
        "/task": add_request_id(task_handler.get_task),
        "/task/update": add_request_id(task_handler.update_task),
        "/task/delete": add_request_id(task_handler.delete_task),
        "/tasks/all": add_request_id(task_handler.get_all_tasks),
    }

    @Request.application
    def app(request: Request) -> Response:
        view = routes.get(request.path)
        if view is None:
            return _error("404 page not found", 404)
        return view(request)

    return app
"""Command that serves the task API over HTTP."""

from __future__ import annotations

import argparse
from typing import Any, Callable, Sequence

from werkzeug.serving import run_simple

from .config import DEFAULT_CONFIG_PATH, Config, load_config
from .factory import new_repository
from .handlers import TaskHandler, setup_router
from .logger import Logger
from .service import TaskService


def build_app(cfg: Config) -> Callable[..., Any]:
    """Wire repository, service and handlers into a WSGI application."""
    repo = new_repository(cfg)
    service = TaskService(repo)
    return setup_router(TaskHandler(service))


def main(argv: Sequence[str] | None = None) -> None:
    """Load the configuration and serve the task API."""
    parser = argparse.ArgumentParser(prog="taskboard", description="Serve the task API.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="YAML configuration file")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    args = parser.parse_args(argv)

    log = Logger()
    cfg = load_config(args.config)

    try:
        app = build_app(cfg)
    except Exception as exc:
        log.fatal(
            "Failed to create repository",
            error=str(exc),
            repository_type=cfg.repository_type,
        )

    log.info("Server starting", port=str(args.port), repository_type=cfg.repository_type)

    try:
        run_simple(args.host, args.port, app)
    except OSError as exc:
        log.fatal("Server failed to start", error=str(exc))
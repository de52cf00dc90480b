"""Choose the task repository named by the configuration."""

from __future__ import annotations

from .config import Config
from .memory_repo import MemoryTaskRepository, TaskRepository
from .sql_repo import SqlTaskRepository


def new_repository(cfg: Config) -> TaskRepository:
    """Return a SQL repository for "postgres", otherwise an in-memory one."""
    if cfg.repository_type == "postgres":
        return SqlTaskRepository.from_config(cfg)
    return MemoryTaskRepository()
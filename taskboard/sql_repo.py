"""Task repository backed by a SQL database."""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.types import TypeDecorator

from .config import Config
from .domain import Task, TaskNotFoundError
from .memory_repo import TaskRepository


class _UtcDateTime(TypeDecorator):
    """Stores datetimes as naive UTC and reads them back as aware UTC."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> Any:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value: Any, dialect: Any) -> Any:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


_metadata = MetaData()

tasks_table = Table(
    "tasks",
    _metadata,
    Column("id", String(255), primary_key=True),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("status", Boolean, default=False),
    Column("created_at", _UtcDateTime, nullable=False),
    Column("updated_at", _UtcDateTime, nullable=False),
)


def database_url(cfg: Config) -> URL:
    """Build the PostgreSQL connection URL described by the configuration."""
    db = cfg.database
    return URL.create(
        "postgresql",
        username=db.user,
        password=db.password,
        host=db.host,
        port=db.port,
        database=db.dbname,
        query={"sslmode": "disable"},
    )


def _row_to_task(row: Any) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        description=row.description or "",
        status=bool(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _select_one(conn: Any, task_id: str) -> Any:
    return conn.execute(select(tasks_table).where(tasks_table.c.id == task_id)).first()


class SqlTaskRepository(TaskRepository):
    """Task storage in the ``tasks`` table, created on first use."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        _metadata.create_all(engine)

    @classmethod
    def from_config(cls, cfg: Config) -> SqlTaskRepository:
        """Connect to the database the configuration names."""
        return cls(create_engine(database_url(cfg)))

    def create_task(self, task: Task) -> Task:
        now = datetime.now(timezone.utc)
        task = replace(task, id=str(uuid.uuid4()), created_at=now, updated_at=now)
        with self._engine.begin() as conn:
            conn.execute(
                insert(tasks_table).values(
                    id=task.id,
                    title=task.title,
                    description=task.description,
                    status=task.status,
                    created_at=task.created_at,
                    updated_at=task.updated_at,
                )
            )
            row = _select_one(conn, task.id)
        return _row_to_task(row)

    def get_task(self, task_id: str) -> Task:
        with self._engine.connect() as conn:
            row = _select_one(conn, task_id)
        if row is None:
            raise TaskNotFoundError()
        return _row_to_task(row)

    def update_task(self, task: Task) -> Task:
        with self._engine.begin() as conn:
            result = conn.execute(
                update(tasks_table)
                .where(tasks_table.c.id == task.id)
                .values(
                    title=task.title,
                    description=task.description,
                    status=task.status,
                    updated_at=task.updated_at,
                )
            )
            if result.rowcount == 0:
                raise TaskNotFoundError()
            row = _select_one(conn, task.id)
        return _row_to_task(row)

    def delete_task(self, task_id: str) -> None:
        with self._engine.begin() as conn:
            result = conn.execute(delete(tasks_table).where(tasks_table.c.id == task_id))
        if result.rowcount == 0:
            raise TaskNotFoundError()

    def get_all_tasks(self) -> list[Task]:
        """Return every stored task; a failing query yields an empty list."""
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(select(tasks_table)).all()
        except SQLAlchemyError:
            return []
        tasks = []
        for row in rows:
            try:
                tasks.append(_row_to_task(row))
            except (TypeError, ValueError, AttributeError):
                continue
        return tasks
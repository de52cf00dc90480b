from dataclasses import replace

import pytest
from sqlalchemy import create_engine, text

from taskboard.config import Config
from taskboard.domain import Task, TaskNotFoundError
from taskboard.sql_repo import SqlTaskRepository, database_url


@pytest.fixture
def engine(tmp_path):
    eng = create_engine(f"sqlite:///{tmp_path / 'tasks.db'}")
    yield eng
    eng.dispose()


@pytest.fixture
def repo(engine):
    return SqlTaskRepository(engine)


def test_create_assigns_id_and_timestamps(repo):
    created = repo.create_task(Task(title="Write", description="docs", status=True))
    assert len(created.id) == 36
    assert created.title == "Write"
    assert created.description == "docs"
    assert created.status is True
    assert created.created_at == created.updated_at
    assert created.created_at.tzinfo is not None


def test_get_round_trip(repo):
    created = repo.create_task(Task(title="Read"))
    assert repo.get_task(created.id) == created


def test_get_missing_raises(repo):
    with pytest.raises(TaskNotFoundError):
        repo.get_task("non-existent-id")


def test_update_keeps_created_at_and_uses_given_updated_at(repo):
    created = repo.create_task(Task(title="Old"))
    changed = replace(created, title="New", description="changed", status=True)
    updated = repo.update_task(changed)
    assert updated == changed
    assert repo.get_task(created.id).title == "New"


def test_update_missing_raises(repo):
    with pytest.raises(TaskNotFoundError):
        repo.update_task(Task(id="non-existent-id", title="x"))


def test_delete_removes_task(repo):
    created = repo.create_task(Task(title="Gone"))
    repo.delete_task(created.id)
    with pytest.raises(TaskNotFoundError):
        repo.get_task(created.id)


def test_delete_missing_raises(repo):
    with pytest.raises(TaskNotFoundError):
        repo.delete_task("non-existent-id")


def test_get_all_tasks(repo):
    assert repo.get_all_tasks() == []
    made = [repo.create_task(Task(title=f"Task {n}")) for n in range(3)]
    assert sorted(t.id for t in repo.get_all_tasks()) == sorted(t.id for t in made)


def test_get_all_tasks_returns_empty_on_query_failure(repo, engine):
    repo.create_task(Task(title="a"))
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE tasks"))
    assert repo.get_all_tasks() == []


def test_table_persists_across_instances(engine):
    first = SqlTaskRepository(engine)
    created = first.create_task(Task(title="kept"))
    second = SqlTaskRepository(engine)
    assert second.get_task(created.id) == created


def test_database_url_from_defaults():
    cfg = Config()
    url = database_url(cfg)
    assert url.drivername == "postgresql"
    assert url.host == "localhost"
    assert url.port == 5432
    assert url.username == "postgres"
    assert url.database == "taskmanager"
    assert url.password == cfg.database.password
    assert url.query["sslmode"] == "disable"
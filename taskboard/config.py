"""Application configuration loaded from an optional YAML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml

DEFAULT_CONFIG_PATH = "config.yaml"
PASSWORD = "password"


@dataclass
class DatabaseConfig:
    """Connection settings for the SQL task repository."""

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = PASSWORD
    dbname: str = "taskmanager"


@dataclass
class Config:
    """Top-level settings; repository_type is "memory" or "postgres"."""

    repository_type: str = "memory"
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _apply_database(db: DatabaseConfig, data: Mapping[str, Any]) -> None:
    for key in ("host", "user", "password", "dbname"):
        text = _as_text(data.get(key))
        if text is not None:
            setattr(db, key, text)
    port = _as_int(data.get("port"))
    if port is not None:
        db.port = port


def _apply(cfg: Config, data: Mapping[str, Any]) -> None:
    repository_type = _as_text(data.get("repository_type"))
    if repository_type is not None:
        cfg.repository_type = repository_type
    database = data.get("database")
    if isinstance(database, Mapping):
        _apply_database(cfg.database, database)


def load_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """Return defaults overridden by whatever the YAML file at path provides.

    A missing or unreadable file leaves the defaults in place; values of the
    wrong type are skipped.
    """
    cfg = Config()
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, ValueError, yaml.YAMLError):
        return cfg
    if isinstance(data, Mapping):
        _apply(cfg, data)
    return cfg
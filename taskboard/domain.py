"""Task entity and the errors raised by task storage."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d{1,9}))?"
    r"(Z|[+-]\d{2}:\d{2})$"
)


class TaskError(Exception):
    """Base class for task errors."""

    default_message = "task error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class TaskNotFoundError(TaskError):
    """No task exists with the requested id."""

    default_message = "task not found"


class TaskIdRequiredError(TaskError):
    """A task id was required but not given."""

    default_message = "task id is required"


class TaskTitleRequiredError(TaskError):
    """A task title was required but not given."""

    default_message = "task title is required"


def format_time(value: datetime) -> str:
    """Format a datetime as RFC 3339 with trailing fraction zeros trimmed."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta(0)
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, keeping microsecond precision."""
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "").ljust(9, "0")[:6])
    if zone == "Z":
        tz = timezone.utc
    else:
        hours, mins = zone[1:].split(":")
        delta = timedelta(hours=int(hours), minutes=int(mins))
        tz = timezone(-delta if zone[0] == "-" else delta)
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


_KEYS = {
    "id": "id",
    "title": "title",
    "description": "description",
    "status": "status",
    "createdat": "created_at",
    "updatedat": "updated_at",
}


@dataclass(frozen=True)
class Task:
    """A unit of work tracked by the task board."""

    id: str = ""
    title: str = ""
    description: str = ""
    status: bool = False
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation of the task."""
        return {
            "ID": self.id,
            "Title": self.title,
            "Description": self.description,
            "Status": self.status,
            "CreatedAt": format_time(self.created_at),
            "UpdatedAt": format_time(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Task:
        """Build a task from decoded JSON; key names match case-insensitively."""
        if not isinstance(data, Mapping):
            raise TypeError("task data must be a JSON object")
        values: dict[str, Any] = {}
        for key, raw in data.items():
            name = _KEYS.get(str(key).lower())
            if name is None or raw is None:
                continue
            if name == "status":
                if not isinstance(raw, bool):
                    raise ValueError("field Status must be a boolean")
                values[name] = raw
            elif name in ("created_at", "updated_at"):
                if not isinstance(raw, str):
                    raise ValueError(f"field {key} must be a timestamp string")
                values[name] = parse_time(raw)
            else:
                if not isinstance(raw, str):
                    raise ValueError(f"field {key} must be a string")
                values[name] = raw
        return cls(**values)
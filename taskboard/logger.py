"""Structured JSON logger with bound fields."""

from __future__ import annotations

import json
import os
import sys
import threading
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, TextIO


class LogLevel(str, Enum):
    """Severity of a log message."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


_RANK = {LogLevel.DEBUG: 0, LogLevel.INFO: 1, LogLevel.WARN: 2, LogLevel.ERROR: 3}
_FATAL_RANK = 5


def _timestamp() -> str:
    now = datetime.now().astimezone()
    return f"{now:%Y-%m-%dT%H:%M:%S}.{now.microsecond // 1000:03d}{now:%z}"


class Logger:
    """Writes one JSON object per line, carrying any bound fields."""

    def __init__(
        self,
        stream: TextIO | None = None,
        level: LogLevel | str = LogLevel.INFO,
        fields: Mapping[str, Any] | None = None,
    ) -> None:
        self._stream = stream
        self._level = LogLevel(level)
        self._fields = dict(fields or {})
        self._lock = threading.Lock()

    @property
    def fields(self) -> dict[str, Any]:
        """A copy of the fields bound to this logger."""
        return dict(self._fields)

    def _derive(self, extra: Mapping[str, Any]) -> Logger:
        child = Logger(self._stream, self._level, {**self._fields, **extra})
        child._lock = self._lock
        return child

    def with_context(self, context: Mapping[str, Any] | None) -> Logger:
        """Return a logger carrying the context's request id, if it has one."""
        request_id = context.get("request_id") if context else None
        if isinstance(request_id, str):
            return self._derive({"request_id": request_id})
        return self

    def with_fields(self, fields: Mapping[str, Any]) -> Logger:
        """Return a logger carrying the given extra fields."""
        return self._derive(fields)

    def _log(self, name: str, rank: int, msg: str, fields: Mapping[str, Any]) -> None:
        if rank < _RANK[self._level]:
            return
        frame = sys._getframe(2)
        code = frame.f_code.co_filename
        caller = f"{os.path.basename(os.path.dirname(code))}/{os.path.basename(code)}:{frame.f_lineno}"
        record = {
            "level": name,
            "timestamp": _timestamp(),
            "caller": caller,
            "msg": msg,
            **self._fields,
            **fields,
        }
        line = json.dumps(record, default=str)
        stream = self._stream if self._stream is not None else sys.stderr
        with self._lock:
            stream.write(line + "\n")

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self._log("debug", _RANK[LogLevel.DEBUG], msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log an info message."""
        self._log("info", _RANK[LogLevel.INFO], msg, kwargs)

    def warn(self, msg: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self._log("warn", _RANK[LogLevel.WARN], msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log an error message."""
        self._log("error", _RANK[LogLevel.ERROR], msg, kwargs)

    def fatal(self, msg: str, **kwargs: Any) -> None:
        """Log a fatal message, flush, and exit with status 1."""
        self._log("fatal", _FATAL_RANK, msg, kwargs)
        self.sync()
        raise SystemExit(1)

    def sync(self) -> None:
        """Flush any buffered output."""
        stream = self._stream if self._stream is not None else sys.stderr
        with self._lock:
            stream.flush()
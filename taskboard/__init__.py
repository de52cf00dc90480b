"""JSON WSGI services for tasks and articles, with in-memory and SQL storage, plus small concurrency demos."""

__version__ = "0.1.0"
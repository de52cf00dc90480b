"""Articles persisted in a SQL database, with a small HTTP API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from sqlalchemy import Column, Integer, MetaData, Table, Text, create_engine, insert, select
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.routing import Map, Rule
from werkzeug.wrappers import Request, Response

from .article_api import _routed_app
from .handlers import _error, _json_response

_metadata = MetaData()

articles_table = Table(
    "articles",
    _metadata,
    Column("id", Integer, primary_key=True),
    Column("title", Text),
    Column("content", Text),
)


@dataclass(frozen=True)
class StoredArticle:
    """An article row."""

    id: int
    title: str
    content: str


class ArticleStore:
    """Reads and writes the ``articles`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def connect(cls, url: str | URL) -> ArticleStore:
        """Open the database at url and check that it answers."""
        engine = create_engine(url)
        with engine.connect():
            pass
        return cls(engine)

    def save_article(self, title: str, content: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(insert(articles_table).values(title=title, content=content))

    def get_all_articles(self) -> list[StoredArticle]:
        query = select(articles_table.c.id, articles_table.c.title, articles_table.c.content)
        with self._engine.connect() as conn:
            rows = conn.execute(query).all()
        return [StoredArticle(row.id, row.title, row.content) for row in rows]


class StoreService:
    """Article operations against an ArticleStore."""

    def __init__(self, store: ArticleStore) -> None:
        self._store = store

    def create(self, title: str, content: str) -> None:
        self._store.save_article(title, content)

    def get_all(self) -> list[StoredArticle]:
        return self._store.get_all_articles()


def _read_request(request: Request) -> tuple[str, str]:
    """Return (title, content) from the JSON body; raise ValueError if it is invalid."""
    body = request.get_data().decode("utf-8", errors="replace").lstrip(" \t\r\n")
    data, _ = json.JSONDecoder().raw_decode(body)
    fields = {"title": "", "content": ""}
    if data is None:
        return fields["title"], fields["content"]
    if not isinstance(data, Mapping):
        raise ValueError("request body must be a JSON object")
    for key, raw in data.items():
        name = str(key).lower()
        if name not in fields or raw is None:
            continue
        if not isinstance(raw, str):
            raise ValueError(f"field {key} must be a string")
        fields[name] = raw
    return fields["title"], fields["content"]


def _article_json(article: StoredArticle) -> dict[str, Any]:
    return {"ID": article.id, "Title": article.title, "Content": article.content}


def create_store_app(store: ArticleStore) -> Callable[..., Any]:
    """Return a WSGI app with POST and GET on /articles."""
    service = StoreService(store)

    def create(request: Request) -> Response:
        try:
            title, content = _read_request(request)
        except ValueError:
            return _error("Invalid request", 400)
        try:
            service.create(title, content)
        except SQLAlchemyError:
            return _error("Could not save article", 500)
        return Response('{"status":"ok"}', status=201, content_type="text/plain; charset=utf-8")

    def list_all(request: Request) -> Response:
        try:
            articles = service.get_all()
        except SQLAlchemyError:
            return _error("Could not get articles", 500)
        # An empty listing is encoded as null, as the original API did.
        return _json_response([_article_json(a) for a in articles] or None)

    url_map = Map(
        [
            Rule("/articles", methods=["POST"], endpoint="create"),
            Rule("/articles", methods=["GET"], endpoint="list"),
        ],
        merge_slashes=False,
    )
    return _routed_app(url_map, {"create": create, "list": list_all})
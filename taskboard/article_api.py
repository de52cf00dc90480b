"""HTTP API over the article service, and the command that serves it."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, Mapping, Sequence

from werkzeug.exceptions import MethodNotAllowed, NotFound
from werkzeug.routing import Map, Rule
from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

from .articles import Article, ArticleService, InMemoryArticleRepository
from .handlers import _error, _json_response

WsgiApp = Callable[..., Any]


def _routed_app(url_map: Map, views: Mapping[str, Callable[..., Response]]) -> WsgiApp:
    """Build a WSGI app that dispatches matched endpoints to views."""

    @Request.application
    def app(request: Request) -> Response:
        adapter = url_map.bind_to_environ(request.environ)
        try:
            endpoint, values = adapter.match()
        except MethodNotAllowed:
            return Response(status=405)
        except NotFound:
            return _error("404 page not found", 404)
        return views[endpoint](request, **values)

    return app


def _read_article(request: Request) -> Article:
    """Decode the body leniently: bad input yields whatever string fields were valid."""
    body = request.get_data().decode("utf-8", errors="replace").lstrip(" \t\r\n")
    try:
        data, _ = json.JSONDecoder().raw_decode(body)
    except ValueError:
        return Article()
    if not isinstance(data, Mapping):
        return Article()
    return Article.from_dict({k: v for k, v in data.items() if isinstance(v, str)})


class ArticleHandler:
    """Turns HTTP requests into article service calls."""

    def __init__(self, service: ArticleService) -> None:
        self._service = service

    def home_page(self, request: Request) -> Response:
        return _json_response("Welcome to the HomePage!")

    def get_articles(self, request: Request) -> Response:
        return _json_response([a.to_dict() for a in self._service.get_all_articles()])

    def get_article(self, request: Request, article_id: str) -> Response:
        article = self._service.get_article_by_id(article_id) or Article()
        return _json_response(article.to_dict())

    def create_article(self, request: Request) -> Response:
        created = self._service.create_article(_read_article(request))
        return _json_response(created.to_dict())

    def delete_article(self, request: Request, article_id: str) -> Response:
        self._service.delete_article(article_id)
        return _json_response([a.to_dict() for a in self._service.get_all_articles()])


def create_app(service: ArticleService) -> WsgiApp:
    """Return the WSGI application serving the article routes."""
    handler = ArticleHandler(service)
    url_map = Map(
        [
            Rule("/", methods=["GET"], endpoint="home"),
            Rule("/articles", methods=["GET"], endpoint="list"),
            Rule("/article", methods=["POST"], endpoint="create"),
            Rule("/article/<article_id>", methods=["GET"], endpoint="get"),
            Rule("/article/<article_id>", methods=["DELETE"], endpoint="delete"),
        ],
        merge_slashes=False,
    )
    views = {
        "home": handler.home_page,
        "list": handler.get_articles,
        "create": handler.create_article,
        "get": handler.get_article,
        "delete": handler.delete_article,
    }
    return _routed_app(url_map, views)


def main(argv: Sequence[str] | None = None) -> None:
    """Serve the article API backed by the seeded in-memory repository."""
    parser = argparse.ArgumentParser(prog="articles", description="Serve the article API.")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=8000, help="port to listen on")
    args = parser.parse_args(argv)

    app = create_app(ArticleService(InMemoryArticleRepository()))
    print(f"Server starting on port {args.port}...", file=sys.stderr)
    try:
        run_simple(args.host, args.port, app)
    except OSError as exc:
        raise SystemExit(str(exc)) from exc
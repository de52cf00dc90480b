"""Articles, their in-memory repository and the service in front of it."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

_FIELDS = {"id": "id", "title": "title", "content": "content"}


@dataclass(frozen=True)
class Article:
    """A blog article."""

    id: str = ""
    title: str = ""
    content: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the JSON-ready representation of the article."""
        return {"id": self.id, "title": self.title, "content": self.content}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Article:
        """Build an article from decoded JSON; key names match case-insensitively."""
        if not isinstance(data, Mapping):
            raise TypeError("article data must be a JSON object")
        values: dict[str, str] = {}
        for key, raw in data.items():
            name = _FIELDS.get(str(key).lower())
            if name is None or raw is None:
                continue
            if not isinstance(raw, str):
                raise ValueError(f"field {key} must be a string")
            values[name] = raw
        return cls(**values)


class ArticleRepository(ABC):
    """Storage for articles."""

    @abstractmethod
    def get_all(self) -> list[Article]:
        """Return every article in insertion order."""

    @abstractmethod
    def get_by_id(self, article_id: str) -> Article | None:
        """Return the first article with this id, or None."""

    @abstractmethod
    def create(self, article: Article) -> Article:
        """Store an article and return it."""

    @abstractmethod
    def delete(self, article_id: str) -> bool:
        """Remove the first article with this id; report whether one was found."""


def _seed() -> list[Article]:
    return [
        Article(id="1", title="Hello", content="Article Content"),
        Article(id="2", title="Hello 2", content="Article Content 2"),
    ]


class InMemoryArticleRepository(ArticleRepository):
    """Article storage held in a list, seeded with two sample articles."""

    def __init__(self, articles: Iterable[Article] | None = None) -> None:
        self._articles = list(articles) if articles is not None else _seed()
        self._lock = threading.Lock()

    def get_all(self) -> list[Article]:
        with self._lock:
            return list(self._articles)

    def get_by_id(self, article_id: str) -> Article | None:
        with self._lock:
            return next((a for a in self._articles if a.id == article_id), None)

    def create(self, article: Article) -> Article:
        with self._lock:
            self._articles.append(article)
        return article

    def delete(self, article_id: str) -> bool:
        with self._lock:
            for position, article in enumerate(self._articles):
                if article.id == article_id:
                    del self._articles[position]
                    return True
        return False


class ArticleService:
    """Article operations on top of a repository."""

    def __init__(self, repo: ArticleRepository) -> None:
        self._repo = repo

    def get_all_articles(self) -> list[Article]:
        return self._repo.get_all()

    def get_article_by_id(self, article_id: str) -> Article | None:
        return self._repo.get_by_id(article_id)

    def create_article(self, article: Article) -> Article:
        return self._repo.create(article)

    def delete_article(self, article_id: str) -> bool:
        return self._repo.delete(article_id)
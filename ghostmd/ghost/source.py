"""
File-backed source of Ghost posts.

Understands three JSON shapes:
  - an Admin API ``posts.browse`` response: {"posts": [...], "meta": {...}}
  - a Ghost site export: {"db": [{"data": {"posts": [...], "users": [...], ...}}]}
  - a bare list of post objects

Site exports keep authors and tags in join tables; they are folded back onto
each post so both shapes yield the same Post records.
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from pydantic import ValidationError

from ..exceptions import PostNotFound, PostSourceError
from .models import Post

LOGGER = logging.getLogger(__name__)

POST_TYPES = ("published", "draft", "all")


@dataclass(frozen=True)
class PostPage:
    posts: List[Post]
    page: int
    pages: int
    total: int

    @property
    def next(self) -> Optional[int]:
        return self.page + 1 if self.page < self.pages else None


def _join(
    data: Dict[str, Any], link_table: str, target_table: str, target_key: str
) -> Dict[str, List[Dict[str, Any]]]:
    targets = {row.get("id"): row for row in data.get(target_table) or []}
    links = sorted(data.get(link_table) or [], key=lambda r: r.get("sort_order") or 0)
    joined: Dict[str, List[Dict[str, Any]]] = {}
    for link in links:
        target = targets.get(link.get(target_key))
        if target is not None:
            joined.setdefault(link.get("post_id"), []).append(target)
    return joined


def _posts_from_export(db: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for entry in db:
        data = entry.get("data") or {}
        authors = _join(data, "posts_authors", "users", "author_id")
        tags = _join(data, "posts_tags", "tags", "tag_id")
        for post in data.get("posts") or []:
            # Exports mix pages in with posts
            if post.get("type", "post") != "post":
                continue
            row = dict(post)
            row.setdefault("authors", authors.get(post.get("id"), []))
            row.setdefault("tags", tags.get(post.get("id"), []))
            rows.append(row)
    return rows


def _raw_posts(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if isinstance(data.get("posts"), list):
            return data["posts"]
        if isinstance(data.get("db"), list):
            return _posts_from_export(data["db"])
    raise PostSourceError(
        "Unrecognized posts JSON: expected a list, {'posts': [...]} or a Ghost export"
    )


class JsonPostSource:
    """In-memory post collection with slug lookup and paginated browsing."""

    def __init__(self, posts: Iterable[Post]):
        self._posts: List[Post] = list(posts)

    @classmethod
    def from_data(cls, data: Any) -> "JsonPostSource":
        posts: List[Post] = []
        for i, raw in enumerate(_raw_posts(data)):
            try:
                posts.append(Post.model_validate(raw))
            except ValidationError as e:
                LOGGER.warning(
                    "Skipping malformed post at index %d: %s",
                    i,
                    e.errors()[0].get("msg"),
                )
        LOGGER.debug("Loaded %d posts", len(posts))
        return cls(posts)

    @classmethod
    def from_file(cls, path: str) -> "JsonPostSource":
        LOGGER.debug("Loading posts from %s", path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PostSourceError(f"Could not read posts from {path}: {e}") from e
        return cls.from_data(data)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def get(self, slug: str) -> Post:
        for post in self._posts:
            if post.slug == slug:
                return post
        LOGGER.warning("Post not found: %s", slug)
        raise PostNotFound(f"Post not found: {slug}")

    def select(
        self, *, status: str = "published", author_slug: Optional[str] = None
    ) -> List[Post]:
        """Posts with the given status ("all" = draft and published) and author."""
        if status not in POST_TYPES:
            raise ValueError(f"status must be one of {POST_TYPES}, got {status!r}")
        wanted = ("draft", "published") if status == "all" else (status,)
        return [
            p
            for p in self._posts
            if p.status in wanted
            and (
                author_slug is None or any(a.slug == author_slug for a in p.authors)
            )
        ]

    def iter_pages(
        self,
        *,
        batch_size: int = 10,
        status: str = "published",
        author_slug: Optional[str] = None,
    ) -> Iterator[PostPage]:
        """Yield selected posts in pages of ``batch_size`` (1-based page numbers).

        An empty selection yields a single empty page.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        selected = self.select(status=status, author_slug=author_slug)
        pages = max(1, math.ceil(len(selected) / batch_size))
        LOGGER.debug(
            "Browsing posts: status=%s author=%s total=%d pages=%d",
            status,
            author_slug,
            len(selected),
            pages,
        )
        for page in range(1, pages + 1):
            start = (page - 1) * batch_size
            yield PostPage(
                posts=selected[start : start + batch_size],
                page=page,
                pages=pages,
                total=len(selected),
            )


def load_posts(path: str) -> JsonPostSource:
    if not os.path.exists(path):
        raise PostSourceError(f"No such file: {path}")
    return JsonPostSource.from_file(path)

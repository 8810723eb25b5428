"""Ghost post records as read from Admin API responses or site exports."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

from pydantic import field_validator

from .._base import GhostMdModel
from ..mobiledoc.models import MobiledocDocument

UNKNOWN_AUTHOR = "unknown-author"


class Author(GhostMdModel):
    id: Optional[str] = None
    name: str = ""
    slug: Optional[str] = None


class PostTag(GhostMdModel):
    id: Optional[str] = None
    name: str
    slug: str


class Post(GhostMdModel):
    """A Ghost post carrying its Mobiledoc body."""

    id: Optional[str] = None
    title: Optional[str] = None
    slug: str
    status: str = "published"
    published_at: Optional[str] = None
    feature_image: Optional[str] = None
    authors: Tuple[Author, ...] = ()
    tags: Tuple[PostTag, ...] = ()
    # Ghost serializes the document as a JSON string
    mobiledoc: Optional[Union[str, Dict[str, Any]]] = None

    @field_validator("authors", "tags", mode="before")
    @classmethod
    def _null_list(cls, v: Any) -> Any:
        return () if v is None else v

    @property
    def primary_author(self) -> Optional[Author]:
        return self.authors[0] if self.authors else None

    @property
    def author_slug(self) -> str:
        author = self.primary_author
        return (author.slug if author else None) or UNKNOWN_AUTHOR

    def document(self) -> MobiledocDocument:
        """Parse the Mobiledoc body. Raises ValueError/ValidationError if broken."""
        if self.mobiledoc is None:
            raise ValueError(f"Post {self.slug!r} has no mobiledoc body")
        return MobiledocDocument.coerce(self.mobiledoc)

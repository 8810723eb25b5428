"""Ghost posts: file-backed source and Markdown exporter."""

from .exporter import ExportSummary, convert, export_post, export_posts, front_matter
from .models import Author, Post, PostTag
from .source import JsonPostSource, PostPage, load_posts

__all__ = [
    "Author",
    "ExportSummary",
    "JsonPostSource",
    "Post",
    "PostPage",
    "PostTag",
    "convert",
    "export_post",
    "export_posts",
    "front_matter",
    "load_posts",
]

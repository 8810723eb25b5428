"""
Exporter helpers for Ghost posts → Markdown files.

Thin wrappers around the Mobiledoc renderer: front matter, the optional
<figure> rewrite, and file output. Per-post failures are logged and counted;
they never stop a batch export.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError

from ..mobiledoc.rendering.figures import rewrite_images
from ..mobiledoc.rendering.options import RenderConfig
from ..mobiledoc.rendering.renderer import render
from .models import Post
from .source import JsonPostSource

LOGGER = logging.getLogger(__name__)


def _q(value: Optional[str]) -> str:
    # JSON strings are valid double-quoted YAML scalars
    return json.dumps(value or "", ensure_ascii=False)


def front_matter(post: Post) -> str:
    """YAML front matter for a post; blank lines are dropped."""
    author = post.primary_author
    if author is None or not author.slug:
        LOGGER.error(
            'Post "%s" (slug: %s) has no author slug', post.title, post.slug
        )
    lines = [
        "---",
        f"title: {_q(post.title)}",
        f"date: {_q(post.published_at)}",
        f"slug: {_q(post.slug)}",
        f"feature_image: {_q(post.feature_image)}",
        "author:",
        f"  name: {_q(author.name if author else '')}",
        f"  slug: {_q(post.author_slug)}",
    ]
    if post.tags:
        lines.append("tags:")
        for tag in post.tags:
            lines.append(f"  - name: {_q(tag.name)}")
            lines.append(f"    slug: {_q(tag.slug)}")
    lines.append("---")
    return "\n".join(line for line in lines if line.strip()) + "\n"


def convert(post: Post, config: Optional[RenderConfig] = None) -> str:
    """Render a post to a complete Markdown file body.

    Returns an empty string when the post's Mobiledoc cannot be parsed.
    """
    conf = config or RenderConfig()
    try:
        document = post.document()
    except (ValidationError, ValueError, TypeError) as e:
        LOGGER.error("Error converting document (slug: %s): %s", post.slug, e)
        return ""

    markdown = render(document, conf)
    if conf.use_figure:
        markdown = rewrite_images(markdown, conf)

    out = front_matter(post) + "\n"
    if post.title:
        out += f"# {post.title}\n\n"
    return out + markdown


def _safe_name(s: Optional[str]) -> str:
    if not s:
        return "untitled"
    s = re.sub(r"\s+", "-", s).strip()
    s = re.sub(r"[^\w\-.]+", "-", s)
    return s[:120] or "untitled"


def write_markdown(post: Post, markdown: str, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f"{_safe_name(post.slug)}.md")
    with open(path, "w", encoding="utf-8") as f:
        f.write(markdown)
    return path


@dataclass
class ExportSummary:
    added: int = 0
    failed: int = 0
    paths: List[str] = field(default_factory=list)


def export_post(
    post: Post, out_dir: str, config: Optional[RenderConfig] = None
) -> Optional[str]:
    """Convert and write one post; returns the path, or None if conversion failed."""
    markdown = convert(post, config)
    if not markdown:
        return None
    path = write_markdown(post, markdown, out_dir)
    LOGGER.info('Saved post "%s" (slug: %s)', post.title, post.slug)
    return path


def export_posts(
    source: JsonPostSource,
    out_dir: str,
    *,
    config: Optional[RenderConfig] = None,
    batch_size: int = 10,
    status: str = "published",
    author_slug: Optional[str] = None,
) -> ExportSummary:
    summary = ExportSummary()
    for page in source.iter_pages(
        batch_size=batch_size, status=status, author_slug=author_slug
    ):
        if author_slug and page.page == 1 and not page.posts:
            LOGGER.error(
                "No posts found for the specified author (author-slug: %s). "
                "Is the author-slug correct?",
                author_slug,
            )
            return summary
        for post in page.posts:
            try:
                path = export_post(post, out_dir, config)
            except OSError as e:
                LOGGER.error(
                    'Failed to save post "%s" (slug: %s): %s', post.title, post.slug, e
                )
                path = None
            if path is None:
                summary.failed += 1
            else:
                summary.added += 1
                summary.paths.append(path)
        LOGGER.info(
            "Completed page %d/%d of posts. %d posts added. %d posts failed.",
            page.page,
            page.pages,
            summary.added,
            summary.failed,
        )
    LOGGER.info(
        "Completed export. %d posts added. %d posts failed.",
        summary.added,
        summary.failed,
    )
    return summary

"""
Render configuration for Mobiledoc → Markdown output.

Centralizes behavior flags so callers can tune defaults without touching
core logic. The defaults reproduce the Markdown dialect Hashnode accepts.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Tuple

_DEFAULT_BLOCK_PREFIXES: Tuple[Tuple[str, str], ...] = (
    ("h1", "# "),
    ("h2", "## "),
    ("h3", "### "),
    ("h4", "#### "),
    ("h5", "##### "),
    ("h6", "###### "),
    ("p", ""),
)


@dataclass(frozen=True)
class RenderConfig:
    # Logging/debug: log every section as it is dispatched
    debug: bool = False

    # Joins rendered sections
    block_separator: str = "\n\n"

    # Alt text for image sections and image cards. Captions never go here:
    # the target platform does not display alt text.
    image_alt: str = "Image"

    # Label for embeds that cannot be passed through as HTML
    embed_label: str = "Embedded content"
    passthrough_embed_types: Tuple[str, ...] = ("video", "rich")

    # Unordered list marker
    bullet: str = "*"

    # (markup section tag, line prefix) pairs; a mapping is accepted and
    # frozen into pairs. Unknown tags pass through unprefixed.
    block_prefixes: Tuple[Tuple[str, str], ...] = _DEFAULT_BLOCK_PREFIXES

    # Rendering of the "soft-return" atom (a line break inside a paragraph)
    soft_break: str = "  \n"

    # Rewrite image references into <figure> HTML after rendering
    use_figure: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.block_prefixes, Mapping):
            object.__setattr__(
                self, "block_prefixes", tuple(self.block_prefixes.items())
            )

    def block_prefix(self, tag_name: str) -> Optional[str]:
        return dict(self.block_prefixes).get(tag_name.lower())

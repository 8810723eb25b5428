"""
Post-processing: rewrite Markdown image references into <figure> HTML.

Operates on rendered Markdown text, so it also applies to image references
coming from raw HTML or Markdown cards. An image card's caption line
(``*caption*`` directly below the image) is folded into the figcaption.
"""

from __future__ import annotations

import html
import re
from typing import Optional

from tinyhtml import h, raw

from .options import RenderConfig

_IMAGE_RE = re.compile(r"!\[(.*?)\]\((.*?)\)(?:\n\*(.+?)\*(?=\n|$))?")


def render_figure(src: str, caption: Optional[str] = None) -> str:
    children = [raw(f'<img src="{html.escape(src)}">')]
    if caption:
        children.append(h("figcaption")(caption))
    return h("figure")(*children).render()


def rewrite_images(markdown: str, config: Optional[RenderConfig] = None) -> str:
    conf = config or RenderConfig()

    def _sub(m: "re.Match[str]") -> str:
        alt, src, caption = m.group(1), m.group(2), m.group(3)
        # The placeholder alt text is not a caption
        if caption is None and alt and alt != conf.image_alt:
            caption = alt
        return render_figure(src, caption)

    return _IMAGE_RE.sub(_sub, markdown)

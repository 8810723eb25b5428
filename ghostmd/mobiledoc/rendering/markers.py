"""
Inline marker rendering.

Mobiledoc flattens inline formatting into a marker stream: each marker lists
the markups opening before its text and how many of the most recently opened
markups close after it. The renderer keeps those open markups on a stack in
a RenderContext and emits Markdown delimiters as they open and close.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..models import Atom, Marker, MobiledocDocument
from .options import RenderConfig
from .renderer_iface import Rendered, RenderContext

LOGGER = logging.getLogger(__name__)

SOFT_RETURN_ATOM = "soft-return"

_OPENING = {
    "a": "[",
    "strong": "**",
    "em": "_",
    "code": "`",
}

# "a" closes with its link target, see _closing()
_CLOSING = {
    "strong": "**",
    "em": "_",
    "code": "`",
}


def _atom_text(atom: Atom, config: RenderConfig) -> str:
    if atom.name == SOFT_RETURN_ATOM:
        return config.soft_break
    return atom.text


def _closing(tag: str, ctx: RenderContext, text: str) -> str:
    if tag == "a":
        link = ctx.current_link
        ctx.current_link = None
        if link is None:
            LOGGER.warning("Link is null for text: %s", text)
            ctx.warn("marker", f"Link closed without a target after {text!r}")
            return "]()"
        return f"]({link})"
    return _CLOSING.get(tag, "")


def render_marker(
    marker: Marker,
    document: MobiledocDocument,
    ctx: RenderContext,
    config: Optional[RenderConfig] = None,
) -> str:
    """Render one marker, updating ``ctx`` with the markups it opens and closes.

    On failure the marker's own text is returned without delimiters.
    """
    conf = config or RenderConfig()
    original = "" if marker.is_atom else str(marker.value)
    try:
        if marker.error is not None:
            LOGGER.error("Error rendering marker: %s", marker.error)
            ctx.error("marker", marker.error)
            text = ""
        elif marker.is_atom:
            text = _atom_text(document.atom(marker.value), conf)  # type: ignore[arg-type]
        else:
            text = original
        original = text

        # Resolve everything before touching the stack
        markups = [document.markup(i) for i in marker.open_markups]

        # Prepend innermost first so the outermost delimiter ends up outermost
        for markup in reversed(markups):
            opening = _OPENING.get(markup.tag)
            if opening is None:
                LOGGER.info("Unknown markup type: %s", markup.tag)
                ctx.warn("markup", f"Unknown markup type: {markup.tag}")
                continue
            text = f"{opening}{text}"
            if markup.tag == "a":
                ctx.current_link = markup.href

        # Unknown tags are pushed too so close counts stay aligned
        ctx.stack.extend(markup.tag for markup in markups)

        if marker.close_count > 0:
            # Several spans closing together is well-formed: traced, no diagnostic
            if marker.close_count > 1:
                LOGGER.debug(
                    "Marker type: %s - closeCount: %d - openTypes: %s - text: %s",
                    marker.kind,
                    marker.close_count,
                    list(marker.open_markups),
                    text,
                )
            for _ in range(marker.close_count):
                if not ctx.stack:
                    LOGGER.warning(
                        "closeCount %d exceeds open markups for text: %s",
                        marker.close_count,
                        text,
                    )
                    ctx.warn(
                        "marker",
                        f"closeCount {marker.close_count} exceeds open markups",
                    )
                    break
                text += _closing(ctx.stack.pop(), ctx, text)

        return text
    except Exception as e:
        LOGGER.error("Error rendering marker: %s", e)
        ctx.error("marker", f"Error rendering marker: {e}")
        return original


def render_markers(
    markers: Iterable[Marker],
    document: MobiledocDocument,
    config: Optional[RenderConfig] = None,
    ctx: Optional[RenderContext] = None,
) -> Rendered:
    """Render a marker stream (one markup section or one list item).

    A fresh RenderContext is used unless one is supplied, so open markups
    never carry over from another block.
    """
    ctx = ctx if ctx is not None else RenderContext()
    text = "".join(render_marker(m, document, ctx, config) for m in markers)
    if ctx.stack:
        LOGGER.debug("Unterminated markups at end of block: %s", ctx.stack)
    return Rendered(text, tuple(ctx.diagnostics))

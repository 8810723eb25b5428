"""
Card rendering strategies for Mobiledoc documents.

A small, pure dispatcher that maps a card's name to a Markdown fragment.

Design:
  - Renderers: small classes implementing `render(payload, config)`; each
    validates its payload against the matching pydantic model
  - Dispatcher: exact name map, then a placeholder comment for anything else

Unknown cards are never an error: Ghost keeps adding card types, and a
placeholder in the output is better than a dropped section.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from ...exceptions import MobiledocError
from ..models import (
    Card,
    CodeCardPayload,
    EmbedCardPayload,
    HtmlCardPayload,
    ImageCardPayload,
    MobiledocDocument,
)
from .options import RenderConfig
from .renderer_iface import Diagnostic, Rendered, Severity

LOGGER = logging.getLogger(__name__)


def image_markdown(src: str, config: RenderConfig) -> str:
    return f"![{config.image_alt}]({src})"


class _Renderer:
    def render(
        self, payload: Mapping[str, Any], config: RenderConfig
    ) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class _ImageRenderer(_Renderer):
    def render(self, payload: Mapping[str, Any], config: RenderConfig) -> str:
        card = ImageCardPayload.model_validate(payload)
        out = image_markdown(card.src, config)
        # Captions go on their own line; alt text is not displayed downstream
        if card.caption:
            out += f"\n*{card.caption}*"
        return out


class _EmbedRenderer(_Renderer):
    def render(self, payload: Mapping[str, Any], config: RenderConfig) -> str:
        card = EmbedCardPayload.model_validate(payload)
        if card.type in config.passthrough_embed_types:
            return card.html or ""
        return f"[{config.embed_label}]({card.url or ''})"


class _HtmlRenderer(_Renderer):
    def render(self, payload: Mapping[str, Any], config: RenderConfig) -> str:
        return HtmlCardPayload.model_validate(payload).html


class _CodeRenderer(_Renderer):
    def render(self, payload: Mapping[str, Any], config: RenderConfig) -> str:
        card = CodeCardPayload.model_validate(payload)
        language = (card.language or "").lower()
        return f"```{language}\n{card.code}\n```"


# Singletons
_IMAGE = _ImageRenderer()
_EMBED = _EmbedRenderer()
_HTML = _HtmlRenderer()
_CODE = _CodeRenderer()

_BY_NAME: Dict[str, _Renderer] = {
    "image": _IMAGE,
    "embed": _EMBED,
    "html": _HTML,
    "code": _CODE,
}


def render_card(card: Card, config: Optional[RenderConfig] = None) -> str:
    """Render a resolved card. Raises ValidationError for a malformed payload."""
    conf = config or RenderConfig()
    r = _BY_NAME.get(card.name)
    if r is None:
        return f"<!-- Card: {card.name} -->"
    return r.render(card.payload, conf)


def render_card_section(
    document: MobiledocDocument,
    card_index: int,
    config: Optional[RenderConfig] = None,
) -> Rendered:
    """Resolve ``cards[card_index]`` and render it.

    A missing card or malformed payload fails this card only.
    """
    try:
        card = document.card(card_index)
        return Rendered(render_card(card, config))
    except (MobiledocError, ValidationError) as e:
        if isinstance(e, ValidationError):
            first = e.errors()[0]
            loc = ".".join(str(p) for p in first.get("loc", ()))
            message = f"Malformed card payload at index {card_index}: {loc}: {first.get('msg')}"
        else:
            message = str(e)
        LOGGER.error("Error rendering card section: %s", message)
        return Rendered.failed(Diagnostic(Severity.ERROR, "card", message))

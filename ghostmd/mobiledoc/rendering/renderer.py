"""
Pure renderer for Ghost Mobiledoc (0.3).

Converts a MobiledocDocument into Markdown. No I/O.

Each section renders independently; a section that fails contributes an empty
block and a diagnostic, and rendering carries on with the next one.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from ...exceptions import UnknownSectionError
from ..models import (
    AnySection,
    CardSection,
    ImageSection,
    InvalidSection,
    ListSection,
    MarkupSection,
    MobiledocDocument,
)
from .cards import image_markdown, render_card_section
from .markers import render_markers
from .options import RenderConfig
from .renderer_iface import Diagnostic, Rendered, RenderReport, Severity

LOGGER = logging.getLogger(__name__)

DocumentInput = Union[MobiledocDocument, Dict[str, Any], str, bytes]


def render_markup_section(
    section: MarkupSection, document: MobiledocDocument, config: RenderConfig
) -> Rendered:
    body = render_markers(section.markers, document, config)
    prefix = config.block_prefix(section.tag_name)
    if prefix is None:
        LOGGER.info("Unknown tag: %s", section.tag_name)
        unknown = Diagnostic(
            Severity.WARNING, "section", f"Unknown tag: {section.tag_name}"
        )
        return Rendered(body.text, body.diagnostics + (unknown,))
    return Rendered(f"{prefix}{body.text}", body.diagnostics)


def render_image_section(section: ImageSection, config: RenderConfig) -> Rendered:
    return Rendered(image_markdown(section.src, config))


def render_list_section(
    section: ListSection, document: MobiledocDocument, config: RenderConfig
) -> Rendered:
    tag = section.tag_name.lower()
    if tag not in ("ul", "ol"):
        LOGGER.warning("Unknown list type: %s", section.tag_name)
        return Rendered.failed(
            Diagnostic(
                Severity.WARNING, "list", f"Unknown list type: {section.tag_name}"
            )
        )

    lines: List[str] = []
    diagnostics: List[Diagnostic] = []
    # Numbering always starts at 1; Mobiledoc 0.3 carries no start attribute
    for number, item in enumerate(section.items, start=1):
        # render_markers starts every item with an empty stack
        rendered = render_markers(item, document, config)
        marker = f"{config.bullet} " if tag == "ul" else f"{number}. "
        lines.append(f"{marker}{rendered.text}")
        diagnostics.extend(rendered.diagnostics)
    return Rendered("\n".join(lines), tuple(diagnostics))


def render_section(
    section: AnySection, document: MobiledocDocument, config: RenderConfig
) -> Rendered:
    """Render one section. Raises for sections that cannot be rendered at all."""
    if isinstance(section, MarkupSection):
        return render_markup_section(section, document, config)
    if isinstance(section, ImageSection):
        return render_image_section(section, config)
    if isinstance(section, ListSection):
        return render_list_section(section, document, config)
    if isinstance(section, CardSection):
        return render_card_section(document, section.card_index, config)
    if isinstance(section, InvalidSection):
        raise UnknownSectionError(section.kind, section.reason)
    raise UnknownSectionError(getattr(section, "kind", None))


def render_document(
    document: DocumentInput, config: Optional[RenderConfig] = None
) -> RenderReport:
    """Render a whole document, collecting diagnostics. Never raises for content."""
    conf = config or RenderConfig()
    try:
        doc = MobiledocDocument.coerce(document)
    except (ValidationError, ValueError, TypeError) as e:
        # json.JSONDecodeError is a ValueError
        LOGGER.error("Error parsing mobiledoc: %s", e)
        return RenderReport(
            "",
            (Diagnostic(Severity.ERROR, "document", f"Error parsing mobiledoc: {e}"),),
        )

    blocks: List[str] = []
    diagnostics: List[Diagnostic] = []
    for index, section in enumerate(doc.sections):
        if conf.debug:
            LOGGER.info("Rendering section %d: %r", index, section)
        try:
            rendered = render_section(section, doc, conf)
        except Exception as e:
            LOGGER.error("Error rendering section: %s", e)
            rendered = Rendered.failed(Diagnostic(Severity.ERROR, "section", str(e)))
        blocks.append(rendered.text)
        diagnostics.extend(replace(d, section_index=index) for d in rendered.diagnostics)

    return RenderReport(conf.block_separator.join(blocks), tuple(diagnostics))


class MobiledocRenderer:
    """Class-based interface for document rendering."""

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    def render(self, document: DocumentInput) -> str:
        """Render the document body to a Markdown string."""
        return render_document(document, self.config).markdown

    def render_with_diagnostics(self, document: DocumentInput) -> RenderReport:
        return render_document(document, self.config)


def render(document: DocumentInput, config: Optional[RenderConfig] = None) -> str:
    return render_document(document, config).markdown


def render_with_diagnostics(
    document: DocumentInput, config: Optional[RenderConfig] = None
) -> RenderReport:
    return render_document(document, config)

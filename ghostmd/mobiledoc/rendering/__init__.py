"""Rendering support for Ghost Mobiledoc, transport-agnostic.

Contains:
- renderer_iface: Rendered/Diagnostic result values and the RenderContext
- markers: inline marker stream rendering (open-span stack)
- cards: card payload rendering by card name
- renderer: the section dispatcher (document → Markdown)
- figures: optional <figure> rewrite of rendered image references
"""

from .options import RenderConfig
from .renderer import (
    MobiledocRenderer,
    render,
    render_document,
    render_with_diagnostics,
)
from .renderer_iface import Diagnostic, Rendered, RenderContext, RenderReport, Severity

__all__ = [
    "Diagnostic",
    "MobiledocRenderer",
    "RenderConfig",
    "RenderContext",
    "RenderReport",
    "Rendered",
    "Severity",
    "render",
    "render_document",
    "render_with_diagnostics",
]

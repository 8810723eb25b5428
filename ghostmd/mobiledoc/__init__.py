"""Public API for Mobiledoc parsing and rendering."""

from .models import MobiledocDocument
from .rendering import (
    Diagnostic,
    MobiledocRenderer,
    RenderConfig,
    RenderReport,
    Severity,
    render,
    render_with_diagnostics,
)

__all__ = [
    "MobiledocDocument",
    "MobiledocRenderer",
    "RenderConfig",
    "RenderReport",
    "Diagnostic",
    "Severity",
    "render",
    "render_with_diagnostics",
]

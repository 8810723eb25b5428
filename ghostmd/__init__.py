"""Convert Ghost Mobiledoc posts to Markdown."""

from ghostmd.mobiledoc import MobiledocDocument, render, render_with_diagnostics

__version__ = "0.1.0"

__all__ = ["MobiledocDocument", "render", "render_with_diagnostics", "__version__"]

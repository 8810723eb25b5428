"""Command modules for the ghostmd CLI."""

from ghostmd.cli.commands import export, render

__all__ = ["export", "render"]

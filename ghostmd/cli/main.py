#!/usr/bin/env python
"""Command line interface for ghostmd."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from ghostmd.cli.commands import export, render

app = typer.Typer(help="Convert Ghost Mobiledoc posts to Markdown")

app.command("render")(render.main)
app.command("export")(export.main)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=True,
                log_time_format="%H:%M:%S",
            )
        ],
        force=True,
    )


@app.callback()
def callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
):
    """Convert Ghost Mobiledoc documents and posts to Markdown."""
    _configure_logging(verbose)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

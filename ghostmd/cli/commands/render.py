"""Render command: print the Markdown for one Mobiledoc document."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ghostmd.mobiledoc import RenderConfig, render_with_diagnostics
from ghostmd.mobiledoc.rendering.figures import rewrite_images

console = Console(stderr=True)


def main(
    file: Path = typer.Argument(
        ..., help="Mobiledoc JSON file, or a post JSON with a 'mobiledoc' field"
    ),
    use_figure: bool = typer.Option(
        False, "--use-figure", help="Render images with HTML figure tags"
    ),
    diagnostics: bool = typer.Option(
        False, "--diagnostics", help="List problems found while rendering"
    ),
):
    """Render a Mobiledoc document to Markdown on stdout."""
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if isinstance(data, dict) and "sections" not in data and "mobiledoc" in data:
        data = data["mobiledoc"]

    config = RenderConfig(use_figure=use_figure)
    report = render_with_diagnostics(data, config)
    markdown = report.markdown
    if use_figure:
        markdown = rewrite_images(markdown, config)
    typer.echo(markdown)

    if diagnostics and report.diagnostics:
        table = Table("Section", "Severity", "Unit", "Message")
        for d in report.diagnostics:
            section = "" if d.section_index is None else str(d.section_index)
            table.add_row(section, d.severity.value, d.unit, d.message)
        console.print(table)

"""Export command: write Ghost posts as Markdown files."""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ghostmd.exceptions import PostNotFound, PostSourceError
from ghostmd.ghost import export_post, export_posts, load_posts
from ghostmd.mobiledoc import RenderConfig

console = Console()


class PostType(str, Enum):
    published = "published"
    draft = "draft"
    all = "all"


def main(
    file: Path = typer.Argument(
        ..., help="Posts JSON (Admin API browse response, Ghost export or list)"
    ),
    slug: Optional[str] = typer.Option(
        None, "--slug", help="The slug of the post to convert"
    ),
    author_slug: Optional[str] = typer.Option(
        None, "--author-slug", help="Only convert posts by this author"
    ),
    post_type: PostType = typer.Option(
        PostType.published, "--post-type", help="The type of posts to convert"
    ),
    use_figure: bool = typer.Option(
        False, "--use-figure", help="Render images with HTML figure tags"
    ),
    batch_size: int = typer.Option(
        10, "--batch-size", min=1, help="Number of posts handled per batch"
    ),
    out_dir: Path = typer.Option(
        Path("__out__"), "--out-dir", help="Directory for the Markdown files"
    ),
):
    """Convert Ghost posts to Markdown files."""
    config = RenderConfig(use_figure=use_figure)
    try:
        source = load_posts(str(file))
    except PostSourceError as e:
        console.print(f"[bold red]Error:[/bold red] {str(e)}")
        raise typer.Exit(1)

    if slug:
        try:
            post = source.get(slug)
        except PostNotFound as e:
            console.print(f"[bold red]Error:[/bold red] {str(e)}")
            raise typer.Exit(1)
        path = export_post(post, str(out_dir), config)
        if path is None:
            console.print(f"[bold red]Error:[/bold red] Could not convert {slug}")
            raise typer.Exit(1)
        console.print(f"Saved [bold]{slug}[/bold] to {path}")
        return

    summary = export_posts(
        source,
        str(out_dir),
        config=config,
        batch_size=batch_size,
        status=post_type.value,
        author_slug=author_slug,
    )
    table = Table("Added", "Failed", "Output")
    table.add_row(str(summary.added), str(summary.failed), str(out_dir))
    console.print(table)

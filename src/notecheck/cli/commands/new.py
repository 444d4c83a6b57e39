"""Command for creating a new document."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console

from notecheck.cli.app import app, get_config
from notecheck.file_utils import FileWriteError
from notecheck.services import DocumentWriter

console = Console()


@app.command()
def new(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Title of the new document"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)."),
    draft: bool = typer.Option(True, "--draft/--no-draft", help="Mark the document as a draft."),
    directory: Optional[Path] = typer.Option(
        None, "--dir", help="Subdirectory of the content directory to write into."
    ),
) -> None:
    """Create a document with valid frontmatter."""
    config = get_config(ctx)
    writer = DocumentWriter(config.content_dir)
    target_dir = config.content_dir / directory if directory else None

    try:
        path = asyncio.run(writer.write(title, draft=draft, tags=tag or [], directory=target_dir))
    except FileWriteError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except ValueError as e:
        logger.error(f"Invalid document: {e}")
        typer.echo(f"Invalid document: {e}", err=True)
        raise typer.Exit(1)

    console.print(f"[green]✓ Created {path}[/green]")

"""Commands for browsing documents: list, tags and show."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from notecheck.cli.app import app, get_config
from notecheck.cli.commands.check import get_check_service
from notecheck.config import ProjectConfig
from notecheck.file_utils import FileError
from notecheck.markdown import DocumentMarkdown
from notecheck.services import CheckReport, CheckService

console = Console()


async def load_report(config: ProjectConfig) -> CheckReport:
    service = get_check_service(config)
    return await service.check_directory(config.content_dir)


def format_draft(document: DocumentMarkdown) -> str:
    if document.draft is None:
        return "[red]?[/red]"
    return "[yellow]draft[/yellow]" if document.draft else "[green]published[/green]"


def build_document_table(
    report: CheckReport, draft: Optional[bool] = None, tag: Optional[str] = None
) -> Table:
    """Table of documents filtered by draft state and tag."""
    table = Table(title="Documents")
    table.add_column("Title", style="bold")
    table.add_column("Status")
    table.add_column("Tags")
    table.add_column("Path", style="dim")

    for rel_path, document in sorted(report.documents.items()):
        if draft is not None and document.draft is not draft:
            continue
        if tag is not None and tag.lower() not in (t.lower() for t in document.tags):
            continue
        table.add_row(
            escape(document.title) if document.title else "[red](no title)[/red]",
            format_draft(document),
            escape(", ".join(document.tags)),
            rel_path,
        )
    return table


def build_tag_table(report: CheckReport) -> Table:
    table = Table(title="Tags")
    table.add_column("Tag", style="bold")
    table.add_column("Documents", justify="right")
    for tag, paths in CheckService.tag_index(report).items():
        table.add_row(escape(tag), str(len(paths)))
    return table


def build_document_panel(document: DocumentMarkdown) -> Panel:
    """Frontmatter, headings and code blocks of a single document."""
    tree = Tree(f"[bold]{escape(document.title or document.path.name)}[/bold]")

    meta = tree.add("Frontmatter")
    if document.frontmatter_error:
        meta.add(f"[red]{escape(document.frontmatter_error)}[/red]")
    elif not document.has_frontmatter:
        meta.add("[red]none[/red]")
    else:
        for key, value in document.metadata.items():
            meta.add(escape(f"{key}: {value!r}"))

    if document.headings:
        headings = tree.add("Headings")
        for heading in document.headings:
            label = f"{'#' * heading.level} {escape(heading.text)}"
            headings.add(f"{label} [dim](line {heading.line})[/dim]")

    if document.code_blocks:
        blocks = tree.add("Code blocks")
        for block in document.code_blocks:
            label = escape(block.language) if block.language else "[yellow]no language[/yellow]"
            if block.title:
                label += f" [cyan]{escape(block.title)}[/cyan]"
            if block.closed:
                span = f"lines {block.start_line}-{block.end_line}"
            else:
                span = f"line {block.start_line}, [red]never closed[/red]"
            blocks.add(f"{label} [dim]({span})[/dim]")

    return Panel(tree, title=str(document.path), expand=False)


def display_read_errors(report: CheckReport) -> None:
    """Print files that could not be read, then fail the command."""
    tree = Tree("[bold red]Unreadable documents[/bold red]")
    for rel_path, error in sorted(report.errors.items()):
        tree.add(Text.assemble((rel_path, "yellow"), ": ", (error, "red")))
    console.print(tree)
    raise typer.Exit(1)


@app.command("list")
def list_documents(
    ctx: typer.Context,
    drafts: Optional[bool] = typer.Option(
        None, "--drafts/--published", help="Only show drafts, or only published documents."
    ),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only show documents with tag."),
) -> None:
    """List documents with their title, draft status and tags."""
    config = get_config(ctx)
    try:
        report = asyncio.run(load_report(config))
    except Exception as e:
        logger.exception("Listing documents failed")
        typer.echo(f"Error listing documents: {e}", err=True)
        raise typer.Exit(1)
    console.print(build_document_table(report, draft=drafts, tag=tag))
    if report.errors:
        display_read_errors(report)


@app.command()
def tags(ctx: typer.Context) -> None:
    """Show every tag and how many documents use it."""
    config = get_config(ctx)
    try:
        report = asyncio.run(load_report(config))
    except Exception as e:
        logger.exception("Building tag index failed")
        typer.echo(f"Error building tag index: {e}", err=True)
        raise typer.Exit(1)

    if report.documents:
        console.print(build_tag_table(report))
    elif not report.errors:
        console.print("[yellow]No documents found[/yellow]")
    if report.errors:
        display_read_errors(report)


@app.command()
def show(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Document to show, relative to the content directory"),
) -> None:
    """Show the parsed structure of a single document."""
    config = get_config(ctx)
    service = get_check_service(config)
    try:
        document = asyncio.run(service.parse(path))
    except FileError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    console.print(build_document_panel(document))

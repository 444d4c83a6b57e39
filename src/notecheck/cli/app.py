"""Typer application and global options for the notecheck CLI."""

from pathlib import Path
from typing import Optional

import typer

from notecheck.config import ProjectConfig, get_project_config
from notecheck.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import notecheck

        typer.echo(f"notecheck version: {notecheck.__version__}")
        raise typer.Exit()


app = typer.Typer(name="notecheck", no_args_is_help=True)


@app.callback()
def app_callback(
    ctx: typer.Context,
    content_dir: Optional[Path] = typer.Option(
        None,
        "--content-dir",
        "-d",
        help="Directory holding the markdown documents",
        envvar="NOTECHECK_CONTENT_DIR",
        file_okay=False,
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Console log level (DEBUG, INFO, WARNING...)"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """notecheck - validate frontmatter and code fences in markdown documentation."""
    config = get_project_config(content_dir=content_dir, log_level=log_level)
    setup_logging(
        level=config.log_level,
        log_file=config.log_file if config.log_to_file else None,
    )
    ctx.obj = config


def get_config(ctx: typer.Context) -> ProjectConfig:
    """Config set up by the app callback, or loaded from the environment."""
    if isinstance(ctx.obj, ProjectConfig):
        return ctx.obj
    return get_project_config()

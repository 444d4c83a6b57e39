"""Check command for notecheck CLI."""

import asyncio
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.text import Text
from rich.tree import Tree

from notecheck.checks import RULE_DESCRIPTIONS, RULES, Issue, Severity
from notecheck.cli.app import app, get_config
from notecheck.config import ProjectConfig
from notecheck.markdown import DocumentParser
from notecheck.services import CheckReport, CheckService

console = Console()

SEVERITY_STYLES = {Severity.ERROR: "red", Severity.WARNING: "yellow"}


def get_check_service(config: ProjectConfig) -> CheckService:
    """Get check service instance."""
    return CheckService(DocumentParser(config.content_dir), config)


def display_path(path: Path, base: Path) -> str:
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


async def collect_paths(service: CheckService, paths: List[Path]) -> Dict[str, Path]:
    """Expand files and directories given on the command line."""
    base = service.config.content_dir
    if not paths:
        scan = await service.scan_directory(base)
        return scan.files

    collected: Dict[str, Path] = {}
    for path in paths:
        # relative arguments are taken from the working directory, like any other CLI
        path = path.resolve()
        if path.is_dir():
            scan = await service.scan_directory(path)
            for file_path in scan.files.values():
                collected[display_path(file_path, base)] = file_path
        else:
            # missing files are reported by the parser
            collected[display_path(path, base)] = path
    return collected


def group_issues_by_directory(report: CheckReport) -> Dict[str, List[Issue]]:
    """Group issues by directory."""
    grouped = defaultdict(list)
    for issue in report.all_issues:
        dir_name = issue.path.parent.as_posix()
        grouped["" if dir_name == "." else dir_name].append(issue)
    return dict(grouped)


def display_issues(report: CheckReport, verbose: bool = False):
    """Display issues in a rich tree, grouped by directory then file."""
    tree = Tree("[bold]Documents[/bold]")

    for dir_name, dir_issues in sorted(group_issues_by_directory(report).items()):
        if dir_name:
            branch = tree.add(
                f"[bold blue]{dir_name}/[/bold blue] ([yellow]{len(dir_issues)} issues[/yellow])"
            )
        else:
            branch = tree

        by_file = defaultdict(list)
        for issue in dir_issues:
            by_file[issue.path.name].append(issue)

        for file_name, file_issues in sorted(by_file.items()):
            file_branch = branch.add(f"[bold]{escape(file_name)}[/bold]")
            for issue in file_issues:
                style = SEVERITY_STYLES[issue.severity]
                location = f"line {issue.line}: " if issue.line else ""
                file_branch.add(
                    Text.assemble(
                        (f"{issue.severity.value} ", style),
                        (location, "dim"),
                        issue.message,
                        (f" [{issue.rule}]", "dim") if verbose else "",
                    )
                )

    for rel_path, error in sorted(report.errors.items()):
        tree.add(Text.assemble((rel_path, "yellow"), ": ", (error, "red")))

    console.print(Padding(tree, (1, 2)))


def display_summary(report: CheckReport, strict: bool = False):
    """Display a one-line summary of the check."""
    checked = len(report.documents)
    if report.ok(strict=strict) and report.warning_count == 0:
        console.print(f"[green]✓ {checked} documents checked, no issues[/green]")
        return

    parts = []
    if report.error_count:
        parts.append(f"[red]{report.error_count} errors[/red]")
    if report.warning_count:
        parts.append(f"[yellow]{report.warning_count} warnings[/yellow]")
    mark = "[green]✓[/green]" if report.ok(strict=strict) else "[red]✗[/red]"
    console.print(f"{mark} {checked} documents checked ({', '.join(parts)})")


async def run_check(
    config: ProjectConfig,
    paths: List[Path],
    strict: bool = False,
    verbose: bool = False,
    rules: Optional[List[str]] = None,
) -> CheckReport:
    """Run the check and display results."""
    service = get_check_service(config)
    targets = await collect_paths(service, paths)
    report = await service.check_paths(targets, rules=rules or None)

    if report.all_issues or report.errors:
        display_issues(report, verbose)
    display_summary(report, strict)
    return report


@app.command()
def check(
    ctx: typer.Context,
    paths: Optional[List[Path]] = typer.Argument(
        None, help="Files or directories to check (defaults to the content directory)"
    ),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors."),
    rule: Optional[List[str]] = typer.Option(
        None, "--rule", "-r", help="Only run the named rule (repeatable)."
    ),
    disable: Optional[List[str]] = typer.Option(
        None, "--disable", "-x", help="Skip the named rule (repeatable)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show rule names."),
) -> None:
    """Check frontmatter and code fences of markdown documents."""
    config = get_config(ctx)
    if disable:
        config = config.model_copy(update={"disabled_rules": [*config.disabled_rules, *disable]})

    unknown = sorted((set(rule or []) | set(config.disabled_rules)) - set(RULES))
    if unknown:
        typer.echo(f"Unknown rule(s): {', '.join(unknown)}", err=True)
        typer.echo(f"Available rules: {', '.join(RULES)}", err=True)
        raise typer.Exit(2)

    try:
        report = asyncio.run(run_check(config, paths or [], strict, verbose, rule))
    except Exception as e:
        logger.exception("Check failed")
        typer.echo(f"Error during check: {e}", err=True)
        raise typer.Exit(1)

    if not report.ok(strict=strict):
        raise typer.Exit(1)


@app.command()
def rules() -> None:
    """List available rules."""
    for name in RULES:
        console.print(f"[bold]{name}[/bold]  {RULE_DESCRIPTIONS.get(name, '')}")

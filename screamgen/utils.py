"""Shared utility functions for screamgen.

Rich-based console output for the CLI (success/warning/error lines, summary
tables, plan listings), logging setup, and duration formatting.  The
scaffolder library never prints; everything user-facing goes through here.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from screamgen.scaffolder.models import GenerationPlan, GenerationReport

console = Console()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(level: str = "INFO") -> None:
    """Route ``logging`` (and Python warnings) through a Rich handler."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    logging.captureWarnings(True)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_plan(plan: GenerationPlan, title: str = "Generation plan") -> None:
    """Print every planned step, in execution order."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Stage", style="dim", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Path")
    table.add_column("Producer", style="dim")

    for step in plan.steps:
        table.add_row(step.stage.value, step.kind, step.path, step.producer)

    console.print(table)
    for warning in plan.warnings:
        print_warning(warning)


def print_report(report: GenerationReport, title: str = "Summary") -> None:
    """Print a ``GenerationReport`` as a summary table plus its follow-ups."""
    print_summary_table(
        {
            "Project": report.project_name,
            "Location": report.project_root,
            "Directories": str(len(report.directories)),
            "Files": str(len(report.files)),
            "Warnings": str(len(report.warnings)),
            "Duration": format_duration(report.duration_seconds),
        },
        title=title,
    )
    for warning in report.warnings:
        print_warning(warning)
    for follow_up in report.follow_ups:
        console.print(f"[cyan]Next:[/cyan] {follow_up}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")

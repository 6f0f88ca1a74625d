"""Rich terminal reporter — run summary and failure panel."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from volv.errors import VolvError
from volv.metrics.models import RunResult


def render(result: RunResult, *, console: Optional[Console] = None) -> None:
    """Print the summary of a successful run."""
    console = console or Console(stderr=True)

    table = Table(
        title=f"volv — {result.repo_name} ({result.branch})",
        show_header=False,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Commits", str(result.total_commits))
    if result.commits:
        table.add_row("First", result.commits[0].hash)
        table.add_row("Last", result.commits[-1].hash)
    table.add_row("Distinct paths", str(result.total_paths))
    table.add_row("File entries", str(result.total_entries))
    table.add_row("Reports", str(result.reports_dir))
    if result.aggregate_path is not None:
        table.add_row("Aggregate", str(result.aggregate_path))
    table.add_row("Duration", f"{result.duration_ms:.0f}ms")

    console.print()
    console.print(table)
    console.print()
    console.print(
        f"[bold green]✅ Analyzed {result.total_commits} commits.[/bold green]"
    )


def render_error(exc: VolvError, *, console: Optional[Console] = None) -> None:
    """Print which stage (and commit) ended the run."""
    console = console or Console(stderr=True)
    where = f" at commit [cyan]{exc.commit}[/cyan]" if exc.commit else ""
    console.print(
        f"[bold red]❌ Run failed during {exc.stage}[/bold red]{where}: {escape(str(exc))}"
    )

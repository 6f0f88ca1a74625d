"""volv CLI — Typer application with run and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from volv import __version__

app = typer.Typer(
    name="volv",
    help="Record the size of every file at every commit of a git repository.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _setup_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=debug, markup=False)],
        force=True,
    )


# ── run ───────────────────────────────────────────────────────────────────────


@app.command()
def run(
    repository: str = typer.Argument(..., help="Repository URL or path to clone"),
    branch: Optional[str] = typer.Argument(None, help="Branch to traverse (default: git.default_branch)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .volv.toml"),
    format: str = typer.Option("terminal", "--format", "-f", help="Summary format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Also write the aggregate to this file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with git commands"),
) -> None:
    """Clone REPOSITORY and record file sizes for every commit on BRANCH."""
    from volv.config.loader import ConfigError, load_config
    from volv.errors import VolvError
    from volv.output import json_report, terminal
    from volv.scanner.engine import run as run_history

    _setup_logging(verbose, debug)

    if format not in ("terminal", "json"):
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)

    # --- Load config ---
    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if verbose or debug:
        console.print(f"[dim]Home: {cfg.paths.home_dir}[/dim]")
        console.print(f"[dim]Branch: {branch or cfg.git.default_branch}[/dim]")

    # --- Traverse ---
    try:
        if format == "terminal" and not debug:
            progress = Progress(
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=console,
                transient=True,
            )
            with progress:
                task = progress.add_task("Cloning", total=None)

                def _advance(report, total: int) -> None:
                    progress.update(
                        task,
                        total=total,
                        advance=1,
                        description=f"Commit {report.commit.short}",
                    )

                result = run_history(repository, branch, cfg, on_report=_advance)
        else:
            result = run_history(repository, branch, cfg)
    except VolvError as exc:
        terminal.render_error(exc, console=console)
        raise typer.Exit(code=1) from exc

    # --- Output ---
    if format == "terminal":
        terminal.render(result, console=console)
    else:
        print(json_report.render(result))

    if output:
        try:
            Path(output).write_text(
                json_report.render_aggregate(result.aggregate, indent=cfg.report.indent),
                encoding="utf-8",
            )
        except OSError as exc:
            console.print(f"[bold red]Could not write {output}:[/bold red] {exc}")
            raise typer.Exit(code=1) from exc
        if verbose:
            console.print(f"[dim]Aggregate written to {output}[/dim]")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing .volv.toml"),
) -> None:
    """Generate a starter .volv.toml in the current directory."""
    from volv.config.defaults import DEFAULT_TOML
    from volv.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not force:
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"volv {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """volv — file size history for every commit of a git repository."""

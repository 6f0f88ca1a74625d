"""History run — orchestrates the full pipeline.

Commits are reported strictly one after another against a single
workspace. Any error ends the run; the workspace is removed on the way
out and artifacts already written stay on disk.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from volv.config.bootstrap import bootstrap, project_reports_dir
from volv.config.schema import VolvConfig
from volv.errors import PersistError, SetupError
from volv.git.adapter import check_git_installed
from volv.git.history import list_commits
from volv.git.workspace import Workspace
from volv.metrics.aggregator import aggregate
from volv.metrics.models import CommitReport, RunResult
from volv.output.json_report import render_aggregate
from volv.scanner.reporter import CommitReporter

logger = logging.getLogger(__name__)

AGGREGATE_FILENAME = "aggregate.json"

ReportCallback = Callable[[CommitReport, int], None]


def repo_name_from(location: str) -> str:
    """Derive a directory-safe project name from a repository URL or path."""
    tail = location.replace("\\", "/").rstrip("/").split("/")[-1]
    tail = tail.rsplit(":", 1)[-1]  # scp-style git@host:repo.git
    if tail.endswith(".git"):
        tail = tail[: -len(".git")]
    if not tail:
        raise SetupError(f"cannot derive a repository name from {location!r}")
    return tail


def run(
    repository: str,
    branch: Optional[str] = None,
    config: Optional[VolvConfig] = None,
    *,
    on_report: Optional[ReportCallback] = None,
) -> RunResult:
    """Report every commit of *branch* in *repository* and aggregate the sizes."""
    cfg = config or VolvConfig()
    branch = branch or cfg.git.default_branch
    start = time.perf_counter()

    # --- Environment ---
    check_git_installed()
    bootstrap(cfg)
    repo_name = repo_name_from(repository)
    reports_dir = project_reports_dir(cfg, repo_name)

    # --- Traverse ---
    reports: List[CommitReport] = []
    with Workspace.cloned(repository, cfg.paths.tmp_dir, timeout=cfg.git.timeout) as workspace:
        commits = list_commits(workspace, branch)
        reporter = CommitReporter(workspace, reports_dir, cfg)
        for commit in commits:
            report = reporter.report_one(commit)
            reports.append(report)
            if on_report is not None:
                on_report(report, len(commits))

    # --- Aggregate ---
    merged = aggregate(reports)
    aggregate_path = None
    if cfg.report.write_aggregate:
        aggregate_path = reports_dir / AGGREGATE_FILENAME
        try:
            aggregate_path.write_text(
                render_aggregate(merged, indent=cfg.report.indent), encoding="utf-8"
            )
        except OSError as exc:
            raise PersistError(f"could not write {aggregate_path}: {exc.strerror or exc}") from exc

    elapsed = (time.perf_counter() - start) * 1000
    logger.info("aggregated %d paths across %d commits", len(merged), len(commits))

    return RunResult(
        repo_name=repo_name,
        branch=branch,
        reports_dir=reports_dir,
        commits=commits,
        reports=reports,
        aggregate=merged,
        aggregate_path=aggregate_path,
        duration_ms=round(elapsed, 2),
    )

"""One commit's lifecycle: checkout, scan, persist, return."""

from __future__ import annotations

import logging
from pathlib import Path

from volv.config.schema import VolvConfig
from volv.errors import PersistError, ScanError
from volv.git.models import CommitRef
from volv.git.workspace import Workspace
from volv.metrics.models import CommitReport
from volv.output.json_report import EXTENSIONS, render_commit
from volv.scanner.tree import scan_tree

logger = logging.getLogger(__name__)


class CommitReporter:
    """Reports commits one at a time against a single workspace.

    The workspace is owned here for the duration of the traversal;
    :meth:`report_one` returns only once the tree is no longer needed, so
    the next call may check out the next commit.
    """

    def __init__(self, workspace: Workspace, reports_dir: Path, config: VolvConfig) -> None:
        self.workspace = workspace
        self.reports_dir = reports_dir
        self.config = config

    def artifact_path(self, commit: CommitRef) -> Path:
        """Path of the per-commit artifact, named by (possibly truncated) hash."""
        length = self.config.report.hash_length
        name = commit.hash[:length] if length else commit.hash
        ext = EXTENSIONS[self.config.report.format]
        return self.reports_dir / f"{name}.{ext}"

    def report_one(self, commit: CommitRef) -> CommitReport:
        """Check out *commit*, scan it, persist the artifact and return the report."""
        self.workspace.set_to(commit.hash)

        scan_cfg = self.config.scan
        try:
            entries = scan_tree(
                self.workspace.root,
                scan_cfg.exclude,
                max_workers=scan_cfg.max_workers,
                follow_symlinks=scan_cfg.follow_symlinks,
            )
        except ScanError as exc:
            exc.commit = commit.hash
            raise

        report = CommitReport(commit=commit, files=tuple(entries))
        self.persist(report)
        logger.info(
            "commit %d %s: %d files, %d bytes",
            commit.position + 1,
            commit.short,
            len(report.files),
            report.total_bytes,
        )
        return report

    def persist(self, report: CommitReport) -> Path:
        """Write *report* to its artifact. Raises PersistError."""
        path = self.artifact_path(report.commit)
        text = render_commit(
            report,
            fmt=self.config.report.format,
            indent=self.config.report.indent,
        )
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise PersistError(
                f"could not write {path}: {exc.strerror or exc}",
                commit=report.commit.hash,
            ) from exc
        return path

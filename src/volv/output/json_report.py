"""Serializers for per-commit artifacts, the aggregate and the run summary."""

from __future__ import annotations

import json
from typing import Any, Dict, List

import yaml

from volv.metrics.models import Aggregate, CommitReport, RunResult

EXTENSIONS = {"json": "json", "yaml": "yaml"}


def commit_to_list(report: CommitReport) -> List[Dict[str, Any]]:
    """Ordered ``{"path", "size"}`` records for one commit's artifact."""
    return [{"path": f.relative_path, "size": f.size_bytes} for f in report.files]


def render_commit(report: CommitReport, *, fmt: str = "json", indent: int = 2) -> str:
    """Return the artifact text for *report* in *fmt* (json | yaml)."""
    records = commit_to_list(report)
    if fmt == "yaml":
        return yaml.safe_dump(records, sort_keys=False, default_flow_style=False)
    return json.dumps(records, indent=indent) + "\n"


def aggregate_to_dict(aggregate: Aggregate) -> Dict[str, Any]:
    """Convert the aggregate to its persisted shape (relative paths only)."""
    return {
        path: {"path": entry.relative_path, "sizes": dict(entry.sizes_by_commit)}
        for path, entry in aggregate.items()
    }


def render_aggregate(aggregate: Aggregate, *, indent: int = 2) -> str:
    return json.dumps(aggregate_to_dict(aggregate), indent=indent) + "\n"


def to_dict(result: RunResult) -> Dict[str, Any]:
    """Convert a RunResult to a JSON-serialisable summary."""
    return {
        "version": "1.0",
        "repository": result.repo_name,
        "branch": result.branch,
        "commits": [c.hash for c in result.commits],
        "total_commits": result.total_commits,
        "total_paths": result.total_paths,
        "total_entries": result.total_entries,
        "reports_dir": str(result.reports_dir),
        **({"aggregate": str(result.aggregate_path)} if result.aggregate_path else {}),
        "duration_ms": result.duration_ms,
    }


def render(result: RunResult) -> str:
    """Return the formatted JSON run summary."""
    return json.dumps(to_dict(result), indent=2)

"""File size models — per-commit reports and the cross-commit aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from volv.git.models import CommitRef


@dataclass(frozen=True, slots=True)
class FileEntry:
    """One file of one commit's working tree."""

    relative_path: str  # POSIX separators, join key across commits
    absolute_path: str
    size_bytes: int


@dataclass(frozen=True)
class CommitReport:
    """Every file present in the working tree when *commit* was scanned."""

    commit: CommitRef
    files: Tuple[FileEntry, ...] = ()

    @property
    def total_bytes(self) -> int:
        return sum(f.size_bytes for f in self.files)


@dataclass
class AggregateEntry:
    """Size history of one path. A missing hash means the file was absent."""

    relative_path: str
    absolute_path: str
    sizes_by_commit: Dict[str, int] = field(default_factory=dict)


Aggregate = Dict[str, AggregateEntry]


@dataclass
class RunResult:
    """Complete result of a history run."""

    repo_name: str
    branch: str
    reports_dir: Path
    commits: List[CommitRef] = field(default_factory=list)
    reports: List[CommitReport] = field(default_factory=list)
    aggregate: Aggregate = field(default_factory=dict)
    aggregate_path: Optional[Path] = None
    duration_ms: float = 0.0

    @property
    def total_commits(self) -> int:
        return len(self.commits)

    @property
    def total_paths(self) -> int:
        return len(self.aggregate)

    @property
    def total_entries(self) -> int:
        return sum(len(r.files) for r in self.reports)

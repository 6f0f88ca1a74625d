"""Fold per-commit reports into one size history per path."""

from __future__ import annotations

from typing import Iterable

from volv.metrics.models import Aggregate, AggregateEntry, CommitReport


def aggregate(reports: Iterable[CommitReport]) -> Aggregate:
    """Build the path -> size-by-commit mapping in a single forward pass.

    Paths keep first-seen order and each path's hashes keep traversal
    order. A (path, commit) pair may only be written once; seeing it twice
    means a commit was reported twice.
    """
    merged: Aggregate = {}

    for report in reports:
        commit_hash = report.commit.hash
        for entry in report.files:
            existing = merged.get(entry.relative_path)
            if existing is None:
                existing = AggregateEntry(
                    relative_path=entry.relative_path,
                    absolute_path=entry.absolute_path,
                )
                merged[entry.relative_path] = existing
            if commit_hash in existing.sizes_by_commit:
                raise ValueError(
                    f"{entry.relative_path} recorded twice for commit {commit_hash}"
                )
            existing.sizes_by_commit[commit_hash] = entry.size_bytes

    return merged

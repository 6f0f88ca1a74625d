"""Enumerate the commits of a branch in traversal order."""

from __future__ import annotations

import logging
from typing import List

from volv.errors import EmptyHistoryError, HistoryError
from volv.git.adapter import GitError, has_commits, rev_list
from volv.git.models import CommitRef
from volv.git.workspace import Workspace

logger = logging.getLogger(__name__)


def list_commits(workspace: Workspace, branch: str) -> List[CommitRef]:
    """Return commits reachable from *branch*, oldest first, without duplicates.

    The branch is checked out first so that a remote-only branch gets a
    local counterpart; an unknown branch raises CheckoutError. A repository
    without a single commit raises EmptyHistoryError before any checkout.
    """
    try:
        populated = has_commits(workspace.root, timeout=workspace.timeout)
    except GitError as exc:
        raise HistoryError(f"could not list refs: {exc.stderr or exc}") from exc
    if not populated:
        raise EmptyHistoryError("the repository has no commits")

    workspace.set_to(branch)
    try:
        hashes = rev_list(workspace.root, branch, timeout=workspace.timeout)
    except GitError as exc:
        raise HistoryError(f"could not list commits of {branch!r}: {exc.stderr or exc}") from exc

    seen: set[str] = set()
    commits: List[CommitRef] = []
    for h in hashes:
        if h in seen:
            continue
        seen.add(h)
        commits.append(CommitRef(hash=h, position=len(commits)))

    if not commits:
        raise EmptyHistoryError(f"no commits found on branch {branch!r}")
    logger.info("found %d commits to analyze on %s", len(commits), branch)
    return commits

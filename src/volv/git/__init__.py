"""Git interface layer — adapter, workspace, history, models."""

from volv.git.adapter import (
    GitError,
    check_git_installed,
    checkout,
    clean,
    clone,
    has_commits,
    rev_list,
)
from volv.git.history import list_commits
from volv.git.models import CommitRef
from volv.git.workspace import Workspace

__all__ = [
    "CommitRef",
    "GitError",
    "Workspace",
    "check_git_installed",
    "checkout",
    "clean",
    "clone",
    "has_commits",
    "list_commits",
    "rev_list",
]

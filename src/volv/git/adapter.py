"""Git subprocess wrapper — clone, checkout, clean, rev-list."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from volv.errors import SetupError

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when a git command cannot run or exits non-zero."""

    def __init__(self, args: List[str], returncode: Optional[int], stderr: str) -> None:
        self.command = "git " + " ".join(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or f"exit status {returncode}"
        super().__init__(f"{self.command}: {detail}")


def check_git_installed() -> str:
    """Return the path of the git binary. Raises SetupError when missing."""
    path = shutil.which("git")
    if path is None:
        raise SetupError("This program requires `git` to be installed and on PATH.")
    return path


def _run_git(args: List[str], cwd: Optional[Path] = None, timeout: int = 600) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError(args, None, "git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(args, None, f"timed out after {timeout}s")

    if result.returncode != 0:
        raise GitError(args, result.returncode, result.stderr.strip())
    return result.stdout


def clone(remote: str, dest: Path, timeout: int = 600) -> None:
    """Clone *remote* into *dest* (which must be empty or absent)."""
    _run_git(["clone", "--quiet", remote, str(dest)], timeout=timeout)


def checkout(repo_root: Path, ref: str, timeout: int = 600) -> None:
    """Force the working tree and HEAD to *ref*."""
    _run_git(["checkout", "--force", "--quiet", ref], cwd=repo_root, timeout=timeout)


def clean(repo_root: Path, timeout: int = 600) -> None:
    """Remove every untracked and ignored file from the working tree."""
    _run_git(["clean", "-ffdxq"], cwd=repo_root, timeout=timeout)


def has_commits(repo_root: Path, timeout: int = 600) -> bool:
    """Return True when any ref in the repository points at a commit."""
    output = _run_git(
        ["for-each-ref", "--count=1", "--format=%(objectname)"],
        cwd=repo_root,
        timeout=timeout,
    )
    return bool(output.strip())


def rev_list(repo_root: Path, ref: str, timeout: int = 600) -> List[str]:
    """Return commit hashes reachable from *ref*, oldest first."""
    output = _run_git(
        ["rev-list", "--reverse", "--topo-order", ref, "--"],
        cwd=repo_root,
        timeout=timeout,
    )
    return [line.strip() for line in output.splitlines() if line.strip()]

"""Scanner — working tree scan, commit reporter, history engine."""

from volv.scanner.engine import repo_name_from, run
from volv.scanner.reporter import CommitReporter
from volv.scanner.tree import list_files, scan_tree

__all__ = [
    "CommitReporter",
    "list_files",
    "repo_name_from",
    "run",
    "scan_tree",
]

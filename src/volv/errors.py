"""Error taxonomy for a history run.

Every error is fatal to the run. Each one names the pipeline stage that
failed and, where it applies, the commit being processed.
"""

from __future__ import annotations

from typing import Optional


class VolvError(Exception):
    """Base class for all run failures."""

    stage = "run"

    def __init__(self, message: str, *, commit: Optional[str] = None) -> None:
        super().__init__(message)
        self.commit = commit


class SetupError(VolvError):
    """The environment is missing something the run needs (git, directories, clone)."""

    stage = "setup"


class CheckoutError(VolvError):
    """A ref could not be materialized in the workspace."""

    stage = "checkout"

    def __init__(self, ref: str, output: str = "") -> None:
        message = f"could not check out {ref!r}"
        if output:
            message = f"{message}: {output}"
        super().__init__(message, commit=ref)
        self.ref = ref
        self.output = output


class HistoryError(VolvError):
    """The commit list could not be produced."""

    stage = "history"


class EmptyHistoryError(HistoryError):
    """The branch has no commits to analyze."""


class ScanError(VolvError):
    """A directory in the working tree could not be read."""

    stage = "scan"
    action = "read"

    def __init__(self, path: str, reason: str = "", *, commit: Optional[str] = None) -> None:
        message = f"could not {self.action} {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, commit=commit)
        self.path = path


class StatError(ScanError):
    """A file disappeared or became unreadable mid-scan."""

    action = "stat"


class PersistError(VolvError):
    """A report artifact could not be written."""

    stage = "persist"

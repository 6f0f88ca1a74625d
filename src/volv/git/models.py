"""Data models for the git layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommitRef:
    """A commit hash and its index in traversal order (0 = oldest)."""

    hash: str
    position: int

    @property
    def short(self) -> str:
        return self.hash[:8]

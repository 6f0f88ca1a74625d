"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional

ReportFormat = Literal["json", "yaml"]

REPORT_FORMATS: tuple[str, ...] = ("json", "yaml")


@dataclass
class PathsConfig:
    home: Optional[str] = None  # default: ~/.volv

    @property
    def home_dir(self) -> Path:
        if self.home:
            return Path(self.home).expanduser()
        return Path.home() / ".volv"

    @property
    def cache_dir(self) -> Path:
        return self.home_dir / "cache"

    @property
    def reports_dir(self) -> Path:
        return self.home_dir / "reports"

    @property
    def tmp_dir(self) -> Path:
        return self.home_dir / "tmp"


@dataclass
class GitConfig:
    default_branch: str = "master"
    timeout: int = 600  # seconds, per git command


@dataclass
class ScanConfig:
    exclude: List[str] = field(default_factory=lambda: [".git"])
    max_workers: int = 8
    follow_symlinks: bool = False


@dataclass
class ReportConfig:
    format: ReportFormat = "json"
    indent: int = 2
    hash_length: Optional[int] = None  # None = full commit hash
    write_aggregate: bool = True


@dataclass
class VolvConfig:
    version: str = "1.0"
    paths: PathsConfig = field(default_factory=PathsConfig)
    git: GitConfig = field(default_factory=GitConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

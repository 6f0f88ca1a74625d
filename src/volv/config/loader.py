"""Load and merge configuration from .volv.toml and VOLV_* env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from volv.config.schema import (
    REPORT_FORMATS,
    GitConfig,
    PathsConfig,
    ReportConfig,
    ScanConfig,
    VolvConfig,
)

CONFIG_FILENAME = ".volv.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(search_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = search_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: VolvConfig) -> None:
    """Apply VOLV_* environment variable overrides."""
    if val := os.environ.get("VOLV_HOME"):
        cfg.paths.home = val
    if val := os.environ.get("VOLV_DEFAULT_BRANCH"):
        cfg.git.default_branch = val
    if val := os.environ.get("VOLV_MAX_WORKERS"):
        try:
            cfg.scan.max_workers = int(val)
        except ValueError:
            pass
    if (val := os.environ.get("VOLV_EXCLUDE")) and isinstance(cfg.scan.exclude, list):
        sep = ":" if os.name != "nt" else ";"
        cfg.scan.exclude.extend(p.strip() for p in val.split(sep) if p.strip())
    if val := os.environ.get("VOLV_REPORT_FORMAT"):
        if val in REPORT_FORMATS:
            cfg.report.format = val  # type: ignore[assignment]


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate(cfg: VolvConfig) -> None:
    if not isinstance(cfg.scan.exclude, list) or not all(
        isinstance(name, str) for name in cfg.scan.exclude
    ):
        raise ConfigError("scan.exclude must be a list of names")
    if not _is_int(cfg.scan.max_workers):
        raise ConfigError(f"scan.max_workers must be an integer, got {cfg.scan.max_workers!r}")
    if cfg.report.hash_length is not None and not _is_int(cfg.report.hash_length):
        raise ConfigError(f"report.hash_length must be an integer, got {cfg.report.hash_length!r}")
    if not _is_int(cfg.report.indent):
        raise ConfigError(f"report.indent must be an integer, got {cfg.report.indent!r}")
    if not _is_int(cfg.git.timeout) or cfg.git.timeout < 1:
        raise ConfigError("git.timeout must be a positive integer")
    if not isinstance(cfg.git.default_branch, str):
        raise ConfigError("git.default_branch must be a string")
    if cfg.report.format not in REPORT_FORMATS:
        raise ConfigError(
            f"report.format must be one of {', '.join(REPORT_FORMATS)}, got {cfg.report.format!r}"
        )
    if cfg.scan.max_workers < 1:
        raise ConfigError("scan.max_workers must be at least 1")
    if cfg.report.hash_length is not None and cfg.report.hash_length < 4:
        raise ConfigError("report.hash_length must be at least 4")
    if not cfg.git.default_branch:
        raise ConfigError("git.default_branch must not be empty")


def load_config(
    search_dir: Optional[Path] = None,
    config_override: Optional[str] = None,
) -> VolvConfig:
    """Load, validate, and return a VolvConfig."""
    config_path = find_config_file(search_dir or Path.cwd(), config_override)

    if config_path is None:
        cfg = VolvConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = VolvConfig(
            version=raw.get("version", "1.0"),
            paths=_build_section(raw, PathsConfig, "paths"),
            git=_build_section(raw, GitConfig, "git"),
            scan=_build_section(raw, ScanConfig, "scan"),
            report=_build_section(raw, ReportConfig, "report"),
        )

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg

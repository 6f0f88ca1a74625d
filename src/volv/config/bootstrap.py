"""Create the volv home directory layout."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from volv.config.schema import VolvConfig
from volv.errors import SetupError

logger = logging.getLogger(__name__)


def bootstrap(config: VolvConfig) -> List[Path]:
    """Ensure home, cache, reports and tmp directories exist. Returns them."""
    paths = config.paths
    created: List[Path] = []
    for directory in (paths.home_dir, paths.cache_dir, paths.reports_dir, paths.tmp_dir):
        if directory.is_dir():
            created.append(directory)
            continue
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SetupError(
                f"could not create directory {directory}: {exc.strerror or exc}. "
                "Check user permissions."
            ) from exc
        logger.debug("created %s", directory)
        created.append(directory)
    return created


def project_reports_dir(config: VolvConfig, repo_name: str) -> Path:
    """Return (and create) the report directory for one repository."""
    directory = config.paths.reports_dir / repo_name
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SetupError(
            f"could not create the reports directory {directory}: {exc.strerror or exc}"
        ) from exc
    return directory

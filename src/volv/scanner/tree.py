"""Working tree scanner — every file under a root with its size in bytes."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path, PurePath
from typing import Iterable, List

from volv.errors import ScanError, StatError
from volv.metrics.models import FileEntry

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE = (".git",)


def _raise_scan_error(exc: OSError) -> None:
    raise ScanError(str(exc.filename or ""), exc.strerror or str(exc)) from exc


def _stat_size(path: str, *, follow_symlinks: bool) -> int:
    try:
        return os.stat(path, follow_symlinks=follow_symlinks).st_size
    except OSError as exc:
        raise StatError(path, exc.strerror or str(exc)) from exc


def list_files(root: Path, exclude: Iterable[str] = DEFAULT_EXCLUDE) -> List[str]:
    """Return absolute paths of all files under *root*, skipping excluded names.

    Version-control metadata in DEFAULT_EXCLUDE is always skipped. Directory
    symlinks are never descended into; they are listed as files.
    """
    excluded = set(DEFAULT_EXCLUDE).union(exclude)
    paths: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_scan_error):
        kept: List[str] = []
        for name in dirnames:
            if name in excluded:
                continue
            full = os.path.join(dirpath, name)
            if os.path.islink(full):
                paths.append(full)
            else:
                kept.append(name)
        dirnames[:] = kept
        paths.extend(os.path.join(dirpath, name) for name in filenames if name not in excluded)
    return paths


def scan_tree(
    root: Path,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
    *,
    max_workers: int = 8,
    follow_symlinks: bool = False,
) -> List[FileEntry]:
    """Scan *root* and return one FileEntry per file, sorted by relative path.

    Sizes are stat'ed on a pool of *max_workers* threads. The first file
    that cannot be stat'ed raises StatError and no list is returned.
    """
    root = Path(root)
    by_relative = {
        PurePath(p).relative_to(root).as_posix(): p for p in list_files(root, exclude)
    }
    relative_paths = sorted(by_relative)
    absolute_paths = [by_relative[rel] for rel in relative_paths]

    if not absolute_paths:
        return []

    stat = partial(_stat_size, follow_symlinks=follow_symlinks)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        sizes = list(pool.map(stat, absolute_paths))

    logger.debug("scanned %d files under %s", len(sizes), root)
    return [
        FileEntry(relative_path=rel, absolute_path=abs_path, size_bytes=size)
        for rel, abs_path, size in zip(relative_paths, absolute_paths, sizes)
    ]

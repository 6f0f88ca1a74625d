"""The single working tree a history run checks commits out into.

A :class:`Workspace` is the only thing allowed to change the files under
its root. Callers get one from :meth:`Workspace.cloned`, which removes the
directory again however the ``with`` block ends::

    with Workspace.cloned(url, tmp_dir) as ws:
        ws.set_to("master")
        ...
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from volv.errors import CheckoutError, SetupError
from volv.git.adapter import GitError, checkout, clean, clone

logger = logging.getLogger(__name__)


class Workspace:
    """A cloned repository whose working tree is moved from ref to ref."""

    def __init__(self, root: Path, *, timeout: int = 600) -> None:
        self.root = root
        self.timeout = timeout
        self.current: Optional[str] = None

    @classmethod
    @contextmanager
    def cloned(cls, remote: str, parent_dir: Path, *, timeout: int = 600) -> Iterator["Workspace"]:
        """Clone *remote* into a fresh directory under *parent_dir*."""
        root = Path(tempfile.mkdtemp(prefix="volv-", dir=parent_dir))
        workspace = cls(root, timeout=timeout)
        try:
            logger.info("cloning %s into %s", remote, root)
            try:
                clone(remote, root, timeout=timeout)
            except GitError as exc:
                raise SetupError(
                    f"could not clone {remote}: {exc.stderr or exc}. Check that the "
                    "location is correct, that your git credentials are valid and that "
                    "your user may clone the repository over this protocol."
                ) from exc
            yield workspace
        finally:
            workspace.discard()

    def set_to(self, ref: str) -> None:
        """Make the working tree match *ref* exactly. Raises CheckoutError."""
        try:
            checkout(self.root, ref, timeout=self.timeout)
            clean(self.root, timeout=self.timeout)
        except GitError as exc:
            self.current = None
            raise CheckoutError(ref, exc.stderr) from exc
        self.current = ref
        logger.debug("workspace at %s", ref)

    def discard(self) -> None:
        """Delete the working tree. Logs, rather than raises, on failure."""
        self.current = None
        if not self.root.exists():
            return
        try:
            shutil.rmtree(self.root)
        except OSError as exc:
            logger.warning(
                "could not remove workspace %s (%s); remove it manually",
                self.root,
                exc,
            )
            return
        logger.debug("removed workspace %s", self.root)

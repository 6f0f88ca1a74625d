"""Shared test fixtures — temp git repositories with a known history."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List

import pytest

from volv.config.schema import VolvConfig


def git(*args: str, cwd: Path) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True,
    )
    return result.stdout


def init_repo(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    git("init", cwd=path)
    git("config", "user.email", "test@test.com", cwd=path)
    git("config", "user.name", "Test", cwd=path)
    git("config", "commit.gpgsign", "false", cwd=path)
    return path


def commit_all(repo: Path, message: str, *, allow_empty: bool = False) -> str:
    git("add", "-A", cwd=repo)
    args = ["commit", "-m", message]
    if allow_empty:
        args.append("--allow-empty")
    git(*args, cwd=repo)
    return git("rev-parse", "HEAD", cwd=repo).strip()


@dataclass
class SampleRepo:
    path: Path
    hashes: List[str]  # oldest first


@pytest.fixture
def history_repo(tmp_path: Path) -> SampleRepo:
    """Three commits on master.

    A: f.txt (10 bytes)
    B: adds g.txt (5 bytes)
    C: deletes f.txt, g.txt grows to 7 bytes
    """
    repo = init_repo(tmp_path / "sample")
    (repo / "f.txt").write_bytes(b"0123456789")
    a = commit_all(repo, "A")
    (repo / "g.txt").write_bytes(b"hello")
    b = commit_all(repo, "B")
    (repo / "f.txt").unlink()
    (repo / "g.txt").write_bytes(b"hello!!")
    c = commit_all(repo, "C")
    git("branch", "-M", "master", cwd=repo)
    return SampleRepo(path=repo, hashes=[a, b, c])


@pytest.fixture
def empty_root_repo(tmp_path: Path) -> SampleRepo:
    """First commit has an empty tree; the second adds one file."""
    repo = init_repo(tmp_path / "empty-root")
    first = commit_all(repo, "empty", allow_empty=True)
    (repo / "src").mkdir()
    (repo / "src" / "main.py").write_text("print('hi')\n")
    second = commit_all(repo, "add main")
    git("branch", "-M", "master", cwd=repo)
    return SampleRepo(path=repo, hashes=[first, second])


@pytest.fixture
def volv_home(tmp_path: Path, monkeypatch) -> Path:
    home = tmp_path / "volv-home"
    monkeypatch.setenv("VOLV_HOME", str(home))
    return home


@pytest.fixture
def config(volv_home: Path) -> VolvConfig:
    cfg = VolvConfig()
    cfg.paths.home = str(volv_home)
    return cfg


@pytest.fixture
def feature_repo(history_repo: SampleRepo) -> SampleRepo:
    """history_repo plus a ``feature`` branch one commit ahead of master.

    ``hashes`` holds the feature branch history.
    """
    repo = history_repo.path
    git("checkout", "-b", "feature", cwd=repo)
    (repo / "h.txt").write_text("feature work")
    extra = commit_all(repo, "D")
    git("checkout", "master", cwd=repo)
    return SampleRepo(path=repo, hashes=history_repo.hashes + [extra])


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """A freshly initialised repository without any commit."""
    return init_repo(tmp_path / "no-commits")


@pytest.fixture
def dangling_link_repo(tmp_path: Path) -> SampleRepo:
    """One commit holding a regular file and a symlink to a missing target."""
    repo = init_repo(tmp_path / "links")
    (repo / "ok.txt").write_text("fine")
    (repo / "broken").symlink_to("missing-target")
    head = commit_all(repo, "link")
    git("branch", "-M", "master", cwd=repo)
    return SampleRepo(path=repo, hashes=[head])

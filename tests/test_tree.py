"""Tests for the working tree scanner."""

import os
from pathlib import Path

import pytest

from volv.errors import StatError
from volv.scanner.tree import list_files, scan_tree


def _write(root: Path, rel: str, data: bytes) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    root = tmp_path / "tree"
    _write(root, "README.md", b"# readme\n")
    _write(root, "src/app.py", b"x = 1\n")
    _write(root, "src/lib/util.py", b"")
    _write(root, ".git/HEAD", b"ref: refs/heads/master\n")
    _write(root, ".git/objects/ab/cdef", b"blob")
    _write(root, "node_modules/pkg/index.js", b"module.exports = 1\n")
    return root


class TestScanTree:
    def test_sorted_relative_paths(self, tree: Path):
        entries = scan_tree(tree)
        assert [e.relative_path for e in entries] == [
            "README.md",
            "node_modules/pkg/index.js",
            "src/app.py",
            "src/lib/util.py",
        ]

    def test_sizes_and_absolute_paths(self, tree: Path):
        entries = {e.relative_path: e for e in scan_tree(tree)}
        assert entries["README.md"].size_bytes == 9
        assert entries["src/app.py"].size_bytes == 6
        assert entries["src/app.py"].absolute_path == str(tree / "src" / "app.py")

    def test_zero_size_file_kept(self, tree: Path):
        entries = {e.relative_path: e for e in scan_tree(tree)}
        assert entries["src/lib/util.py"].size_bytes == 0

    def test_git_metadata_excluded(self, tree: Path):
        assert not any(e.relative_path.startswith(".git/") for e in scan_tree(tree))

    def test_custom_exclude(self, tree: Path):
        entries = scan_tree(tree, [".git", "node_modules"])
        assert [e.relative_path for e in entries] == [
            "README.md",
            "src/app.py",
            "src/lib/util.py",
        ]

    def test_only_metadata_gives_empty_list(self, tmp_path: Path):
        root = tmp_path / "bare"
        _write(root, ".git/HEAD", b"ref: refs/heads/master\n")
        assert scan_tree(root) == []

    def test_empty_directories_ignored(self, tmp_path: Path):
        (tmp_path / "a" / "b").mkdir(parents=True)
        assert scan_tree(tmp_path) == []

    def test_worker_count_does_not_change_result(self, tree: Path):
        assert scan_tree(tree, max_workers=1) == scan_tree(tree, max_workers=16)

    def test_deterministic(self, tree: Path):
        assert scan_tree(tree) == scan_tree(tree)


@pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
class TestSymlinks:
    def test_dangling_link_recorded_by_default(self, tmp_path: Path):
        (tmp_path / "link").symlink_to("missing-target")
        entries = scan_tree(tmp_path)
        assert [e.relative_path for e in entries] == ["link"]
        assert entries[0].size_bytes == len("missing-target")

    def test_dangling_link_fails_when_following(self, tmp_path: Path):
        _write(tmp_path, "ok.txt", b"fine")
        (tmp_path / "link").symlink_to("missing-target")
        with pytest.raises(StatError) as info:
            scan_tree(tmp_path, follow_symlinks=True)
        assert info.value.path == str(tmp_path / "link")
        assert info.value.stage == "scan"

    def test_directory_link_not_descended(self, tmp_path: Path):
        _write(tmp_path, "real/data.bin", b"1234")
        (tmp_path / "alias").symlink_to("real", target_is_directory=True)
        paths = [e.relative_path for e in scan_tree(tmp_path)]
        assert paths == ["alias", "real/data.bin"]


class TestListFiles:
    def test_excluded_file_names(self, tmp_path: Path):
        _write(tmp_path, "keep.txt", b"k")
        _write(tmp_path, "sub/.DS_Store", b"x")
        files = list_files(tmp_path, [".git", ".DS_Store"])
        assert files == [str(tmp_path / "keep.txt")]


class TestMetadataAlwaysExcluded:
    def test_custom_exclude_keeps_git_out(self, tree: Path):
        entries = scan_tree(tree, ["node_modules"])
        assert [e.relative_path for e in entries] == [
            "README.md",
            "src/app.py",
            "src/lib/util.py",
        ]

    def test_empty_exclude_keeps_git_out(self, tree: Path):
        assert not any(e.relative_path.startswith(".git/") for e in scan_tree(tree, []))

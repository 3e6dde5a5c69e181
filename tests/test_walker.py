"""Tests for the tree walker."""

import logging
import os
import threading
from pathlib import Path

import pytest

from lice.styles import C_BLOCK, DOUBLE_SLASH, HASH
from lice.walker import TreeWalker, iter_work_items


def _rel(items, root: Path) -> list[str]:
    return sorted(Path(i.path).relative_to(root).as_posix() for i in items)


class TestTreeWalker:
    def test_finds_supported_files(self, sample_tree: Path):
        items = list(TreeWalker([sample_tree]))
        assert _rel(items, sample_tree) == [
            "run.sh",
            "src/lib.rs",
            "src/main.c",
            "src/temp/scratch.c",
            "src/template.c",
            "src/util.h",
            "vendor/dep.c",
        ]

    def test_resolves_styles(self, sample_tree: Path):
        styles = {Path(i.path).name: i.style for i in TreeWalker([sample_tree])}
        assert styles["main.c"] is C_BLOCK
        assert styles["lib.rs"] is DOUBLE_SLASH
        assert styles["run.sh"] is HASH

    def test_excluded_directories_not_descended(self, sample_tree: Path):
        walker = TreeWalker([sample_tree], ["vendor", "temp"])
        rel = _rel(walker, sample_tree)
        assert "vendor/dep.c" not in rel
        assert "src/temp/scratch.c" not in rel
        assert "src/template.c" in rel
        assert walker.stats["excluded"] == 2

    def test_excluded_file(self, sample_tree: Path):
        rel = _rel(TreeWalker([sample_tree], ["main.c"]), sample_tree)
        assert "src/main.c" not in rel
        assert "src/util.h" in rel

    def test_unsupported_files_silently_skipped(self, sample_tree: Path, caplog):
        with caplog.at_level(logging.WARNING, logger="lice.walker"):
            walker = TreeWalker([sample_tree])
            list(walker)
        assert walker.stats["unsupported"] == 1
        assert caplog.records == []

    def test_missing_target_warns_and_continues(self, sample_tree: Path, tmp_path: Path, caplog):
        missing = tmp_path / "nope"
        with caplog.at_level(logging.WARNING, logger="lice.walker"):
            walker = TreeWalker([missing, sample_tree / "src" / "main.c"])
            items = list(walker)
        assert walker.missing_targets == [missing]
        assert [i.path for i in items] == [sample_tree / "src" / "main.c"]
        assert "Target path not found" in caplog.text

    def test_single_file_target(self, sample_tree: Path):
        items = list(TreeWalker([sample_tree / "run.sh"]))
        assert len(items) == 1
        assert items[0].style is HASH

    def test_explicit_unsupported_file_warns(self, sample_tree: Path, caplog):
        with caplog.at_level(logging.WARNING, logger="lice.walker"):
            items = list(TreeWalker([sample_tree / "src" / "notes.txt"]))
        assert items == []
        assert "unsupported file type" in caplog.text

    def test_targets_walked_in_order(self, sample_tree: Path):
        items = list(TreeWalker([sample_tree / "run.sh", sample_tree / "src" / "util.h"]))
        assert [i.path.name for i in items] == ["run.sh", "util.h"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinks_skipped(self, sample_tree: Path):
        os.symlink(sample_tree / "src", sample_tree / "link")
        rel = _rel(TreeWalker([sample_tree]), sample_tree)
        assert not any(r.startswith("link/") for r in rel)

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_unreadable_directory_skipped(self, sample_tree: Path, caplog):
        locked = sample_tree / "src" / "temp"
        locked.chmod(0)
        try:
            with caplog.at_level(logging.WARNING, logger="lice.walker"):
                walker = TreeWalker([sample_tree])
                rel = _rel(walker, sample_tree)
        finally:
            locked.chmod(0o755)
        assert "src/main.c" in rel
        assert walker.stats["errors"] == 1
        assert "Failed to read directory" in caplog.text

    def test_stop_event_ends_walk(self, sample_tree: Path):
        stop = threading.Event()
        walker = TreeWalker([sample_tree], stop=stop)
        it = iter(walker)
        next(it)
        stop.set()
        assert len(list(it)) < 6


def test_iter_work_items(sample_tree: Path):
    assert len(list(iter_work_items([sample_tree], ["vendor"]))) == 6

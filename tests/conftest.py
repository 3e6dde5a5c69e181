"""Shared fixtures for lice tests."""

from pathlib import Path

import pytest

LICENSE_TEXT = "Copyright 2025 X\nApache 2.0"


@pytest.fixture
def license_text() -> str:
    return LICENSE_TEXT


@pytest.fixture
def license_file(tmp_path: Path) -> Path:
    path = tmp_path / "HEADER.txt"
    path.write_text(LICENSE_TEXT + "\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A small source tree with a mix of supported, unsupported and vendored files."""
    root = tmp_path / "project"
    (root / "src" / "temp").mkdir(parents=True)
    (root / "vendor").mkdir()
    (root / "src" / "main.c").write_text("int main(void) { return 0; }\n")
    (root / "src" / "util.h").write_text("#pragma once\n")
    (root / "src" / "lib.rs").write_text("//! crate docs\nfn f() {}\n")
    (root / "src" / "temp" / "scratch.c").write_text("int x;\n")
    (root / "src" / "template.c").write_text("int y;\n")
    (root / "src" / "notes.txt").write_text("not source\n")
    (root / "vendor" / "dep.c").write_text("int dep;\n")
    (root / "run.sh").write_text("#!/bin/sh\necho hi\n")
    return root

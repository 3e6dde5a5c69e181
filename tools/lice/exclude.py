"""Exclude patterns that match whole path components only."""

from __future__ import annotations

import os
from typing import Iterable

_SEPARATORS = ("/", "\\")


def is_excluded(path: str | os.PathLike[str], pattern: str) -> bool:
    """Return True if *pattern* occurs in *path* as a complete component.

    ``"temp"`` matches ``temp``, ``temp/file.c`` and ``src/temp/x.c`` but not
    ``template.c`` or ``item_post.c``.  Every occurrence is tried, since an
    early one can fail the boundary test while a later one passes.
    """
    if not pattern:
        return False
    text = os.fspath(path)
    idx = text.find(pattern)
    while idx != -1:
        end = idx + len(pattern)
        left_ok = idx == 0 or text[idx - 1] in _SEPARATORS
        right_ok = end == len(text) or text[end] in _SEPARATORS
        if left_ok and right_ok:
            return True
        idx = text.find(pattern, idx + 1)
    return False


def matches_any(path: str | os.PathLike[str], patterns: Iterable[str]) -> str | None:
    """Return the first pattern that excludes *path*, or None."""
    for pattern in patterns:
        if is_excluded(path, pattern):
            return pattern
    return None

"""Tree walker – enumerate eligible files under each target root."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .exclude import matches_any
from .styles import CommentStyle, style_for_path

logger = logging.getLogger("lice.walker")


@dataclass(frozen=True)
class WorkItem:
    path: Path
    style: CommentStyle


class TreeWalker:
    """Iterate :class:`WorkItem` objects for every supported file under the targets.

    Missing roots and unreadable entries are logged and skipped; the walk
    carries on with whatever remains.  Setting *stop* ends the walk early.
    """

    def __init__(
        self,
        targets: Iterable[str | os.PathLike[str]],
        excludes: Iterable[str] = (),
        *,
        stop: threading.Event | None = None,
    ) -> None:
        self.targets = tuple(Path(t) for t in targets)
        self.excludes = tuple(excludes)
        self.stop = stop
        self.missing_targets: list[Path] = []
        self.stats = {"files": 0, "excluded": 0, "unsupported": 0, "errors": 0}

    @property
    def _stopped(self) -> bool:
        return self.stop is not None and self.stop.is_set()

    def _excluded(self, path: str) -> bool:
        pattern = matches_any(path, self.excludes)
        if pattern is None:
            return False
        logger.debug("Excluded %s (matches '%s')", path, pattern)
        self.stats["excluded"] += 1
        return True

    def __iter__(self) -> Iterator[WorkItem]:
        for root in self.targets:
            if self._stopped:
                return
            yield from self._walk_root(root)

    # ── single root ──────────────────────────────────────────────

    def _walk_root(self, root: Path) -> Iterator[WorkItem]:
        root_str = os.fspath(root)
        if not os.path.exists(root_str):
            logger.warning("Target path not found: %s", root)
            self.missing_targets.append(root)
            return
        if self._excluded(root_str):
            return
        if os.path.isdir(root_str):
            yield from self._walk_dir(root_str)
            return
        if not os.path.isfile(root_str):
            logger.warning("Ignoring %s: not a regular file or directory", root)
            return
        style = style_for_path(root_str)
        if style is None:
            logger.warning("Ignoring unsupported file type: %s", root)
            self.stats["unsupported"] += 1
            return
        self.stats["files"] += 1
        yield WorkItem(root, style)

    def _walk_dir(self, top: str) -> Iterator[WorkItem]:
        stack = [top]
        while stack:
            if self._stopped:
                return
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as exc:
                logger.warning("Failed to read directory %s: %s", current, exc)
                self.stats["errors"] += 1
                continue

            subdirs: list[str] = []
            for entry in entries:
                if self._excluded(entry.path):
                    continue
                try:
                    if entry.is_symlink():
                        logger.debug("Skipping symlink %s", entry.path)
                        continue
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                        continue
                    if not entry.is_file(follow_symlinks=False):
                        continue
                except OSError as exc:
                    logger.warning("Failed to stat %s: %s", entry.path, exc)
                    self.stats["errors"] += 1
                    continue

                style = style_for_path(entry.name)
                if style is None:
                    self.stats["unsupported"] += 1
                    continue
                self.stats["files"] += 1
                yield WorkItem(Path(entry.path), style)

            # Popped in name order.
            stack.extend(reversed(subdirs))


def iter_work_items(
    targets: Iterable[str | os.PathLike[str]],
    excludes: Iterable[str] = (),
) -> Iterator[WorkItem]:
    """Shorthand for iterating a fresh :class:`TreeWalker`."""
    return iter(TreeWalker(targets, excludes))

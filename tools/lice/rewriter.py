"""Header detection and in-place rewrite for a single file."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterator

from .outcome import ErrorKind, FileOutcome
from .styles import CommentStyle

logger = logging.getLogger("lice.rewriter")

# Characters skipped between an old block header's terminator and the body.
_BLOCK_GAP = " \r\n"


def _lines(text: str, pos: int = 0) -> Iterator[tuple[int, str]]:
    """Yield ``(start, line)`` pairs; each line keeps its newline."""
    while pos < len(text):
        end = text.find("\n", pos)
        end = len(text) if end == -1 else end + 1
        yield pos, text[pos:end]
        pos = end


def _skip_blank_lines(text: str, pos: int = 0) -> int:
    for start, line in _lines(text, pos):
        if line.strip():
            return start
    return len(text)


def split_shebang(content: str, style: CommentStyle) -> tuple[str, int]:
    """Return the shebang line to preserve and the offset the header belongs at.

    The header is expected after the shebang and any blank lines that
    follow it.  A shebang with no trailing newline gets one.
    """
    if not style.shebang or not content.startswith("#!"):
        return "", 0
    nl = content.find("\n")
    if nl == -1:
        return content + "\n", len(content)
    return content[: nl + 1], _skip_blank_lines(content, nl + 1)


def _is_header_line(line: str, token: str) -> bool:
    line = line.rstrip("\r\n")
    return line == token or line.startswith(token + " ")


def _line_body_start(window: str, style: CommentStyle) -> int:
    """Offset just past a leading run of comment lines (0 when there is none)."""
    end = 0
    for start, line in _lines(window):
        if not _is_header_line(line, style.token):
            break
        end = start + len(line)
    if end == 0:
        return 0
    return _skip_blank_lines(window, end)


def _block_body_start(window: str, style: CommentStyle) -> int | None:
    """Offset of the body after an old block header, or None if it never closes."""
    marker = style.close_marker
    end = window.find(marker, len(style.open))
    if end == -1:
        return None
    pos = end + len(marker)
    while pos < len(window) and window[pos] in _BLOCK_GAP:
        pos += 1
    return pos


def atomic_write(path: Path, text: str) -> None:
    """Replace *path* with *text* via a sibling temp file and ``os.replace``."""
    tf = tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="",
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=str(path.parent),
        delete=False,
    )
    tmp_path = Path(tf.name)
    try:
        with tf:
            tf.write(text)
            tf.flush()
            os.fsync(tf.fileno())
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    finally:
        # Only still present when something above failed.
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError as exc:
                logger.debug("Could not remove temp file %s: %s", tmp_path, exc)


def apply(
    path: str | os.PathLike[str],
    golden: str,
    style: CommentStyle,
    *,
    dry_run: bool = False,
) -> FileOutcome:
    """Make *path* start with *golden*, replacing an existing header if present.

    Per-file problems are reported through the returned outcome, never raised.
    With ``dry_run`` the outcome is computed but nothing is written.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            content = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        return FileOutcome.failed(path, ErrorKind.READ_ERROR, str(exc))

    shebang, offset = split_shebang(content, style)
    window = content[offset:]
    if window.startswith(golden):
        return FileOutcome.compliant(path)

    if style.is_block:
        if window.startswith(style.open):
            body_start = _block_body_start(window, style)
            if body_start is None:
                return FileOutcome.skipped(
                    path, ErrorKind.MALFORMED_HEADER, "malformed header (unclosed block comment)"
                )
            replacing = True
        else:
            body_start, replacing = 0, False
    else:
        body_start = _line_body_start(window, style)
        replacing = body_start > 0

    new_content = shebang + golden + window[body_start:]
    outcome = FileOutcome.updated(path) if replacing else FileOutcome.added(path)
    if dry_run:
        return outcome

    try:
        atomic_write(path, new_content)
    except OSError as exc:
        return FileOutcome.failed(path, ErrorKind.WRITE_ERROR, str(exc))
    logger.debug("%s %s", outcome.status.value.capitalize(), path)
    return outcome

"""Render raw license text into a language-specific comment block."""

from __future__ import annotations

import functools

from .styles import CommentStyle


def _comment_line(token: str, line: str) -> str:
    # Blank lines get the bare token so the header never carries trailing whitespace.
    return f"{token} {line}\n" if line else f"{token}\n"


def format_header(raw_text: str, style: CommentStyle) -> str:
    """Return the exact text a compliant file must begin with.

    Block styles::

        /*
         * line one
         *
         * line two
         */
        <blank line>

    Line styles prefix every line with the token and end with one blank line.
    Trailing whitespace on each license line and trailing blank lines of the
    license text are dropped.
    """
    lines = [line.rstrip() for line in raw_text.rstrip().splitlines()]
    parts: list[str] = []
    if style.is_block:
        parts.append(style.open + "\n")
    parts.extend(_comment_line(style.token, line) for line in lines)
    if style.is_block:
        parts.append(style.close + "\n")
    parts.append("\n")
    return "".join(parts)


@functools.lru_cache(maxsize=None)
def golden_header(raw_text: str, style: CommentStyle) -> str:
    """Cached :func:`format_header`; one rendering per distinct style."""
    return format_header(raw_text, style)

"""Comment-style registry – map a file to the comment syntax its header uses."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class StyleKind(str, Enum):
    LINE = "line"
    BLOCK = "block"


@dataclass(frozen=True)
class CommentStyle:
    """Markers used to wrap a license header in one language family.

    Line styles only use ``token``.  Block styles open with ``open``,
    prefix each body line with ``token`` and end with ``close``.
    """
    name: str
    kind: StyleKind
    token: str
    open: str = ""
    close: str = ""
    shebang: bool = False

    @property
    def is_block(self) -> bool:
        return self.kind is StyleKind.BLOCK

    @property
    def close_marker(self) -> str:
        """The bare terminator searched for when replacing an old block."""
        return self.close.strip()


C_BLOCK = CommentStyle("c-block", StyleKind.BLOCK, token=" *", open="/*", close=" */")
DOUBLE_SLASH = CommentStyle("double-slash", StyleKind.LINE, token="//")
HASH = CommentStyle("hash", StyleKind.LINE, token="#", shebang=True)
DOUBLE_DASH = CommentStyle("double-dash", StyleKind.LINE, token="--", shebang=True)


def _table(groups: dict[CommentStyle, tuple[str, ...]]) -> Mapping[str, CommentStyle]:
    flat = {key: style for style, keys in groups.items() for key in keys}
    return MappingProxyType(flat)


# Extension (without the dot, lower-case) → style
EXTENSION_STYLES: Mapping[str, CommentStyle] = _table({
    C_BLOCK: ("c", "h", "cc", "cpp", "cxx", "hpp", "hh", "css"),
    DOUBLE_SLASH: ("rs", "go", "java", "js", "ts", "jsx", "tsx", "kt", "swift", "scala", "cs", "dart", "zig"),
    HASH: ("py", "sh", "bash", "zsh", "rb", "pl", "r", "yaml", "yml", "toml", "mk", "cmake"),
    DOUBLE_DASH: ("lua", "hs", "sql"),
})

# Whole file names that carry no useful extension
FILENAME_STYLES: Mapping[str, CommentStyle] = _table({
    HASH: ("Makefile", "GNUmakefile", "Dockerfile", "CMakeLists.txt", "Rakefile", "Gemfile"),
})


def style_for(extension: str) -> CommentStyle | None:
    """Look up the style for a file extension (``"py"`` or ``".py"``)."""
    return EXTENSION_STYLES.get(extension.lstrip(".").lower())


def style_for_path(path: str | os.PathLike[str]) -> CommentStyle | None:
    """Classify a path by its file name first, then by its extension."""
    name = os.path.basename(os.fspath(path))
    style = FILENAME_STYLES.get(name)
    if style is not None:
        return style
    _, ext = os.path.splitext(name)
    if not ext:
        return None
    return style_for(ext)

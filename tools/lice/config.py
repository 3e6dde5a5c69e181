"""Run configuration for lice."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """Invalid or unreadable configuration; fatal before any file is touched."""


def default_jobs() -> int:
    return os.cpu_count() or 4


@dataclass(frozen=True)
class LiceConfig:
    license_text: str
    excludes: tuple[str, ...] = ()
    targets: tuple[Path, ...] = (Path("."),)
    jobs: int = field(default_factory=default_jobs)
    queue_size: int = 256  # bounds memory on very large trees
    check: bool = False

    def __post_init__(self) -> None:
        if not self.license_text.strip():
            raise ConfigError("License text is empty")
        if self.jobs < 1:
            raise ConfigError(f"Invalid number of jobs: {self.jobs}")
        if self.queue_size < 1:
            raise ConfigError(f"Invalid queue size: {self.queue_size}")
        # Normalise list arguments so the frozen instance holds tuples only.
        object.__setattr__(self, "excludes", tuple(self.excludes))
        object.__setattr__(self, "targets", tuple(Path(t) for t in self.targets) or (Path("."),))

    @classmethod
    def from_license_file(cls, license_file: str | os.PathLike[str], **kwargs: Any) -> LiceConfig:
        """Read the raw license text from *license_file* and build a config."""
        try:
            text = Path(license_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Failed to read license file {license_file}: {exc}") from exc
        return cls(license_text=text, **kwargs)

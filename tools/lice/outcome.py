"""Per-file results and the run-level summary built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Outcome(str, Enum):
    ALREADY_COMPLIANT = "already_compliant"
    ADDED = "added"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def changed(self) -> bool:
        return self in (Outcome.ADDED, Outcome.UPDATED)


class ErrorKind(str, Enum):
    READ_ERROR = "read_error"
    WRITE_ERROR = "write_error"
    MALFORMED_HEADER = "malformed_header"
    CONFIG_ERROR = "config_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class FileOutcome:
    path: Path
    status: Outcome
    error: ErrorKind | None = None
    reason: str = ""

    @classmethod
    def compliant(cls, path: Path) -> FileOutcome:
        return cls(path, Outcome.ALREADY_COMPLIANT)

    @classmethod
    def added(cls, path: Path) -> FileOutcome:
        return cls(path, Outcome.ADDED)

    @classmethod
    def updated(cls, path: Path) -> FileOutcome:
        return cls(path, Outcome.UPDATED)

    @classmethod
    def skipped(cls, path: Path, error: ErrorKind, reason: str) -> FileOutcome:
        return cls(path, Outcome.SKIPPED, error, reason)

    @classmethod
    def failed(cls, path: Path, error: ErrorKind, reason: str) -> FileOutcome:
        return cls(path, Outcome.FAILED, error, reason)


@dataclass
class RunSummary:
    """Aggregate of every outcome produced by one run."""
    outcomes: list[FileOutcome] = field(default_factory=list)
    missing_targets: list[Path] = field(default_factory=list)
    cancelled: bool = False

    def count(self, status: Outcome) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def changed(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.status.changed]

    @property
    def stats(self) -> dict[str, int]:
        counts = {status.value: self.count(status) for status in Outcome}
        counts["missing_targets"] = len(self.missing_targets)
        return counts

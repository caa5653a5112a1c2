"""Types shared by fskit operations.

ASCII-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Outcome(StrEnum):
    """Result of a single-file operation."""

    DONE = "done"
    SKIPPED = "skipped"  # destination existed and overwrite was disabled
    MISSING = "missing"  # delete target did not exist
    SAME_PATH = "same_path"  # target and source are one file


@dataclass(frozen=True)
class WriteOrCopyOpts:
    """Options for write/copy/move operations."""

    overwrite: bool = False


@dataclass
class CopyReport:
    """Summary of a directory copy or move."""

    dirs_created: int = 0
    files_copied: int = 0
    files_skipped: int = 0
    bytes_copied: int = 0
    source_removed: bool = False

    def record(self, outcome: Outcome, size: int = 0) -> None:
        if outcome is Outcome.DONE:
            self.files_copied += 1
            self.bytes_copied += size
        elif outcome is Outcome.SKIPPED:
            self.files_skipped += 1

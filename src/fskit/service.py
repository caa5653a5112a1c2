"""Filesystem service: the public boundary of fskit.

Every method resolves its path arguments exactly once, against the root the
service was built with, then delegates to `fskit.ops` with absolute paths.
Mutating operations publish `operation.start` / `operation.end` envelopes on
the event bus and log a one-line summary.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from fskit.core.config import ConfigResolver, FsSettings, load_settings
from fskit.core.diagnostics import build_envelope, short_traceback
from fskit.core.events import get_event_bus
from fskit.core.logging import apply_logging_policy, get_logger
from fskit.formatting import SpaceUnit
from fskit.formatting import directory_size as fmt_directory_size
from fskit.formatting import format_bytes as fmt_format_bytes
from fskit.ops import checksums
from fskit.ops.directories import copy_directory as op_copy_directory
from fskit.ops.directories import delete_directory as op_delete_directory
from fskit.ops.directories import make_directory as op_make_directory
from fskit.ops.directories import move_directory as op_move_directory
from fskit.ops.files import copy_file as op_copy_file
from fskit.ops.files import delete_file as op_delete_file
from fskit.ops.files import move_file as op_move_file
from fskit.ops.files import write_file as op_write_file
from fskit.paths import StrPath, get_project_root, resolve_path
from fskit.types import CopyReport, Outcome, WriteOrCopyOpts

_logger = get_logger(__name__)


def _safe_publish(event: str, payload: dict[str, Any]) -> None:
    try:
        get_event_bus().publish(event, payload)
    except Exception:
        # Diagnostics must never break a filesystem operation.
        return


def _report_summary(report: CopyReport) -> dict[str, Any]:
    return {
        "dirs_created": report.dirs_created,
        "files_copied": report.files_copied,
        "files_skipped": report.files_skipped,
        "bytes": report.bytes_copied,
    }


@contextmanager
def _observe_operation(*, operation: str, base: dict[str, Any]) -> Iterator[dict[str, Any]]:
    start = time.perf_counter()

    _safe_publish(
        "operation.start",
        build_envelope(
            event="operation.start",
            component="fskit",
            operation=operation,
            data=dict(base),
        ),
    )

    summary: dict[str, Any] = {}
    try:
        yield summary
    except Exception as e:
        duration_ms = int((time.perf_counter() - start) * 1000)
        end_data = dict(base)
        end_data.update(
            {
                "status": "failed",
                "duration_ms": duration_ms,
                "error_type": type(e).__name__,
                "error_message": str(e),
                "traceback": short_traceback(),
            }
        )
        _safe_publish(
            "operation.end",
            build_envelope(
                event="operation.end",
                component="fskit",
                operation=operation,
                data=end_data,
            ),
        )
        _logger.warning(
            f"{operation} status=failed duration_ms={duration_ms} "
            f"path={base.get('path')!r} error_type={type(e).__name__!r}"
        )
        raise
    else:
        duration_ms = int((time.perf_counter() - start) * 1000)
        status = summary.pop("status", "succeeded")
        end_data = dict(base)
        end_data.update(summary)
        end_data.update({"status": status, "duration_ms": duration_ms})
        _safe_publish(
            "operation.end",
            build_envelope(
                event="operation.end",
                component="fskit",
                operation=operation,
                data=end_data,
            ),
        )
        summary_parts = [f"status={status}", f"duration_ms={duration_ms}"]
        for k in ("path", "target", "source", "outcome", "files_copied", "files_skipped", "bytes"):
            if k in end_data:
                summary_parts.append(f"{k}={end_data[k]!r}")
        line = f"{operation} " + " ".join(summary_parts)
        if status == "failed":
            _logger.warning(line)
        else:
            _logger.info(line)


class FsService:
    """Filesystem operations anchored at one root directory.

    Relative paths passed to any method are joined onto `root_dir`; absolute
    paths are used as given.
    """

    def __init__(self, root_dir: StrPath, settings: FsSettings | None = None) -> None:
        self.settings = settings or FsSettings()
        self.root_dir = resolve_path(root_dir, Path.cwd())

    @classmethod
    def from_resolver(cls, resolver: ConfigResolver) -> FsService:
        """Build a service from configuration.

        The root is `root_dir` when configured, else the process project root.
        `logging.level` is applied to the process verbosity.
        """
        settings = load_settings(resolver)
        apply_logging_policy(resolver.resolve_logging_policy())
        root_dir = settings.root_dir if settings.root_dir is not None else get_project_root()
        return cls(root_dir, settings)

    @staticmethod
    def _overwrite(opts: WriteOrCopyOpts | None, overwrite: bool | None) -> bool:
        if overwrite is not None:
            return overwrite
        if opts is not None:
            return opts.overwrite
        return False

    # ----------------------------------------------------------------- paths

    def resolve_path(self, path: StrPath) -> Path:
        """Return the absolute form of `path`."""
        return resolve_path(path, self.root_dir)

    def exists(self, path: StrPath) -> bool:
        return self.resolve_path(path).exists()

    # ----------------------------------------------------------- directories

    def make_directory(self, path: StrPath) -> bool:
        """Create a directory and its missing ancestors. False on failure."""
        abs_path = self.resolve_path(path)
        with _observe_operation(
            operation="fskit.make_directory", base={"path": str(abs_path)}
        ) as summary:
            ok = op_make_directory(abs_path)
            if not ok:
                summary["status"] = "failed"
            return ok

    def copy_directory(
        self,
        target: StrPath,
        source: StrPath,
        opts: WriteOrCopyOpts | None = None,
        *,
        overwrite: bool | None = None,
    ) -> CopyReport:
        """Copy a tree (or a single file) from `source` to `target`."""
        dst = self.resolve_path(target)
        src = self.resolve_path(source)
        flag = self._overwrite(opts, overwrite)
        with _observe_operation(
            operation="fskit.copy_directory",
            base={"target": str(dst), "source": str(src), "overwrite": flag},
        ) as summary:
            report = op_copy_directory(
                dst,
                src,
                overwrite=flag,
                max_workers=self.settings.max_workers,
                chunk_size=self.settings.chunk_size,
            )
            summary.update(_report_summary(report))
            return report

    def delete_directory(self, path: StrPath) -> bool:
        """Remove a tree. A missing path is success; False on failure."""
        abs_path = self.resolve_path(path)
        with _observe_operation(
            operation="fskit.delete_directory", base={"path": str(abs_path)}
        ) as summary:
            ok = op_delete_directory(abs_path)
            if not ok:
                summary["status"] = "failed"
            return ok

    def move_directory(
        self,
        target: StrPath,
        source: StrPath,
        opts: WriteOrCopyOpts | None = None,
        *,
        overwrite: bool | None = None,
    ) -> CopyReport:
        """Copy a tree to `target`, then remove `source`."""
        dst = self.resolve_path(target)
        src = self.resolve_path(source)
        flag = self._overwrite(opts, overwrite)
        with _observe_operation(
            operation="fskit.move_directory",
            base={"target": str(dst), "source": str(src), "overwrite": flag},
        ) as summary:
            report = op_move_directory(
                dst,
                src,
                overwrite=flag,
                max_workers=self.settings.max_workers,
                chunk_size=self.settings.chunk_size,
            )
            summary.update(_report_summary(report))
            summary["source_removed"] = report.source_removed
            return report

    # ----------------------------------------------------------------- files

    def write_file(
        self,
        path: StrPath,
        data: bytes | str,
        opts: WriteOrCopyOpts | None = None,
        *,
        overwrite: bool | None = None,
    ) -> Outcome:
        """Write `data` unless the file exists and overwrite is disabled."""
        abs_path = self.resolve_path(path)
        flag = self._overwrite(opts, overwrite)
        with _observe_operation(
            operation="fskit.write_file", base={"path": str(abs_path), "overwrite": flag}
        ) as summary:
            outcome = op_write_file(abs_path, data, overwrite=flag)
            summary["outcome"] = outcome.value
            return outcome

    def copy_file(
        self,
        target: StrPath,
        source: StrPath,
        opts: WriteOrCopyOpts | None = None,
        *,
        overwrite: bool | None = None,
    ) -> Outcome:
        dst = self.resolve_path(target)
        src = self.resolve_path(source)
        flag = self._overwrite(opts, overwrite)
        with _observe_operation(
            operation="fskit.copy_file",
            base={"target": str(dst), "source": str(src), "overwrite": flag},
        ) as summary:
            outcome = op_copy_file(dst, src, overwrite=flag, chunk_size=self.settings.chunk_size)
            summary["outcome"] = outcome.value
            return outcome

    def delete_file(self, path: StrPath) -> Outcome:
        abs_path = self.resolve_path(path)
        with _observe_operation(
            operation="fskit.delete_file", base={"path": str(abs_path)}
        ) as summary:
            outcome = op_delete_file(abs_path)
            summary["outcome"] = outcome.value
            return outcome

    def move_file(
        self,
        target: StrPath,
        source: StrPath,
        opts: WriteOrCopyOpts | None = None,
        *,
        overwrite: bool | None = None,
    ) -> Outcome:
        dst = self.resolve_path(target)
        src = self.resolve_path(source)
        flag = self._overwrite(opts, overwrite)
        with _observe_operation(
            operation="fskit.move_file",
            base={"target": str(dst), "source": str(src), "overwrite": flag},
        ) as summary:
            outcome = op_move_file(dst, src, overwrite=flag, chunk_size=self.settings.chunk_size)
            summary["outcome"] = outcome.value
            return outcome

    # ------------------------------------------------------------- inspection

    def checksum(self, path: StrPath, algorithm: str = "sha256") -> str:
        """Hex digest of a file (SHA-256 unless `algorithm` names another)."""
        return checksums.digest(self.resolve_path(path), algorithm)

    def directory_size(self, path: StrPath) -> int:
        return fmt_directory_size(self.resolve_path(path))

    def format_bytes(
        self,
        num_bytes: float,
        decimals: int | None = None,
        unit: SpaceUnit = SpaceUnit.BYTE,
        auto: bool = True,
    ) -> str:
        """Format a size using the configured default precision."""
        if decimals is None:
            decimals = self.settings.decimals
        return fmt_format_bytes(num_bytes, decimals=decimals, unit=unit, auto=auto)

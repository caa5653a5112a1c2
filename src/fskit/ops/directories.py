"""Recursive directory operations.

All paths are absolute; resolution happens at the service boundary.
Existence checks followed by an action are not atomic with respect to other
processes touching the same tree.
"""

from __future__ import annotations

import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path

from fskit.core.config import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_WORKERS
from fskit.core.errors import FileError, NotADirectoryError, NotFoundError, PathError
from fskit.core.logging import get_logger
from fskit.paths import is_within, same_file
from fskit.types import CopyReport, Outcome

from .files import copy_file_counted, delete_file

_logger = get_logger(__name__)


def make_directory(path: Path) -> bool:
    """Create `path` and any missing ancestors, ancestors first.

    Returns:
        True if the directory exists afterwards, False if it could not be
        created (permission denied, an ancestor is a file, ...)
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _logger.error(f"mkdir failed for {str(path)!r}: {type(e).__name__}: {e}")
        return False
    return True


def _raise_walk_error(err: OSError) -> None:
    raise err


def _plan_copy(target: Path, source: Path, report: CopyReport) -> list[tuple[Path, Path]]:
    """Mirror the directory skeleton of `source` under `target`.

    Returns the (target, source) pairs of every file to copy.
    """
    jobs: list[tuple[Path, Path]] = []

    for dirpath, dirnames, filenames in os.walk(source, onerror=_raise_walk_error):
        src_dir = Path(dirpath)
        dest_dir = target / src_dir.relative_to(source)

        if not dest_dir.is_dir():
            dest_dir.mkdir(parents=True, exist_ok=True)
            report.dirs_created += 1

        for name in list(dirnames):
            if (src_dir / name).is_symlink():
                _logger.warning(f"not following symlinked directory {str(src_dir / name)!r}")
                dirnames.remove(name)

        for name in sorted(filenames):
            jobs.append((dest_dir / name, src_dir / name))

    return jobs


def _run_copies(
    jobs: list[tuple[Path, Path]],
    report: CopyReport,
    *,
    overwrite: bool,
    max_workers: int,
    chunk_size: int,
) -> None:
    if not jobs:
        return

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="fskit-copy") as executor:
        futures: dict[Future[tuple[Outcome, int]], Path] = {
            executor.submit(
                copy_file_counted, dst, src, overwrite=overwrite, chunk_size=chunk_size
            ): src
            for dst, src in jobs
        }
        try:
            for future in as_completed(futures):
                outcome, size = future.result()
                report.record(outcome, size)
        except BaseException:
            # First failure wins; queued copies are dropped.
            for pending in futures:
                pending.cancel()
            raise


def copy_directory(
    target: Path,
    source: Path,
    *,
    overwrite: bool = False,
    max_workers: int = DEFAULT_MAX_WORKERS,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> CopyReport:
    """Copy the tree at `source` into `target`.

    A regular file `source` is copied as a single file. Files are copied
    concurrently on at most `max_workers` threads; each respects `overwrite`
    on its own.

    Raises:
        NotFoundError: If `source` does not exist.
        PathError: If `target` lies inside `source`.
        OSError: Propagated from the first failing copy.
    """
    report = CopyReport()

    if not source.exists():
        raise NotFoundError(f"Not found: {source}")

    if source.is_file():
        outcome, size = copy_file_counted(
            target, source, overwrite=overwrite, chunk_size=chunk_size
        )
        report.record(outcome, size)
        return report

    if is_within(target, source):
        raise PathError(str(target), str(source))

    jobs = _plan_copy(target, source, report)
    _run_copies(
        jobs,
        report,
        overwrite=overwrite,
        max_workers=max_workers,
        chunk_size=chunk_size,
    )

    _logger.verbose(
        f"copied tree {str(source)!r} -> {str(target)!r} "
        f"files={report.files_copied} skipped={report.files_skipped}"
    )
    return report


def _remove_tree(path: Path) -> None:
    with os.scandir(path) as it:
        entries = list(it)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            _remove_tree(Path(entry.path))
        else:
            try:
                os.unlink(entry.path)
            except FileNotFoundError:
                continue

    path.rmdir()


def delete_directory(path: Path) -> bool:
    """Remove `path` and everything below it.

    A missing path counts as success. Removal stops at the first failure,
    which is logged; already removed entries stay removed.

    Raises:
        NotADirectoryError: If `path` is a file or a symlink.
    """
    if not path.exists() and not path.is_symlink():
        return True
    if path.is_symlink() or not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")

    try:
        _remove_tree(path)
    except FileNotFoundError:
        # Directory vanished underneath us; the goal state is reached.
        return not path.exists()
    except OSError as e:
        _logger.error(f"delete failed for {str(path)!r}: {type(e).__name__}: {e}")
        return False

    _logger.debug(f"deleted tree {str(path)!r}")
    return True


def move_directory(
    target: Path,
    source: Path,
    *,
    overwrite: bool = False,
    max_workers: int = DEFAULT_MAX_WORKERS,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> CopyReport:
    """Copy `source` to `target`, then remove `source`.

    The source is kept when any file was skipped, so no data is lost.

    Raises:
        FileError: If the copy succeeded but the source could not be removed.
    """
    if same_file(target, source):
        return CopyReport()

    report = copy_directory(
        target,
        source,
        overwrite=overwrite,
        max_workers=max_workers,
        chunk_size=chunk_size,
    )

    if report.files_skipped:
        _logger.warning(
            f"move kept source {str(source)!r}: {report.files_skipped} file(s) already at target"
        )
        return report

    if source.is_dir():
        removed = delete_directory(source)
    else:
        delete_file(source)
        removed = not source.exists()

    if not removed:
        raise FileError(
            f"Copied to '{target}' but could not remove '{source}'",
            "Check permissions on the source tree and delete it manually",
        )

    report.source_removed = True
    return report

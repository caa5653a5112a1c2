"""Single-file operations.

All paths are absolute; resolution happens at the service boundary.
"""

from __future__ import annotations

import os
from pathlib import Path

from fskit.core.config import DEFAULT_CHUNK_SIZE
from fskit.core.errors import AlreadyExistsError, IsADirectoryError
from fskit.core.logging import get_logger
from fskit.paths import same_file
from fskit.types import Outcome

from .streams import copy_stream

_logger = get_logger(__name__)


def write_file(path: Path, data: bytes | str, *, overwrite: bool = False) -> Outcome:
    """Write `data` to `path`, creating parent directories.

    An existing file is left untouched unless `overwrite` is set. The new
    content is written to a sibling temp file and moved into place.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists() and not overwrite:
        _logger.verbose(f"write skipped, destination exists: {str(path)!r}")
        return Outcome.SKIPPED
    if path.is_dir():
        raise IsADirectoryError(f"Is a directory: {path}")

    payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(tmp_path, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    _logger.debug(f"wrote {len(payload)} bytes to {str(path)!r}")
    return Outcome.DONE


def copy_file_counted(
    target: Path,
    source: Path,
    *,
    overwrite: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> tuple[Outcome, int]:
    """Stream `source` into `target`; return the outcome and bytes copied."""
    if same_file(target, source):
        _logger.verbose(f"copy skipped, source and destination are one file: {str(target)!r}")
        return Outcome.SAME_PATH, 0

    try:
        copied = copy_stream(source, target, overwrite=overwrite, chunk_size=chunk_size)
    except AlreadyExistsError:
        _logger.verbose(f"copy skipped, destination exists: {str(target)!r}")
        return Outcome.SKIPPED, 0

    _logger.debug(f"copied {copied} bytes {str(source)!r} -> {str(target)!r}")
    return Outcome.DONE, copied


def copy_file(
    target: Path,
    source: Path,
    *,
    overwrite: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Outcome:
    """Copy one file; the source is never loaded into memory whole.

    Raises:
        NotFoundError: If `source` does not exist.
        IsADirectoryError: If `source` is a directory.
    """
    outcome, _copied = copy_file_counted(
        target, source, overwrite=overwrite, chunk_size=chunk_size
    )
    return outcome


def delete_file(path: Path) -> Outcome:
    """Unlink `path`; a missing file is not an error."""
    if not path.exists() and not path.is_symlink():
        return Outcome.MISSING
    if path.is_dir() and not path.is_symlink():
        raise IsADirectoryError(f"Is a directory: {path}")

    try:
        path.unlink()
    except FileNotFoundError:
        # Removed by someone else between the check and the unlink.
        return Outcome.MISSING

    _logger.debug(f"deleted {str(path)!r}")
    return Outcome.DONE


def move_file(
    target: Path,
    source: Path,
    *,
    overwrite: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Outcome:
    """Copy `source` to `target`, then delete `source`.

    A skipped copy, or a target that is the source file itself, leaves the
    source in place.
    """
    outcome = copy_file(target, source, overwrite=overwrite, chunk_size=chunk_size)
    if outcome is not Outcome.DONE:
        return outcome

    delete_file(source)
    return Outcome.DONE

"""Streaming helpers for file operations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from fskit.core.errors import AlreadyExistsError, IsADirectoryError, NotFoundError


@contextmanager
def open_read(path: Path) -> Iterator[BinaryIO]:
    """Open an existing regular file for reading in binary mode."""
    if not path.exists():
        raise NotFoundError(f"Not found: {path}")
    if path.is_dir():
        raise IsADirectoryError(f"Is a directory: {path}")

    with open(path, "rb") as f:
        yield f


@contextmanager
def open_write(
    path: Path, *, overwrite: bool = False, mkdir_parents: bool = True
) -> Iterator[BinaryIO]:
    """Open a file for writing in binary mode.

    Raises:
        AlreadyExistsError: If `path` exists and overwrite is disabled.
    """
    if mkdir_parents:
        path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists() and not overwrite:
        raise AlreadyExistsError(f"Destination exists: {path}")
    if path.is_dir():
        raise IsADirectoryError(f"Is a directory: {path}")

    with open(path, "wb") as f:
        yield f


def pump(src: BinaryIO, dst: BinaryIO, *, chunk_size: int) -> int:
    """Copy `src` into `dst` chunk by chunk and return the number of bytes."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    total = 0
    while True:
        chunk = src.read(chunk_size)
        if not chunk:
            break
        dst.write(chunk)
        total += len(chunk)
    return total


def copy_stream(source: Path, target: Path, *, overwrite: bool, chunk_size: int) -> int:
    """Stream `source` into `target` and return the number of bytes copied."""
    with open_read(source) as src, open_write(target, overwrite=overwrite) as dst:
        return pump(src, dst, chunk_size=chunk_size)

"""fskit - recursive directory and file operations with overwrite control.

Module-level functions operate on a default FsService bound to the process
project root (see `fskit.paths.init_project_root`).
"""

from __future__ import annotations

__version__ = "1.0.0"

from pathlib import Path

from fskit.core.config import ConfigResolver, load_settings
from fskit.core.logging import apply_logging_policy
from fskit.core.errors import (
    AlreadyExistsError,
    ConfigError,
    FileError,
    FsKitError,
    IsADirectoryError,
    NotADirectoryError,
    NotFoundError,
    PathError,
)
from fskit.formatting import SpaceUnit, format_bytes, parse_unit
from fskit.paths import StrPath, get_project_root, init_project_root
from fskit.service import FsService
from fskit.types import CopyReport, Outcome, WriteOrCopyOpts

_DEFAULT_SERVICE: FsService | None = None


def get_default_service() -> FsService:
    """Return the shared service, created from configuration on first use."""
    global _DEFAULT_SERVICE
    if _DEFAULT_SERVICE is None:
        resolver = ConfigResolver()
        settings = load_settings(resolver)
        apply_logging_policy(resolver.resolve_logging_policy())
        _DEFAULT_SERVICE = FsService(get_project_root(), settings)
    return _DEFAULT_SERVICE


def reset_default_service() -> None:
    """Drop the shared service. Intended for test isolation."""
    global _DEFAULT_SERVICE
    _DEFAULT_SERVICE = None


def resolve_path(path: StrPath) -> Path:
    return get_default_service().resolve_path(path)


def make_directory(path: StrPath) -> bool:
    return get_default_service().make_directory(path)


def copy_directory(target: StrPath, source: StrPath, *, overwrite: bool = False) -> CopyReport:
    return get_default_service().copy_directory(target, source, overwrite=overwrite)


def delete_directory(path: StrPath) -> bool:
    return get_default_service().delete_directory(path)


def move_directory(target: StrPath, source: StrPath, *, overwrite: bool = False) -> CopyReport:
    return get_default_service().move_directory(target, source, overwrite=overwrite)


def write_file(path: StrPath, data: bytes | str, *, overwrite: bool = False) -> Outcome:
    return get_default_service().write_file(path, data, overwrite=overwrite)


def copy_file(target: StrPath, source: StrPath, *, overwrite: bool = False) -> Outcome:
    return get_default_service().copy_file(target, source, overwrite=overwrite)


def delete_file(path: StrPath) -> Outcome:
    return get_default_service().delete_file(path)


def move_file(target: StrPath, source: StrPath, *, overwrite: bool = False) -> Outcome:
    return get_default_service().move_file(target, source, overwrite=overwrite)


__all__ = [
    # Service
    "FsService",
    "get_default_service",
    "reset_default_service",
    # Paths
    "init_project_root",
    "get_project_root",
    "resolve_path",
    # Operations
    "make_directory",
    "copy_directory",
    "delete_directory",
    "move_directory",
    "write_file",
    "copy_file",
    "delete_file",
    "move_file",
    # Formatting
    "SpaceUnit",
    "format_bytes",
    "parse_unit",
    # Types
    "CopyReport",
    "Outcome",
    "WriteOrCopyOpts",
    # Errors
    "FsKitError",
    "ConfigError",
    "FileError",
    "NotFoundError",
    "AlreadyExistsError",
    "NotADirectoryError",
    "IsADirectoryError",
    "PathError",
]

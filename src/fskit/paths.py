"""Path resolution against the project root.

Relative paths are anchored at a process-wide project root which is set once
(explicitly, from the `root_dir` config key, or from the current working
directory at first use) and is read-only afterwards.
"""

from __future__ import annotations

import os
from pathlib import Path

from fskit.core.config import ConfigResolver, load_settings
from fskit.core.errors import ConfigError
from fskit.core.logging import get_logger

StrPath = str | os.PathLike[str]

_logger = get_logger(__name__)

_PROJECT_ROOT: Path | None = None


def resolve_path(path: StrPath, root_dir: StrPath | None = None) -> Path:
    """Return `path` as an absolute path.

    Absolute input is returned unchanged. Relative input is joined onto
    `root_dir`, or onto the project root when no root is given. Existence is
    not checked.
    """
    p = Path(path)
    if p.is_absolute():
        return p
    base = Path(os.path.abspath(root_dir)) if root_dir is not None else get_project_root()
    return base / p


def same_path(a: StrPath, b: StrPath) -> bool:
    """Path-for-path identity of two absolute paths (no symlink resolution)."""
    return os.path.normpath(a) == os.path.normpath(b)


def same_file(a: StrPath, b: StrPath) -> bool:
    """True when `a` and `b` name the same existing file (aliases included)."""
    if same_path(a, b):
        return True
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def is_within(child: StrPath, parent: StrPath) -> bool:
    """True when `child` equals `parent` or lies below it."""
    child_norm = os.path.normpath(child)
    parent_norm = os.path.normpath(parent)
    return child_norm == parent_norm or child_norm.startswith(parent_norm.rstrip(os.sep) + os.sep)


def init_project_root(path: StrPath | None = None, *, resolver: ConfigResolver | None = None) -> Path:
    """Set the process-wide project root once.

    Without an explicit `path`, the `root_dir` config key is used, and the
    current working directory when that is empty.

    Raises:
        ConfigError: If the root is already set to a different directory.
    """
    global _PROJECT_ROOT

    if path is not None:
        root = Path(path).expanduser()
    else:
        settings = load_settings(resolver or ConfigResolver())
        root = settings.root_dir if settings.root_dir is not None else Path.cwd()

    root = Path(os.path.abspath(root))

    if _PROJECT_ROOT is not None:
        if same_path(_PROJECT_ROOT, root):
            return _PROJECT_ROOT
        raise ConfigError(
            f"Project root already set to '{_PROJECT_ROOT}', refusing '{root}'",
            "Set the project root once at startup",
        )

    _PROJECT_ROOT = root
    _logger.debug(f"project root set to {str(root)!r}")
    return root


def get_project_root() -> Path:
    """Return the project root, initialising it from configuration on first use."""
    if _PROJECT_ROOT is None:
        return init_project_root()
    return _PROJECT_ROOT


def reset_project_root() -> None:
    """Forget the project root. Intended for test isolation."""
    global _PROJECT_ROOT
    _PROJECT_ROOT = None

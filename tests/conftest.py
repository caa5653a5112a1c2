"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Add src to path (for 'fskit.*' imports without installation)
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root / "src"))

import fskit  # noqa: E402
from fskit import paths  # noqa: E402
from fskit.core.events import get_event_bus  # noqa: E402
from fskit.core.logging import VerbosityLevel, set_log_sink, set_verbosity  # noqa: E402
from fskit.service import FsService  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch):
    """Keep the project root, default service, event bus and log sink from leaking between tests."""
    for key in list(os.environ):
        if key.startswith("FSKIT_"):
            monkeypatch.delenv(key, raising=False)

    paths.reset_project_root()
    fskit.reset_default_service()
    get_event_bus().clear()
    set_log_sink(None)
    set_verbosity(VerbosityLevel.NORMAL)
    yield
    paths.reset_project_root()
    fskit.reset_default_service()
    get_event_bus().clear()
    set_log_sink(None)
    set_verbosity(VerbosityLevel.NORMAL)


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Project root directory for a test."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def service(root: Path) -> FsService:
    return FsService(root)


@pytest.fixture
def sample_tree(root: Path) -> Path:
    """Create a small nested tree under root/src_tree.

    Layout:
        src_tree/top.txt
        src_tree/sub/one.bin
        src_tree/sub/deeper/two.txt
        src_tree/empty/
    """
    base = root / "src_tree"
    (base / "sub" / "deeper").mkdir(parents=True)
    (base / "empty").mkdir()
    (base / "top.txt").write_text("top level\n")
    (base / "sub" / "one.bin").write_bytes(bytes(range(256)) * 4)
    (base / "sub" / "deeper" / "two.txt").write_text("deep file\n")
    return base

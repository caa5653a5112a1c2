"""End-to-end scenarios through the module-level API."""

from __future__ import annotations

from pathlib import Path

import pytest

import fskit
from fskit import Outcome
from fskit.core.logging import VerbosityLevel, get_verbosity, set_log_sink


@pytest.fixture
def project(tmp_path: Path) -> Path:
    fskit.init_project_root(tmp_path)
    return tmp_path


def test_nested_copy_then_delete_original(project: Path) -> None:
    assert fskit.make_directory("a/b/c")
    assert fskit.write_file("a/b/c/f.txt", b"end to end\n") is Outcome.DONE

    report = fskit.copy_directory("a2", "a", overwrite=True)
    assert report.files_copied == 1

    copied = project / "a2" / "b" / "c" / "f.txt"
    assert copied.exists()
    assert copied.read_bytes() == (project / "a" / "b" / "c" / "f.txt").read_bytes()

    assert fskit.delete_directory("a")
    assert not (project / "a").exists()
    assert copied.read_bytes() == b"end to end\n"


def test_resolve_path_idempotent(project: Path) -> None:
    once = fskit.resolve_path("x/y.txt")
    assert once == project / "x" / "y.txt"
    assert fskit.resolve_path(once) == once


def test_repeated_copy_without_overwrite_is_stable(project: Path) -> None:
    fskit.write_file("src/one.txt", "1")
    fskit.write_file("src/nested/two.txt", "2")

    fskit.copy_directory("dst", "src")
    fskit.write_file("src/one.txt", "changed", overwrite=True)

    second = fskit.copy_directory("dst", "src", overwrite=False)
    assert second.files_copied == 0
    assert second.files_skipped == 2
    assert (project / "dst" / "one.txt").read_text() == "1"

    fskit.copy_directory("dst", "src", overwrite=True)
    assert (project / "dst" / "one.txt").read_text() == "changed"


def test_moves(project: Path) -> None:
    fskit.write_file("tree/f.txt", "f")

    assert fskit.move_file("tree/g.txt", "tree/f.txt") is Outcome.DONE
    assert fskit.move_file("tree/g.txt", "tree/g.txt") is Outcome.SAME_PATH

    report = fskit.move_directory("moved_tree", "tree")
    assert report.source_removed
    assert not (project / "tree").exists()
    assert (project / "moved_tree" / "g.txt").read_text() == "f"

    same = fskit.move_directory("moved_tree", "moved_tree")
    assert not same.source_removed
    assert (project / "moved_tree" / "g.txt").exists()


def test_copy_and_delete_single_files(project: Path) -> None:
    fskit.write_file("a.txt", "a")

    assert fskit.copy_file("b.txt", "a.txt") is Outcome.DONE
    assert fskit.copy_file("b.txt", "a.txt") is Outcome.SKIPPED
    assert fskit.delete_file("b.txt") is Outcome.DONE
    assert fskit.delete_file("b.txt") is Outcome.MISSING


def test_format_bytes_exported() -> None:
    assert fskit.format_bytes(1024) == "1.00 KB"
    assert fskit.format_bytes(500) == "500.00 Byte"
    assert fskit.format_bytes(3, unit=fskit.SpaceUnit.BYTE, auto=False, decimals=0) == "3 Byte"


def test_default_service_follows_project_root(project: Path) -> None:
    assert fskit.get_default_service().root_dir == project


def test_default_service_honors_logging_level(
    project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("FSKIT_LOGGING_LEVEL", "quiet")
    lines: list[str] = []
    set_log_sink(lines.append)

    assert fskit.write_file("quiet.txt", "x") is Outcome.DONE

    assert get_verbosity() == VerbosityLevel.QUIET
    assert lines == []

"""Tests for project-root path resolution."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fskit.core.config import ConfigResolver
from fskit.core.errors import ConfigError
from fskit.paths import (
    get_project_root,
    init_project_root,
    is_within,
    resolve_path,
    same_file,
    same_path,
)


def test_absolute_path_returned_unchanged(tmp_path: Path) -> None:
    p = tmp_path / "a" / "b.txt"
    assert resolve_path(p, tmp_path / "elsewhere") == p


def test_relative_path_joined_onto_root(tmp_path: Path) -> None:
    assert resolve_path("a/b.txt", tmp_path) == tmp_path / "a" / "b.txt"


def test_resolve_is_idempotent(tmp_path: Path) -> None:
    once = resolve_path("x/y", tmp_path)
    assert resolve_path(once, tmp_path) == once


def test_resolve_does_not_check_existence(tmp_path: Path) -> None:
    p = resolve_path("does/not/exist", tmp_path)
    assert not p.exists()
    assert p.is_absolute()


def test_relative_root_is_made_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert resolve_path("f.txt", "rel_root") == Path.cwd() / "rel_root" / "f.txt"


def test_project_root_used_when_no_root_given(tmp_path: Path) -> None:
    init_project_root(tmp_path)
    assert resolve_path("f.txt") == tmp_path / "f.txt"


def test_project_root_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    resolver = ConfigResolver(
        user_config_path=tmp_path / "none.yaml",
        system_config_path=tmp_path / "none.yaml",
    )
    assert init_project_root(resolver=resolver) == Path.cwd()


def test_project_root_from_config(tmp_path: Path) -> None:
    resolver = ConfigResolver(cli_args={"root_dir": str(tmp_path / "configured")})
    assert init_project_root(resolver=resolver) == tmp_path / "configured"


def test_project_root_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FSKIT_ROOT_DIR", str(tmp_path))
    assert get_project_root() == tmp_path


def test_project_root_is_set_once(tmp_path: Path) -> None:
    init_project_root(tmp_path)
    # Same directory again is fine
    assert init_project_root(tmp_path) == tmp_path

    with pytest.raises(ConfigError):
        init_project_root(tmp_path / "other")

    assert get_project_root() == tmp_path


def test_same_path_normalises_but_does_not_compare_content(tmp_path: Path) -> None:
    assert same_path(tmp_path / "a" / ".." / "b", tmp_path / "b")
    assert same_path(str(tmp_path / "b") + "/", tmp_path / "b")
    assert not same_path(tmp_path / "a", tmp_path / "b")


def test_same_file_follows_hard_links(tmp_path: Path) -> None:
    original = tmp_path / "a.txt"
    original.write_text("x")
    os.link(original, tmp_path / "b.txt")
    (tmp_path / "c.txt").write_text("x")

    assert same_file(tmp_path / "b.txt", original)
    assert not same_file(tmp_path / "c.txt", original)
    assert not same_file(tmp_path / "missing.txt", original)
    assert same_file(tmp_path / "missing.txt", tmp_path / "." / "missing.txt")


def test_is_within(tmp_path: Path) -> None:
    assert is_within(tmp_path / "a" / "b", tmp_path / "a")
    assert is_within(tmp_path / "a", tmp_path / "a")
    assert not is_within(tmp_path / "ab", tmp_path / "a")
    assert not is_within(tmp_path, tmp_path / "a")

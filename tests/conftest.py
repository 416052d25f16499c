"""Shared fixtures for dotfind tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from dotfind.scanner import Diagnostics, execute
from dotfind.search import SearchSpec


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a real ``~/.config/dotfind/config.yaml`` out of the tests."""
    missing = tmp_path_factory.mktemp("config") / "missing.yaml"
    monkeypatch.setenv("DOTFIND_CONFIG", str(missing))


@pytest.fixture
def proj_tree(tmp_path: Path) -> Path:
    """Create a small project tree.

    Structure::

        root/
        └── proj/
            ├── a_test.go
            ├── README.md
            ├── sub/
            │   └── b.go
            └── src/
                ├── main.go
                └── vendor/
                    └── lib.go
    """
    proj = tmp_path / "proj"
    (proj / "sub").mkdir(parents=True)
    (proj / "src" / "vendor").mkdir(parents=True)
    (proj / "a_test.go").write_text("package proj\n")
    (proj / "README.md").write_text("# proj\n")
    (proj / "sub" / "b.go").write_text("package sub\n")
    (proj / "src" / "main.go").write_text("package main\n")
    (proj / "src" / "vendor" / "lib.go").write_text("package vendor\n")
    return tmp_path


@pytest.fixture
def todo_tree(tmp_path: Path) -> Path:
    """Two files differing only in the case of a TODO marker."""
    (tmp_path / "lower.go").write_text("// todo: fix\n")
    (tmp_path / "upper.go").write_text("// TODO: fix\n")
    return tmp_path


def collect(
    spec: SearchSpec, diagnostics: Diagnostics | None = None
) -> list[tuple[str, bool]]:
    """Run a traversal and return every accepted ``(path, is_dir)`` pair."""
    accepted: list[tuple[str, bool]] = []
    execute(spec, lambda path, is_dir: accepted.append((path, is_dir)), diagnostics)
    return accepted


def collect_files(spec: SearchSpec, diagnostics: Diagnostics | None = None) -> list[str]:
    """Run a traversal and return accepted non-directory paths."""
    return [path for path, is_dir in collect(spec, diagnostics) if not is_dir]

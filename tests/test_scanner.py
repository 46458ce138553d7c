"""Tests for graphpc-lint file scanner."""
from __future__ import annotations

from pathlib import Path

import pytest

from graphpc_lint.scanner import scan_files
from graphpc_lint.types import LintConfig


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Create a sample project structure."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "pkg").mkdir()
    (tmp_path / "tests").mkdir()
    (tmp_path / "__pycache__").mkdir()
    (tmp_path / ".hidden").mkdir()

    (tmp_path / "main.py").write_text("# main")
    (tmp_path / "src" / "app.py").write_text("# app")
    (tmp_path / "src" / "pkg" / "module.py").write_text("# module")
    (tmp_path / "src" / "pkg" / "__init__.py").write_text("")
    (tmp_path / "tests" / "test_app.py").write_text("# test")
    (tmp_path / "__pycache__" / "cached.cpython-311.pyc").write_bytes(b"")
    (tmp_path / "__pycache__" / "module.py").write_text("# cached py")
    (tmp_path / ".hidden" / "secret.py").write_text("# hidden")

    (tmp_path / "README.md").write_text("# README")
    (tmp_path / "src" / "data.json").write_text("{}")

    return tmp_path


def test_scan_single_python_file(tmp_path: Path) -> None:
    py_file: Path = tmp_path / "api.py"
    py_file.write_text("# api")

    result: list[Path] = scan_files(paths=(py_file,), config=LintConfig())

    assert result == [py_file.resolve()]


def test_scan_ignores_non_python_files(tmp_path: Path) -> None:
    txt_file: Path = tmp_path / "notes.txt"
    txt_file.write_text("not python")

    assert scan_files(paths=(txt_file,), config=LintConfig()) == []


def test_default_excludes(sample_project: Path) -> None:
    result: list[Path] = scan_files(paths=(sample_project,), config=LintConfig())

    assert {p.name for p in result} == {
        "main.py", "app.py", "module.py", "__init__.py", "test_app.py",
    }
    for path in result:
        assert "__pycache__" not in path.parts
        assert ".hidden" not in path.parts


def test_exclude_dot_directories(sample_project: Path) -> None:
    config: LintConfig = LintConfig(include=("**/*.py",), exclude=("**/.*/**",))

    result: list[Path] = scan_files(paths=(sample_project,), config=config)

    for path in result:
        rel: Path = path.relative_to(sample_project.resolve())
        assert not any(part.startswith(".") for part in rel.parts)


def test_exclude_test_files(sample_project: Path) -> None:
    config: LintConfig = LintConfig(include=("**/*.py",), exclude=("**/test_*.py",))

    result: list[Path] = scan_files(paths=(sample_project,), config=config)

    assert not any(p.name.startswith("test_") for p in result)


def test_include_pattern_limits_files(sample_project: Path) -> None:
    config: LintConfig = LintConfig(include=("src/**/*.py",), exclude=())

    result: list[Path] = scan_files(paths=(sample_project,), config=config)

    assert {p.name for p in result} == {"app.py", "module.py", "__init__.py"}


def test_prefix_exclude(sample_project: Path) -> None:
    config: LintConfig = LintConfig(include=("**/*.py",), exclude=("src/**", "**/.*"))

    result: list[Path] = scan_files(paths=(sample_project,), config=config)

    assert "app.py" not in {p.name for p in result}
    assert "main.py" in {p.name for p in result}


def test_multiple_paths(tmp_path: Path) -> None:
    dir1: Path = tmp_path / "dir1"
    dir2: Path = tmp_path / "dir2"
    dir1.mkdir()
    dir2.mkdir()
    (dir1 / "a.py").write_text("# a")
    (dir2 / "b.py").write_text("# b")

    result: list[Path] = scan_files(paths=(dir1, dir2), config=LintConfig())

    assert {p.name for p in result} == {"a.py", "b.py"}


def test_overlapping_paths_deduplicated(tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("# a")

    result: list[Path] = scan_files(
        paths=(tmp_path, tmp_path / "a.py"), config=LintConfig(),
    )

    assert len(result) == 1


def test_results_are_sorted(tmp_path: Path) -> None:
    for name in ["z.py", "a.py", "m.py"]:
        (tmp_path / name).write_text("")

    result: list[Path] = scan_files(paths=(tmp_path,), config=LintConfig())

    names: list[str] = [p.name for p in result]
    assert names == sorted(names)


def test_empty_directory_returns_empty_list(tmp_path: Path) -> None:
    empty_dir: Path = tmp_path / "empty"
    empty_dir.mkdir()

    assert scan_files(paths=(empty_dir,), config=LintConfig()) == []

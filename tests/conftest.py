"""Pytest fixtures for graphpc-lint tests."""
from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def temp_pyproject(tmp_path: Path) -> Path:
    """Create a temporary pyproject.toml file."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[tool.graphpc-lint]
include = ["src/**/*.py"]
exclude = ["**/test_*.py"]
output_format = "json"
show_source = false
color = "never"

[tool.graphpc-lint.rules]
GPC001 = "warn"

[tool.graphpc-lint.ignores]
require_reason = false
disallow = ["GPC001"]
max_per_file = 10
"""
    )
    return config_path


@pytest.fixture
def empty_pyproject(tmp_path: Path) -> Path:
    """Create a pyproject.toml without [tool.graphpc-lint] section."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[project]
name = "test-project"
version = "0.1.0"
"""
    )
    return config_path


@pytest.fixture
def invalid_toml(tmp_path: Path) -> Path:
    """Create an invalid TOML file."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text("invalid [ toml content")
    return config_path


@pytest.fixture
def invalid_config(tmp_path: Path) -> Path:
    """Create a pyproject.toml with invalid graphpc-lint config."""
    config_path: Path = tmp_path / "pyproject.toml"
    config_path.write_text(
        """
[tool.graphpc-lint]
output_format = "invalid_format"
color = "maybe"
preset = "strict"

[tool.graphpc-lint.rules]
GPC001 = "super_error"

[tool.graphpc-lint.ignores]
disallow = ["FAKE001"]
"""
    )
    return config_path


@pytest.fixture
def node_project(tmp_path: Path) -> Path:
    """A small project with one violating and one clean graphpc module."""
    src: Path = tmp_path / "src"
    src.mkdir()
    (src / "api.py").write_text(
        "from graphpc import Node, method\n"
        "\n"
        "\n"
        "class Api(Node):\n"
        "    @method\n"
        "    async def ping(self):\n"
        "        return 'pong'\n"
        "\n"
        "    def do_stuff(self):\n"
        "        return 1\n"
    )
    (src / "clean.py").write_text(
        "from graphpc import Node, edge\n"
        "\n"
        "\n"
        "class Posts(Node):\n"
        "    @edge(int)\n"
        "    def count(self):\n"
        "        return 0\n"
    )
    return tmp_path

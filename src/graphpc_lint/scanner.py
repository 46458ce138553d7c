"""File discovery for graphpc-lint using glob patterns."""
from __future__ import annotations

import logging
from fnmatch import fnmatch
from pathlib import Path

from graphpc_lint.types import LintConfig

logger: logging.Logger = logging.getLogger(__name__)


def _matches_pattern(*, path: Path, patterns: tuple[str, ...], base: Path) -> bool:
    """Check if path matches any of the glob patterns, relative to base."""
    try:
        rel_str: str = path.relative_to(base).as_posix()
    except ValueError:
        rel_str = path.as_posix()

    return any(_glob_match(path=rel_str, pattern=pattern) for pattern in patterns)


def _glob_match(*, path: str, pattern: str) -> bool:
    """Match a posix path against a glob pattern with ** support."""
    if "**" not in pattern:
        return fnmatch(path, pattern)

    parts: list[str] = path.split("/")

    # "**/name/**": some directory component matches name
    if pattern.startswith("**/") and pattern.endswith("/**"):
        middle: str = pattern[3:-3]
        return any(fnmatch(part, middle) for part in parts[:-1])

    # "**/tail": some suffix of the path matches tail
    if pattern.startswith("**/"):
        tail: str = pattern[3:]
        return any(fnmatch("/".join(parts[i:]), tail) for i in range(len(parts)))

    # "prefix/**/tail": under prefix, then any suffix matches tail
    if "/**/" in pattern:
        prefix, tail = pattern.split("/**/", 1)
        if not path.startswith(prefix + "/"):
            return False
        rest: list[str] = path[len(prefix) + 1:].split("/")
        return any(fnmatch("/".join(rest[i:]), tail) for i in range(len(rest)))

    # "prefix/**": anything under prefix
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return path == prefix or path.startswith(prefix + "/")

    return fnmatch(path, pattern)


def _collect_python_files(*, path: Path) -> list[Path]:
    """Collect .py files at or below path."""
    if path.is_file():
        return [path] if path.suffix == ".py" else []
    if path.is_dir():
        return [p for p in path.rglob("*.py") if p.is_file()]
    return []


def _base_for(*, file_path: Path, roots: list[Path]) -> Path:
    """Directory that include/exclude patterns are evaluated against."""
    for root in roots:
        if root.is_file():
            if file_path == root:
                return root.parent
        elif file_path.is_relative_to(root):
            return root
    return file_path.parent


def scan_files(*, paths: tuple[Path, ...], config: LintConfig) -> list[Path]:
    """
    Find Python files matching include/exclude patterns.

    Args:
        paths: Root paths to scan (files or directories).
        config: Configuration with include/exclude patterns.

    Returns:
        Sorted list of Python files to lint.
    """
    roots: list[Path] = [path.resolve() for path in paths]

    selected: set[Path] = set()
    for root in roots:
        for file_path in _collect_python_files(path=root):
            base: Path = _base_for(file_path=file_path, roots=roots)

            # Exclusions take priority
            if _matches_pattern(path=file_path, patterns=config.exclude, base=base):
                logger.debug("Excluded %s", file_path)
                continue

            if _matches_pattern(path=file_path, patterns=config.include, base=base):
                selected.add(file_path)

    # Sorted for deterministic output
    return sorted(selected)

"""Diagnostic data model for graphpc-lint.

A rule reports a ``Diagnostic`` per finding. Besides the rendered ``message``
it carries the ``message_id`` and the ``data`` used to fill the template, so
JSON consumers can match on the payload instead of on English text.
"""
from __future__ import annotations

import ast
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from graphpc_lint.constants import Severity


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """1-based span; the end is optional."""

    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None

    @classmethod
    def of_node(cls, node: ast.stmt | ast.expr) -> SourceLocation:
        """Span of an AST node, converting ``ast``'s 0-based columns."""
        return cls(
            line=node.lineno,
            column=node.col_offset + 1,
            end_line=node.end_lineno,
            end_column=None if node.end_col_offset is None else node.end_col_offset + 1,
        )


@dataclass(frozen=True, slots=True)
class Diagnostic:
    file: Path
    location: SourceLocation
    code: str
    message: str
    severity: Severity
    source_line: str | None = None
    message_id: str | None = None
    data: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def sort_key(self) -> tuple[str, int, int]:
        return (str(self.file), self.location.line, self.location.column)

    def as_dict(self, *, with_source: bool) -> dict[str, Any]:
        item: dict[str, Any] = {
            "file": str(self.file),
            "line": self.location.line,
            "column": self.location.column,
            "end_line": self.location.end_line,
            "end_column": self.location.end_column,
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "message_id": self.message_id,
            "data": dict(self.data),
        }
        if with_source:
            item["source_line"] = self.source_line
        return item


@dataclass(slots=True)
class DiagnosticCollection:
    """Every diagnostic of one lint run, with per-severity tallies."""

    _items: list[Diagnostic] = field(default_factory=list)
    _tally: Counter[Severity] = field(default_factory=Counter)

    def add(self, *, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)
        self._tally[diagnostic.severity] += 1

    def add_all(self, *, diagnostics: list[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.add(diagnostic=diagnostic)

    @property
    def sorted(self) -> list[Diagnostic]:
        """Diagnostics ordered by file, then line, then column."""
        return sorted(self._items, key=lambda d: d.sort_key)

    def count(self, severity: Severity) -> int:
        return self._tally[severity]

    @property
    def error_count(self) -> int:
        return self.count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self.count(Severity.WARN)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

"""Suppression pragmas and their governance for graphpc-lint.

Three forms are recognised::

    def do_stuff(self): ...  # graphpc-lint: ignore[GPC001] because: internal
    # graphpc-lint: ignore[GPC001] because: covers the next statement
    # graphpc-lint: ignore-file[GPC001] because: whole module

A block pragma covers the statement that starts on the following line. For a
decorated function or class that may be either the first decorator line or the
``def``/``class`` line itself. A block pragma with no statement directly below
it suppresses nothing and is reported as IGN004. Text after the closing bracket
that does not start with ``because:`` is not a reason.
"""
from __future__ import annotations

import ast
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from graphpc_lint.constants import (
    IGN001_CODE,
    IGN002_CODE,
    IGN003_CODE,
    IGN004_CODE,
    Severity,
)
from graphpc_lint.diagnostics import Diagnostic, SourceLocation
from graphpc_lint.parser import ParseResult
from graphpc_lint.types import IgnoreGovernance

_PRAGMA: Final[re.Pattern[str]] = re.compile(
    r"#\s*graphpc-lint:\s*ignore(?P<file>-file)?\[(?P<codes>[^\]]+)\](?P<tail>.*)$"
)
_REASON: Final[re.Pattern[str]] = re.compile(r"^\s*because:(?P<reason>.*)$")


@dataclass(frozen=True, slots=True)
class IgnoreDirective:
    line: int
    codes: frozenset[str]
    reason: str | None
    is_file_level: bool
    is_inline: bool


@dataclass(slots=True)
class _Suppressions:
    file_codes: set[str] = field(default_factory=set)
    line_codes: dict[int, set[str]] = field(default_factory=dict)
    ranges: list[tuple[int, int, frozenset[str]]] = field(default_factory=list)
    # Block pragmas that no statement follows.
    dangling: list[IgnoreDirective] = field(default_factory=list)

    def covers(self, diag: Diagnostic) -> bool:
        line: int = diag.location.line
        if diag.code in self.file_codes:
            return True
        if diag.code in self.line_codes.get(line, ()):
            return True
        return any(
            start <= line <= end and diag.code in codes
            for start, end, codes in self.ranges
        )


def parse_ignore_directives(
    *,
    source_lines: tuple[str, ...],
) -> list[IgnoreDirective]:
    directives: list[IgnoreDirective] = []

    for line_num, line_text in enumerate(source_lines, start=1):
        match: re.Match[str] | None = _PRAGMA.search(line_text)
        if match is None:
            continue
        is_file_level: bool = match.group("file") is not None
        directives.append(IgnoreDirective(
            line=line_num,
            codes=_parse_codes(match.group("codes")),
            reason=_parse_reason(match.group("tail")),
            is_file_level=is_file_level,
            is_inline=not is_file_level and bool(line_text[:match.start()].strip()),
        ))

    return directives


def apply_ignores(
    *,
    diagnostics: list[Diagnostic],
    parse_result: ParseResult,
    governance: IgnoreGovernance,
) -> list[Diagnostic]:
    """Drop suppressed diagnostics; governance violations (IGN0xx) are prepended."""
    directives: list[IgnoreDirective] = parse_ignore_directives(
        source_lines=parse_result.source_lines,
    )
    if not directives:
        return diagnostics

    suppressions: _Suppressions = _build_suppressions(
        directives=directives,
        tree=parse_result.tree,
    )
    violations: list[Diagnostic] = _check_governance(
        directives=directives,
        dangling=suppressions.dangling,
        governance=governance,
        parse_result=parse_result,
    )

    kept: list[Diagnostic] = [
        diag for diag in diagnostics
        if not governance.may_suppress(diag.code) or not suppressions.covers(diag)
    ]
    return violations + kept


def _parse_codes(raw: str) -> frozenset[str]:
    return frozenset(c.strip().upper() for c in raw.split(",") if c.strip())


def _parse_reason(tail: str) -> str | None:
    match: re.Match[str] | None = _REASON.match(tail)
    if match is None:
        return None
    return match.group("reason").strip() or None


def _statement_ranges(*, tree: ast.Module) -> dict[int, int]:
    """Map each line a statement may be introduced on to the statement's last line.

    Decorated definitions are keyed both by their first decorator and by the
    ``def``/``class`` line.
    """
    ranges: dict[int, int] = {}
    for node in ast.walk(tree):
        if not isinstance(node, ast.stmt):
            continue
        end: int = node.end_lineno or node.lineno
        ranges.setdefault(node.lineno, end)
        if (
            isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef))
            and node.decorator_list
        ):
            ranges.setdefault(min(d.lineno for d in node.decorator_list), end)
    return ranges


def _build_suppressions(
    *,
    directives: list[IgnoreDirective],
    tree: ast.Module | None,
) -> _Suppressions:
    result: _Suppressions = _Suppressions()
    stmt_ranges: dict[int, int] | None = None

    for d in directives:
        if d.is_file_level:
            result.file_codes |= d.codes
        elif d.is_inline:
            result.line_codes.setdefault(d.line, set()).update(d.codes)
        elif tree is not None:
            if stmt_ranges is None:
                stmt_ranges = _statement_ranges(tree=tree)
            end: int | None = stmt_ranges.get(d.line + 1)
            if end is None:
                result.dangling.append(d)
            else:
                result.ranges.append((d.line + 1, end, d.codes))

    return result


def _check_governance(
    *,
    directives: list[IgnoreDirective],
    dangling: list[IgnoreDirective],
    governance: IgnoreGovernance,
    parse_result: ParseResult,
) -> list[Diagnostic]:
    file: Path = parse_result.file

    def violation(*, line: int, code: str, message: str) -> Diagnostic:
        return Diagnostic(
            file=file,
            location=SourceLocation(line=line, column=1),
            code=code,
            message=message,
            severity=Severity.ERROR,
            source_line=parse_result.line_at(line),
        )

    violations: list[Diagnostic] = []

    if governance.require_reason:
        violations.extend(
            violation(
                line=d.line,
                code=IGN001_CODE,
                message="Ignore pragma requires a reason (use 'because: ...')",
            )
            for d in directives
            if d.reason is None
        )

    for d in directives:
        for code in sorted(d.codes & governance.disallow):
            violations.append(violation(
                line=d.line,
                code=IGN002_CODE,
                message=f"Rule '{code}' cannot be ignored (disallowed by configuration)",
            ))

    if (
        governance.max_per_file is not None
        and len(directives) > governance.max_per_file
    ):
        violations.append(violation(
            line=1,
            code=IGN003_CODE,
            message=f"File has {len(directives)} ignore directives, "
            f"maximum allowed is {governance.max_per_file}",
        ))

    violations.extend(
        violation(
            line=d.line,
            code=IGN004_CODE,
            message="Ignore pragma is not directly above a statement and suppresses nothing",
        )
        for d in dangling
    )

    return violations

"""Source parsing for graphpc-lint.

Every file is parsed into a ``ParseResult`` once; rules only ever see the
resulting ``ast.Module``. Unreadable files and syntax errors are reported as
``SyntaxErrorInfo`` instead of raising.
"""
from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class SyntaxErrorInfo:
    """Syntax error details. Line/column are 1-based."""

    line: int
    column: int
    message: str
    source_line: str | None


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Result of parsing a Python file."""

    file: Path
    tree: ast.Module | None
    source: str
    source_lines: tuple[str, ...]
    syntax_error: SyntaxErrorInfo | None

    def line_at(self, line: int) -> str | None:
        """Return the 1-based source line, or None when out of range."""
        if 1 <= line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None


def _unreadable(*, file: Path, message: str) -> ParseResult:
    return ParseResult(
        file=file,
        tree=None,
        source="",
        source_lines=(),
        syntax_error=SyntaxErrorInfo(
            line=1,
            column=1,
            message=message,
            source_line=None,
        ),
    )


def split_source_lines(source: str) -> tuple[str, ...]:
    """Split on the line endings the tokenizer counts, so indices match AST line numbers.

    ``str.splitlines`` also breaks on form feeds, vertical tabs and Unicode
    separators, none of which start a new line for ``ast``.
    """
    lines: list[str] = source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(lines)


def parse_source(*, source: str, file: Path) -> ParseResult:
    """Parse in-memory source, returning AST or syntax error."""
    source_lines: tuple[str, ...] = split_source_lines(source)

    try:
        tree: ast.Module = ast.parse(source, filename=str(file))
    except SyntaxError as e:
        line: int = e.lineno if e.lineno is not None else 1
        column: int = max(1, e.offset if e.offset is not None else 1)

        source_line: str | None = None
        if 1 <= line <= len(source_lines):
            source_line = source_lines[line - 1]

        return ParseResult(
            file=file,
            tree=None,
            source=source,
            source_lines=source_lines,
            syntax_error=SyntaxErrorInfo(
                line=line,
                column=column,
                message=e.msg or "Syntax error",
                source_line=source_line,
            ),
        )
    except ValueError as e:
        # Python < 3.12 rejects null bytes with ValueError instead of SyntaxError.
        return ParseResult(
            file=file,
            tree=None,
            source=source,
            source_lines=source_lines,
            syntax_error=SyntaxErrorInfo(
                line=1,
                column=1,
                message=str(e),
                source_line=None,
            ),
        )

    return ParseResult(
        file=file,
        tree=tree,
        source=source,
        source_lines=source_lines,
        syntax_error=None,
    )


def parse_file(*, file: Path) -> ParseResult:
    """Read and parse a Python file."""
    try:
        source: str = file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        return _unreadable(file=file, message=f"Encoding error: {e}")
    except OSError as e:
        return _unreadable(file=file, message=f"Cannot read file: {e}")

    return parse_source(source=source, file=file)

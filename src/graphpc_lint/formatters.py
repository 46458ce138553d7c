"""Output formatters for graphpc-lint diagnostics."""
from __future__ import annotations

import json
from typing import Final, Protocol

import click

from graphpc_lint.constants import ColorMode, OutputFormat, Severity
from graphpc_lint.diagnostics import Diagnostic, DiagnosticCollection
from graphpc_lint.types import LintConfig

_SEVERITY_COLORS: Final[dict[Severity, str]] = {
    Severity.ERROR: "red",
    Severity.WARN: "yellow",
}


class Formatter(Protocol):
    def format(
        self,
        *,
        diagnostics: DiagnosticCollection,
        config: LintConfig,
    ) -> str: ...


class TextFormatter:
    """One ``path:line:col: SEVERITY [CODE] message`` line per diagnostic.

    Styling is emitted unless color is NEVER; ``click.echo`` strips it again
    when stdout is not a terminal.
    """

    def format(
        self,
        *,
        diagnostics: DiagnosticCollection,
        config: LintConfig,
    ) -> str:
        styled: bool = config.color != ColorMode.NEVER
        lines: list[str] = []

        for diag in diagnostics.sorted:
            lines.append(_headline(diag=diag, styled=styled))

            if config.show_source and diag.source_line is not None:
                lines.append(f"    {diag.source_line}")
                caret_pos: int = max(0, diag.location.column - 1)
                lines.append(f"    {' ' * caret_pos}^")
                lines.append("")

        return "\n".join(lines)


class JsonFormatter:
    def format(
        self,
        *,
        diagnostics: DiagnosticCollection,
        config: LintConfig,
    ) -> str:
        return json.dumps(
            [d.as_dict(with_source=config.show_source) for d in diagnostics.sorted],
            indent=2,
        )


def _headline(*, diag: Diagnostic, styled: bool) -> str:
    severity_str: str = diag.severity.value.upper()
    if styled:
        severity_str = click.style(
            severity_str,
            fg=_SEVERITY_COLORS.get(diag.severity),
            bold=True,
        )
    return (
        f"{diag.file}:{diag.location.line}:{diag.location.column}: "
        f"{severity_str} [{diag.code}] {diag.message}"
    )


def get_formatter(*, output_format: OutputFormat) -> Formatter:
    if output_format == OutputFormat.JSON:
        return JsonFormatter()
    return TextFormatter()


def format_summary(*, diagnostics: DiagnosticCollection) -> str:
    error_count: int = diagnostics.error_count
    warning_count: int = diagnostics.warning_count

    parts: list[str] = []
    if error_count > 0:
        parts.append(f"{error_count} error{'s' if error_count != 1 else ''}")
    if warning_count > 0:
        parts.append(f"{warning_count} warning{'s' if warning_count != 1 else ''}")

    if not parts:
        return "No issues found."

    return f"Found {', '.join(parts)}."

"""Lint orchestrator for graphpc-lint."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from graphpc_lint.constants import SYNTAX_ERROR_CODE, OutputFormat, Severity
from graphpc_lint.diagnostics import Diagnostic, DiagnosticCollection, SourceLocation
from graphpc_lint.formatters import Formatter, format_summary, get_formatter
from graphpc_lint.ignores import apply_ignores
from graphpc_lint.parser import ParseResult, SyntaxErrorInfo, parse_file, parse_source
from graphpc_lint.rules.base import Rule
from graphpc_lint.rules.registry import get_enabled_rules
from graphpc_lint.scanner import scan_files
from graphpc_lint.types import LintConfig

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LintResult:
    diagnostics: DiagnosticCollection
    files_checked: int
    exit_code: int


def _syntax_error_to_diagnostic(*, parse_result: ParseResult) -> Diagnostic:
    err: SyntaxErrorInfo | None = parse_result.syntax_error
    if err is None:
        raise ValueError("parse_result must have a syntax_error")
    return Diagnostic(
        file=parse_result.file,
        location=SourceLocation(line=err.line, column=err.column),
        code=SYNTAX_ERROR_CODE,
        message=err.message,
        severity=Severity.ERROR,
        source_line=err.source_line,
    )


def _check_parsed(
    *,
    parse_result: ParseResult,
    rules: list[Rule],
    config: LintConfig,
) -> list[Diagnostic]:
    """Run every rule over one parsed file and apply its ignore pragmas."""
    if parse_result.syntax_error is not None:
        logger.debug(
            "%s: not analysed, %s", parse_result.file, parse_result.syntax_error.message,
        )
        return [_syntax_error_to_diagnostic(parse_result=parse_result)]

    file_diagnostics: list[Diagnostic] = []
    for rule in rules:
        found: list[Diagnostic] = rule.check(parse_result=parse_result, config=config)
        logger.debug(
            "%s: %s produced %d diagnostics", parse_result.file, rule.code, len(found),
        )
        file_diagnostics.extend(found)

    return apply_ignores(
        diagnostics=file_diagnostics,
        parse_result=parse_result,
        governance=config.ignores,
    )


def lint_source(*, source: str, file: Path, config: LintConfig) -> list[Diagnostic]:
    """Lint in-memory source as if it were the contents of ``file``."""
    return _check_parsed(
        parse_result=parse_source(source=source, file=file),
        rules=get_enabled_rules(config=config),
        config=config,
    )


def lint_paths(*, paths: tuple[Path, ...], config: LintConfig) -> LintResult:
    started: float = time.perf_counter()
    files: list[Path] = scan_files(paths=paths, config=config)
    logger.info("Found %d files to lint", len(files))

    collection: DiagnosticCollection = DiagnosticCollection()
    rules: list[Rule] = get_enabled_rules(config=config)

    for file in files:
        logger.debug("Checking %s", file)
        collection.add_all(
            diagnostics=_check_parsed(
                parse_result=parse_file(file=file),
                rules=rules,
                config=config,
            ),
        )

    logger.info("Completed in %.3fs", time.perf_counter() - started)
    exit_code: int = 1 if collection.has_errors else 0
    return LintResult(
        diagnostics=collection,
        files_checked=len(files),
        exit_code=exit_code,
    )


def format_results(*, result: LintResult, config: LintConfig) -> str:
    formatter: Formatter = get_formatter(output_format=config.output_format)
    output: str = formatter.format(diagnostics=result.diagnostics, config=config)

    # JSON output must stay machine-readable.
    if config.output_format == OutputFormat.JSON:
        return output

    summary: str = format_summary(diagnostics=result.diagnostics)
    suffix: str = "s" if result.files_checked != 1 else ""
    file_count: str = f"Checked {result.files_checked} file{suffix}."

    parts: list[str] = []
    if output:
        parts.append(output)
    parts.append(summary)
    parts.append(file_count)

    return "\n".join(parts)

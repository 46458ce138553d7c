"""Command-line interface for graphpc-lint using Click."""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

import click

from graphpc_lint.config import load_config
from graphpc_lint.constants import (
    DEFAULT_PRESET,
    PRESETS,
    RULE_CODES,
    TOOL_NAME,
    ColorMode,
    OutputFormat,
    Severity,
    __version__,
)
from graphpc_lint.explain import RULE_CATALOG, format_rule_detail, format_rule_table
from graphpc_lint.rules.base import Rule
from graphpc_lint.rules.registry import find_rule
from graphpc_lint.runner import LintResult, format_results, lint_paths
from graphpc_lint.types import ConfigError, IgnoreGovernance, LintConfig


def config_report(*, config: LintConfig) -> dict[str, Any]:
    """The resolved settings, grouped the way ``config`` prints them."""
    governance: IgnoreGovernance = config.ignores
    return {
        "config_path": str(config.config_path) if config.config_path else None,
        "preset": config.rules.preset,
        "rules": {
            code: config.get_severity(code).value for code in sorted(RULE_CODES)
        },
        "files": {
            "include": list(config.include),
            "exclude": list(config.exclude),
        },
        "output": {
            "format": config.output_format.value,
            "color": config.color.value,
            "show_source": config.show_source,
        },
        "ignores": {
            "require_reason": governance.require_reason,
            "disallow": sorted(governance.disallow),
            "max_per_file": governance.max_per_file,
        },
    }


def format_config_text(*, config: LintConfig) -> str:
    report: dict[str, Any] = config_report(config=config)
    output: dict[str, Any] = report["output"]
    ignores: dict[str, Any] = report["ignores"]
    source: str = report["config_path"] or "built-in defaults"
    limit: Any = ignores["max_per_file"]

    lines: list[str] = [
        f"{TOOL_NAME} configuration ({source})",
        "",
        f"Preset: {report['preset']}",
        "Rules:",
    ]
    for code, severity in report["rules"].items():
        lines.append(f"  {code} ({RULE_CATALOG[code].meta.name}): {severity}")

    lines += [
        "Files:",
        f"  include {' '.join(report['files']['include'])}",
        f"  exclude {' '.join(report['files']['exclude'])}",
        f"Output: {output['format']}, color {output['color']}, "
        f"{'with source' if output['show_source'] else 'no source'}",
        "Ignore pragmas:",
        f"  reason required: {'yes' if ignores['require_reason'] else 'no'}",
        f"  never suppress: {', '.join(ignores['disallow']) or '-'}",
        f"  per-file limit: {'-' if limit is None else limit}",
    ]
    return "\n".join(lines)


def format_config_json(*, config: LintConfig) -> str:
    return json.dumps(config_report(config=config), indent=2)


def _configure_logging(*, verbose: bool, debug: bool) -> None:
    """Send log records to stderr; stdout stays reserved for lint output."""
    level: int = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(name)s: %(message)s", stream=sys.stderr)
    logging.getLogger("graphpc_lint").setLevel(level)


@click.group()
@click.version_option(version=__version__, prog_name=TOOL_NAME)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to pyproject.toml (default: nearest one above the current directory)",
)
@click.option("--verbose", is_flag=True, help="Log file counts and timing to stderr")
@click.option("--debug", is_flag=True, help="Log per-file and per-rule detail to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    config_path: Path | None,
    verbose: bool,
    debug: bool,
) -> None:
    """graphpc-lint - Catch undecorated methods on graphpc Node subclasses."""
    _configure_logging(verbose=verbose, debug=debug)

    try:
        ctx.obj = load_config(path=config_path)
    except ConfigError as e:
        location: str = f" ({e.path})" if e.path else ""
        click.echo(f"Error{location}: {e}", err=True)
        ctx.exit(1)


@cli.command()
@click.option("--validate", is_flag=True, help="Only check that the configuration loads")
@click.option("--json", "as_json", is_flag=True, help="Print the resolved configuration as JSON")
@click.pass_obj
def config(cfg: LintConfig, *, validate: bool, as_json: bool) -> None:
    """Show the resolved configuration, or just validate it."""
    if validate:
        click.echo(f"Configuration valid: {cfg.config_path or '(defaults)'}")
    elif as_json:
        click.echo(format_config_json(config=cfg))
    else:
        click.echo(format_config_text(config=cfg))


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Output format (overrides config)",
)
@click.option(
    "--color",
    type=click.Choice([c.value for c in ColorMode]),
    default=None,
    help="Color output mode (overrides config)",
)
@click.option("--show-source/--no-show-source", default=None, help="Show source code snippets")
@click.pass_context
def lint(
    ctx: click.Context,
    paths: tuple[Path, ...],
    *,
    output_format: str | None,
    color: str | None,
    show_source: bool | None,
) -> None:
    """Check Python files for undecorated Node methods (default: current directory)."""
    cfg: LintConfig = ctx.obj
    if output_format is not None:
        cfg = replace(cfg, output_format=OutputFormat(output_format))
    if color is not None:
        cfg = replace(cfg, color=ColorMode(color))
    if show_source is not None:
        cfg = replace(cfg, show_source=show_source)

    result: LintResult = lint_paths(paths=paths or (Path("."),), config=cfg)
    output: str = format_results(result=result, config=cfg)
    if output:
        click.echo(output, color=True if cfg.color is ColorMode.ALWAYS else None)
    ctx.exit(result.exit_code)


@cli.command()
@click.argument("rule_id", required=False, default=None)
@click.option("--all", "show_all", is_flag=True, help="List all rules with configured severities")
@click.pass_context
def explain(ctx: click.Context, rule_id: str | None, *, show_all: bool) -> None:
    """Show rule documentation and examples (by code or name)."""
    cfg: LintConfig = ctx.obj

    if show_all:
        click.echo(format_rule_table(
            catalog=RULE_CATALOG,
            severities={code: cfg.get_severity(code).value for code in RULE_CATALOG},
        ))
        return

    if rule_id is None:
        click.echo(f"Usage: {TOOL_NAME} explain <RULE> or {TOOL_NAME} explain --all")
        ctx.exit(1)

    rule: Rule | None = find_rule(rule_id)
    if rule is None:
        click.echo(f"Error: Unknown rule '{rule_id}'.", err=True)
        ctx.exit(1)

    click.echo(format_rule_detail(
        info=RULE_CATALOG[rule.code],
        default_severity=PRESETS[DEFAULT_PRESET].get(rule.code, Severity.OFF).value,
        configured_severity=cfg.get_severity(rule.code).value,
    ))


def main() -> None:
    """Main entry point for the graphpc-lint CLI."""
    cli()


if __name__ == "__main__":
    main()

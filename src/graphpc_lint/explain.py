"""Rule documentation catalog for the ``graphpc-lint explain`` command."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from graphpc_lint.constants import REQUIRE_DECORATOR_CODE, TOOL_NAME
from graphpc_lint.rules.base import Rule, RuleMeta
from graphpc_lint.rules.registry import all_rules


@dataclass(frozen=True, slots=True)
class RuleInfo:
    code: str
    meta: RuleMeta
    title: str
    details: str
    bad_example: str
    good_example: str
    limitations: str = ""


_EXAMPLES: Final[dict[str, tuple[str, str, str, str, str]]] = {
    REQUIRE_DECORATOR_CODE: (
        "Undecorated Node Method",
        (
            "Every public method on a class that extends graphpc's Node must\n"
            "be decorated with @edge, @method, or @hidden. The runtime refuses\n"
            "to expose undecorated methods, yet they still appear in client\n"
            "autocomplete. Constructors, properties, static/class methods and\n"
            "underscore-prefixed names are not checked."
        ),
        (
            "from graphpc import Node\n"
            "class Api(Node):\n"
            "    def ping(self): ..."
        ),
        (
            "from graphpc import Node, method\n"
            "class Api(Node):\n"
            "    @method\n"
            "    def ping(self): ..."
        ),
        (
            "Only direct subclasses (class X(Node)) are checked; a subclass of\n"
            "a Node subclass is not."
        ),
    ),
}


def _build_catalog(rules: list[Rule]) -> dict[str, RuleInfo]:
    catalog: dict[str, RuleInfo] = {}
    for rule in rules:
        title, details, bad, good, limitations = _EXAMPLES[rule.code]
        catalog[rule.code] = RuleInfo(
            code=rule.code,
            meta=rule.meta,
            title=title,
            details=details,
            bad_example=bad,
            good_example=good,
            limitations=limitations,
        )
    return catalog


RULE_CATALOG: Final[dict[str, RuleInfo]] = _build_catalog(all_rules())


def format_rule_detail(
    *, info: RuleInfo, default_severity: str, configured_severity: str,
) -> str:
    """Format a single rule's full documentation.

    ``default_severity`` is what the default preset assigns; ``configured_severity``
    is what the loaded configuration resolves to.
    """
    lines: list[str] = [
        f"{info.code} ({info.meta.name}): {info.title}",
        f"Type: {info.meta.type.value} | Default severity: {default_severity}"
        f" | Configured: {configured_severity}"
        f" | Options: {'none' if not info.meta.schema else 'yes'}",
        "",
        f"  {info.meta.description}",
        "",
    ]
    lines.extend(f"  {line}" for line in info.details.splitlines())

    lines.append("")
    lines.append("  Bad:")
    lines.extend(f"    {line}" for line in info.bad_example.splitlines())
    lines.append("  Good:")
    lines.extend(f"    {line}" for line in info.good_example.splitlines())

    if info.limitations:
        lines.append("")
        lines.append("  Limitations:")
        lines.extend(f"    {line}" for line in info.limitations.splitlines())

    if info.meta.docs_url:
        lines.extend(["", f"  Docs: {info.meta.docs_url}"])

    lines.extend([
        "",
        f"  Suppress: # {TOOL_NAME}: ignore[{info.code}] because: <reason>",
    ])

    return "\n".join(lines)


def format_rule_table(*, catalog: dict[str, RuleInfo], severities: dict[str, str]) -> str:
    """Format all rules as a summary table."""
    lines: list[str] = [
        f"{'CODE':<8} {'NAME':<20} {'SEVERITY':<10} {'TITLE'}",
        "-" * 64,
    ]
    for code in sorted(catalog):
        info: RuleInfo = catalog[code]
        severity: str = severities.get(code, "off")
        lines.append(f"{code:<8} {info.meta.name:<20} {severity:<10} {info.title}")
    return "\n".join(lines)

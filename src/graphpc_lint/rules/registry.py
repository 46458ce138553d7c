"""Rule registry for graphpc-lint."""
from __future__ import annotations

from graphpc_lint.rules.base import Rule
from graphpc_lint.rules.gpc001 import GPC001Rule
from graphpc_lint.types import LintConfig


def get_enabled_rules(*, config: LintConfig) -> list[Rule]:
    """Return rule instances that are not OFF in the given config."""
    registered: list[Rule] = _all_rules()
    return [rule for rule in registered if config.is_rule_enabled(rule.code)]


def find_rule(identifier: str) -> Rule | None:
    """Look a rule up by code (``GPC001``) or name (``require-decorator``)."""
    wanted: str = identifier.strip()
    for rule in _all_rules():
        if rule.code == wanted.upper() or rule.meta.name == wanted.lower():
            return rule
    return None


def all_rules() -> list[Rule]:
    """Return every registered rule, enabled or not."""
    return _all_rules()


def _all_rules() -> list[Rule]:
    """Return all registered rule instances."""
    rules: list[Rule] = [
        GPC001Rule(),
    ]
    return rules

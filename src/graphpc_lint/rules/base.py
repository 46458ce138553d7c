"""Rule protocol for graphpc-lint rules."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from graphpc_lint.constants import RuleType
from graphpc_lint.diagnostics import Diagnostic
from graphpc_lint.parser import ParseResult
from graphpc_lint.types import LintConfig


@dataclass(frozen=True, slots=True)
class RuleMeta:
    """Static description of a rule: its name, type and message templates."""

    name: str
    type: RuleType
    description: str
    messages: Mapping[str, str]
    docs_url: str | None = None
    # Options schema; an empty schema means the rule accepts no options.
    schema: tuple[Mapping[str, Any], ...] = ()

    def render(self, message_id: str, data: Mapping[str, str]) -> str:
        """Fill a message template's ``{placeholder}`` fields from ``data``."""
        return self.messages[message_id].format_map(data)


@runtime_checkable
class Rule(Protocol):
    """Structural interface for lint rules."""

    @property
    def code(self) -> str: ...

    @property
    def meta(self) -> RuleMeta: ...

    def check(
        self,
        *,
        parse_result: ParseResult,
        config: LintConfig,
    ) -> list[Diagnostic]: ...

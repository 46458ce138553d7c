"""GPC001: Require @edge, @method, or @hidden on public methods of Node subclasses.

The graphpc runtime rejects undecorated methods, but they still show up in
autocomplete on the client proxy. Only classes that directly extend the
imported ``Node`` are checked; subclasses of those classes are not followed.
"""
from __future__ import annotations

import ast
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Final

from graphpc_lint.bindings import ImportBinding, extends_binding, find_node_import
from graphpc_lint.constants import REQUIRE_DECORATOR_CODE, RuleType, Severity
from graphpc_lint.diagnostics import Diagnostic, SourceLocation
from graphpc_lint.members import (
    ClassMember,
    class_display_name,
    class_members,
    has_qualifying_decorator,
)
from graphpc_lint.parser import ParseResult
from graphpc_lint.rules.base import RuleMeta
from graphpc_lint.types import LintConfig

logger: logging.Logger = logging.getLogger(__name__)

MISSING_DECORATOR: Final[str] = "missing-decorator"

META: Final[RuleMeta] = RuleMeta(
    name="require-decorator",
    type=RuleType.PROBLEM,
    description="Require @edge, @method, or @hidden on public methods of Node subclasses",
    messages=MappingProxyType({
        MISSING_DECORATOR: (
            'Public method "{name}" on Node subclass "{class_name}" must be '
            "decorated with @edge, @method, or @hidden. "
            "Undecorated methods are rejected at runtime."
        ),
    }),
    docs_url="https://github.com/zenazn/graphpc/blob/main/docs/type-checking.md",
)


class GPC001Rule:
    """Detect undecorated public methods on direct Node subclasses."""

    @property
    def code(self) -> str:
        return REQUIRE_DECORATOR_CODE

    @property
    def meta(self) -> RuleMeta:
        return META

    def check(
        self,
        *,
        parse_result: ParseResult,
        config: LintConfig,
    ) -> list[Diagnostic]:
        if parse_result.tree is None:
            return []
        visitor: _Visitor = _Visitor(
            severity=config.get_severity(self.code),
            parse_result=parse_result,
        )
        visitor.visit(parse_result.tree)
        return visitor.diagnostics


class _Visitor(ast.NodeVisitor):
    """Single top-down pass: bind ``Node`` at the module, then check each class."""

    def __init__(self, *, severity: Severity, parse_result: ParseResult) -> None:
        self._severity: Severity = severity
        self._parse_result: ParseResult = parse_result
        self._file: Path = parse_result.file
        self._binding: ImportBinding | None = None
        self.diagnostics: list[Diagnostic] = []

    def visit_Module(self, node: ast.Module) -> None:
        self._binding = find_node_import(node)
        if self._binding is None:
            # Nothing in a file that never imports Node can match.
            return
        logger.debug(
            "%s: %s.%s bound as %r",
            self._file,
            self._binding.source_module,
            self._binding.imported_name,
            self._binding.local_name,
        )
        self.generic_visit(node)

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        if extends_binding(node, self._binding):
            class_name: str = class_display_name(node)
            for member in class_members(node):
                if member.is_checkable and not has_qualifying_decorator(member):
                    self._report(
                        member=member,
                        message_id=MISSING_DECORATOR,
                        data={"name": member.display_name, "class_name": class_name},
                    )
        self.generic_visit(node)

    def _report(
        self,
        *,
        member: ClassMember,
        message_id: str,
        data: Mapping[str, str],
    ) -> None:
        target: ast.FunctionDef | ast.AsyncFunctionDef = member.node
        self.diagnostics.append(
            Diagnostic(
                file=self._file,
                location=SourceLocation.of_node(target),
                code=REQUIRE_DECORATOR_CODE,
                message=META.render(message_id, data),
                severity=self._severity,
                source_line=self._parse_result.line_at(target.lineno),
                message_id=message_id,
                data=MappingProxyType(dict(data)),
            ),
        )

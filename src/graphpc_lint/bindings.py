"""Resolve the local name bound to ``graphpc.Node`` and match its direct subclasses."""
from __future__ import annotations

import ast
from dataclasses import dataclass

from graphpc_lint.constants import TRACKED_MODULE, TRACKED_SYMBOL


@dataclass(frozen=True, slots=True)
class ImportBinding:
    """Association between the imported ``Node`` and the name a module uses for it."""

    source_module: str
    imported_name: str
    local_name: str


def find_node_import(
    tree: ast.Module,
    *,
    module: str = TRACKED_MODULE,
    symbol: str = TRACKED_SYMBOL,
) -> ImportBinding | None:
    """
    Find the first top-level ``from <module> import <symbol>`` in source order.

    Only absolute ``from`` imports directly in the module body count. Star,
    relative and plain ``import graphpc`` statements never bind. Later matching
    imports are ignored once a binding is found.

    Returns:
        The binding, or None if the module never imports the symbol.
    """
    for stmt in tree.body:
        if not isinstance(stmt, ast.ImportFrom):
            continue
        if stmt.level != 0 or stmt.module != module:
            continue
        for alias in stmt.names:
            if alias.name == symbol:
                return ImportBinding(
                    source_module=module,
                    imported_name=alias.name,
                    local_name=alias.asname or alias.name,
                )
    return None


def superclass_name(node: ast.ClassDef) -> str | None:
    """Return the base class name when the class has exactly one plain-name base."""
    if len(node.bases) != 1:
        return None
    base: ast.expr = node.bases[0]
    if isinstance(base, ast.Name):
        return base.id
    return None


def extends_binding(node: ast.ClassDef, binding: ImportBinding | None) -> bool:
    """Check whether a class directly extends the bound name.

    Subclasses of subclasses are not followed.
    """
    if binding is None:
        return False
    return superclass_name(node) == binding.local_name

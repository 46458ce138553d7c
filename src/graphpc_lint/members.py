"""Classify the members of a Node subclass and inspect their decorators."""
from __future__ import annotations

import ast
from dataclasses import dataclass
from enum import Enum
from typing import Final

from graphpc_lint.constants import (
    ANONYMOUS_CLASS_LABEL,
    COMPUTED_MEMBER_LABEL,
    QUALIFYING_DECORATORS,
)

_CONSTRUCTOR_NAMES: Final[frozenset[str]] = frozenset({"__init__", "__new__"})
_GETTER_DECORATORS: Final[frozenset[str]] = frozenset({
    "property",
    "cached_property",
    "functools.cached_property",
})
_STATIC_DECORATORS: Final[frozenset[str]] = frozenset({"staticmethod", "classmethod"})


class MemberKind(Enum):
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    GETTER = "getter"
    SETTER = "setter"
    # Dunder protocol hooks such as __repr__ or __call__.
    SPECIAL = "special"


class Visibility(Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class DecoratorForm(Enum):
    """Syntactic shape of a decorator expression."""

    BARE = "bare"  # @method
    CALL = "call"  # @edge(PostsService)
    OTHER = "other"  # @graphpc.method, @registry[key], ...


@dataclass(frozen=True, slots=True)
class Decorator:
    form: DecoratorForm
    name: str | None


@dataclass(frozen=True, slots=True)
class ClassMember:
    """A method-style member of a class body."""

    display_name: str
    kind: MemberKind
    is_static: bool
    visibility: Visibility
    has_private_name: bool
    decorators: tuple[Decorator, ...]
    node: ast.FunctionDef | ast.AsyncFunctionDef

    @property
    def is_checkable(self) -> bool:
        """Only plain public instance methods must carry a graphpc decorator."""
        return (
            self.kind is MemberKind.METHOD
            and not self.is_static
            and self.visibility is Visibility.PUBLIC
            and not self.has_private_name
        )


def describe_decorator(expr: ast.expr) -> Decorator:
    """Reduce a decorator expression to its form and referenced name."""
    if isinstance(expr, ast.Name):
        return Decorator(form=DecoratorForm.BARE, name=expr.id)
    if isinstance(expr, ast.Call) and isinstance(expr.func, ast.Name):
        return Decorator(form=DecoratorForm.CALL, name=expr.func.id)
    return Decorator(form=DecoratorForm.OTHER, name=None)


def has_qualifying_decorator(
    member: ClassMember,
    *,
    names: frozenset[str] = QUALIFYING_DECORATORS,
) -> bool:
    """Check whether any decorator is a bare or called @edge/@method/@hidden.

    Call arguments are not inspected.
    """
    return any(
        d.form is not DecoratorForm.OTHER and d.name in names
        for d in member.decorators
    )


def describe_member(node: ast.FunctionDef | ast.AsyncFunctionDef) -> ClassMember:
    """Build the classification record for a function defined in a class body."""
    dotted: list[str | None] = [_dotted_name(d) for d in node.decorator_list]
    return ClassMember(
        display_name=member_display_name(node.name),
        kind=_member_kind(node, dotted=dotted),
        is_static=any(name in _STATIC_DECORATORS for name in dotted),
        visibility=_visibility(node.name),
        has_private_name=_is_mangled(node.name),
        decorators=tuple(describe_decorator(d) for d in node.decorator_list),
        node=node,
    )


def class_members(node: ast.ClassDef) -> list[ClassMember]:
    """Return the class's method-style members in declaration order."""
    return [
        describe_member(stmt)
        for stmt in node.body
        if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef))
    ]


def class_display_name(node: ast.ClassDef) -> str:
    return node.name or ANONYMOUS_CLASS_LABEL


def member_display_name(name: str | None) -> str:
    return name or COMPUTED_MEMBER_LABEL


def _member_kind(
    node: ast.FunctionDef | ast.AsyncFunctionDef,
    *,
    dotted: list[str | None],
) -> MemberKind:
    if node.name in _CONSTRUCTOR_NAMES:
        return MemberKind.CONSTRUCTOR

    for name in dotted:
        if name is None:
            continue
        if name in _GETTER_DECORATORS or name.endswith(".getter"):
            return MemberKind.GETTER
        if name.endswith((".setter", ".deleter")):
            return MemberKind.SETTER

    if _is_dunder(node.name):
        return MemberKind.SPECIAL
    return MemberKind.METHOD


def _visibility(name: str) -> Visibility:
    if _is_mangled(name):
        return Visibility.PRIVATE
    if name.startswith("_") and not _is_dunder(name):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def _dotted_name(expr: ast.expr) -> str | None:
    """Return ``a.b.c`` for a Name/Attribute chain, None for anything else."""
    if isinstance(expr, ast.Name):
        return expr.id
    if isinstance(expr, ast.Attribute):
        prefix: str | None = _dotted_name(expr.value)
        if prefix is None:
            return None
        return f"{prefix}.{expr.attr}"
    return None


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _is_mangled(name: str) -> bool:
    return name.startswith("__") and not name.endswith("__")

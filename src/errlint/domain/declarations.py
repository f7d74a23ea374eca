"""Declaration model shared by every host adapter.

The engine never touches ``ast.ClassDef`` or live enum classes directly.
Hosts describe each marked type as a :class:`TypeDescriptor` (name,
ordered fields, ordered constructors) and each member as a
:class:`ConstantDecl` (name, ordered arguments, optional syntax node).

INVARIANT: Declarations compare by identity. Two members with the same
name and arguments in two different enums are different definers.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from enum import StrEnum


class TypeKind(StrEnum):
    """Kinds of declarations a marker can sit on."""

    ENUM = "enum"
    CLASS = "class"


@dataclass(frozen=True)
class SourceLocation:
    path: str | None = None
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True)
class FieldDecl:
    """One attribute of a composite type.

    ``annotation`` is the annotation rendered as source text
    (``"int"``, ``"Optional[int]"``), or None when nothing declares a type.
    """

    name: str
    annotation: str | None = None
    is_static: bool = False


@dataclass(frozen=True)
class ParameterDecl:
    name: str
    annotation: str | None = None


@dataclass(frozen=True)
class ConstructorDecl:
    """Positional parameters of ``__init__``, without ``self``."""

    parameters: tuple[ParameterDecl, ...] = ()

    def index_of(self, name: str) -> int:
        for i, param in enumerate(self.parameters):
            if param.name == name:
                return i
        return -1


@dataclass(frozen=True, eq=False)
class TypeDescriptor:
    """Composite-type capability consumed by the resolver."""

    name: str
    kind: TypeKind = TypeKind.ENUM
    fields: tuple[FieldDecl, ...] = ()
    constructors: tuple[ConstructorDecl, ...] = ()
    location: SourceLocation = field(default_factory=SourceLocation)

    @property
    def is_class_like(self) -> bool:
        return self.kind in (TypeKind.ENUM, TypeKind.CLASS)

    @property
    def is_enum(self) -> bool:
        return self.kind is TypeKind.ENUM


@dataclass(frozen=True)
class Argument:
    """One constructor argument: its canonical text and, when the host
    has a syntax tree, the expression node it came from."""

    text: str
    node: ast.expr | None = None


@dataclass(frozen=True, eq=False)
class ConstantDecl:
    """A named enum member bound to the owner's constructor."""

    name: str
    owner: TypeDescriptor | None
    arguments: tuple[Argument, ...] = ()
    syntax: ast.expr | None = None
    location: SourceLocation = field(default_factory=SourceLocation)

    @property
    def qualified_name(self) -> str:
        if self.owner is None:
            return self.name
        return f"{self.owner.name}.{self.name}"

    def render(self) -> str:
        """Canonical textual form: ``NAME(arg0, arg1, ...)``."""
        return f"{self.name}({', '.join(arg.text for arg in self.arguments)})"


@dataclass(frozen=True)
class MarkedType:
    """A type carrying the marker, as delivered by a host.

    ``overrides`` holds the marker's keyword arguments; ``rule_errors``
    lists marker arguments the host could not read.
    """

    descriptor: TypeDescriptor
    constants: tuple[ConstantDecl, ...] = ()
    overrides: dict[str, object] = field(default_factory=dict)
    rule_errors: tuple[str, ...] = ()

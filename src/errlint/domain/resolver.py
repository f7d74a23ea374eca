"""Field and constructor-parameter resolution for enum members.

Finds the instance field that holds the error code and the position of
the matching ``__init__`` parameter. The position is what ties a member's
argument list to the field: it assumes parameter names match field names,
which is a convention, not something Python enforces.
"""

from __future__ import annotations

from dataclasses import dataclass

from errlint.domain.declarations import ConstantDecl, FieldDecl, TypeDescriptor

INTEGER_ANNOTATIONS: frozenset[str] = frozenset({"int", "builtins.int", "'int'", '"int"'})


@dataclass(frozen=True)
class FieldBinding:
    field: FieldDecl
    index: int


def owning_type(constant: ConstantDecl) -> TypeDescriptor | None:
    """Return the class-like type enclosing *constant*, or None."""
    owner = constant.owner
    if owner is None or not owner.is_class_like:
        return None
    return owner


def resolve_field(constant: ConstantDecl, field_name: str) -> FieldDecl | None:
    """Find the first non-static field named *field_name* on the owner."""
    owner = owning_type(constant)
    if owner is None:
        return None
    for candidate in owner.fields:
        if candidate.name == field_name and not candidate.is_static:
            return candidate
    return None


def resolve_parameter_index(constant: ConstantDecl, field_name: str) -> int:
    """Zero-based position of the constructor parameter named *field_name*.

    Uses the first constructor declared on the owner. Returns -1 when the
    owner, the constructor, or the parameter is missing.
    """
    owner = owning_type(constant)
    if owner is None or not owner.constructors:
        return -1
    return owner.constructors[0].index_of(field_name)


def resolve_binding(constant: ConstantDecl, field_name: str) -> FieldBinding | None:
    found = resolve_field(constant, field_name)
    if found is None:
        return None
    return FieldBinding(field=found, index=resolve_parameter_index(constant, field_name))


def is_integer_field(field: FieldDecl | None) -> bool:
    """True only for fields annotated as plain ``int``."""
    if field is None or field.annotation is None:
        return False
    return field.annotation.strip() in INTEGER_ANNOTATIONS

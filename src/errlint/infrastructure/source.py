"""Source host — marked enums discovered with the ``ast`` module.

Turns each class decorated with the marker into a :class:`MarkedType`
whose members keep their syntax nodes, so the structured extraction
strategy can read literals directly.

Enum detection is syntactic: a class is an enum when one of its bases is
named like a stdlib enum type (``Enum``, ``IntEnum``, ``StrEnum``, ``Flag``,
``IntFlag``, ``ReprEnum``) or ends in ``Enum``. Imported aliases with other
names are not followed.
"""

from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from errlint.domain.declarations import (
    Argument,
    ConstantDecl,
    ConstructorDecl,
    FieldDecl,
    MarkedType,
    ParameterDecl,
    SourceLocation,
    TypeDescriptor,
    TypeKind,
)
from errlint.domain.diagnostics import Diagnostic, for_source
from errlint.domain.messages import PARSE_ERROR
from errlint.domain.rules import RULE_KEYS
from errlint.marker import MARKER_NAME

ENUM_BASES: frozenset[str] = frozenset(
    {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag", "ReprEnum"}
)


@dataclass(frozen=True)
class SourceScan:
    """Everything one file contributed to a round."""

    path: str
    types: tuple[MarkedType, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


def scan_file(path: Path, *, marker_names: Iterable[str] = (MARKER_NAME,)) -> SourceScan:
    """Read and scan one ``.py`` file. Unreadable files become diagnostics."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return SourceScan(
            str(path),
            diagnostics=(for_source(PARSE_ERROR, str(path), path=str(path), detail=exc),),
        )
    return scan_source(text, str(path), marker_names=marker_names)


def scan_source(
    text: str,
    path: str = "<string>",
    *,
    marker_names: Iterable[str] = (MARKER_NAME,),
) -> SourceScan:
    """Parse *text* and collect every marked class, nested ones included."""
    try:
        tree = ast.parse(text, filename=path)
    except (SyntaxError, ValueError) as exc:
        return SourceScan(path, diagnostics=(for_source(PARSE_ERROR, path, path=path, detail=exc),))

    names = frozenset(marker_names)
    classes = [node for node in ast.walk(tree) if isinstance(node, ast.ClassDef)]
    classes.sort(key=lambda node: (node.lineno, node.col_offset))

    types: list[MarkedType] = []
    for node in classes:
        marker = _find_marker(node, names)
        if marker is None:
            continue
        overrides, errors = _read_overrides(marker)
        descriptor = describe_class(node, path)
        types.append(
            MarkedType(
                descriptor=descriptor,
                constants=_members(node, descriptor, path),
                overrides=overrides,
                rule_errors=tuple(errors),
            )
        )
    return SourceScan(path, types=tuple(types))


# ---------------------------------------------------------------------------
# Marker
# ---------------------------------------------------------------------------


def _terminal_name(node: ast.expr) -> str | None:
    """``Name`` -> id, ``a.b.Name`` -> ``Name``, anything else -> None."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _find_marker(node: ast.ClassDef, names: frozenset[str]) -> ast.expr | None:
    for decorator in node.decorator_list:
        target = decorator.func if isinstance(decorator, ast.Call) else decorator
        if _terminal_name(target) in names:
            return decorator
    return None


def _read_overrides(marker: ast.expr) -> tuple[dict[str, object], list[str]]:
    if not isinstance(marker, ast.Call):
        return {}, []
    overrides: dict[str, object] = {}
    errors: list[str] = []
    if marker.args:
        errors.append("positional arguments are not supported")
    for keyword in marker.keywords:
        if keyword.arg is None:
            errors.append("'**' unpacking is not supported")
            continue
        if keyword.arg not in RULE_KEYS:
            errors.append(f"unknown argument '{keyword.arg}'")
            continue
        try:
            value = ast.literal_eval(keyword.value)
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError):
            errors.append(f"'{keyword.arg}' must be a literal, got {ast.unparse(keyword.value)}")
            continue
        if value is None:
            continue
        if keyword.arg == "exclude_values" and isinstance(value, (list, set, frozenset)):
            value = tuple(value)
        overrides[keyword.arg] = value
    return overrides, errors


# ---------------------------------------------------------------------------
# Type shape
# ---------------------------------------------------------------------------


def _is_enum(node: ast.ClassDef) -> bool:
    for base in node.bases:
        name = _terminal_name(base)
        if name is not None and (name in ENUM_BASES or name.endswith("Enum")):
            return True
    return False


def _is_classvar(annotation: ast.expr) -> bool:
    target = annotation.value if isinstance(annotation, ast.Subscript) else annotation
    if isinstance(target, ast.Constant) and isinstance(target.value, str):
        return target.value.lstrip().startswith(("ClassVar", "typing.ClassVar"))
    return _terminal_name(target) == "ClassVar"


def _first_init(node: ast.ClassDef) -> ast.FunctionDef | None:
    for stmt in node.body:
        if isinstance(stmt, ast.FunctionDef) and stmt.name == "__init__":
            return stmt
    return None


def _positional(init: ast.FunctionDef) -> list[ast.arg]:
    return [*init.args.posonlyargs, *init.args.args]


def _parameters(init: ast.FunctionDef) -> tuple[ParameterDecl, ...]:
    return tuple(
        ParameterDecl(arg.arg, ast.unparse(arg.annotation) if arg.annotation else None)
        for arg in _positional(init)[1:]
    )


def _class_fields(node: ast.ClassDef) -> list[tuple[int, FieldDecl]]:
    found: list[tuple[int, FieldDecl]] = []
    for stmt in node.body:
        if not isinstance(stmt, ast.AnnAssign) or not isinstance(stmt.target, ast.Name):
            continue
        is_static = _is_classvar(stmt.annotation)
        # Annotated assignments with a value are members unless ClassVar.
        if stmt.value is not None and not is_static:
            continue
        found.append(
            (stmt.lineno, FieldDecl(stmt.target.id, ast.unparse(stmt.annotation), is_static))
        )
    return found


def _init_fields(
    init: ast.FunctionDef, parameters: tuple[ParameterDecl, ...]
) -> list[tuple[int, FieldDecl]]:
    positional = _positional(init)
    if not positional:
        return []
    self_name = positional[0].arg
    param_annotations = {param.name: param.annotation for param in parameters}

    def self_attr(target: ast.expr) -> str | None:
        if (
            isinstance(target, ast.Attribute)
            and isinstance(target.value, ast.Name)
            and target.value.id == self_name
        ):
            return target.attr
        return None

    def bound_annotation(value: ast.expr | None) -> str | None:
        if isinstance(value, ast.Name):
            return param_annotations.get(value.id)
        return None

    found: list[tuple[int, FieldDecl]] = []
    for stmt in ast.walk(init):
        if isinstance(stmt, ast.AnnAssign):
            name = self_attr(stmt.target)
            if name is not None:
                found.append((stmt.lineno, FieldDecl(name, ast.unparse(stmt.annotation))))
        elif isinstance(stmt, ast.Assign):
            for target in stmt.targets:
                pairs: list[tuple[ast.expr, ast.expr | None]]
                if isinstance(target, ast.Tuple):
                    values = stmt.value.elts if isinstance(stmt.value, ast.Tuple) else []
                    if len(values) != len(target.elts):
                        values = [None] * len(target.elts)
                    pairs = list(zip(target.elts, values))
                else:
                    pairs = [(target, stmt.value)]
                for element, value in pairs:
                    name = self_attr(element)
                    if name is not None:
                        found.append((stmt.lineno, FieldDecl(name, bound_annotation(value))))
    return found


def describe_class(node: ast.ClassDef, path: str) -> TypeDescriptor:
    """Build the resolver-facing descriptor of a class definition."""
    init = _first_init(node)
    parameters = _parameters(init) if init is not None else ()
    fields = _class_fields(node)
    if init is not None:
        fields.extend(_init_fields(init, parameters))
    fields.sort(key=lambda item: item[0])
    return TypeDescriptor(
        name=node.name,
        kind=TypeKind.ENUM if _is_enum(node) else TypeKind.CLASS,
        fields=tuple(decl for _, decl in fields),
        constructors=(ConstructorDecl(parameters),) if init is not None else (),
        location=SourceLocation(path, node.lineno, node.col_offset + 1),
    )


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


def _ignored_names(node: ast.ClassDef) -> frozenset[str]:
    """Names listed in an ``_ignore_`` assignment."""
    for stmt in node.body:
        if (
            isinstance(stmt, ast.Assign)
            and len(stmt.targets) == 1
            and isinstance(stmt.targets[0], ast.Name)
            and stmt.targets[0].id == "_ignore_"
        ):
            try:
                value = ast.literal_eval(stmt.value)
            except (ValueError, TypeError, SyntaxError):
                return frozenset()
            if isinstance(value, str):
                return frozenset(value.replace(",", " ").split())
            if isinstance(value, (list, tuple)):
                return frozenset(str(item) for item in value)
    return frozenset()


def _is_nonmember(value: ast.expr) -> bool:
    return isinstance(value, ast.Call) and _terminal_name(value.func) == "nonmember"


def _members(node: ast.ClassDef, owner: TypeDescriptor, path: str) -> tuple[ConstantDecl, ...]:
    ignored = _ignored_names(node)
    members: list[ConstantDecl] = []
    for stmt in node.body:
        if (
            isinstance(stmt, ast.Assign)
            and len(stmt.targets) == 1
            and isinstance(stmt.targets[0], ast.Name)
        ):
            name, value = stmt.targets[0].id, stmt.value
        elif (
            isinstance(stmt, ast.AnnAssign)
            and stmt.value is not None
            and isinstance(stmt.target, ast.Name)
            and not _is_classvar(stmt.annotation)
        ):
            name, value = stmt.target.id, stmt.value
        else:
            continue
        if (name.startswith("_") and name.endswith("_")) or name in ignored:
            continue
        if _is_nonmember(value):
            continue
        elements = value.elts if isinstance(value, ast.Tuple) else [value]
        members.append(
            ConstantDecl(
                name=name,
                owner=owner,
                arguments=tuple(Argument(ast.unparse(element), element) for element in elements),
                syntax=value,
                location=SourceLocation(path, stmt.lineno, stmt.col_offset + 1),
            )
        )
    return tuple(members)

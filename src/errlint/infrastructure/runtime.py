"""Runtime host — marked enums discovered by importing modules.

Used when the source is not at hand (installed packages, generated
modules). Only symbol information is available here: members carry no
syntax nodes, so extraction always relies on the textual strategies over
``NAME(repr(arg0), repr(arg1), ...)``.
"""

from __future__ import annotations

import ast
import enum
import importlib
import inspect
import logging
import textwrap
import typing
from dataclasses import dataclass
from types import ModuleType
from typing import Any

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
from errlint.domain.messages import IMPORT_ERROR
from errlint.marker import MARKER_ATTR

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class ModuleScan:
    module: str
    types: tuple[MarkedType, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


def scan_module(module_name: str) -> ModuleScan:
    """Import *module_name* and collect the marked classes it defines."""
    try:
        module = importlib.import_module(module_name)
    except (Exception, SystemExit) as exc:
        logger.debug("Import of %s failed", module_name, exc_info=True)
        return ModuleScan(
            module_name,
            diagnostics=(for_source(IMPORT_ERROR, module_name, module=module_name, detail=exc),),
        )
    return ModuleScan(module_name, types=tuple(marked_types(module)))


def marked_types(module: ModuleType) -> list[MarkedType]:
    found: list[MarkedType] = []
    for obj in vars(module).values():
        if not inspect.isclass(obj) or obj.__module__ != module.__name__:
            continue
        if MARKER_ATTR not in vars(obj):
            continue
        found.append(describe_marked(obj))
    found.sort(key=lambda marked: marked.descriptor.location.line or 0)
    return found


def describe_marked(cls: type) -> MarkedType:
    descriptor = describe_type(cls)
    overrides = dict(vars(cls).get(MARKER_ATTR) or {})
    return MarkedType(descriptor=descriptor, constants=_members(cls, descriptor), overrides=overrides)


# ---------------------------------------------------------------------------
# Type shape
# ---------------------------------------------------------------------------


def _annotation_text(annotation: Any) -> str:
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, type):
        return annotation.__name__
    return repr(annotation).removeprefix("typing.")


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.lstrip().startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _class_source(cls: type) -> tuple[ast.ClassDef, str | None, int, int] | None:
    """Re-parse the definition of *cls*.

    Returns the class node with the file path and the line and column
    offsets that map node positions back into that file.
    """
    try:
        path = inspect.getsourcefile(cls)
        lines, start = inspect.getsourcelines(cls)
        tree = ast.parse(textwrap.dedent("".join(lines)))
    except (OSError, TypeError, SyntaxError):
        return None
    if not tree.body or not isinstance(tree.body[0], ast.ClassDef):
        return None
    margin = len(lines[0]) - len(lines[0].lstrip())
    return tree.body[0], path, start - 1, margin


def _location(cls: type) -> SourceLocation:
    parsed = _class_source(cls)
    if parsed is None:
        return SourceLocation(path=cls.__module__)
    node, path, line_offset, margin = parsed
    return SourceLocation(path, node.lineno + line_offset, node.col_offset + margin + 1)


def _member_locations(cls: type) -> dict[str, SourceLocation]:
    parsed = _class_source(cls)
    if parsed is None:
        return {}
    node, path, line_offset, margin = parsed
    found: dict[str, SourceLocation] = {}
    for stmt in node.body:
        if isinstance(stmt, ast.Assign):
            targets = stmt.targets
        elif isinstance(stmt, ast.AnnAssign):
            targets = [stmt.target]
        else:
            continue
        for target in targets:
            if isinstance(target, ast.Name):
                found.setdefault(
                    target.id,
                    SourceLocation(path, stmt.lineno + line_offset, stmt.col_offset + margin + 1),
                )
    return found


def _constructor(cls: type) -> ConstructorDecl | None:
    init = vars(cls).get("__init__")
    if init is None or not callable(init):
        return None
    try:
        signature = inspect.signature(init)
    except (TypeError, ValueError):
        return None
    positional = [p for p in signature.parameters.values() if p.kind in _POSITIONAL]
    return ConstructorDecl(
        tuple(
            ParameterDecl(
                p.name,
                None if p.annotation is inspect.Parameter.empty else _annotation_text(p.annotation),
            )
            for p in positional[1:]
        )
    )


def describe_type(cls: type) -> TypeDescriptor:
    constructor = _constructor(cls)
    fields: list[FieldDecl] = []
    seen: set[str] = set()
    for name, annotation in inspect.get_annotations(cls).items():
        fields.append(FieldDecl(name, _annotation_text(annotation), _is_classvar(annotation)))
        seen.add(name)

    # Instance attributes set by __init__ show up on the members themselves.
    params = {p.name: p.annotation for p in constructor.parameters} if constructor else {}
    sample = next(iter(cls), None) if isinstance(cls, enum.EnumMeta) else None
    if sample is not None:
        for name in vars(sample):
            if name.startswith("_") or name in seen:
                continue
            fields.append(FieldDecl(name, params.get(name)))
            seen.add(name)

    return TypeDescriptor(
        name=cls.__name__,
        kind=TypeKind.ENUM if isinstance(cls, enum.EnumMeta) else TypeKind.CLASS,
        fields=tuple(fields),
        constructors=(constructor,) if constructor else (),
        location=_location(cls),
    )


def _members(cls: type, owner: TypeDescriptor) -> tuple[ConstantDecl, ...]:
    if not isinstance(cls, enum.EnumMeta):
        return ()
    locations = _member_locations(cls)
    members: list[ConstantDecl] = []
    for name, member in cls.__members__.items():
        value = member.value
        values = value if type(value) is tuple else (value,)
        members.append(
            ConstantDecl(
                name=name,
                owner=owner,
                arguments=tuple(Argument(repr(item)) for item in values),
                location=locations.get(name, SourceLocation(path=owner.location.path)),
            )
        )
    return tuple(members)

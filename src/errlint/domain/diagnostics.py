"""Diagnostic model emitted by the checker."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from errlint.domain.declarations import ConstantDecl, SourceLocation, TypeDescriptor
from errlint.domain.messages import format_message

Severity = Literal["error", "warning"]


class Diagnostic(BaseModel):
    """One finding attached to a declaration.

    Attributes:
        code: Stable identifier from :mod:`errlint.domain.messages`.
        target: Qualified name of the declaration (``Owner.MEMBER``),
            or the file/module for host-level failures.
        related: Qualified name of the earlier definer for duplicates.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    target: str
    severity: Severity = "error"
    path: str | None = None
    line: int | None = None
    column: int | None = None
    related: str | None = None

    @property
    def location(self) -> str:
        parts = [self.path or "<unknown>"]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


def _at(location: SourceLocation) -> dict[str, object]:
    return {"path": location.path, "line": location.line, "column": location.column}


def for_constant(
    code: str,
    constant: ConstantDecl,
    *,
    message: str | None = None,
    related: str | None = None,
    **fields: object,
) -> Diagnostic:
    """Build an error attached to an enum member."""
    return Diagnostic(
        code=code,
        message=message if message is not None else format_message(code, **fields),
        target=constant.qualified_name,
        related=related,
        **_at(constant.location),
    )


def for_type(code: str, descriptor: TypeDescriptor, **fields: object) -> Diagnostic:
    """Build an error attached to a marked type."""
    return Diagnostic(
        code=code,
        message=format_message(code, **fields),
        target=descriptor.name,
        **_at(descriptor.location),
    )


def for_source(code: str, target: str, *, path: str | None = None, **fields: object) -> Diagnostic:
    """Build an error attached to a whole file or module."""
    return Diagnostic(code=code, message=format_message(code, **fields), target=target, path=path)

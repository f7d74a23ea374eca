"""Tests for the import-based runtime host."""

from __future__ import annotations

from collections.abc import Callable

from errlint.domain.declarations import TypeKind
from errlint.domain.messages import IMPORT_ERROR
from errlint.infrastructure.runtime import scan_module

ENUM_MODULE = """\
from enum import Enum

from errlint import valid_error_code


@valid_error_code(prefix="2001", length=6)
class ErrorCode(Enum):
    SUCCESS = (0, "ok")
    NOT_FOUND = (200101, "Not found")
    MISSING = (200101, "Alias of NOT_FOUND")

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message


class Unmarked(Enum):
    A = 1
"""


class TestScanModule:
    def test_marked_enum_found(self, importable: Callable[[str, str], str]) -> None:
        name = importable("codes_basic", ENUM_MODULE)
        scan = scan_module(name)
        assert scan.diagnostics == ()
        (marked,) = scan.types
        assert marked.descriptor.name == "ErrorCode"
        assert marked.descriptor.kind is TypeKind.ENUM
        assert marked.overrides == {"prefix": "2001", "length": 6}

    def test_fields_from_member_attributes(self, importable: Callable[[str, str], str]) -> None:
        scan = scan_module(importable("codes_fields", ENUM_MODULE))
        descriptor = scan.types[0].descriptor
        fields = {f.name: f.annotation for f in descriptor.fields}
        assert fields["code"] == "int"
        assert fields["message"] == "str"
        assert [p.name for p in descriptor.constructors[0].parameters] == ["code", "message"]

    def test_members_render_values_without_syntax(
        self, importable: Callable[[str, str], str]
    ) -> None:
        scan = scan_module(importable("codes_members", ENUM_MODULE))
        constants = scan.types[0].constants
        assert [c.name for c in constants] == ["SUCCESS", "NOT_FOUND", "MISSING"]
        assert constants[1].render() == "NOT_FOUND(200101, 'Not found')"
        assert all(c.syntax is None for c in constants)

    def test_plain_class_marked(self, importable: Callable[[str, str], str]) -> None:
        name = importable(
            "codes_plain",
            """\
            from errlint import valid_error_code


            @valid_error_code()
            class NotAnEnum:
                code: int
            """,
        )
        (marked,) = scan_module(name).types
        assert marked.descriptor.kind is TypeKind.CLASS
        assert marked.constants == ()

    def test_import_failure(self) -> None:
        scan = scan_module("errlint_no_such_module_here")
        assert scan.types == ()
        (diagnostic,) = scan.diagnostics
        assert diagnostic.code == IMPORT_ERROR
        assert "errlint_no_such_module_here" in diagnostic.message

    def test_module_raising_on_import(self, importable: Callable[[str, str], str]) -> None:
        name = importable("codes_broken", "raise RuntimeError('boom')\n")
        (diagnostic,) = scan_module(name).diagnostics
        assert diagnostic.code == IMPORT_ERROR
        assert "boom" in diagnostic.message

    def test_module_exiting_on_import(self, importable: Callable[[str, str], str]) -> None:
        name = importable("codes_script", "import sys\nsys.exit(2)\n")
        (diagnostic,) = scan_module(name).diagnostics
        assert diagnostic.code == IMPORT_ERROR

    def test_member_locations(self, importable: Callable[[str, str], str]) -> None:
        (marked,) = scan_module(importable("codes_lines", ENUM_MODULE)).types
        assert marked.descriptor.location.line == 7
        positions = [(c.location.line, c.location.column) for c in marked.constants]
        assert positions == [(8, 5), (9, 5), (10, 5)]
        assert marked.constants[0].location.path == marked.descriptor.location.path

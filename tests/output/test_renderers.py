"""Tests for operation-specific Rich renderers."""

from errlint.output.renderers import format_location, render_quiet, render_result
from errlint.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _diagnostic(code: str, message: str, line: int) -> dict[str, object]:
    return {
        "code": code,
        "message": message,
        "target": "ErrorCode.C",
        "severity": "error",
        "path": "errors.py",
        "line": line,
        "column": 5,
    }


def _code(code: str, definer: str, *, excluded: bool = False) -> dict[str, object]:
    return {
        "code": code,
        "definer": definer,
        "strategy": "syntax_tree",
        "excluded": excluded,
        "path": "errors.py",
        "line": 3,
    }


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check",
            error=ServiceError(code="PATH_NOT_FOUND", message="Path does not exist: x"),
        )
        output = render_result(result)
        assert "ERROR" in output
        assert "check" in output
        assert "Path does not exist: x" in output

    def test_verbose_shows_detail(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check",
            error=ServiceError(code="E", message="Bad", detail={"path": "x"}),
        )
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "path: x" in output

    def test_no_error_object(self) -> None:
        output = render_result(ServiceResult(ok=False, op="check"))
        assert "Unknown error" in output


# ── Check renderer ───────────────────────────────────────────────────


class TestCheckRenderer:
    def test_clean(self) -> None:
        output = render_result(_ok("check", diagnostics=[], types_checked=2, constants_checked=7))
        assert "OK" in output
        assert "No issues found (2 types, 7 constants)" in output

    def test_table_and_totals(self) -> None:
        result = _ok(
            "check",
            diagnostics=[
                _diagnostic("LENGTH_MISMATCH", "too short", 6),
                _diagnostic("PREFIX_MISMATCH", "bad prefix", 6),
            ],
            error_count=2,
            warning_count=0,
            types_checked=1,
            constants_checked=4,
        )
        output = render_result(result)
        assert "errors.py:6:5" in output
        assert "LENGTH_MISMATCH" in output
        assert "bad prefix" in output
        assert "2 errors, 0 warnings (1 types, 4 constants)" in output
        assert "ErrorCode.C" not in output

    def test_verbose_adds_target(self) -> None:
        result = _ok("check", diagnostics=[_diagnostic("LENGTH_MISMATCH", "too short", 6)])
        assert "ErrorCode.C" in render_result(result, verbose=True)

    def test_brackets_are_not_markup(self) -> None:
        diagnostic = {
            **_diagnostic("FIELD_NOT_FOUND", "Field '[/x]' missing", 3),
            "path": "app/[id]/e.py",
        }
        output = render_result(_ok("check", diagnostics=[diagnostic]))
        assert "app/[id]/e.py:3:5" in output
        assert "Field '[/x]' missing" in output


# ── Codes renderer ───────────────────────────────────────────────────


class TestCodesRenderer:
    def test_table(self) -> None:
        result = _ok(
            "codes",
            codes=[_code("0", "ErrorCode.OK", excluded=True), _code("11220001", "ErrorCode.A")],
        )
        output = render_result(result)
        assert "OK" in output
        assert "0 (excluded)" in output
        assert "11220001" in output
        assert "ErrorCode.A" in output
        assert "syntax_tree" not in output

    def test_verbose_shows_strategy(self) -> None:
        result = _ok("codes", codes=[_code("11220001", "ErrorCode.A")])
        assert "syntax_tree" in render_result(result, verbose=True)

    def test_brackets_are_not_markup(self) -> None:
        entry = {**_code("11220001", "Codes.[bold]A"), "path": "app/[id]/e.py"}
        output = render_result(_ok("codes", codes=[entry]))
        assert "Codes.[bold]A" in output
        assert "app/[id]/e.py:3" in output

    def test_hidden_errors_hint(self) -> None:
        result = _ok("codes", codes=[_code("11220001", "ErrorCode.A")], error_count=3)
        assert "errlint check" in render_result(result)

    def test_empty(self) -> None:
        assert "No error codes found" in render_result(_ok("codes", codes=[]))


# ── Generic + quiet ──────────────────────────────────────────────────


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("other", answer=42))
        assert "other" in output
        assert "answer: 42" in output


class TestQuiet:
    def test_codes_skip_excluded(self) -> None:
        result = _ok(
            "codes",
            codes=[_code("0", "ErrorCode.OK", excluded=True), _code("11220001", "ErrorCode.A")],
        )
        assert render_quiet(result) == "11220001 ErrorCode.A"

    def test_unknown_op(self) -> None:
        assert render_quiet(_ok("other")) == "OK: other"


class TestFormatLocation:
    def test_full(self) -> None:
        assert format_location({"path": "a.py", "line": 3, "column": 7}) == "a.py:3:7"

    def test_falls_back_to_target(self) -> None:
        assert format_location({"path": None, "target": "pkg.mod"}) == "pkg.mod"

    def test_line_without_column(self) -> None:
        assert format_location({"path": "a.py", "line": 3}) == "a.py:3"

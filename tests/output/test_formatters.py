"""Tests for the format_result dispatcher and OutputSettings."""

import json

import pytest
from pydantic import ValidationError

from errlint.output.formatters import OutputSettings, format_result
from errlint.services.result import ServiceError, ServiceResult


def _check(*diagnostics: dict[str, object]) -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="check",
        data={
            "diagnostics": list(diagnostics),
            "count": len(diagnostics),
            "error_count": len(diagnostics),
            "warning_count": 0,
        },
    )


def _err(op: str = "check", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="ERR", message=msg))


DUPLICATE = {
    "code": "DUPLICATE_CODE",
    "message": "Duplicate error code 11220001",
    "target": "ErrorCode.B",
    "severity": "error",
    "path": "errors.py",
    "line": 9,
    "column": 5,
}


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False

    def test_frozen(self) -> None:
        s = OutputSettings(json_output=True)
        with pytest.raises(ValidationError):
            s.quiet = True  # type: ignore[misc]


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_check(DUPLICATE), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "check"
        assert data["data"]["diagnostics"][0]["target"] == "ErrorCode.B"

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(
            _check(), settings=OutputSettings(json_output=True, quiet=True)
        )
        assert json.loads(output)["op"] == "check"

    def test_json_mode_error(self) -> None:
        output = format_result(_err(msg="Bad"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is False
        assert data["error"]["message"] == "Bad"


class TestFormatResultQuiet:
    def test_quiet_lines(self) -> None:
        output = format_result(_check(DUPLICATE), settings=OutputSettings(quiet=True))
        assert output == "errors.py:9:5: DUPLICATE_CODE Duplicate error code 11220001"

    def test_quiet_clean_check_is_empty(self) -> None:
        assert format_result(_check(), settings=OutputSettings(quiet=True)) == ""

    def test_quiet_error(self) -> None:
        output = format_result(_err(msg="Bad input"), settings=OutputSettings(quiet=True))
        assert output == "ERROR: check: Bad input"


class TestFormatResultHuman:
    def test_default_settings(self) -> None:
        output = format_result(_check())
        assert "No issues found" in output
        assert not output.startswith("{")

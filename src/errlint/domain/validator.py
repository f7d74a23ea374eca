"""Format rules for extracted error codes.

Both rules run on the minimal decimal rendering of the value and are
evaluated independently, so one value can break length and prefix at once.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from errlint.domain.messages import LENGTH_MISMATCH, PREFIX_MISMATCH, format_message
from errlint.domain.rules import CodeRules


def render_code(value: int) -> str:
    """Canonical code string: no leading zeros, ``-`` kept for negatives."""
    return str(value)


@dataclass(frozen=True)
class LengthMismatch:
    field_name: str
    expected_length: int
    actual_length: int
    rendered: str

    code = LENGTH_MISMATCH

    @property
    def message(self) -> str:
        return format_message(
            self.code,
            field=self.field_name,
            expected=self.expected_length,
            actual=self.actual_length,
            rendered=self.rendered,
        )


@dataclass(frozen=True)
class PrefixMismatch:
    field_name: str
    expected_prefix: str
    rendered: str
    value: int

    code = PREFIX_MISMATCH

    @property
    def message(self) -> str:
        return format_message(
            self.code,
            field=self.field_name,
            prefix=self.expected_prefix,
            rendered=self.rendered,
            value=self.value,
        )


FormatViolation = LengthMismatch | PrefixMismatch


def validate_format(value: int, rules: CodeRules) -> list[FormatViolation]:
    rendered = render_code(value)
    violations: list[FormatViolation] = []
    if len(rendered) != rules.length:
        violations.append(LengthMismatch(rules.code_field, rules.length, len(rendered), rendered))
    if not rendered.startswith(rules.prefix):
        violations.append(PrefixMismatch(rules.code_field, rules.prefix, rendered, value))
    return violations


def should_exclude(value: int | None, exclude_values: Iterable[int] | None) -> bool:
    """True when *value* is present and listed in *exclude_values*."""
    if value is None or exclude_values is None:
        return False
    return any(value == excluded for excluded in exclude_values)

"""Numbering rules applied to one marked enum.

Defaults match the marker's defaults: prefix ``1122``, eight digits, the
``code`` field, and ``0`` (usually "success") excluded from validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

RULE_KEYS: frozenset[str] = frozenset({"prefix", "length", "code_field", "exclude_values"})


class CodeRules(BaseModel):
    """Immutable rule set for one composite type."""

    model_config = {"frozen": True, "extra": "forbid"}

    prefix: str = "1122"
    length: int = Field(default=8, ge=1)
    code_field: str = "code"
    exclude_values: tuple[int, ...] = (0,)

    @field_validator("exclude_values", mode="before")
    @classmethod
    def _coerce_exclude_values(cls, value: Any) -> Any:
        """Accept any iterable of ints (lists from TOML, sets from decorators)."""
        if isinstance(value, int) and not isinstance(value, bool):
            return (value,)
        if isinstance(value, (set, frozenset)):
            return tuple(sorted(value))
        return value

    def merged(self, overrides: dict[str, Any]) -> CodeRules:
        """Return a validated copy with *overrides* applied.

        Raises ``pydantic.ValidationError`` when an override has the wrong
        type or names an unknown rule.
        """
        if not overrides:
            return self
        return CodeRules.model_validate({**self.model_dump(), **overrides})

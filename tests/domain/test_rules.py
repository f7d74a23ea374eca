"""Tests for CodeRules — defaults, coercion and overrides."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from errlint.domain.rules import RULE_KEYS, CodeRules


class TestDefaults:
    def test_defaults(self) -> None:
        rules = CodeRules()
        assert rules.prefix == "1122"
        assert rules.length == 8
        assert rules.code_field == "code"
        assert rules.exclude_values == (0,)

    def test_frozen(self) -> None:
        rules = CodeRules()
        with pytest.raises(ValidationError):
            rules.length = 4  # type: ignore[misc]

    def test_rule_keys_match_fields(self) -> None:
        assert RULE_KEYS == set(CodeRules.model_fields)


class TestCoercion:
    def test_single_exclude_value(self) -> None:
        assert CodeRules(exclude_values=5).exclude_values == (5,)  # type: ignore[arg-type]

    def test_list_from_toml(self) -> None:
        assert CodeRules.model_validate({"exclude_values": [0, -1]}).exclude_values == (0, -1)

    def test_set_sorted(self) -> None:
        rules = CodeRules.model_validate({"exclude_values": {3, 1}})
        assert rules.exclude_values == (1, 3)

    def test_length_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CodeRules(length=0)


class TestMerged:
    def test_no_overrides_returns_self(self) -> None:
        rules = CodeRules()
        assert rules.merged({}) is rules

    def test_partial_override(self) -> None:
        rules = CodeRules(prefix="2001").merged({"length": 6})
        assert rules.prefix == "2001"
        assert rules.length == 6

    def test_unknown_key(self) -> None:
        with pytest.raises(ValidationError):
            CodeRules().merged({"prefx": "1"})

    def test_wrong_type(self) -> None:
        with pytest.raises(ValidationError):
            CodeRules().merged({"length": "eight"})

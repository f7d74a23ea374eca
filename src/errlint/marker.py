"""Runtime side of the ``@valid_error_code`` marker.

The decorator only records its arguments on the class so that code using
it imports and runs unchanged; the checks themselves happen in
``errlint check``. Overrides are validated eagerly so a typo fails at
import time instead of being silently ignored.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from errlint.domain.rules import CodeRules

MARKER_ATTR = "__errlint_rules__"
MARKER_NAME = "valid_error_code"

_T = TypeVar("_T", bound=type)


def valid_error_code(
    *,
    prefix: str | None = None,
    length: int | None = None,
    code_field: str | None = None,
    exclude_values: Iterable[int] | int | None = None,
) -> Callable[[_T], _T]:
    """Mark an enum for error-code validation.

    Omitted arguments fall back to the project configuration
    (``[rules]`` in ``errlint.toml``), which in turn defaults to
    prefix ``"1122"``, length ``8``, field ``"code"`` and ``exclude_values=(0,)``.

    Usage::

        @valid_error_code(prefix="1122", length=8)
        class ErrorCode(Enum):
            SUCCESS = (0, "ok")
            PARAM_ERROR = (11220002, "Parameter error")

            def __init__(self, code: int, message: str) -> None:
                self.code = code
                self.message = message
    """
    overrides: dict[str, Any] = {}
    if prefix is not None:
        overrides["prefix"] = prefix
    if length is not None:
        overrides["length"] = length
    if code_field is not None:
        overrides["code_field"] = code_field
    if exclude_values is not None:
        overrides["exclude_values"] = exclude_values
    rules = CodeRules().merged(overrides)
    overrides = {key: getattr(rules, key) for key in overrides}

    def decorator(cls: _T) -> _T:
        setattr(cls, MARKER_ATTR, dict(overrides))
        return cls

    return decorator

"""Error-code extraction from enum members.

Three strategies run in order and the first success wins:

1. ``from_syntax_tree`` — read the literal at the resolved argument index
   straight from the member's syntax node.
2. ``from_first_argument_text`` — match ``NAME(<digits>`` in the member's
   textual rendering. Position 0 only.
3. ``from_argument_position`` — split the rendered argument list on commas
   and clean up the entry at the resolved index.

Strategies are pure functions returning a tagged result. Any exception
raised inside one is converted to an :class:`ExtractionError` at the
strategy boundary and never reaches the caller.

Known limitation: the positional split is comma-naive. Nested calls,
string arguments containing commas, and escapes shift or corrupt the
split; such members fall back to "unable to extract" or to the wrong
entry exactly as the split dictates.
"""

from __future__ import annotations

import ast
import functools
import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from errlint.domain.declarations import ConstantDecl
from errlint.domain.resolver import resolve_parameter_index

logger = logging.getLogger(__name__)

FIRST_INT_ARGUMENT = r"{name}\s*\(\s*(\d+)"
"""Pattern for ``NAME(123, ...)``; ``{name}`` is the escaped member name."""

NON_DIGIT_EXCEPT_MINUS = re.compile(r"[^0-9-]")


@dataclass(frozen=True)
class Extracted:
    value: int
    strategy: str


@dataclass(frozen=True)
class ExtractionError:
    strategy: str
    reason: str


ExtractionResult = Extracted | ExtractionError
Strategy = Callable[[ConstantDecl, str], ExtractionResult]


def _strategy(name: str) -> Callable[[Strategy], Strategy]:
    """Name a strategy and turn anything it raises into an ExtractionError."""

    def decorator(func: Strategy) -> Strategy:
        @functools.wraps(func)
        def wrapper(constant: ConstantDecl, field_name: str) -> ExtractionResult:
            try:
                return func(constant, field_name)
            except Exception as exc:
                logger.debug(
                    "Strategy %s raised on %s", name, constant.qualified_name, exc_info=True
                )
                return ExtractionError(name, f"{type(exc).__name__}: {exc}")

        return wrapper

    return decorator


def _literal_number(node: ast.expr) -> int | None:
    if not isinstance(node, ast.Constant):
        return None
    value = node.value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


@_strategy("syntax_tree")
def from_syntax_tree(constant: ConstantDecl, field_name: str) -> ExtractionResult:
    if constant.syntax is None:
        return ExtractionError("syntax_tree", "no syntax tree")
    nodes = [arg.node for arg in constant.arguments]
    if not nodes:
        return ExtractionError("syntax_tree", "empty argument list")
    index = resolve_parameter_index(constant, field_name)
    if index < 0 or index >= len(nodes):
        return ExtractionError("syntax_tree", f"parameter index {index} out of range")
    node = nodes[index]
    if node is None:
        return ExtractionError("syntax_tree", "argument has no syntax node")
    value = _literal_number(node)
    if value is None:
        return ExtractionError("syntax_tree", f"argument is not a numeric literal: {ast.unparse(node)}")
    return Extracted(value, "syntax_tree")


@_strategy("first_argument_text")
def from_first_argument_text(constant: ConstantDecl, field_name: str) -> ExtractionResult:
    pattern = re.compile(FIRST_INT_ARGUMENT.format(name=re.escape(constant.name)), re.ASCII)
    match = pattern.search(constant.render())
    if match is None:
        return ExtractionError("first_argument_text", "no leading integer argument")
    return Extracted(int(match.group(1)), "first_argument_text")


@_strategy("argument_position")
def from_argument_position(constant: ConstantDecl, field_name: str) -> ExtractionResult:
    index = resolve_parameter_index(constant, field_name)
    if index == -1:
        return ExtractionError("argument_position", f"no constructor parameter '{field_name}'")
    text = constant.render()
    start = text.find("(")
    end = text.rfind(")")
    if start == -1 or end <= start:
        return ExtractionError("argument_position", "no argument list")
    parts = text[start + 1 : end].split(",")
    if index >= len(parts):
        return ExtractionError("argument_position", f"parameter index {index} out of range")
    cleaned = NON_DIGIT_EXCEPT_MINUS.sub("", parts[index])
    if not cleaned:
        return ExtractionError("argument_position", "argument has no digits")
    return Extracted(int(cleaned), "argument_position")


STRATEGIES: tuple[Strategy, ...] = (
    from_syntax_tree,
    from_first_argument_text,
    from_argument_position,
)


def extract_code(
    constant: ConstantDecl,
    field_name: str,
    strategies: Sequence[Strategy] = STRATEGIES,
) -> ExtractionResult:
    """Return the first successful extraction, or an error naming every failure."""
    failures: list[ExtractionError] = []
    for strategy in strategies:
        result = strategy(constant, field_name)
        if isinstance(result, Extracted):
            return result
        failures.append(result)
    reason = "; ".join(f"{f.strategy}: {f.reason}" for f in failures)
    return ExtractionError("all", reason or "no strategies")

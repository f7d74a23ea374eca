"""Command: validate error-code enums."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from errlint.commands._base import ErrCommand, with_inputs

if TYPE_CHECKING:
    from errlint.commands._context import AppContext
    from errlint.domain.rules import CodeRules


def rule_overrides(**options: Any) -> dict[str, Any]:
    """Collect the rule flags that were actually given."""
    return {key: value for key, value in options.items() if value not in (None, ())}


def effective_rules(app: AppContext, overrides: dict[str, Any]) -> CodeRules:
    from pydantic import ValidationError

    try:
        return app.settings.rules.merged(overrides)
    except ValidationError as exc:
        raise click.UsageError(f"Invalid rule flags: {exc}") from exc


@click.command(
    cls=ErrCommand,
    examples="""\
  errlint check
  errlint check src/myapp/errors.py
  errlint check --module myapp.errors
  errlint check src --prefix 2001 --length 6
  errlint check src --exclude-value 0 --exclude-value -1
  errlint --json check src
  errlint -q check src --exit-zero""",
)
@with_inputs
@click.option("--prefix", default=None, help="Required code prefix (default from config).")
@click.option(
    "--length",
    type=click.IntRange(min=1),
    default=None,
    help="Required number of digits (default from config).",
)
@click.option("--code-field", default=None, help="Name of the code field (default from config).")
@click.option(
    "--exclude-value",
    "exclude_values",
    type=int,
    multiple=True,
    help="Code value exempt from validation (repeatable; replaces the configured list).",
)
@click.option("--exit-zero", is_flag=True, help="Exit 0 even when errors are found.")
@click.pass_obj
def check(
    app: AppContext,
    paths: tuple[Path, ...],
    modules: tuple[str, ...],
    prefix: str | None,
    length: int | None,
    code_field: str | None,
    exclude_values: tuple[int, ...],
    exit_zero: bool,
) -> None:
    """Check marked enums for code length, prefix and uniqueness.

    PATHS are files or directories; with neither PATHS nor --module the
    project root is scanned. Marker arguments on an enum override the
    rules given here.
    """
    from errlint.services.check import CheckService

    overrides = rule_overrides(
        prefix=prefix, length=length, code_field=code_field, exclude_values=exclude_values
    )
    rules = effective_rules(app, overrides)

    result = CheckService(app.settings, app.plugins).check(paths, modules, rules=rules)
    failed = result.ok and result.data.get("error_count", 0) > 0 and not exit_zero
    app.emit(result, failed=failed)

"""Command: list extracted error codes."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from errlint.commands._base import ErrCommand, with_inputs

if TYPE_CHECKING:
    from errlint.commands._context import AppContext


@click.command(
    cls=ErrCommand,
    examples="""\
  errlint codes
  errlint codes src/myapp/errors.py
  errlint codes --module myapp.errors
  errlint -q codes src | sort""",
)
@with_inputs
@click.pass_obj
def codes(app: AppContext, paths: tuple[Path, ...], modules: tuple[str, ...]) -> None:
    """List every error code with the constant that defines it.

    Excluded values are listed and flagged; violations are counted but
    not shown (use 'errlint check').
    """
    from errlint.services.check import CheckService

    app.emit(CheckService(app.settings, app.plugins).list_codes(paths, modules))

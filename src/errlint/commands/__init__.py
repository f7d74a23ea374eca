"""Subcommand modules for errlint.

Provides register_commands() which uses deferred imports to keep
``errlint --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from errlint.commands.check import check
    from errlint.commands.codes import codes

    cli.add_command(check)
    cli.add_command(codes)

"""Custom Click base classes with --examples support.

``--help`` stays short; ``--examples`` prints usage examples and exits.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class ErrCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


# Shared by check and codes.
input_arguments = [
    click.argument(
        "paths",
        nargs=-1,
        type=click.Path(exists=True, path_type=Path),
    ),
    click.option(
        "-m",
        "--module",
        "modules",
        multiple=True,
        metavar="NAME",
        help="Import a module and check its marked enums (repeatable).",
    ),
]


def with_inputs(func: Any) -> Any:
    """Apply the PATHS argument and ``--module`` option."""
    for decorator in reversed(input_arguments):
        func = decorator(func)
    return func

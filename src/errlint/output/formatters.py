"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables) or machines
(``--json``). ``--quiet`` reduces a check to one line per diagnostic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from errlint.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from errlint.services.result import ServiceResult


class OutputSettings(BaseModel):
    """The subset of settings that shape rendered output."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON wins over quiet; quiet wins over the default Rich rendering.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)

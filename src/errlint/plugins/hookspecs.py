"""Pluggy hook specifications for errlint check rounds.

Plugins act as additional diagnostic sinks: they are told when a round
starts, receive every diagnostic as it is produced, and get the totals
when the round ends. Hooks run inline on the checking thread.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from errlint.domain.diagnostics import Diagnostic

hookspec = pluggy.HookspecMarker("errlint")
hookimpl = pluggy.HookimplMarker("errlint")


class ErrlintHookSpec:
    """Hook specifications for the errlint plugin system."""

    @hookspec
    def errlint_round_start(self, type_count: int) -> None:
        """Called after the registry is cleared, before the first type."""

    @hookspec
    def errlint_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Called once for every diagnostic, in emission order."""

    @hookspec
    def errlint_round_end(
        self,
        types_checked: int,
        constants_checked: int,
        diagnostics_found: int,
    ) -> None:
        """Called after the last type of the round."""

"""Uniqueness registry for error codes.

Maps each canonical code string to the member that defined it first.
One registry lives for one processing round; the orchestrator clears it
at round start, so a round never sees a code registered by an earlier one.

INVARIANT: First writer wins. A colliding registration is reported and
never overwrites the stored definer.
"""

from __future__ import annotations

from dataclasses import dataclass

from errlint.domain.declarations import ConstantDecl


@dataclass(frozen=True)
class Unique:
    code: str


@dataclass(frozen=True)
class Duplicate:
    code: str
    existing: ConstantDecl

    @property
    def existing_name(self) -> str:
        return self.existing.qualified_name


RegistrationResult = Unique | Duplicate


class CodeRegistry:
    """Round-scoped code -> definer mapping."""

    def __init__(self) -> None:
        self._entries: dict[str, ConstantDecl] = {}

    def clear(self) -> None:
        self._entries.clear()

    def check_and_register(self, code: str, constant: ConstantDecl) -> RegistrationResult:
        """Register *code* for *constant* unless another member already owns it.

        Re-registering the very same member object is not a collision and
        leaves the entry untouched. Members are frozen, so the same object
        always has the same owning type.
        """
        existing = self._entries.get(code)
        if existing is None:
            self._entries[code] = constant
            return Unique(code)
        if existing is constant:
            return Unique(code)
        return Duplicate(code, existing)

    def definition_of(self, code: str) -> ConstantDecl | None:
        return self._entries.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __len__(self) -> int:
        return len(self._entries)

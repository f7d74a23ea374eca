"""CheckService — error-code validation rounds.

Single command following the linter pattern: everything discovered in
one invocation (files and modules alike) is checked in one round against
one registry, so codes must be unique across the whole run.

Per member the order is fixed: field lookup, int check, extraction,
exclusion, format rules, uniqueness. A member stops at its first
structural failure; format and uniqueness findings accumulate.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from errlint.domain.declarations import ConstantDecl, MarkedType
from errlint.domain.diagnostics import Diagnostic, for_constant, for_type
from errlint.domain.extractor import ExtractionError, extract_code
from errlint.domain.messages import (
    DUPLICATE_CODE,
    EXTRACTION_FAILED,
    FIELD_NOT_FOUND,
    FIELD_NOT_INT,
    INVALID_RULES,
    NOT_AN_ENUM,
)
from errlint.domain.registry import CodeRegistry, Duplicate
from errlint.domain.resolver import is_integer_field, resolve_binding
from errlint.domain.rules import CodeRules
from errlint.domain.validator import render_code, should_exclude, validate_format
from errlint.infrastructure.filesystem import find_python_files
from errlint.infrastructure.runtime import scan_module
from errlint.infrastructure.source import scan_file
from errlint.services.base import BaseService
from errlint.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from errlint.plugins.manager import PluginManager

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CodeEntry:
    """One extracted code and where it came from."""

    code: str
    definer: str
    strategy: str
    excluded: bool = False
    path: str | None = None
    line: int | None = None


@dataclass
class RoundReport:
    diagnostics: list[Diagnostic] = field(default_factory=list)
    codes: list[CodeEntry] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    types_checked: int = 0
    constants_checked: int = 0
    codes_registered: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == "error")


def _describe_validation(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


class CodeChecker:
    """Runs check rounds over marked types.

    Owns the registry: it is cleared at the start of every round and is
    never shared between checkers.
    """

    def __init__(
        self,
        rules: CodeRules | None = None,
        *,
        plugins: PluginManager | None = None,
    ) -> None:
        self._rules = rules or CodeRules()
        self._plugins = plugins
        self._registry = CodeRegistry()

    @property
    def registry(self) -> CodeRegistry:
        return self._registry

    def run_round(
        self,
        batch: Sequence[MarkedType],
        *,
        host_diagnostics: Sequence[Diagnostic] = (),
    ) -> RoundReport:
        """Check one batch. *host_diagnostics* (unreadable inputs) are
        reported first, through the same sink as everything else."""
        self._registry.clear()
        report = RoundReport()
        log = logger.bind(types=len(batch))
        self._dispatch("errlint_round_start", report, type_count=len(batch))

        for diagnostic in host_diagnostics:
            self._emit(diagnostic, report)
        for marked in batch:
            self._check_type(marked, report)

        self._dispatch(
            "errlint_round_end",
            report,
            types_checked=report.types_checked,
            constants_checked=report.constants_checked,
            diagnostics_found=len(report.diagnostics),
        )
        report.codes_registered = len(self._registry)
        log.debug(
            "round_complete",
            constants=report.constants_checked,
            diagnostics=len(report.diagnostics),
            codes=len(self._registry),
        )
        return report

    def _dispatch(self, hook_name: str, report: RoundReport, **payload: Any) -> None:
        if self._plugins is not None:
            self._plugins.dispatch(hook_name, report.warnings, **payload)

    def _emit(self, diagnostic: Diagnostic, report: RoundReport) -> None:
        report.diagnostics.append(diagnostic)
        self._dispatch("errlint_diagnostic", report, diagnostic=diagnostic)

    def _check_type(self, marked: MarkedType, report: RoundReport) -> None:
        descriptor = marked.descriptor
        report.types_checked += 1
        if not descriptor.is_enum:
            self._emit(for_type(NOT_AN_ENUM, descriptor), report)
            return
        if marked.rule_errors:
            detail = "; ".join(marked.rule_errors)
            self._emit(for_type(INVALID_RULES, descriptor, detail=detail), report)
            return
        try:
            rules = self._rules.merged(marked.overrides)
        except ValidationError as exc:
            detail = _describe_validation(exc)
            self._emit(for_type(INVALID_RULES, descriptor, detail=detail), report)
            return

        for constant in marked.constants:
            report.constants_checked += 1
            self._check_constant(constant, rules, report)

    def _check_constant(self, constant: ConstantDecl, rules: CodeRules, report: RoundReport) -> None:
        binding = resolve_binding(constant, rules.code_field)
        if binding is None:
            self._emit(for_constant(FIELD_NOT_FOUND, constant, field=rules.code_field), report)
            return
        if not is_integer_field(binding.field):
            self._emit(for_constant(FIELD_NOT_INT, constant, field=rules.code_field), report)
            return

        result = extract_code(constant, rules.code_field)
        if isinstance(result, ExtractionError):
            logger.debug(
                "extraction_failed",
                constant=constant.qualified_name,
                index=binding.index,
                reason=result.reason,
            )
            self._emit(for_constant(EXTRACTION_FAILED, constant, name=constant.name), report)
            return

        value = result.value
        code = render_code(value)
        entry = CodeEntry(
            code=code,
            definer=constant.qualified_name,
            strategy=result.strategy,
            path=constant.location.path,
            line=constant.location.line,
        )
        if should_exclude(value, rules.exclude_values):
            report.codes.append(replace(entry, excluded=True))
            return

        for violation in validate_format(value, rules):
            self._emit(for_constant(violation.code, constant, message=violation.message), report)

        registration = self._registry.check_and_register(code, constant)
        if isinstance(registration, Duplicate):
            self._emit(
                for_constant(
                    DUPLICATE_CODE,
                    constant,
                    related=registration.existing_name,
                    code=code,
                    definer=registration.existing_name,
                ),
                report,
            )
        report.codes.append(entry)


@dataclass
class _Inputs:
    types: list[MarkedType] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    files: int = 0
    modules: int = 0


class CheckService(BaseService):
    """Discovers marked enums and runs them through one check round."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(
        self,
        paths: Sequence[Path] = (),
        modules: Sequence[str] = (),
        *,
        rules: CodeRules | None = None,
    ) -> ServiceResult:
        """Report every rule violation found in *paths* and *modules*."""
        collected = self._collect("check", paths, modules)
        if isinstance(collected, ServiceResult):
            return collected

        rules = rules or self._settings.rules
        report = self._checker(rules).run_round(
            collected.types, host_diagnostics=collected.diagnostics
        )
        diagnostics = [d.model_dump() for d in report.diagnostics]
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "diagnostics": diagnostics,
                "count": len(diagnostics),
                "error_count": report.error_count,
                "warning_count": len(diagnostics) - report.error_count,
                "files_checked": collected.files,
                "modules_checked": collected.modules,
                "types_checked": report.types_checked,
                "constants_checked": report.constants_checked,
                "codes_registered": report.codes_registered,
            },
            warnings=report.warnings,
            meta={"rules": rules.model_dump()},
        )

    def list_codes(
        self,
        paths: Sequence[Path] = (),
        modules: Sequence[str] = (),
        *,
        rules: CodeRules | None = None,
    ) -> ServiceResult:
        """List every extracted code with its definer, in declaration order."""
        collected = self._collect("codes", paths, modules)
        if isinstance(collected, ServiceResult):
            return collected

        report = self._checker(rules).run_round(
            collected.types, host_diagnostics=collected.diagnostics
        )
        codes = [asdict(entry) for entry in report.codes]
        return ServiceResult(
            ok=True,
            op="codes",
            data={"codes": codes, "count": len(codes), "error_count": report.error_count},
            warnings=report.warnings,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _checker(self, rules: CodeRules | None) -> CodeChecker:
        return CodeChecker(rules or self._settings.rules, plugins=self._plugins)

    def _collect(
        self, op: str, paths: Sequence[Path], modules: Sequence[str]
    ) -> _Inputs | ServiceResult:
        scan = self._settings.scan
        if not paths and not modules:
            paths = [self._settings.project_root]

        collected = _Inputs()
        try:
            files = find_python_files(paths, include=scan.include, exclude=scan.exclude)
        except FileNotFoundError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="PATH_NOT_FOUND", message=str(exc)),
            )

        for path in files:
            source = scan_file(path, marker_names=scan.marker_names)
            collected.types.extend(source.types)
            collected.diagnostics.extend(source.diagnostics)
        collected.files = len(files)

        for module_name in modules:
            module = scan_module(module_name)
            collected.types.extend(module.types)
            collected.diagnostics.extend(module.diagnostics)
        collected.modules = len(modules)

        logger.debug(
            "inputs_collected",
            files=collected.files,
            modules=collected.modules,
            types=len(collected.types),
        )
        return collected

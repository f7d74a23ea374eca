"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO); callers get
the rendered text back from :func:`render_result`. Renderers are
dispatched by ``result.op``; unknown ops fall through to a generic
key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from errlint.output.console import create_console, get_output, style_for_severity

if TYPE_CHECKING:
    from rich.console import Console

    from errlint.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    ``check`` prints one ``path:line:col: CODE message`` line per
    diagnostic and nothing when clean; ``codes`` prints ``code definer``.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "check":
        return "\n".join(
            f"{format_location(d)}: {d.get('code')} {d.get('message')}"
            for d in result.data.get("diagnostics", [])
        )
    if result.op == "codes":
        return "\n".join(
            f"{entry.get('code')} {entry.get('definer')}"
            for entry in result.data.get("codes", [])
            if not entry.get("excluded")
        )
    return f"OK: {result.op}"


def format_location(item: dict[str, Any]) -> str:
    """``path:line:col`` from a serialized diagnostic or code entry."""
    parts = [str(item.get("path") or item.get("target") or "<unknown>")]
    if item.get("line") is not None:
        parts.append(str(item["line"]))
        if item.get("column") is not None:
            parts.append(str(item["column"]))
    return ":".join(parts)


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="errlint.ok"), Text(f"  {result.op}", style="errlint.op"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    msg = result.error.message if result.error else "Unknown error"
    console.print(
        Text("ERROR", style="errlint.error"),
        Text(f"  {result.op}", style="errlint.op"),
        Text(f"  {msg}"),
    )
    if verbose and result.error and result.error.detail:
        console.print(Text("  detail:", style="errlint.key"))
        for key, value in result.error.detail.items():
            console.print(Text(f"    {key}: {value}"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="errlint.key"), Text(str(value)))


def _summary(data: dict[str, Any]) -> str:
    types = data.get("types_checked", 0)
    constants = data.get("constants_checked", 0)
    return f"{types} types, {constants} constants"


# ── Operation renderers ──────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render diagnostics as a table, followed by the totals."""
    data = result.data
    diagnostics: list[dict[str, Any]] = data.get("diagnostics", [])

    if not diagnostics:
        console.print(f"[errlint.ok]OK[/errlint.ok]  No issues found ({_summary(data)}).")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Location", style="errlint.location", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Code", style="errlint.code")
    table.add_column("Message")
    if verbose:
        table.add_column("Target")

    for diagnostic in diagnostics:
        severity = str(diagnostic.get("severity", "error"))
        style = style_for_severity(severity)
        row = [
            Text(format_location(diagnostic)),
            Text(severity, style=style),
            Text(str(diagnostic.get("code", ""))),
            Text(str(diagnostic.get("message", ""))),
        ]
        if verbose:
            row.append(Text(str(diagnostic.get("target", ""))))
        table.add_row(*row)

    console.print(table)
    errors = data.get("error_count", 0)
    warnings = data.get("warning_count", 0)
    console.print(f"\n{errors} errors, {warnings} warnings ({_summary(data)})")


def _render_codes(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the registry view: every code with its first definer."""
    codes: list[dict[str, Any]] = result.data.get("codes", [])
    _status_line(console, result)
    if not codes:
        console.print("  No error codes found.")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Code", style="errlint.value", no_wrap=True)
    table.add_column("Defined by")
    table.add_column("Location", style="errlint.location")
    if verbose:
        table.add_column("Strategy", style="errlint.key")

    for entry in codes:
        code = str(entry.get("code", ""))
        if entry.get("excluded"):
            code = f"{code} (excluded)"
        row = [Text(code), Text(str(entry.get("definer", ""))), Text(format_location(entry))]
        if verbose:
            row.append(Text(str(entry.get("strategy", ""))))
        table.add_row(*row)

    console.print(table)
    errors = result.data.get("error_count", 0)
    if errors:
        console.print(
            f"\n[errlint.warning]{errors} errors[/errlint.warning] hidden; "
            "run 'errlint check' for details"
        )


_OP_RENDERERS = {
    "check": _render_check,
    "codes": _render_codes,
}

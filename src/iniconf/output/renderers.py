"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from iniconf.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from iniconf.services.result import ServiceResult

GLOBAL_LABEL = "<global>"


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "get":
        return str(result.data.get("value", ""))
    if result.op == "scan":
        return "\n".join(
            f"{_section_name(sect)}.{entry['name']}={entry['value']}"
            for sect in result.data.get("sections", [])
            for entry in sect["entries"]
        )
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _section_name(section: dict[str, Any]) -> str:
    name = section.get("name")
    return GLOBAL_LABEL if name is None else str(name)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="ini.ok")
    op = Text(f"  {result.op}", style="ini.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ini.key")
    if key == "section":
        v = Text(GLOBAL_LABEL if value is None else f"[{value}]", style="ini.section")
    elif key == "value":
        v = Text(str(value), style="ini.value")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="", soft_wrap=True)
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ini.error")
    op = Text(f"  {result.op}", style="ini.op")
    colon = Text(": ")
    console.print(label, op, colon, Text(msg), sep="", soft_wrap=True)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_scan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render scan results as one table of section/key/value rows."""
    sections = result.data.get("sections", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Section", style="ini.section", no_wrap=True)
    table.add_column("Key", style="ini.name")
    table.add_column("Value", style="ini.value")
    if verbose:
        table.add_column("Line", style="ini.line", justify="right")

    for sect in sections:
        label = _section_name(sect)
        for entry in sect["entries"]:
            row = [Text(label), Text(entry["name"]), Text(entry["value"])]
            if verbose:
                row.append(Text(str(entry["line"])))
            table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} entries in {len(sections)} sections")


def _render_get(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single resolved value."""
    _status_line(console, result)
    for key in ("section", "name", "kind", "value"):
        _field(console, key, result.data.get(key))
    if result.data.get("default_used"):
        _field(console, "source", "default")
    else:
        _field(console, "source", f"line {result.data.get('line')}")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "scan": _render_scan,
    "get": _render_get,
}

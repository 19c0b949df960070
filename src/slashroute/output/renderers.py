"""Rich renderers for CLI ServiceResults.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from slashroute.output.console import create_console, event_text, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from slashroute.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def format_result(
    result: ServiceResult, *, json_output: bool = False, verbose: bool = False
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return Rich-rendered text.
        verbose: Include error detail and meta in human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    return render_result(result, verbose=verbose)


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


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="sr.ok")
    op = Text(f" {result.op}", style="sr.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="sr.key")
    if isinstance(value, bool):
        v = Text(str(value).lower(), style="sr.ok" if value else "dim")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="sr.error")
    op = Text(f"  {result.op}", style="sr.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    if err is None or not err.detail:
        return
    rendered = err.detail.get("rendered")
    if rendered:
        console.print()
        console.print(Text(str(rendered)))
    if verbose:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k == "rendered":
                continue
            console.print(Text(f"    {k}: {v}"))


# ── Callback renderers ────────────────────────────────────────────────


def _render_resolve_callbacks(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render a resolved callback configuration: profile, options, events."""
    data = result.data
    _status_line(console, result)
    _field(console, "profile", data.get("profile", ""))
    for key, value in data.get("options", {}).items():
        _field(console, key, value)

    enabled = data.get("enabled", [])
    console.print()
    console.print(Text(f"  enabled ({len(enabled)}):", style="sr.key"))
    for event in enabled:
        console.print(Text("    "), event_text(event), sep="")
    if verbose:
        _render_meta(console, result)


def _render_profiles(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Profile", style="sr.op", no_wrap=True)
    table.add_column("Base callbacks")
    table.add_column("Enhanced logging")
    table.add_column("Performance")
    for item in items:
        table.add_row(
            str(item.get("name", "")),
            ", ".join(item.get("base_callbacks", [])),
            "yes" if item.get("enhanced_logging") else "no",
            "yes" if item.get("performance_optimized") else "no",
        )
    console.print(table)
    console.print(f"\n{len(items)} profiles")


def _render_categories(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Category", style="sr.category", no_wrap=True)
    table.add_column("Events")
    for item in items:
        events = Text(", ").join(event_text(e) for e in item.get("events", []))
        table.add_row(str(item.get("name", "")), events)
    console.print(table)
    console.print(f"\n{len(items)} categories")


# ── Command definition renderers ──────────────────────────────────────


def _render_show_commands(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render registration payloads; options are listed in wire order."""
    items = result.data.get("items", [])
    _status_line(console, result)
    for payload in items:
        console.print()
        console.print(
            Text(f"  /{payload.get('name', '')}", style="sr.op"),
            Text(f"  {payload.get('description', '')}"),
        )
        for option in payload.get("options", []):
            required = "required" if option.get("required") else "optional"
            console.print(
                Text(f"    {option.get('name', '')}", style="sr.key"),
                Text(f" type={option.get('type')} {required}"),
                sep="",
            )
        if verbose:
            console.print(Text(f"    {_json.dumps(payload, separators=(',', ':'))}", style="dim"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    data = result.data if isinstance(result.data, dict) else {"value": result.data}
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "resolve_callbacks": _render_resolve_callbacks,
    "list_profiles": _render_profiles,
    "list_categories": _render_categories,
    "show_commands": _render_show_commands,
}

"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from bundlevalley.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from bundlevalley.services.result import ServiceResult


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
        return f"ERROR: {result.op} — {msg}"

    if result.op == "list_bundles":
        return "\n".join(b["id"] for b in result.data.get("bundles", []))
    if result.op == "list_rooms":
        return "\n".join(result.data.get("rooms", []))
    if result.op == "progress_stats":
        return f"{result.data.get('progress_percentage', 0.0):.1f}"

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="bv.ok")
    op = Text(f"  {result.op}", style="bv.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="bv.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="bv.id")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text(f"  warning: {warning}", style="bv.warning"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="bv.error")
    op = Text(f"  {result.op}", style="bv.op")
    console.print(label, op, Text(" — "), msg, sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Bundle renderers ─────────────────────────────────────────────────


def _bundle_table(bundle: dict[str, Any], *, verbose: bool = False) -> Table:
    """Build a Rich Table listing one bundle's items."""
    items = bundle.get("items", [])
    delivered = bundle.get("delivered_count", 0)
    required = bundle.get("required_items", len(items))
    title = Text.assemble(
        (str(bundle.get("name", "")), "bv.bundle"),
        "  ",
        (str(bundle.get("room", "")), "bv.room"),
        f"  {delivered}/{required}",
    )
    if bundle.get("complete"):
        title.append("  complete", style="bv.ok")

    table = Table(title=title, title_justify="left", show_header=True, expand=False)
    if verbose:
        table.add_column("ID", style="bv.id", no_wrap=True)
    table.add_column("Item")
    table.add_column("Quality", style="bv.quality")
    table.add_column("Status")

    for item in items:
        status = str(item.get("status", ""))
        row: list[Any] = []
        if verbose:
            row.append(str(item.get("id", "")))
        row.extend(
            [
                str(item.get("name", "")),
                str(item.get("quality") or ""),
                Text(status, style=style_for_status(status)),
            ]
        )
        table.add_row(*row)
    return table


def _render_bundles(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_bundles as one table per bundle."""
    bundles = result.data.get("bundles", [])
    for bundle in bundles:
        console.print(_bundle_table(bundle, verbose=verbose))
    console.print(f"\n{result.data.get('count', len(bundles))} bundles")


def _render_rooms(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    for room in result.data.get("rooms", []):
        console.print(Text(room, style="bv.room"))


# ── Progress renderers ───────────────────────────────────────────────


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render progress_stats as a panel with a completion bar."""
    d = result.data
    pct = float(d.get("progress_percentage", 0.0))

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bv.key")
    grid.add_column(justify="right")
    grid.add_row("Completion", f"{pct:.1f}%")
    grid.add_row("Delivered", str(d.get("delivered_items", 0)))
    grid.add_row("Collected", str(d.get("collected_items", 0)))
    grid.add_row(
        "Bundles",
        f"{d.get('bundles_completed', 0)}/{d.get('total_bundles', 0)}",
    )
    grid.add_row("Total items", str(d.get("total_items", 0)))

    console.print(Panel(grid, title="Overall Progress", expand=False))
    console.print(ProgressBar(total=100.0, completed=pct, width=40))


def _render_status_update(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    _field(console, "id", result.data.get("id", ""))
    _field(console, "status", result.data.get("status", ""))
    if verbose:
        _field(console, "matched", result.data.get("matched", False))
    _render_warnings(console, result)


def _render_seed(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    if d.get("skipped"):
        _field(console, "skipped", "store already seeded")
    else:
        _field(console, "bundles_inserted", d.get("bundles_inserted", 0))
        _field(console, "items_inserted", d.get("items_inserted", 0))
    if verbose:
        _field(console, "catalog_bundles", d.get("catalog_bundles", 0))
        _field(console, "catalog_items", d.get("catalog_items", 0))
        partial = d.get("partial_bundles", [])
        if partial:
            _field(console, "partial_bundles", ", ".join(partial))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    _render_warnings(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_bundles": _render_bundles,
    "list_rooms": _render_rooms,
    "progress_stats": _render_stats,
    "update_item_status": _render_status_update,
    "seed": _render_seed,
}

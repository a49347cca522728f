"""Rich rendering of component, cycle and build-order results.

``render_result`` draws the human view: a status line, then a component
table or an arrow chain, then with ``--verbose`` the recorded steps as a
tree.  ``render_quiet`` prints bare node ids for shell pipelines.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from depgraph.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from depgraph.services.result import ServiceResult

type _Renderer = Callable[[ServiceResult, Console], None]


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* as text; ANSI styling only when writing to a terminal."""
    console = create_console()
    if result.ok:
        _RENDERERS.get(result.op, _render_fields)(result, console)
    else:
        _render_failure(result, console, verbose=verbose)
    if verbose and result.meta and "telemetry" in result.meta:
        console.print()
        console.print(_steps_tree(result.meta["telemetry"]))
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One component per line (members space-separated) or one node per line."""
    if not result.ok:
        reason = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {reason}"
    if "components" in result.data:
        return "\n".join(_members(c) for c in result.data["components"])
    if "order" in result.data:
        return "\n".join(map(str, result.data["order"]))
    return f"OK: {result.op}"


def _members(component: dict[str, Any]) -> str:
    return " ".join(map(str, component.get("members", [])))


def _header(console: Console, status: str, op: str) -> None:
    style = "dg.ok" if status == "OK" else "dg.error"
    console.print(Text.assemble((status, style), (f"  {op}", "dg.op")), end="")


def _steps_tree(span: dict[str, Any], tree: Tree | None = None) -> Tree:
    """Timed steps of a traced call, with the graph sizes each one recorded."""
    label = Text.assemble(
        (f"{span.get('duration_ms', 0.0):.2f}ms", "dg.key"), f"  {span['name']}"
    )
    sizes = span.get("annotations")
    if sizes:
        label.append("  (" + ", ".join(f"{k}={v}" for k, v in sizes.items()) + ")", style="dim")
    node = Tree(label) if tree is None else tree.add(label)
    for child in span.get("children", []):
        _steps_tree(child, node)
    return node


def _render_failure(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    err = result.error
    _header(console, "ERROR", result.op)
    console.print(f" — {err.message if err else 'Unknown error'}", markup=False)
    if err is None:
        return
    for cycle in err.detail.get("cycles", []):
        console.print(f"  cycle: {' '.join(map(str, cycle))}", style="dg.cycle")
    if verbose and err.detail:
        console.print("  detail:", style="dg.key")
        for key, value in err.detail.items():
            console.print(f"    {key}: {json.dumps(value, separators=(',', ':'))}", markup=False)


def _render_fields(result: ServiceResult, console: Console) -> None:
    _header(console, "OK", result.op)
    console.print()
    for key, value in result.data.items():
        console.print(Text.assemble((f"  {key}: ", "dg.key"), str(value)))


def _render_components(result: ServiceResult, console: Console) -> None:
    components = result.data.get("components", [])
    _header(console, "OK", result.op)
    console.print()
    summary = f"{result.data.get('count', len(components))} components"
    if "cyclic_count" in result.data:
        summary += f", {result.data['cyclic_count']} cyclic"
    console.print(summary)
    if not components:
        return
    table = Table(pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Size", justify="right")
    table.add_column("Cycle")
    table.add_column("Members", style="dg.node")
    for comp in components:
        table.add_row(
            str(comp.get("index", "")),
            str(comp.get("size", 0)),
            Text("yes", style="dg.cycle") if comp.get("cyclic") else Text("no", style="dim"),
            _members(comp),
        )
    console.print(table)


def _render_order(result: ServiceResult, console: Console) -> None:
    order = result.data.get("order", [])
    _header(console, "OK", result.op)
    console.print()
    if order:
        console.print(" → ".join(f"[dg.node]{node}[/dg.node]" for node in order))
    else:
        console.print("Graph is empty.")


_RENDERERS: dict[str, _Renderer] = {
    "components": _render_components,
    "cycles": _render_components,
    "order": _render_order,
}

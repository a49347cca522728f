"""Command group: strong components, cycles and build order."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click

from depgraph.commands._base import DepGroup
from depgraph.domain.edges import split_tokens
from depgraph.services.components import ComponentService

if TYPE_CHECKING:
    from depgraph.commands._context import AppContext
    from depgraph.services.result import ServiceResult

_GRAPH_EXAMPLES = """\
  depgraph graph components 1:2 2:3 3:1 3:4
  depgraph graph components 1:2 2:1 2:3 --remove 2
  depgraph graph cycles 1:2 2:1 3:3 4:5
  depgraph graph order 1:2 2:3 --node 9
  echo "1:2 2:3" | depgraph --json graph order --stdin"""


def _graph_input(func: Callable[..., None]) -> Callable[..., None]:
    """Attach the shared graph-building arguments and options."""
    decorators = [
        click.argument("edges", nargs=-1),
        click.option("--node", "nodes", multiple=True, help="Add an isolated node (repeatable)."),
        click.option("--remove", multiple=True, help="Remove a node after building (repeatable)."),
        click.option(
            "--unlink", multiple=True, help="Remove edge SRC:DST after building (repeatable)."
        ),
        click.option(
            "--stdin", "from_stdin", is_flag=True, help="Read more edges/nodes from stdin."
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _run(
    app: AppContext,
    op: Callable[[ComponentService], ServiceResult],
    *,
    edges: tuple[str, ...],
    nodes: tuple[str, ...],
    remove: tuple[str, ...],
    unlink: tuple[str, ...],
    from_stdin: bool,
) -> None:
    """Build the graph, run *op* on it and emit the result."""
    edge_tokens = list(edges)
    node_tokens = list(nodes)
    if from_stdin:
        for token in split_tokens(click.get_text_stream("stdin").read()):
            if ":" in token or "->" in token:
                edge_tokens.append(token)
            else:
                node_tokens.append(token)

    svc = app.service()
    loaded = svc.load(edge_tokens, nodes=node_tokens, remove=remove, unlink=unlink)
    if not loaded.ok:
        app.emit(loaded)
        return

    result = op(svc)
    if loaded.warnings:
        result = result.model_copy(update={"warnings": [*loaded.warnings, *result.warnings]})
    app.emit(result)


@click.group(cls=DepGroup, examples=_GRAPH_EXAMPLES)
def graph() -> None:
    """Compute strong components of a dependency graph.

    Edges are given as SRC:DST, meaning SRC depends on DST.  Output lists
    dependencies before the nodes that depend on them.
    """


@graph.command(
    examples="""\
  depgraph graph components 1:2 2:3
  depgraph graph components 1:2 2:1 2:3 --remove 2
  depgraph --json graph components 1:2 2:1 --unlink 2:1"""
)
@_graph_input
@click.pass_obj
def components(app: AppContext, **kwargs: Any) -> None:
    """List strong components in dependency order."""
    _run(app, ComponentService.components, **kwargs)


@graph.command(
    examples="""\
  depgraph graph cycles 1:2 2:1 3:3
  depgraph -q graph cycles 1:2 2:3 3:1"""
)
@_graph_input
@click.pass_obj
def cycles(app: AppContext, **kwargs: Any) -> None:
    """List only the components that form a cycle."""
    _run(app, ComponentService.cycles, **kwargs)


@graph.command(
    examples="""\
  depgraph graph order 1:2 2:3
  depgraph -q graph order 1:2 1:3 3:2"""
)
@_graph_input
@click.pass_obj
def order(app: AppContext, **kwargs: Any) -> None:
    """Print a build order, dependencies first; fails on cycles."""
    _run(app, ComponentService.order, **kwargs)

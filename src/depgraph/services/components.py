"""ComponentService — strong components, cycles and build order of a Graph.

Wraps :class:`~depgraph.domain.graph.Graph` for the CLI: parses edge tokens
into a graph, applies edits (removals, unlinks), and reports results as
:class:`ServiceResult`.  Component order is always dependencies first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from depgraph.domain.edges import parse_edge, parse_node
from depgraph.domain.graph import Graph
from depgraph.domain.scc import is_cyclic
from depgraph.domain.types import Component
from depgraph.services.result import ServiceResult
from depgraph.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class ComponentService:
    """Computes strong-component views over a single graph."""

    def __init__(
        self,
        graph: Graph | None = None,
        *,
        sort_members: bool = True,
        show_singletons: bool = True,
    ) -> None:
        self.graph = graph if graph is not None else Graph()
        self._sort_members = sort_members
        self._show_singletons = show_singletons

    # ------------------------------------------------------------------
    # load — build the graph from command-line tokens
    # ------------------------------------------------------------------

    @traced
    def load(
        self,
        edges: Iterable[str],
        *,
        nodes: Iterable[str] = (),
        remove: Iterable[str] = (),
        unlink: Iterable[str] = (),
    ) -> ServiceResult:
        """Add *nodes* and *edges*, then apply *unlink* and *remove* edits.

        Edits run after all insertions, in that order.  Unlinking an edge
        or removing a node that is not there is not an error.
        """
        try:
            add_nodes = [parse_node(t) for t in nodes]
            removals = [parse_node(t) for t in remove]
        except ValueError as exc:
            return ServiceResult.failure("load", "INVALID_NODE", str(exc))
        try:
            links = [parse_edge(t) for t in edges]
            unlinks = [parse_edge(t) for t in unlink]
        except ValueError as exc:
            return ServiceResult.failure("load", "INVALID_EDGE", str(exc))

        g = self.graph
        with trace_span("insert") as span:
            for node in add_nodes:
                g.add(node)
            for src, dst in links:
                g.link(src, dst)
            if span:
                span.record(nodes=len(add_nodes), links=len(links))

        warnings: list[str] = []
        with trace_span("edit") as span:
            for src, dst in unlinks:
                if not g.has_edge(src, dst):
                    warnings.append(f"No edge {src}:{dst} to unlink")
                g.unlink(src, dst)
            for node in removals:
                if node not in g:
                    warnings.append(f"No node {node} to remove")
                g.remove(node)
            if span:
                span.record(unlinks=len(unlinks), removals=len(removals), misses=len(warnings))

        logger.debug("Loaded graph: %d nodes, %d edges", len(g), g.number_of_edges())
        return ServiceResult(
            ok=True,
            op="load",
            data={"nodes": len(g), "edges": g.number_of_edges()},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # components / cycles / order
    # ------------------------------------------------------------------

    @traced
    def components(self) -> ServiceResult:
        """List every strong component, dependencies first."""
        items = self._component_items()
        cyclic_count = sum(1 for item in items if item["cyclic"])
        if not self._show_singletons:
            items = [item for item in items if item["cyclic"]]
        return ServiceResult(
            ok=True,
            op="components",
            data={
                "count": len(items),
                "cyclic_count": cyclic_count,
                "components": items,
            },
        )

    @traced
    def cycles(self) -> ServiceResult:
        """List only the components that form a cycle."""
        items = [item for item in self._component_items() if item["cyclic"]]
        return ServiceResult(
            ok=True,
            op="cycles",
            data={"count": len(items), "components": items},
        )

    @traced
    def order(self) -> ServiceResult:
        """Flat build order (dependencies first); fails if the graph has a cycle."""
        items = self._component_items()
        cycles = [item["members"] for item in items if item["cyclic"]]
        if cycles:
            return ServiceResult.failure(
                "order",
                "CYCLE_DETECTED",
                f"Graph has {len(cycles)} cycle(s); no build order exists",
                cycles=cycles,
            )
        order = [item["members"][0] for item in items]
        return ServiceResult(
            ok=True,
            op="order",
            data={"count": len(order), "order": order},
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _component_items(self) -> list[dict[str, Any]]:
        with trace_span("strong_components") as span:
            comps = self.graph.strong_components()
            if span:
                span.record(
                    nodes=len(self.graph),
                    edges=self.graph.number_of_edges(),
                    components=len(comps),
                )

        out = self.graph.out_adjacency
        return [
            {
                "index": i,
                "size": len(comp),
                "cyclic": is_cyclic(comp, out),
                "members": self._members(comp),
            }
            for i, comp in enumerate(comps)
        ]

    def _members(self, comp: Component) -> list[int]:
        return sorted(comp) if self._sort_members else list(comp)

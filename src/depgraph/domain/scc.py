"""Strong components in dependency order via Kosaraju's two-pass DFS.

The engine holds no state between calls.  Each run allocates one marker
store and flips its polarity between passes: the first pass marks visited
nodes 1, the second treats 1 as "not yet seen" and clears it on visit.

Both passes use explicit work stacks, so long chains never hit the
interpreter recursion limit.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Collection, Iterator, MutableMapping

from depgraph.domain.types import Adjacency, Component, Node

logger = logging.getLogger(__name__)

# Marker storage is a flat bytearray while ``max(id) < len * factor + slack``.
_DENSE_FACTOR = 4
_DENSE_SLACK = 1024


class _Markers:
    """Visited markers indexed by node identity, reused across both passes."""

    __slots__ = ("_flip",)

    def __init__(self, nodes: Collection[Node]) -> None:
        self._flip: bytearray | MutableMapping[Node, int]
        if nodes and min(nodes) >= 0 and max(nodes) < len(nodes) * _DENSE_FACTOR + _DENSE_SLACK:
            self._flip = bytearray(max(nodes) + 1)
        else:
            self._flip = defaultdict(int)

    @property
    def dense(self) -> bool:
        return isinstance(self._flip, bytearray)

    def saw_true(self, node: Node) -> bool:
        """Mark *node* for the first pass; return whether it was already marked."""
        seen = self._flip[node]
        self._flip[node] = 1
        return bool(seen)

    def saw_false(self, node: Node) -> bool:
        """Unmark *node* for the second pass; return whether it was already unmarked."""
        seen = self._flip[node]
        self._flip[node] = 0
        return not seen


class SccComputer:
    """Kosaraju's algorithm over a pair of mirrored adjacency maps.

    The first pass walks *in_adjacency* to get a post-order, the second
    walks *out_adjacency* from the last-finished node backwards.  That is
    the textbook algorithm run on the reverse graph, which has the same
    components and emits them dependencies first.
    """

    def __init__(self, out_adjacency: Adjacency, in_adjacency: Adjacency) -> None:
        self._out = out_adjacency
        self._in = in_adjacency
        self._markers = _Markers(out_adjacency.keys())

    def run(self) -> list[Component]:
        order = self._finish_order()
        components: list[Component] = []
        for node in reversed(order):
            if not self._markers.saw_false(node):
                components.append(self._collect(node))
        logger.debug(
            "Computed %d strong components over %d nodes (dense markers=%s)",
            len(components),
            len(order),
            self._markers.dense,
        )
        return components

    def _finish_order(self) -> list[Node]:
        """First pass: post-order DFS over the reverse adjacency."""
        order: list[Node] = []
        graph = self._in
        markers = self._markers
        for root in graph:
            if markers.saw_true(root):
                continue
            stack: list[tuple[Node, Iterator[Node]]] = [(root, iter(graph[root]))]
            while stack:
                node, neighbors = stack[-1]
                for neighbor in neighbors:
                    if not markers.saw_true(neighbor):
                        stack.append((neighbor, iter(graph[neighbor])))
                        break
                else:
                    stack.pop()
                    order.append(node)
        return order

    def _collect(self, root: Node) -> Component:
        """Second pass: gather every node reachable from *root* not yet claimed."""
        graph = self._out
        markers = self._markers
        component: Component = []
        stack = [root]
        while stack:
            node = stack.pop()
            component.append(node)
            for neighbor in graph[node]:
                if not markers.saw_false(neighbor):
                    stack.append(neighbor)
        return component


def strong_components(out_adjacency: Adjacency, in_adjacency: Adjacency) -> list[Component]:
    """Return the strong components of a graph in dependency order."""
    return SccComputer(out_adjacency, in_adjacency).run()


def is_cyclic(component: Collection[Node], out_adjacency: Adjacency) -> bool:
    """True if *component* is a cycle: several members, or one with a self-loop."""
    if len(component) > 1:
        return True
    return any(node in out_adjacency.get(node, ()) for node in component)

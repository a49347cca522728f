"""Graph — mutable directed graph with mirrored forward/reverse adjacency.

Both adjacency maps are keyed by node identity and kept as mirror images:
``dst in out[src]`` iff ``src in in[dst]``.  Hash-backed sets make edge
removal O(1) and node removal O(degree), which is the reason to prefer this
container over index-based adjacency when the graph is edited between
repeated :meth:`Graph.strong_components` calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from depgraph.domain.scc import strong_components
from depgraph.domain.types import Adjacency, Component, Edge, Node


class _AdjacencyView(Mapping[Node, frozenset[Node]]):
    """Read-only window onto one side of the adjacency.

    Neighbour sets come back as frozenset copies, so holding a view never
    lets a caller edit one map without the other.
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[Node, set[Node]]) -> None:
        self._data = data

    def __getitem__(self, node: Node) -> frozenset[Node]:
        return frozenset(self._data[node])

    def __contains__(self, node: object) -> bool:
        return node in self._data

    def __iter__(self) -> Iterator[Node]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)


class Graph:
    """Directed graph of integer node identities.

    Adding an edge implicitly adds both endpoints.  Removing or unlinking
    something that is not there is a no-op.
    """

    __slots__ = ("_in", "_out")

    def __init__(self) -> None:
        self._out: dict[Node, set[Node]] = {}
        self._in: dict[Node, set[Node]] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[Edge], nodes: Iterable[Node] = ()) -> Graph:
        """Build a graph from *edges*, plus any isolated *nodes*."""
        g = cls()
        for node in nodes:
            g.add(node)
        for src, dst in edges:
            g.link(src, dst)
        return g

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, node: Node) -> None:
        """Add *node* if it does not exist."""
        if node not in self._out:
            self._out[node] = set()
            self._in[node] = set()

    def remove(self, node: Node) -> None:
        """Remove *node* and every edge touching it, if it exists."""
        out = self._out.pop(node, None)
        if out is None:
            return
        inc = self._in.pop(node)
        for dst in out:
            if dst != node:
                self._in[dst].discard(node)
        for src in inc:
            if src != node:
                self._out[src].discard(node)

    def link(self, src: Node, dst: Node) -> None:
        """Add an edge from *src* to *dst*, creating the nodes if needed."""
        self.add(src)
        self.add(dst)
        self._out[src].add(dst)
        self._in[dst].add(src)

    def unlink(self, src: Node, dst: Node) -> None:
        """Remove the edge from *src* to *dst* if it exists."""
        out = self._out.get(src)
        if out is not None:
            out.discard(dst)
        inc = self._in.get(dst)
        if inc is not None:
            inc.discard(src)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __contains__(self, node: object) -> bool:
        return node in self._out

    def __len__(self) -> int:
        return len(self._out)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._out)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._out)}, edges={self.number_of_edges()})"

    def nodes(self) -> frozenset[Node]:
        return frozenset(self._out)

    def edges(self) -> Iterator[Edge]:
        """Yield every ``(src, dst)`` pair."""
        for src, dsts in self._out.items():
            for dst in dsts:
                yield src, dst

    def number_of_edges(self) -> int:
        return sum(len(dsts) for dsts in self._out.values())

    def has_edge(self, src: Node, dst: Node) -> bool:
        out = self._out.get(src)
        return out is not None and dst in out

    def successors(self, node: Node) -> frozenset[Node]:
        """Nodes *node* has an edge to (empty if *node* is absent)."""
        return frozenset(self._out.get(node, ()))

    def predecessors(self, node: Node) -> frozenset[Node]:
        """Nodes with an edge to *node* (empty if *node* is absent)."""
        return frozenset(self._in.get(node, ()))

    @property
    def out_adjacency(self) -> Adjacency:
        """Read-only view of the forward adjacency map."""
        return _AdjacencyView(self._out)

    @property
    def in_adjacency(self) -> Adjacency:
        """Read-only view of the reverse adjacency map."""
        return _AdjacencyView(self._in)

    # ------------------------------------------------------------------
    # Algorithms
    # ------------------------------------------------------------------

    def strong_components(self) -> list[Component]:
        """Return all strong components in dependency order.

        Components that others depend on come first: for an edge
        ``u -> v`` across components, ``v``'s component precedes ``u``'s.
        Without cycles every component has one node and the result is a
        topological sort with dependencies first.
        """
        return strong_components(self._out, self._in)

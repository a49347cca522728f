"""Tests for Graph — mirrored adjacency, mutation, and queries."""

from __future__ import annotations

import pytest

from depgraph.domain.graph import Graph
from tests.conftest import assert_mirrored, random_edges


class TestCreate:
    def test_empty(self, graph: Graph) -> None:
        assert len(graph) == 0
        assert graph.nodes() == frozenset()
        assert list(graph.edges()) == []
        assert graph.number_of_edges() == 0

    def test_from_edges_with_isolated_nodes(self) -> None:
        g = Graph.from_edges([(1, 2), (2, 3)], nodes=[7])
        assert g.nodes() == {1, 2, 3, 7}
        assert set(g.edges()) == {(1, 2), (2, 3)}
        assert_mirrored(g)

    def test_repr(self) -> None:
        g = Graph.from_edges([(1, 2)])
        assert repr(g) == "Graph(nodes=2, edges=1)"


class TestAdd:
    def test_add_node(self, graph: Graph) -> None:
        graph.add(5)
        assert 5 in graph
        assert graph.successors(5) == frozenset()
        assert graph.predecessors(5) == frozenset()

    def test_add_is_idempotent(self, graph: Graph) -> None:
        graph.link(1, 2)
        graph.add(1)
        assert graph.has_edge(1, 2)
        assert len(graph) == 2


class TestLink:
    def test_link_creates_endpoints(self, graph: Graph) -> None:
        graph.link(1, 2)
        assert 1 in graph
        assert 2 in graph
        assert graph.has_edge(1, 2)
        assert not graph.has_edge(2, 1)
        assert graph.successors(1) == {2}
        assert graph.predecessors(2) == {1}

    def test_link_is_idempotent(self, graph: Graph) -> None:
        graph.link(1, 2)
        graph.link(1, 2)
        assert graph.number_of_edges() == 1
        assert_mirrored(graph)

    def test_self_loop(self, graph: Graph) -> None:
        graph.link(3, 3)
        assert graph.has_edge(3, 3)
        assert graph.successors(3) == {3}
        assert graph.predecessors(3) == {3}


class TestUnlink:
    def test_unlink_edge(self, graph: Graph) -> None:
        graph.link(1, 2)
        graph.unlink(1, 2)
        assert not graph.has_edge(1, 2)
        assert graph.predecessors(2) == frozenset()
        assert_mirrored(graph)

    def test_unlink_keeps_isolated_nodes(self, graph: Graph) -> None:
        graph.link(1, 2)
        graph.unlink(1, 2)
        assert graph.nodes() == {1, 2}

    def test_unlink_only_one_direction(self, graph: Graph) -> None:
        graph.link(1, 2)
        graph.link(2, 1)
        graph.unlink(2, 1)
        assert graph.has_edge(1, 2)
        assert not graph.has_edge(2, 1)

    @pytest.mark.parametrize(("src", "dst"), [(1, 9), (9, 1), (8, 9), (2, 1)])
    def test_unlink_missing_is_noop(self, graph: Graph, src: int, dst: int) -> None:
        graph.link(1, 2)
        graph.unlink(src, dst)
        assert set(graph.edges()) == {(1, 2)}
        assert 8 not in graph and 9 not in graph

    def test_unlink_self_loop(self, graph: Graph) -> None:
        graph.link(4, 4)
        graph.unlink(4, 4)
        assert 4 in graph
        assert not graph.has_edge(4, 4)


class TestRemove:
    def test_remove_isolated(self, graph: Graph) -> None:
        graph.add(1)
        graph.remove(1)
        assert 1 not in graph
        assert len(graph) == 0

    def test_remove_missing_is_noop(self, graph: Graph) -> None:
        graph.link(1, 2)
        graph.remove(42)
        assert set(graph.edges()) == {(1, 2)}

    def test_remove_scrubs_both_directions(self, graph: Graph) -> None:
        graph.link(1, 2)
        graph.link(2, 1)
        graph.link(2, 3)
        graph.remove(2)
        assert graph.nodes() == {1, 3}
        assert graph.successors(1) == frozenset()
        assert graph.predecessors(3) == frozenset()
        assert list(graph.edges()) == []
        assert_mirrored(graph)

    def test_remove_node_with_self_loop(self, graph: Graph) -> None:
        graph.link(1, 1)
        graph.link(1, 2)
        graph.link(0, 1)
        graph.remove(1)
        assert graph.nodes() == {0, 2}
        assert graph.number_of_edges() == 0
        assert_mirrored(graph)

    def test_remove_then_relink(self, graph: Graph) -> None:
        graph.link(1, 2)
        graph.remove(2)
        graph.link(3, 2)
        assert graph.predecessors(2) == {3}
        assert graph.successors(1) == frozenset()

    @pytest.mark.parametrize("seed", range(5))
    def test_random_edits_keep_mirror(self, seed: int) -> None:
        ids, pairs = random_edges(seed, nodes=30, edges=90)
        g = Graph.from_edges(pairs, nodes=ids)
        for node in ids[::4]:
            g.remove(node)
        for src, dst in pairs[::3]:
            g.unlink(src, dst)
        assert_mirrored(g)
        assert not any(node in g for node in ids[::4])


class TestQueries:
    def test_absent_node_queries(self, graph: Graph) -> None:
        assert graph.successors(1) == frozenset()
        assert graph.predecessors(1) == frozenset()
        assert not graph.has_edge(1, 2)

    def test_iteration_and_len(self) -> None:
        g = Graph.from_edges([(1, 2), (2, 3)])
        assert sorted(g) == [1, 2, 3]
        assert len(g) == 3

    def test_neighbour_sets_do_not_alias(self, graph: Graph) -> None:
        graph.link(1, 2)
        succ = graph.successors(1)
        graph.link(1, 3)
        assert succ == {2}

    def test_adjacency_views_are_read_only(self, graph: Graph) -> None:
        graph.link(1, 2)
        with pytest.raises(TypeError):
            graph.out_adjacency[5] = set()  # type: ignore[index]
        with pytest.raises(TypeError):
            graph.in_adjacency[5] = set()  # type: ignore[index]

    def test_adjacency_neighbour_sets_are_frozen(self, graph: Graph) -> None:
        graph.link(1, 2)
        with pytest.raises(AttributeError):
            graph.out_adjacency[1].add(3)  # type: ignore[attr-defined]
        with pytest.raises(AttributeError):
            graph.in_adjacency[2].add(3)  # type: ignore[attr-defined]
        assert graph.out_adjacency[1] == {2}
        assert 3 not in graph
        assert_mirrored(graph)
        assert graph.strong_components() == [[2], [1]]

    def test_adjacency_views_track_edits(self, graph: Graph) -> None:
        view = graph.out_adjacency
        graph.link(1, 2)
        assert view[1] == frozenset({2})
        assert len(view) == 2
        assert 2 in view
        assert view.get(7) is None

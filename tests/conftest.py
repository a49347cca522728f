"""Shared pytest fixtures and test helpers for depgraph tests."""

from __future__ import annotations

import logging
import random
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from depgraph.domain.graph import Graph
from depgraph.services.telemetry import set_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def graph() -> Graph:
    """An empty graph."""
    return Graph()


@pytest.fixture(autouse=True)
def _isolate_global_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Restore logging and telemetry state touched by CLI invocations."""
    monkeypatch.delenv("DEPGRAPH_CONFIG", raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("depgraph")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    set_telemetry(False)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def random_edges(
    seed: int, *, nodes: int, edges: int, spread: int = 1
) -> tuple[list[int], list[tuple[int, int]]]:
    """Deterministic random graph; *spread* > 1 makes ids sparse."""
    rng = random.Random(seed)
    ids = [i * spread for i in range(nodes)]
    pairs = [(rng.choice(ids), rng.choice(ids)) for _ in range(edges)]
    return ids, pairs


def assert_mirrored(g: Graph) -> None:
    """Forward and reverse adjacency describe the same edge set."""
    out = g.out_adjacency
    inc = g.in_adjacency
    assert out.keys() == inc.keys()
    forward = {(s, d) for s, ds in out.items() for d in ds}
    backward = {(s, d) for d, ss in inc.items() for s in ss}
    assert forward == backward
    for s, d in forward:
        assert s in out and d in out

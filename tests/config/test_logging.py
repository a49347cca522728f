"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest

from depgraph.config.logging import configure_logging
from depgraph.domain.graph import Graph
from depgraph.services.components import ComponentService


def _json_lines(err: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in err.splitlines() if line.strip()]


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("verbose", "level"), [(True, logging.DEBUG), (False, logging.WARNING)]
    )
    def test_package_level(self, verbose: bool, level: int) -> None:
        configure_logging(verbose=verbose)
        assert logging.getLogger("depgraph").level == level
        assert logging.getLogger().level == logging.WARNING

    def test_engine_debug_line_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        Graph.from_edges([(1, 2), (2, 1), (2, 3)]).strong_components()
        records = _json_lines(capfd.readouterr().err)
        scc = [r for r in records if r["logger"] == "depgraph.domain.scc"]
        assert scc[0]["level"] == "debug"
        assert str(scc[0]["event"]).startswith("Computed 2 strong components over 3 nodes")
        assert "timestamp" in scc[0]

    def test_service_debug_line_as_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        ComponentService().load(["1:2", "2:3"])
        records = _json_lines(capfd.readouterr().err)
        assert {
            "logger": "depgraph.services.components",
            "event": "Loaded graph: 3 nodes, 2 edges",
        }.items() <= records[-1].items()

    def test_quiet_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        Graph.from_edges([(1, 2)]).strong_components()
        assert capfd.readouterr().err == ""

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=True, log_json=True)
        ours = [h for h in logging.getLogger().handlers if h.get_name() == "depgraph-stderr"]
        assert len(ours) == 1

"""depgraph — mutable dependency graph with strong components in dependency order."""

from depgraph.domain.graph import Graph
from depgraph.domain.scc import SccComputer, is_cyclic, strong_components
from depgraph.domain.types import Component, Edge, Node

__version__ = "0.1.0"

__all__ = [
    "Component",
    "Edge",
    "Graph",
    "Node",
    "SccComputer",
    "__version__",
    "is_cyclic",
    "strong_components",
]

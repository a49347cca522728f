"""Shared type aliases for the graph domain."""

from __future__ import annotations

from collections.abc import Mapping, Set

type Node = int
type Edge = tuple[Node, Node]
type Adjacency = Mapping[Node, Set[Node]]
type Component = list[Node]

"""Parse node and edge tokens given on the command line.

An edge token is ``SRC:DST`` where both sides are non-negative integers,
e.g. ``1:2``.  ``SRC->DST`` is accepted as an alias.
"""

from __future__ import annotations

import re

from depgraph.domain.types import Edge, Node

_EDGE_RE = re.compile(r"^\s*(\d+)\s*(?::|->)\s*(\d+)\s*$")
_NODE_RE = re.compile(r"^\s*(\d+)\s*$")


def parse_node(token: str) -> Node:
    """Parse a single node identity.

    Raises:
        ValueError: If *token* is not a non-negative integer.
    """
    m = _NODE_RE.match(token)
    if not m:
        msg = f"Invalid node '{token}': expected a non-negative integer"
        raise ValueError(msg)
    return int(m.group(1))


def parse_edge(token: str) -> Edge:
    """Parse ``SRC:DST`` into a ``(src, dst)`` tuple.

    Raises:
        ValueError: If *token* is not of the form ``SRC:DST``.
    """
    m = _EDGE_RE.match(token)
    if not m:
        msg = f"Invalid edge '{token}': expected SRC:DST with integer node ids"
        raise ValueError(msg)
    return int(m.group(1)), int(m.group(2))


def split_tokens(text: str) -> list[str]:
    """Split free-form input (e.g. stdin) into whitespace/comma separated tokens."""
    return [t for t in re.split(r"[\s,]+", text) if t]

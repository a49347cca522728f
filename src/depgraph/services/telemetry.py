"""Span timing for ComponentService calls.

With ``--verbose`` each traced service call records a span tree: the call
itself at the root, with ``insert``, ``edit`` and ``strong_components``
children carrying graph sizes.  The tree lands in
``ServiceResult.meta["telemetry"]``.  When tracing is off, the cost is one
ContextVar read per call.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field

import structlog

from depgraph.services.result import ServiceResult

log = structlog.get_logger("depgraph.telemetry")

_enabled: ContextVar[bool] = ContextVar("depgraph_telemetry", default=False)
_active: ContextVar[Span | None] = ContextVar("depgraph_active_span", default=None)


@dataclass
class Span:
    """One timed step, with the graph sizes it saw."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    sizes: dict[str, int] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def elapsed_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def record(self, **sizes: int) -> None:
        """Attach counts such as ``nodes=``, ``edges=`` or ``components=``."""
        self.sizes.update(sizes)

    def to_dict(self) -> dict[str, object]:
        tree: dict[str, object] = {"name": self.name, "duration_ms": round(self.elapsed_ms, 2)}
        if self.sizes:
            tree["annotations"] = dict(self.sizes)
        if self.children:
            tree["children"] = [child.to_dict() for child in self.children]
        return tree


def set_telemetry(enabled: bool) -> None:
    """Turn span recording on or off for the current context."""
    _enabled.set(enabled)


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.finished = time.perf_counter()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a step inside a traced call; yields None when nothing is recording."""
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _activate(child):
        yield child


def traced[**P](method: Callable[P, ServiceResult]) -> Callable[P, ServiceResult]:
    """Record a span tree for a service call and attach it to the result."""

    @functools.wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> ServiceResult:
        if not _enabled.get():
            return method(*args, **kwargs)

        root = Span(method.__qualname__)
        with _activate(root):
            result = method(*args, **kwargs)

        tree = root.to_dict()
        log.debug(
            "span.complete",
            op=result.op,
            ok=result.ok,
            duration_ms=tree["duration_ms"],
            steps=[child.name for child in root.children],
        )
        return result.model_copy(update={"meta": {**(result.meta or {}), "telemetry": tree}})

    return wrapper

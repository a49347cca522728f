"""structlog setup: one stderr handler, console or JSON rendering.

The domain modules log through stdlib ``logging`` and the services through
structlog.  Both reach the same handler, so a ``--log-json`` run emits one
JSON object per line whichever side produced the record.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

_HANDLER_NAME = "depgraph-stderr"

_SHARED: tuple[Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
)


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Send depgraph logs to stderr, at DEBUG with *verbose* and WARNING otherwise.

    Calling it again swaps the depgraph handler instead of adding a second one.
    """
    structlog.configure(
        processors=[*_SHARED, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_SHARED),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    for stale in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(stale)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("depgraph").setLevel(logging.DEBUG if verbose else logging.WARNING)

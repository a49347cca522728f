"""Locate depgraph.toml.

``DEPGRAPH_CONFIG`` names the file outright.  Without it, the first
``depgraph.toml`` in the start directory or one of its ancestors wins.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "depgraph.toml"
CONFIG_ENV_VAR = "DEPGRAPH_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any.

    A ``DEPGRAPH_CONFIG`` pointing at a missing file disables discovery
    rather than falling back to the walk.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )

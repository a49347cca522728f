"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, depgraph.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    sort_members: bool = True
    show_singletons: bool = True

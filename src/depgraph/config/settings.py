"""DepgraphSettings: one frozen object built from flags, environment and TOML.

Sources, strongest first: the global CLI flags, ``DEPGRAPH_*`` variables
(``DEPGRAPH_OUTPUT__SORT_MEMBERS=false`` reaches into ``[output]``), the
``depgraph.toml`` in effect, then the defaults in :mod:`depgraph.config.models`.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from depgraph.config.discovery import find_config
from depgraph.config.models import OutputConfig

# The TOML file for the settings object currently being built.
_toml_file: ContextVar[Path | None] = ContextVar("depgraph_toml_file", default=None)


class DepgraphSettings(BaseSettings):
    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="DEPGRAPH_",
        env_nested_delimiter="__",
    )

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_toml_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **flags: Any,
    ) -> DepgraphSettings:
        """Resolve the TOML file and build settings with *flags* on top.

        An explicit *config_path* that does not exist means "no file"; it
        does not fall back to discovery from *start*.
        """
        if config_path:
            explicit = Path(config_path)
            toml = explicit if explicit.is_file() else None
        else:
            toml = find_config(start)

        token = _toml_file.set(toml)
        try:
            return cls(config_path=toml, **flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml}: {exc}") from exc
        finally:
            _toml_file.reset(token)

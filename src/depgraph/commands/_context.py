"""AppContext: the object the root group hands to every graph command.

It owns the resolved settings, sets up logging and span recording once,
builds ComponentService instances with the ``[output]`` options applied,
and decides where a result goes and what the exit code is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from depgraph.config.logging import configure_logging
from depgraph.output.formatters import OutputSettings, format_result
from depgraph.services.components import ComponentService
from depgraph.services.telemetry import set_telemetry

if TYPE_CHECKING:
    from depgraph.config.settings import DepgraphSettings
    from depgraph.services.result import ServiceResult


class AppContext:
    def __init__(self, settings: DepgraphSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        set_telemetry(settings.verbose)

    def service(self) -> ComponentService:
        """A ComponentService over an empty graph, shaped by ``[output]``."""
        output = self.settings.output
        return ComponentService(
            sort_members=output.sort_members,
            show_singletons=output.show_singletons,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; failures go to stderr and exit with status 1.

        Warnings about missing nodes or edges go to stderr too, except in
        JSON mode where they are already part of the payload.
        """
        s = self.settings
        text = format_result(
            result,
            settings=OutputSettings(json_output=s.json_output, quiet=s.quiet, verbose=s.verbose),
        )
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if not s.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

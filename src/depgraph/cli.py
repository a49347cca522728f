"""Entry point: ``depgraph [global flags] graph components|cycles|order ...``."""

from __future__ import annotations

from typing import Any

import click

from depgraph import __version__
from depgraph.commands import register_commands
from depgraph.commands._base import DepGroup
from depgraph.commands._context import AppContext
from depgraph.config.settings import DepgraphSettings

_EXAMPLES = """\
  depgraph graph components 1:2 2:3 3:1
  depgraph --json graph order 1:2 2:3
  depgraph -v -c ./depgraph.toml graph cycles 1:2 2:1"""


@click.group(cls=DepGroup, invoke_without_command=True, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="depgraph")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Bare member lists, one component per line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and step timings.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Read this depgraph.toml instead of searching for one.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: Any) -> None:
    """Strong components of a dependency graph, dependencies first.

    An edge SRC:DST means SRC depends on DST.
    """
    ctx.obj = AppContext(DepgraphSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)

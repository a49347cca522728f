"""Click classes that take an ``examples=`` text and expose it as ``--examples``.

``--help`` stays short; sample edge lists for each command live behind
``--examples``.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when the command is given examples."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class DepCommand(_ExamplesMixin, click.Command):
    """Command with optional ``--examples``."""


class DepGroup(_ExamplesMixin, click.Group):
    """Group with optional ``--examples``; its subcommands are DepCommands."""

    command_class = DepCommand

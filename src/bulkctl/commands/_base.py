"""Click classes shared by every bulkctl command.

A command may declare an ``examples`` block of sample invocations. It is
dedented and shown by ``--examples``, which exits before the command body
runs, so the record store is never opened for it.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class ExamplesMixin:
    """Adds an eager ``--examples`` flag when ``examples`` text is given."""

    examples: str | None
    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show sample invocations and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class BulkCommand(ExamplesMixin, click.Command):
    pass


class BulkGroup(ExamplesMixin, click.Group):
    """Group whose ``@group.command()`` subcommands are :class:`BulkCommand`."""

    command_class = BulkCommand

"""Subcommand modules for bulkctl.

register_commands() uses deferred imports to keep ``bulkctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``write`` group and the standalone commands."""
    from bulkctl.commands.init_cmd import init_cmd
    from bulkctl.commands.normalize import normalize
    from bulkctl.commands.write import write

    cli.add_command(write)
    cli.add_command(normalize)
    cli.add_command(init_cmd)

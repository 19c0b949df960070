"""Subcommand modules for slashroute.

Provides register_commands() which uses deferred imports to keep
``slashroute --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from slashroute.commands.callbacks import callbacks
    from slashroute.commands.definitions import commands_group

    cli.add_command(callbacks)
    cli.add_command(commands_group)

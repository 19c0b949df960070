"""Command filter chain backed by the ``command_allowed`` plugin hook.

A command is allowed when no registered filter returns False. Filter
failures are logged and treated as allowing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slashroute.domain.commands import Command
    from slashroute.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


def command_allowed(
    plugin_manager: PluginManager | None,
    command: Command,
    guild_id: str | None,
) -> bool:
    """Whether *command* may run in *guild_id* according to every filter."""
    if plugin_manager is None:
        return True
    try:
        verdicts = plugin_manager.hook.command_allowed(command=command, guild_id=guild_id)
    except Exception:
        logger.warning("Command filter failed for %s", command.name, exc_info=True)
        return True
    return all(verdict is not False for verdict in verdicts)


def filter_commands(
    plugin_manager: PluginManager | None,
    commands: Iterable[Command],
    guild_id: str | None,
) -> list[Command]:
    """The subset of *commands* allowed in *guild_id*, order preserved."""
    return [c for c in commands if command_allowed(plugin_manager, c, guild_id)]

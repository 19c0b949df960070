"""Pluggy hook specifications for slashroute.

One gate consulted before a command runs, and one lifecycle event
dispatched after every routed invocation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from slashroute.domain.commands import Command

PROJECT_NAME = "slashroute"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class SlashrouteHookSpec:
    """Hook specifications for the slashroute plugin system."""

    @hookspec
    def command_allowed(self, command: Command, guild_id: str | None) -> bool | None:
        """Return False to block *command* in *guild_id*; None or True to allow.

        A command is allowed only when no implementation returns False.
        """

    @hookspec
    def post_route(
        self,
        command_name: str,
        interaction_id: str,
        ok: bool,
        error_kind: str | None,
        duration_ms: float,
    ) -> None:
        """Called after an invocation has been routed and its response sent."""

"""Command group: inspect callback profiles and resolve configurations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from slashroute.commands._base import SrGroup
from slashroute.services.catalog import CallbackService

if TYPE_CHECKING:
    from slashroute.commands._context import AppContext

_CALLBACKS_EXAMPLES = """\
  slashroute callbacks resolve
  slashroute callbacks resolve --profile production --enable reaction_events
  slashroute callbacks profiles
  slashroute --json callbacks categories"""


@click.group(cls=SrGroup, examples=_CALLBACKS_EXAMPLES)
@click.pass_obj
def callbacks(app: AppContext) -> None:
    """Inspect and resolve inbound event configuration."""


@callbacks.command(
    examples="""\
  slashroute callbacks resolve
  slashroute callbacks resolve --environment prod
  slashroute callbacks resolve --profile custom --enable message_events
  slashroute callbacks resolve --profile full --disable typing_start --disable voice_events
  slashroute --json callbacks resolve --profile minimal --enhanced-logging"""
)
@click.option("--profile", default=None, help="Profile name (overrides [callbacks] profile).")
@click.option("--environment", default=None, help="Deployment environment for the default profile.")
@click.option("--enable", multiple=True, help="Event or category to enable (repeatable).")
@click.option("--disable", multiple=True, help="Event or category to disable (repeatable).")
@click.option(
    "--enhanced-logging/--no-enhanced-logging",
    default=None,
    help="Override the profile's enhanced logging.",
)
@click.option(
    "--store-bot-messages/--no-store-bot-messages",
    default=None,
    help="Persist messages sent by bots.",
)
@click.option(
    "--auto-create-users/--no-auto-create-users",
    default=None,
    help="Create principals for unseen callers.",
)
@click.pass_obj
def resolve(
    app: AppContext,
    profile: str | None,
    environment: str | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
    enhanced_logging: bool | None,
    store_bot_messages: bool | None,
    auto_create_users: bool | None,
) -> None:
    """Resolve the enabled events and consumer options.

    Starts from the ``[callbacks]`` table of the active settings; flags
    given here replace the corresponding keys.
    """
    config: dict[str, Any] = app.settings.callbacks.model_dump()
    overrides: dict[str, Any] = {
        "profile": profile,
        "enable_callbacks": list(enable) or None,
        "disable_callbacks": list(disable) or None,
        "enhanced_logging": enhanced_logging,
        "store_bot_messages": store_bot_messages,
        "auto_create_users": auto_create_users,
    }
    config.update({k: v for k, v in overrides.items() if v is not None})
    app.emit(
        CallbackService().resolve(config, environment=environment or app.settings.environment)
    )


@callbacks.command(
    examples="""\
  slashroute callbacks profiles
  slashroute --json callbacks profiles"""
)
@click.pass_obj
def profiles(app: AppContext) -> None:
    """List the callback profiles."""
    app.emit(CallbackService().profiles())


@callbacks.command(
    examples="""\
  slashroute callbacks categories
  slashroute --json callbacks categories"""
)
@click.pass_obj
def categories(app: AppContext) -> None:
    """List the callback categories and the events they expand to."""
    app.emit(CallbackService().categories())

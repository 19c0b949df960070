"""Callback (inbound event) catalogue: events, categories, and profiles.

Core events are always enabled. Categories are a naming convenience for
list expansion only; profiles bundle a base event list with logging and
performance defaults. All tables are immutable.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

CORE_EVENTS: frozenset[str] = frozenset({"ready", "interaction_create", "application_command"})

# Ordered for display; membership checks go through the frozensets below.
EXTENDED_EVENT_ORDER: tuple[str, ...] = (
    "message_create",
    "message_update",
    "message_delete",
    "message_delete_bulk",
    "message_reaction_add",
    "message_reaction_remove",
    "message_reaction_remove_all",
    "guild_create",
    "guild_update",
    "guild_delete",
    "guild_role_create",
    "guild_role_update",
    "guild_role_delete",
    "guild_member_add",
    "guild_member_update",
    "guild_member_remove",
    "channel_create",
    "channel_update",
    "channel_delete",
    "voice_state_update",
    "typing_start",
    "invite_create",
    "invite_delete",
    "unknown_event",
)

CORE_EVENT_ORDER: tuple[str, ...] = ("ready", "interaction_create", "application_command")

EXTENDED_EVENTS: frozenset[str] = frozenset(EXTENDED_EVENT_ORDER)
ALL_EVENTS: frozenset[str] = CORE_EVENTS | EXTENDED_EVENTS

CATEGORIES: MappingProxyType[str, frozenset[str]] = MappingProxyType(
    {
        "message_events": frozenset(
            {"message_create", "message_update", "message_delete", "message_delete_bulk"}
        ),
        "reaction_events": frozenset(
            {"message_reaction_add", "message_reaction_remove", "message_reaction_remove_all"}
        ),
        "guild_events": frozenset({"guild_create", "guild_update", "guild_delete"}),
        "role_events": frozenset({"guild_role_create", "guild_role_update", "guild_role_delete"}),
        "member_events": frozenset(
            {"guild_member_add", "guild_member_update", "guild_member_remove"}
        ),
        "channel_events": frozenset({"channel_create", "channel_update", "channel_delete"}),
        "interaction_events": frozenset({"interaction_create", "application_command"}),
        "voice_events": frozenset({"voice_state_update"}),
        "typing_events": frozenset({"typing_start"}),
        "invite_events": frozenset({"invite_create", "invite_delete"}),
        "unknown_events": frozenset({"unknown_event"}),
        "core_events": CORE_EVENTS,
    }
)


class CallbackProfile(BaseModel):
    """Named bundle of base callbacks plus logging/performance defaults."""

    model_config = ConfigDict(frozen=True)

    name: str
    base_callbacks: tuple[str, ...]
    enhanced_logging: bool = False
    performance_optimized: bool = False


CUSTOM_PROFILE = "custom"

PROFILES: MappingProxyType[str, CallbackProfile] = MappingProxyType(
    {
        "minimal": CallbackProfile(
            name="minimal",
            base_callbacks=("core_events",),
            enhanced_logging=False,
            performance_optimized=True,
        ),
        "production": CallbackProfile(
            name="production",
            base_callbacks=("core_events", "message_events", "guild_events", "interaction_events"),
            enhanced_logging=False,
            performance_optimized=True,
        ),
        "development": CallbackProfile(
            name="development",
            base_callbacks=CORE_EVENT_ORDER + EXTENDED_EVENT_ORDER,
            enhanced_logging=True,
            performance_optimized=False,
        ),
        "full": CallbackProfile(
            name="full",
            base_callbacks=CORE_EVENT_ORDER + EXTENDED_EVENT_ORDER,
            enhanced_logging=False,
            performance_optimized=False,
        ),
    }
)

PROFILE_NAMES: tuple[str, ...] = (*PROFILES, CUSTOM_PROFILE)

_ENVIRONMENT_PROFILES: dict[str, str] = {
    "prod": "production",
    "production": "production",
    "dev": "development",
    "development": "development",
    "test": "minimal",
}


def environment_profile(environment: str | None) -> str:
    """Default profile for a deployment environment.

    Examples:
        >>> environment_profile("prod")
        'production'
        >>> environment_profile("test")
        'minimal'
        >>> environment_profile("staging")
        'full'
    """
    return _ENVIRONMENT_PROFILES.get((environment or "").lower(), "full")


def custom_profile(*, enhanced_logging: bool = False) -> CallbackProfile:
    """Synthetic profile used when ``profile = "custom"``."""
    return CallbackProfile(
        name=CUSTOM_PROFILE, base_callbacks=(), enhanced_logging=enhanced_logging
    )


def expand_categories(entries: Iterable[str]) -> frozenset[str]:
    """Replace category names with their events; other entries pass through.

    The result is a set, so expansion is idempotent:
    ``expand_categories(expand_categories(x)) == expand_categories(x)``.
    """
    expanded: set[str] = set()
    for entry in entries:
        expanded |= CATEGORIES.get(entry, frozenset({entry}))
    return frozenset(expanded)


def is_known_entry(entry: str) -> bool:
    """Whether *entry* names a primitive event or a category."""
    return entry in ALL_EVENTS or entry in CATEGORIES


def callback_enabled(name: str, enabled: Iterable[str]) -> bool:
    """Whether event *name* is in an enabled set."""
    return name in enabled

"""Callback configuration resolver.

Computes, once per consumer configuration, the exact set of inbound event
types to process plus the consumer options. Resolution order:

1. validate (all problems collected, then raised at this boundary)
2. base set from the profile (``custom`` starts from the core events)
3. union with the expanded enable list
4. difference with the expanded disable list (disable wins)
5. union with the core events, unconditionally

The function is pure and deterministic apart from one INFO log line.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from slashroute.config.errors import raise_for_diagnostics
from slashroute.config.models import CallbackConfig, validate_callback_config
from slashroute.domain.callbacks import (
    CORE_EVENTS,
    CUSTOM_PROFILE,
    PROFILES,
    CallbackProfile,
    custom_profile,
    environment_profile,
    expand_categories,
)

log = structlog.get_logger(__name__)


class ResolvedCallbackConfig(BaseModel):
    """Immutable outcome of callback resolution."""

    model_config = ConfigDict(frozen=True)

    profile: str
    enabled: frozenset[str]
    enhanced_logging: bool
    performance_optimized: bool
    store_bot_messages: bool
    auto_create_users: bool

    def is_enabled(self, event: str) -> bool:
        return event in self.enabled

    def options(self) -> dict[str, bool]:
        return {
            "enhanced_logging": self.enhanced_logging,
            "performance_optimized": self.performance_optimized,
            "store_bot_messages": self.store_bot_messages,
            "auto_create_users": self.auto_create_users,
        }


def resolve_callback_config(
    config: CallbackConfig | Mapping[str, Any] | None = None,
    *,
    environment: str | None = None,
) -> ResolvedCallbackConfig:
    """Resolve *config* into the enabled event set and consumer options.

    Args:
        config: The ``[callbacks]`` record (model or plain mapping).
        environment: Deployment environment used to pick the default
            profile when ``profile`` is absent.

    Raises:
        CoreCallbackDisableConflict: ``disable_callbacks`` names a core event,
            directly or through a category.
        ConfigurationError: Any other invalid value.
    """
    if config is None:
        config = CallbackConfig()
    elif not isinstance(config, CallbackConfig):
        config = CallbackConfig.model_validate(dict(config))

    raise_for_diagnostics(validate_callback_config(config))

    profile_name = config.profile_name() or environment_profile(environment)
    profile = _profile_for(profile_name, config)

    if profile_name == CUSTOM_PROFILE:
        enabled = set(CORE_EVENTS)
    else:
        enabled = set(expand_categories(profile.base_callbacks))
    enabled |= expand_categories(config.enable_entries())
    enabled -= expand_categories(config.disable_entries())
    enabled |= CORE_EVENTS

    resolved = ResolvedCallbackConfig(
        profile=profile_name,
        enabled=frozenset(enabled),
        enhanced_logging=_flag(config.enhanced_logging, profile.enhanced_logging),
        performance_optimized=profile.performance_optimized,
        store_bot_messages=_flag(config.store_bot_messages, False),
        auto_create_users=_flag(config.auto_create_users, True),
    )
    log.info(
        "callbacks.resolved",
        profile=profile_name,
        enabled_count=len(resolved.enabled),
        **resolved.options(),
    )
    return resolved


def _profile_for(name: str, config: CallbackConfig) -> CallbackProfile:
    if name == CUSTOM_PROFILE:
        return custom_profile(enhanced_logging=_flag(config.enhanced_logging, False))
    return PROFILES[name]


def _flag(value: bool | None, default: bool) -> bool:
    return default if value is None else value

"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``slashroute.toml`` only
contains overrides. The ``[callbacks]`` table is deliberately typed
loosely: values are checked by :func:`validate_callback_config`, which
reports every problem as a structured diagnostic instead of coercing.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_snake

from slashroute.config.errors import ConfigDiagnostic
from slashroute.domain.callbacks import (
    CATEGORIES,
    CORE_EVENT_ORDER,
    CORE_EVENTS,
    EXTENDED_EVENT_ORDER,
    PROFILE_NAMES,
    expand_categories,
    is_known_entry,
)
from slashroute.domain.types import ErrorKind

BOOLEAN_OPTIONS: tuple[str, ...] = ("enhanced_logging", "auto_create_users", "store_bot_messages")


def normalize_name(value: str) -> str:
    """Canonical snake_case spelling of an event, category, or profile name.

    Examples:
        >>> normalize_name("voiceStateUpdate")
        'voice_state_update'
        >>> normalize_name("message_events")
        'message_events'
    """
    return to_snake(value.strip())


class CallbackConfig(BaseModel):
    """[callbacks] section: which inbound events the consumer processes.

    Accepts snake_case and camelCase keys; ``debug_logging`` is accepted
    as an alias of ``enhanced_logging``. Unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    profile: Any = Field(
        default=None,
        validation_alias=AliasChoices("profile", "callback_config", "callbackConfig"),
    )
    enable_callbacks: Any = Field(
        default=None,
        validation_alias=AliasChoices("enable_callbacks", "enableCallbacks"),
    )
    disable_callbacks: Any = Field(
        default=None,
        validation_alias=AliasChoices("disable_callbacks", "disableCallbacks"),
    )
    enhanced_logging: Any = Field(
        default=None,
        validation_alias=AliasChoices(
            "enhanced_logging", "enhancedLogging", "debug_logging", "debugLogging"
        ),
    )
    auto_create_users: Any = Field(
        default=None,
        validation_alias=AliasChoices("auto_create_users", "autoCreateUsers"),
    )
    store_bot_messages: Any = Field(
        default=None,
        validation_alias=AliasChoices("store_bot_messages", "storeBotMessages"),
    )

    @field_validator("enable_callbacks", "disable_callbacks", mode="before")
    @classmethod
    def _freeze_lists(cls, value: Any) -> Any:
        if isinstance(value, (list, set, frozenset)):
            return tuple(value)
        return value

    def profile_name(self) -> str | None:
        if isinstance(self.profile, str):
            return normalize_name(self.profile)
        return None

    def enable_entries(self) -> tuple[str, ...]:
        return _normalized_entries(self.enable_callbacks)

    def disable_entries(self) -> tuple[str, ...]:
        return _normalized_entries(self.disable_callbacks)


def _normalized_entries(value: Any) -> tuple[str, ...]:
    if not isinstance(value, tuple):
        return ()
    return tuple(normalize_name(v) for v in value if isinstance(v, str))


# --- validation (pure) ---

_LIST_EXAMPLES = (
    'enable_callbacks = ["message_events", "guild_events"]',
    'disable_callbacks = ["typing_start", "voice_state_update"]',
)


def validate_callback_config(config: CallbackConfig) -> list[ConfigDiagnostic]:
    """Return every problem found in *config*; an empty list means valid."""
    diagnostics: list[ConfigDiagnostic] = []
    diagnostics.extend(_check_profile(config))
    for list_name in ("enable_callbacks", "disable_callbacks"):
        diagnostics.extend(_check_list(list_name, getattr(config, list_name)))
    diagnostics.extend(_check_core_disable(config))
    diagnostics.extend(_check_booleans(config))
    return diagnostics


def _check_profile(config: CallbackConfig) -> Iterable[ConfigDiagnostic]:
    if config.profile is None:
        return
    if config.profile_name() in PROFILE_NAMES:
        return
    yield ConfigDiagnostic(
        message=f"Unknown callback profile: {config.profile!r}",
        context={"profile": config.profile, "valid_profiles": list(PROFILE_NAMES)},
        suggestions=(
            f"Use one of: {', '.join(PROFILE_NAMES)}",
            "Remove the option to use the environment default",
            'Use "custom" with enable_callbacks for a hand-picked set',
        ),
        examples=(
            'profile = "production"',
            'profile = "custom"\nenable_callbacks = ["message_events"]',
        ),
    )


def _check_list(list_name: str, value: Any) -> Iterable[ConfigDiagnostic]:
    if value is None:
        return
    valid_callbacks = [*CORE_EVENT_ORDER, *EXTENDED_EVENT_ORDER]
    valid_categories = list(CATEGORIES)
    if not isinstance(value, tuple):
        yield ConfigDiagnostic(
            message=f"{list_name} must be a list of callback or category names",
            context={"provided": value, "valid_categories": valid_categories},
            suggestions=(f"Wrap the value in a list: {list_name} = [{value!r}]",),
            examples=_LIST_EXAMPLES,
        )
        return
    invalid = [v for v in value if not isinstance(v, str) or not is_known_entry(normalize_name(v))]
    if not invalid:
        return
    yield ConfigDiagnostic(
        message=f"Invalid callbacks in {list_name}: {invalid!r}",
        context={
            "invalid": invalid,
            "valid_callbacks": valid_callbacks,
            "valid_categories": valid_categories,
        },
        suggestions=(
            f"Use valid callback names: {', '.join(valid_callbacks)}",
            f"Use callback categories: {', '.join(valid_categories)}",
            "Check for typos in callback names",
        ),
        examples=_LIST_EXAMPLES,
    )


def _check_core_disable(config: CallbackConfig) -> Iterable[ConfigDiagnostic]:
    offending = [
        entry
        for entry in config.disable_entries()
        if is_known_entry(entry) and expand_categories([entry]) & CORE_EVENTS
    ]
    if not offending:
        return
    yield ConfigDiagnostic(
        code=ErrorKind.CORE_CALLBACK_DISABLE_CONFLICT,
        message=f"Cannot disable core callbacks: {offending!r}",
        context={"attempted_disable": offending, "core_callbacks": list(CORE_EVENT_ORDER)},
        suggestions=(
            "Remove core callbacks from disable_callbacks",
            "Core callbacks are required for command handling",
            'Use profile = "minimal" for the smallest callback set',
        ),
        examples=(
            'disable_callbacks = ["typing_start", "voice_state_update"]  # OK',
            'disable_callbacks = ["message_events", "guild_events"]      # OK',
        ),
    )


def _check_booleans(config: CallbackConfig) -> Iterable[ConfigDiagnostic]:
    provided = {
        name: getattr(config, name)
        for name in BOOLEAN_OPTIONS
        if getattr(config, name) is not None and not isinstance(getattr(config, name), bool)
    }
    if not provided:
        return
    yield ConfigDiagnostic(
        message=f"Boolean options must be true or false: {list(provided)!r}",
        context={"invalid_options": list(provided), "provided_values": provided},
        suggestions=(
            "Use true or false for boolean options",
            "Remove the option to use its default value",
            'Quoted values such as "true" are strings, not booleans',
        ),
        examples=(
            "enhanced_logging = true",
            "auto_create_users = false",
            "store_bot_messages = true",
        ),
    )

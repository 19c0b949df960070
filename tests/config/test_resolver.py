"""Tests for resolve_callback_config."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from slashroute.config.callbacks import resolve_callback_config
from slashroute.config.errors import ConfigurationError, CoreCallbackDisableConflict
from slashroute.config.models import CallbackConfig
from slashroute.domain.callbacks import ALL_EVENTS, CORE_EVENTS


class TestScenarios:
    def test_minimal_is_exactly_core(self) -> None:
        resolved = resolve_callback_config({"profile": "minimal"})
        assert resolved.enabled == CORE_EVENTS

    def test_production_with_disables(self) -> None:
        resolved = resolve_callback_config(
            {"profile": "production", "disable_callbacks": ["voice_state_update", "typing_start"]}
        )
        assert {"message_create", "guild_create"} <= resolved.enabled
        assert "voice_state_update" not in resolved.enabled
        assert "typing_start" not in resolved.enabled

    def test_custom_enable_then_disable(self) -> None:
        resolved = resolve_callback_config(
            {
                "profile": "custom",
                "enable_callbacks": ["message_events"],
                "disable_callbacks": ["message_delete"],
            }
        )
        assert {"message_create", "message_update", "message_delete_bulk"} <= resolved.enabled
        assert CORE_EVENTS <= resolved.enabled
        assert "message_delete" not in resolved.enabled

    def test_camel_case_input(self) -> None:
        resolved = resolve_callback_config(
            {"profile": "custom", "enableCallbacks": ["messageEvents", "typingStart"]}
        )
        assert {"message_create", "typing_start"} <= resolved.enabled


class TestDefaults:
    @pytest.mark.parametrize(
        ("environment", "profile"),
        [("prod", "production"), ("dev", "development"), ("test", "minimal"), ("qa", "full")],
    )
    def test_environment_picks_profile(self, environment: str, profile: str) -> None:
        assert resolve_callback_config(environment=environment).profile == profile

    def test_explicit_profile_beats_environment(self) -> None:
        resolved = resolve_callback_config({"profile": "minimal"}, environment="dev")
        assert resolved.profile == "minimal"

    def test_no_config_no_environment_is_full(self) -> None:
        resolved = resolve_callback_config()
        assert resolved.profile == "full"
        assert resolved.enabled == ALL_EVENTS

    def test_accepts_model(self) -> None:
        resolved = resolve_callback_config(CallbackConfig(profile="minimal"))
        assert resolved.enabled == CORE_EVENTS


class TestOptions:
    def test_profile_flags(self) -> None:
        minimal = resolve_callback_config({"profile": "minimal"})
        assert minimal.performance_optimized is True
        assert minimal.enhanced_logging is False

        development = resolve_callback_config({"profile": "development"})
        assert development.enhanced_logging is True
        assert development.performance_optimized is False

    def test_enhanced_logging_override(self) -> None:
        resolved = resolve_callback_config({"profile": "development", "enhanced_logging": False})
        assert resolved.enhanced_logging is False

    def test_custom_profile_flags(self) -> None:
        resolved = resolve_callback_config({"profile": "custom", "debug_logging": True})
        assert resolved.enhanced_logging is True
        assert resolved.performance_optimized is False

    def test_consumer_option_defaults(self) -> None:
        resolved = resolve_callback_config({"profile": "minimal"})
        assert resolved.auto_create_users is True
        assert resolved.store_bot_messages is False

    def test_options_dict(self) -> None:
        resolved = resolve_callback_config({"profile": "minimal", "store_bot_messages": True})
        assert resolved.options() == {
            "enhanced_logging": False,
            "performance_optimized": True,
            "store_bot_messages": True,
            "auto_create_users": True,
        }

    def test_is_enabled(self) -> None:
        resolved = resolve_callback_config({"profile": "minimal"})
        assert resolved.is_enabled("ready")
        assert not resolved.is_enabled("typing_start")


class TestErrors:
    def test_core_disable_raises_conflict(self) -> None:
        with pytest.raises(CoreCallbackDisableConflict) as exc_info:
            resolve_callback_config({"profile": "full", "disable_callbacks": ["ready"]})
        assert exc_info.value.context["attempted_disable"] == ["ready"]

    def test_core_disable_via_category(self) -> None:
        with pytest.raises(CoreCallbackDisableConflict):
            resolve_callback_config({"disable_callbacks": ["interaction_events"]})

    def test_conflict_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_callback_config({"disable_callbacks": ["application_command"]})

    def test_conflict_reported_first(self) -> None:
        with pytest.raises(CoreCallbackDisableConflict) as exc_info:
            resolve_callback_config({"profile": "turbo", "disable_callbacks": ["ready"]})
        assert len(exc_info.value.diagnostics) == 2
        assert "core callbacks" in exc_info.value.message

    def test_invalid_profile(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_callback_config({"profile": "turbo"})
        err = exc_info.value
        assert not isinstance(err, CoreCallbackDisableConflict)
        assert err.suggestions
        assert err.examples
        assert "valid_profiles" in err.context

    def test_error_render_lists_every_problem(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_callback_config({"profile": "turbo", "enable_callbacks": ["bogus"]})
        rendered = exc_info.value.render()
        assert "Unknown callback profile" in rendered
        assert "Invalid callbacks in enable_callbacks" in rendered
        assert str(exc_info.value) == rendered

    def test_invalid_boolean(self) -> None:
        with pytest.raises(ConfigurationError, match="Boolean options"):
            resolve_callback_config({"auto_create_users": "no"})


class TestLogging:
    def test_resolution_logged_once(self) -> None:
        with capture_logs() as logs:
            resolve_callback_config({"profile": "minimal"})
        resolved_events = [e for e in logs if e["event"] == "callbacks.resolved"]
        assert len(resolved_events) == 1
        assert resolved_events[0]["log_level"] == "info"
        assert resolved_events[0]["profile"] == "minimal"
        assert resolved_events[0]["enabled_count"] == 3

"""Tests for Rich CLI renderers."""

from __future__ import annotations

import json

from slashroute.domain.types import ErrorKind
from slashroute.output.renderers import format_result, render_result
from slashroute.services.result import ServiceResult


class TestFormatResult:
    def test_json(self) -> None:
        result = ServiceResult.success("resolve_callbacks", {"profile": "minimal"})
        parsed = json.loads(format_result(result, json_output=True))
        assert parsed["ok"] is True
        assert parsed["data"] == {"profile": "minimal"}

    def test_json_error(self) -> None:
        result = ServiceResult.failure("show_commands", ErrorKind.NOT_FOUND, "No command named 'x'")
        parsed = json.loads(format_result(result, json_output=True))
        assert parsed["error"]["code"] == "not_found"

    def test_human(self) -> None:
        result = ServiceResult.success("something_else", {"answer": 42})
        assert format_result(result) == render_result(result)


class TestRenderers:
    def test_resolve_callbacks(self) -> None:
        result = ServiceResult.success(
            "resolve_callbacks",
            {
                "profile": "minimal",
                "environment": "test",
                "options": {"enhanced_logging": False, "performance_optimized": True},
                "enabled": ["ready", "interaction_create", "application_command"],
            },
        )
        out = render_result(result)
        assert out.startswith("OK  resolve_callbacks")
        assert "profile: minimal" in out
        assert "performance_optimized: true" in out
        assert "enabled (3):" in out
        assert "    interaction_create" in out

    def test_profiles_table(self) -> None:
        result = ServiceResult.success(
            "list_profiles",
            {
                "count": 1,
                "items": [
                    {
                        "name": "minimal",
                        "base_callbacks": ["core_events"],
                        "enhanced_logging": False,
                        "performance_optimized": True,
                    }
                ],
            },
        )
        out = render_result(result)
        assert "minimal" in out
        assert "core_events" in out
        assert "1 profiles" in out

    def test_categories_table(self) -> None:
        result = ServiceResult.success(
            "list_categories",
            {"count": 1, "items": [{"name": "voice_events", "events": ["voice_state_update"]}]},
        )
        out = render_result(result)
        assert "voice_events" in out
        assert "voice_state_update" in out
        assert "1 categories" in out

    def test_show_commands(self) -> None:
        result = ServiceResult.success(
            "show_commands",
            {
                "count": 1,
                "items": [
                    {
                        "name": "echo",
                        "description": "Echo text",
                        "type": 1,
                        "options": [
                            {"name": "message", "type": 3, "description": "", "required": True}
                        ],
                    }
                ],
            },
        )
        out = render_result(result)
        assert "/echo" in out
        assert "message type=3 required" in out

    def test_generic_fallback(self) -> None:
        out = render_result(ServiceResult.success("mystery", {"a": 1, "b": [1, 2]}))
        assert "OK  mystery" in out
        assert "a: 1" in out
        assert "b: [1,2]" in out

    def test_generic_non_dict_data(self) -> None:
        out = render_result(ServiceResult.success("mystery", "plain"))
        assert "value: plain" in out


class TestErrorRendering:
    def test_error_line(self) -> None:
        result = ServiceResult.failure("show_commands", ErrorKind.NOT_FOUND, "No command named 'x'")
        assert render_result(result) == "ERROR  show_commands: No command named 'x'"

    def test_rendered_diagnostic_shown(self) -> None:
        result = ServiceResult.failure(
            "resolve_callbacks",
            ErrorKind.CONFIGURATION,
            "Unknown callback profile: 'turbo'",
            detail={"rendered": "Configuration error: Unknown callback profile: 'turbo'"},
        )
        out = render_result(result)
        assert "Configuration error: Unknown callback profile" in out

    def test_verbose_detail(self) -> None:
        result = ServiceResult.failure(
            "show_commands",
            ErrorKind.NOT_FOUND,
            "missing",
            detail={"available": ["echo"]},
        )
        assert "available: ['echo']" in render_result(result, verbose=True)
        assert "available" not in render_result(result)

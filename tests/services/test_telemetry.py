"""Tests for telemetry primitives: Span, trace_span, @traced, slow operations."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest
from structlog.testing import capture_logs

from slashroute.domain.types import ErrorKind
from slashroute.services.result import ServiceResult
from slashroute.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    log_slow_operation,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_with_children_and_annotations(self) -> None:
        root = Span(name="root")
        child = Span(name="backend.notes.create_note", parent=root)
        child.annotate("error", "Forbidden")
        root.children.append(child)
        child.end()
        root.end()
        d = root.to_dict()
        assert d["children"][0]["name"] == "backend.notes.create_note"
        assert d["children"][0]["annotations"] == {"error": "Forbidden"}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("test") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("test") as span:
            assert span is None

    def test_nested_spans(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("a"):
                with trace_span("b"):
                    pass
        finally:
            _current_span.reset(token)
        assert root.children[0].name == "a"
        assert root.children[0].children[0].name == "b"
        assert root.children[0].end_time is not None


class _Service:
    @traced
    def run(self, *, fail: bool = False) -> ServiceResult:
        if fail:
            return ServiceResult.failure("run", ErrorKind.UNKNOWN, "nope")
        with trace_span("inner"):
            pass
        return ServiceResult.success("run", {"x": 1})

    @traced
    def explode(self) -> ServiceResult:
        msg = "boom"
        raise RuntimeError(msg)


class TestTracedDecorator:
    def test_disabled_leaves_meta_alone(self) -> None:
        assert _Service().run().meta is None

    def test_enabled_injects_span_tree(self) -> None:
        enable_telemetry()
        result = _Service().run()
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "_Service.run"
        assert tree["children"][0]["name"] == "inner"

    def test_failure_results_traced_too(self) -> None:
        enable_telemetry()
        result = _Service().run(fail=True)
        assert result.meta is not None
        assert "telemetry" in result.meta

    def test_exception_resets_span(self) -> None:
        enable_telemetry()
        with pytest.raises(RuntimeError):
            _Service().explode()
        assert get_current_span() is None

    def test_get_current_span_disabled(self) -> None:
        assert get_current_span() is None


class TestSlowOperations:
    def test_under_threshold_silent(self) -> None:
        with capture_logs() as logs:
            log_slow_operation("command", "echo", 999.0)
        assert logs == []

    @pytest.mark.parametrize(
        ("duration_ms", "level"),
        [(1500.0, "info"), (6000.0, "warning"), (12000.0, "error")],
    )
    def test_severity_scales(self, duration_ms: float, level: str) -> None:
        with capture_logs() as logs:
            log_slow_operation("command", "echo", duration_ms, interaction_id="1001")
        [entry] = logs
        assert entry["log_level"] == level
        assert entry["operation_type"] == "command"
        assert entry["operation_name"] == "echo"
        assert entry["interaction_id"] == "1001"

    def test_custom_threshold(self) -> None:
        with capture_logs() as logs:
            log_slow_operation("backend", "notes.list", 60.0, threshold_ms=50)
        assert len(logs) == 1

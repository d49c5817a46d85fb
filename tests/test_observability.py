"""
Property-based tests for observability functionality.

Tests verify:
- Operation logging with required fields
- Correlation IDs on every entry emitted inside a correlation context
- Normalization logging levels
- Metric recording
"""

import io
import json
import uuid
from unittest.mock import patch

import pytest
from hypothesis import given, strategies as st, settings, HealthCheck
from opentelemetry import trace
from structlog.testing import capture_logs

from models.data_models import NormalizationPath
from tools.observability import (
    ObservabilityManager,
    get_observability_manager,
    setup_observability,
)


@pytest.fixture
def obs_manager():
    return ObservabilityManager(service_name="test-service", enable_console_export=False)


# Custom strategies
operation_strategy = st.sampled_from(["review_requested", "review_normalized", "model_call_completed"])
level_strategy = st.sampled_from(["info", "warning", "error", "critical"])


@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(operation=operation_strategy, level=level_strategy)
def test_property_operation_logging_contains_required_fields(obs_manager, operation, level):
    """For any operation logged, the entry carries the event name and level."""
    with capture_logs() as logs:
        obs_manager.log_operation(operation=operation, level=level, review_length=3)

    assert len(logs) == 1
    assert logs[0]["event"] == operation
    assert logs[0]["log_level"] == level
    assert logs[0]["review_length"] == 3
    assert "timestamp" in logs[0]


def test_json_output(obs_manager):
    captured_output = io.StringIO()
    with patch('sys.stdout', captured_output):
        obs_manager.log_operation("review_requested", code_length=10)

    log_entry = json.loads(captured_output.getvalue().strip())
    assert log_entry["event"] == "review_requested"
    assert log_entry["level"] == "info"
    assert log_entry["code_length"] == 10


def test_debug_is_filtered_at_info_level(obs_manager):
    captured_output = io.StringIO()
    with patch('sys.stdout', captured_output):
        obs_manager.log_operation("noisy", level="debug")

    assert captured_output.getvalue() == ""


@settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(correlation_id=st.uuids().map(str))
def test_property_correlation_id_is_bound(obs_manager, correlation_id):
    captured_output = io.StringIO()
    with patch('sys.stdout', captured_output):
        with obs_manager.correlation_context(correlation_id) as bound:
            assert bound == correlation_id
            obs_manager.log_operation("review_requested")
        obs_manager.log_operation("after_context")

    lines = [json.loads(line) for line in captured_output.getvalue().strip().splitlines()]
    assert lines[0]["correlation_id"] == correlation_id
    assert "correlation_id" not in lines[1]


def test_correlation_context_generates_id(obs_manager):
    with obs_manager.correlation_context() as correlation_id:
        assert uuid.UUID(correlation_id)


def test_log_normalization_levels(obs_manager):
    with capture_logs() as logs:
        obs_manager.log_normalization(NormalizationPath.CANDIDATE_PARTS, "review")
        obs_manager.log_normalization(NormalizationPath.STRINGIFIED, "{...}")

    events = [(entry["event"], entry["log_level"]) for entry in logs]
    assert ("review_normalized", "info") in events
    assert ("review_normalization_degraded", "warning") in events


def test_log_normalization_records_length_metric(obs_manager):
    obs_manager.log_normalization(NormalizationPath.PLAIN_TEXT, "hello")

    entries = obs_manager.get_metrics("review_length")["review_length"]
    assert entries[0]["value"] == 5.0
    assert entries[0]["tags"] == {"path": "plain_text"}


def test_log_error_includes_error_details(obs_manager):
    with capture_logs() as logs:
        obs_manager.log_error("review_failed", RuntimeError("boom"), error_kind="unknown")

    assert logs[0]["log_level"] == "error"
    assert logs[0]["error_type"] == "RuntimeError"
    assert logs[0]["error_message"] == "boom"
    assert logs[0]["error_kind"] == "unknown"


def test_trace_operation_reraises(obs_manager):
    with pytest.raises(ValueError):
        with obs_manager.trace_operation("gemini.generate_content", {"model": "m"}):
            raise ValueError("failed")


def test_get_metrics_all_and_missing(obs_manager):
    obs_manager.record_metric("model_call_duration_ms", 12.5, "ms")

    assert "model_call_duration_ms" in obs_manager.get_metrics()
    assert obs_manager.get_metrics("unknown") == {"unknown": []}


def test_setup_observability_replaces_global():
    manager = setup_observability(service_name="replaced", enable_console_export=False)
    assert get_observability_manager() is manager
    assert manager.service_name == "replaced"


def test_metric_history_is_capped():
    manager = ObservabilityManager(service_name="test-service", metric_history=3)

    for value in range(10):
        manager.record_metric("review_length", float(value), "chars")

    values = [entry["value"] for entry in manager.get_metrics("review_length")["review_length"]]
    assert values == [7.0, 8.0, 9.0]


def test_get_metrics_returns_snapshot(obs_manager):
    obs_manager.record_metric("review_length", 1.0, "chars")

    snapshot = obs_manager.get_metrics()
    snapshot["review_length"].clear()

    assert len(obs_manager.get_metrics("review_length")["review_length"]) == 1


@pytest.mark.parametrize("candidate", ["req-123", "a1b2.c_3", str(uuid.UUID(int=7))])
def test_accept_correlation_id_keeps_tokens(obs_manager, candidate):
    assert obs_manager.accept_correlation_id(candidate) == candidate


@pytest.mark.parametrize("candidate", [None, "", "x" * 129, "two words", "a\nb", "{\"json\": 1}"])
def test_accept_correlation_id_replaces_unusable_values(obs_manager, candidate):
    accepted = obs_manager.accept_correlation_id(candidate)
    assert accepted != candidate
    assert uuid.UUID(accepted)


def test_nested_correlation_context_restores_outer_id(obs_manager):
    captured_output = io.StringIO()
    with patch('sys.stdout', captured_output):
        with obs_manager.correlation_context("outer"):
            with obs_manager.correlation_context("inner"):
                obs_manager.log_operation("inner_event")
            obs_manager.log_operation("outer_event")

    lines = [json.loads(line) for line in captured_output.getvalue().strip().splitlines()]
    assert [line["correlation_id"] for line in lines] == ["inner", "outer"]


def test_tracer_provider_is_installed_once():
    ObservabilityManager(service_name="first")
    provider = trace.get_tracer_provider()

    with patch.object(trace, "set_tracer_provider") as set_provider, \
            patch.object(provider, "add_span_processor") as add_processor:
        ObservabilityManager(service_name="second", enable_console_export=True)

    set_provider.assert_not_called()
    add_processor.assert_called_once()

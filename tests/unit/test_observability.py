"""
Unit tests for logging, metrics and tracing.
"""

import json
import logging

import pytest
import structlog
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from prometheus_client import CollectorRegistry

from fakes import SequenceRandom, StubJob
from workstealing import recruiter as recruiter_module
from workstealing.config import get_settings
from workstealing.constants import Outcome
from workstealing.observability.logging import (
    add_service_name,
    add_trace_context,
    bind_worker,
    clear_context,
    setup_logging,
)
from workstealing.observability.metrics import MetricsCollector
from workstealing.recruiter import Recruiter
from workstealing.types.job import JobResult


@pytest.fixture
def exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def provider(exporter: InMemorySpanExporter) -> TracerProvider:
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider


@pytest.fixture
def restore_logging():
    """Undo setup_logging's changes to global logging state."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    yield

    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    clear_context()


class TestTracing:
    """Tests for recruiting spans."""

    def test_job_invocation_span(
        self,
        provider: TracerProvider,
        exporter: InMemorySpanExporter,
        metrics: MetricsCollector,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Test that each invocation is traced with job id and outcome."""
        monkeypatch.setattr(
            recruiter_module, "get_tracer", lambda: provider.get_tracer("test")
        )
        recruiter = Recruiter(random=SequenceRandom([0.1]), metrics=metrics)
        recruiter.install(StubJob(JobResult.no_work()), "idle", 0.5)

        recruiter.enlist()

        (span,) = exporter.get_finished_spans()
        assert span.name == "recruit_job"
        assert span.attributes["job.id"] == "idle"
        assert span.attributes["job.outcome"] == Outcome.DISMISSED

    def test_trace_context_added_to_logs(self, provider: TracerProvider):
        """Test that log records inside a span carry its ids."""
        with provider.get_tracer("test").start_as_current_span("work") as span:
            event = add_trace_context(None, "info", {"event": "hello"})

        ctx = span.get_span_context()
        assert event["trace_id"] == format(ctx.trace_id, "032x")
        assert event["span_id"] == format(ctx.span_id, "016x")

    def test_no_trace_context_outside_span(self):
        """Test that records outside a span are left alone."""
        assert add_trace_context(None, "info", {"event": "hello"}) == {"event": "hello"}


class TestLogging:
    """Tests for structured logging setup."""

    def test_json_records(
        self,
        restore_logging,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Test that stdlib records are rendered as JSON with bound context."""
        monkeypatch.setenv("LOG_FORMAT", "json")
        get_settings.cache_clear()
        try:
            setup_logging()
        finally:
            get_settings.cache_clear()

        bind_worker("web-1-4242")
        Recruiter(metrics=MetricsCollector(registry=CollectorRegistry())).install(
            StubJob(), "gc", 0.25
        )

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "Installed job gc"
        assert record["job_id"] == "gc"
        assert record["rate"] == 0.25
        assert record["worker_id"] == "web-1-4242"
        assert record["service"] == "workstealing"
        assert record["level"] == "info"

    def test_service_name_does_not_override(self):
        """Test that an explicit service field is kept."""
        assert add_service_name(None, "info", {"event": "x"})["service"] == "workstealing"
        assert add_service_name(None, "info", {"service": "api"})["service"] == "api"


class TestMetrics:
    """Tests for the metrics collector."""

    def test_exposition(self, metrics: MetricsCollector):
        """Test that recorded jobs appear in the Prometheus output."""
        metrics.record_job("gc", Outcome.RECRUITED, 0.002)

        output = metrics.get_metrics().decode()

        assert 'workstealing_job_invocations_total{job_id="gc",outcome="recruited"} 1.0' in output
        assert metrics.get_content_type().startswith("text/plain")

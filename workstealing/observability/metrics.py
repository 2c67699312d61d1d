"""
Prometheus metrics collection.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from workstealing.constants import (
    METRIC_ENLISTMENTS,
    METRIC_JOB_DURATION,
    METRIC_JOB_ERRORS,
    METRIC_JOB_INVOCATIONS,
)

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for recruiting.

    Collects metrics for:
    - Enlistment outcomes (including callers no job was drawn for)
    - Per-job invocation outcomes
    - Per-job errors by kind
    - Per-job slice duration
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.enlistments = Counter(
            METRIC_ENLISTMENTS,
            "Total number of enlisted callers",
            ["outcome"],
            registry=self._registry,
        )

        self.job_invocations = Counter(
            METRIC_JOB_INVOCATIONS,
            "Total number of job slices invoked",
            ["job_id", "outcome"],
            registry=self._registry,
        )

        self.job_errors = Counter(
            METRIC_JOB_ERRORS,
            "Total number of job slices abandoned because of an error",
            ["job_id", "kind"],
            registry=self._registry,
        )

        # Slices are expected to take microseconds to tens of milliseconds
        self.job_duration = Histogram(
            METRIC_JOB_DURATION,
            "Job slice duration in seconds",
            ["job_id"],
            buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5),
            registry=self._registry,
        )

    def record_enlistment(self, outcome: str) -> None:
        """Record the outcome of one enlist() call."""
        self.enlistments.labels(outcome=outcome).inc()

    def record_job(
        self,
        job_id: str,
        outcome: str,
        duration_seconds: float,
        error: str | None = None,
    ) -> None:
        """Record one job invocation."""
        self.job_invocations.labels(job_id=job_id, outcome=outcome).inc()
        self.job_duration.labels(job_id=job_id).observe(duration_seconds)
        if error is not None:
            self.job_errors.labels(job_id=job_id, kind=error).inc()

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self._registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics response."""
        return CONTENT_TYPE_LATEST


def setup_metrics() -> MetricsCollector:
    """
    Set up and return the metrics collector.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_metrics() -> MetricsCollector:
    """
    Get the metrics collector instance, creating it on first use.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    if _metrics is None:
        return setup_metrics()
    return _metrics

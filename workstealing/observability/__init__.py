"""
Observability module.
Contains logging, metrics, and tracing setup.
"""

from workstealing.observability.logging import bind_worker, setup_logging
from workstealing.observability.metrics import (
    MetricsCollector,
    get_metrics,
    setup_metrics,
)
from workstealing.observability.tracing import get_tracer, setup_tracing

__all__ = [
    "setup_logging",
    "bind_worker",
    "setup_metrics",
    "get_metrics",
    "MetricsCollector",
    "setup_tracing",
    "get_tracer",
]

"""Prometheus metrics for the FleetGuard service.

Business Metrics (for collections):
- fleetguard_status_computed_total: Statuses computed by risk level
- fleetguard_reminder_due_total: Pending reminders by kind
- fleetguard_legacy_rule_total: Evaluations still using a deprecated rule

Technical Metrics (for Engineering/SRE):
- fleetguard_batch_latency_seconds: Board evaluation latency
- fleetguard_batch_size: Records per board evaluation
- fleetguard_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator, Iterable

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST

from src.service.billing import RiskStatus, should_remind


# =============================================================================
# Business Metrics
# =============================================================================

status_computed_total = Counter(
    "fleetguard_status_computed_total",
    "Total number of risk statuses computed",
    ["risk_level"],  # normal, high, severe
)

reminder_due_total = Counter(
    "fleetguard_reminder_due_total",
    "Unreminded records found on a due day or the day before",
    ["kind"],  # due_today, due_tomorrow
)

legacy_rule_total = Counter(
    "fleetguard_legacy_rule_total",
    "Evaluations requested with a deprecated highlight rule",
    ["rule"],
)


# =============================================================================
# Technical Metrics
# =============================================================================

batch_latency = Histogram(
    "fleetguard_batch_latency_seconds",
    "Board evaluation latency in seconds",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0],
)

batch_size = Histogram(
    "fleetguard_batch_size",
    "Number of records per board evaluation",
    buckets=[1, 10, 50, 100, 250, 500, 1000, 5000],
)

http_requests_total = Counter(
    "fleetguard_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "fleetguard_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_statuses(statuses: Iterable[RiskStatus]) -> None:
    """Record computed statuses and pending reminders."""
    for status in statuses:
        status_computed_total.labels(risk_level=status.risk_level.value).inc()
        if should_remind(status):
            reminder_due_total.labels(kind=status.reminder_kind.value).inc()


def record_legacy_rule(rule: str) -> None:
    """Record use of a deprecated highlight rule."""
    legacy_rule_total.labels(rule=rule).inc()


@contextmanager
def track_batch_latency(size: int) -> Generator[None, None, None]:
    """Context manager to track board evaluation latency and size."""
    batch_size.observe(size)
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        batch_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST

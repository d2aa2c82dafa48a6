"""Prometheus metrics for the SPay client.

- spay_gateway_request_total: Gateway calls by operation and outcome
- spay_gateway_request_latency_seconds: Gateway exchange latency
- spay_business_error_total: Business failures by gateway response code
- spay_encryption_self_check_failures_total: Failed envelope self-checks
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


gateway_request_total = Counter(
    "spay_gateway_request_total",
    "Total number of SPay gateway calls",
    ["operation", "outcome"],  # success, business_error, transport_error, decode_error
)

gateway_request_latency = Histogram(
    "spay_gateway_request_latency_seconds",
    "SPay gateway exchange latency in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

business_error_total = Counter(
    "spay_business_error_total",
    "Business failures reported by the gateway",
    ["response_code"],
)

encryption_self_check_failures = Counter(
    "spay_encryption_self_check_failures_total",
    "Outbound envelopes that failed the decrypt-after-encrypt check",
)


@contextmanager
def track_gateway_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track gateway exchange latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        gateway_request_latency.labels(operation=operation).observe(duration)


def record_gateway_success(operation: str) -> None:
    """Record a successful gateway call."""
    gateway_request_total.labels(operation=operation, outcome="success").inc()


def record_gateway_failure(operation: str, outcome: str) -> None:
    """Record a failed gateway call."""
    gateway_request_total.labels(operation=operation, outcome=outcome).inc()


def record_business_error(response_code: str) -> None:
    """Record a business failure by its gateway response code."""
    business_error_total.labels(response_code=response_code or "unknown").inc()


def record_self_check_failure() -> None:
    """Record a failed envelope self-check."""
    encryption_self_check_failures.inc()


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics exposition."""
    return CONTENT_TYPE_LATEST

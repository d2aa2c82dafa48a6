"""
Integration tests for metrics tracking.

These tests verify:
1. Gateway calls are counted by operation and outcome
2. Business errors are counted by response code
3. Metrics are exposed in Prometheus format
"""

import pytest

from spay.core.metrics import REGISTRY, get_metrics, get_metrics_content_type
from spay.domain.entities import TRANSFER_SUCCESS, GatewayCall
from spay.domain.exceptions import BusinessError, TransportError
from spay.infrastructure.clients import HttpSpayGatewayClient
from tests.integration.conftest import GatewayStub

CALL = GatewayCall(operation="metrics_check", path="/api/Spay/MetricsCheck", sentinel=TRANSFER_SUCCESS)


def sample(name: str, **labels) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


# =============================================================================
# Gateway Metrics
# =============================================================================

class TestGatewayMetrics:
    """Tests for gateway call counters."""

    def test_success_is_counted(
        self,
        gateway_client: HttpSpayGatewayClient,
        stub: GatewayStub,
    ):
        before = sample("spay_gateway_request_total", operation="metrics_check", outcome="success")
        stub.queue({"response": "00"})

        gateway_client.execute(CALL, {}, lambda p: p)

        after = sample("spay_gateway_request_total", operation="metrics_check", outcome="success")
        assert after == before + 1

    def test_business_error_is_counted_by_code(
        self,
        gateway_client: HttpSpayGatewayClient,
        stub: GatewayStub,
    ):
        before_total = sample(
            "spay_gateway_request_total", operation="metrics_check", outcome="business_error"
        )
        before_code = sample("spay_business_error_total", response_code="x51")
        stub.queue({"response": "x51"}, status_code=503)

        with pytest.raises(BusinessError):
            gateway_client.execute(CALL, {}, lambda p: p)

        assert sample(
            "spay_gateway_request_total", operation="metrics_check", outcome="business_error"
        ) == before_total + 1
        assert sample("spay_business_error_total", response_code="x51") == before_code + 1

    def test_transport_error_is_counted(
        self,
        gateway_client: HttpSpayGatewayClient,
        stub: GatewayStub,
    ):
        before = sample(
            "spay_gateway_request_total", operation="metrics_check", outcome="transport_error"
        )
        stub.queue(status_code=503)

        with pytest.raises(TransportError):
            gateway_client.execute(CALL, {}, lambda p: p)

        assert sample(
            "spay_gateway_request_total", operation="metrics_check", outcome="transport_error"
        ) == before + 1

    def test_latency_is_observed(
        self,
        gateway_client: HttpSpayGatewayClient,
        stub: GatewayStub,
    ):
        before = sample("spay_gateway_request_latency_seconds_count", operation="metrics_check")
        stub.queue({"response": "00"})

        gateway_client.execute(CALL, {}, lambda p: p)

        assert sample(
            "spay_gateway_request_latency_seconds_count", operation="metrics_check"
        ) == before + 1


# =============================================================================
# Exposition
# =============================================================================

class TestExposition:
    """Tests for the Prometheus exposition helpers."""

    def test_metrics_are_exposed(self):
        content = get_metrics().decode("utf-8")

        assert "spay_gateway_request_total" in content
        assert "spay_encryption_self_check_failures_total" in content

    def test_content_type(self):
        assert "text/plain" in get_metrics_content_type()

"""Dependency wiring for SPay clients and services."""

import httpx

from spay.core.config import Settings, get_settings
from spay.domain.entities import SharedSecret
from spay.infrastructure.clients import (
    HttpInflowRequeryClient,
    HttpSpayGatewayClient,
)
from spay.application.services import SpayService
from spay.service.crypto import load_shared_secret


def get_shared_secret(settings: Settings | None = None) -> SharedSecret:
    """
    Build the shared secret from configuration.

    Raises:
        FormatError: If a configured bit-string is malformed
        CipherInitError: If the key or IV has the wrong length
    """
    settings = settings or get_settings()
    return load_shared_secret(settings.shared_key, settings.shared_vector)


def get_gateway_client(
    settings: Settings | None = None,
    http_client: httpx.Client | None = None,
) -> HttpSpayGatewayClient:
    """Get a PaymentGatewayClient instance."""
    settings = settings or get_settings()
    return HttpSpayGatewayClient(
        settings=settings,
        secret=get_shared_secret(settings),
        http_client=http_client,
    )


def get_requery_client(
    settings: Settings | None = None,
    http_client: httpx.Client | None = None,
) -> HttpInflowRequeryClient:
    """Get an InflowRequeryClient instance."""
    return HttpInflowRequeryClient(settings=settings, http_client=http_client)


def get_spay_service(
    settings: Settings | None = None,
    http_client: httpx.Client | None = None,
) -> SpayService:
    """Get a SpayService instance with all dependencies."""
    settings = settings or get_settings()
    return SpayService(
        gateway=get_gateway_client(settings, http_client),
        requery=get_requery_client(settings, http_client),
        settings=settings,
    )

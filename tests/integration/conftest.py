"""
Fixtures for integration tests.

Provides:
- Settings pointing at test hosts with a known shared secret
- A scripted gateway stub behind httpx.MockTransport
- Gateway, requery and service instances wired to the stub
"""

import json
from typing import Any, Callable, Dict, Iterator, List, Union

import httpx
import pytest

from spay.core.config import Settings
from spay.core.dependencies import (
    get_gateway_client,
    get_requery_client,
    get_spay_service,
)
from spay.application.services import SpayService
from spay.domain.entities import SharedSecret
from spay.infrastructure.clients import HttpInflowRequeryClient, HttpSpayGatewayClient
from spay.service.crypto import decrypt, encrypt, to_bitstring
from spay.service.outcome import decode_json_payload


# =============================================================================
# Test Data
# =============================================================================

KEY = bytes(range(1, 25))
IV = bytes(range(10, 18))
APP_ID = 42
FROM_ACCOUNT = "0060000001"
BASE_URL = "https://gateway.test/Spay"
REQUERY_URL = "https://requery.test"


# =============================================================================
# Gateway Stub
# =============================================================================

Scripted = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class GatewayStub:
    """
    Records every request and answers from a queue of scripted responses.
    """

    def __init__(self, secret: SharedSecret):
        self.secret = secret
        self.requests: List[httpx.Request] = []
        self._responses: List[Scripted] = []

    def queue(
        self,
        payload: Any = None,
        status_code: int = 200,
        content: bytes | None = None,
        encrypted: bool = False,
    ) -> None:
        if content is None:
            content = b"" if payload is None else json.dumps(payload).encode("utf-8")
        if encrypted:
            content = encrypt(content, self.secret.key, self.secret.iv).encode("ascii")
        self._responses.append(httpx.Response(status_code, content=content))

    def queue_error(self, error: Exception) -> None:
        self._responses.append(error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request to {request.url}")
        scripted = self._responses.pop(0)
        if isinstance(scripted, Exception):
            raise scripted
        if callable(scripted):
            return scripted(request)
        return scripted

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        """Decrypt and decode the body of the last gateway request."""
        plaintext = decrypt(self.last_request.content, self.secret.key, self.secret.iv)
        return decode_json_payload(plaintext)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def secret() -> SharedSecret:
    return SharedSecret(key=KEY, iv=IV)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        base_url=BASE_URL,
        requery_base_url=REQUERY_URL,
        app_id=APP_ID,
        shared_key=to_bitstring(KEY),
        shared_vector=to_bitstring(IV),
        from_account=FROM_ACCOUNT,
    )


@pytest.fixture
def stub(secret: SharedSecret) -> GatewayStub:
    return GatewayStub(secret)


@pytest.fixture
def http_client(stub: GatewayStub) -> Iterator[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(stub.handler))
    yield client
    client.close()


@pytest.fixture
def gateway_client(
    test_settings: Settings,
    http_client: httpx.Client,
) -> HttpSpayGatewayClient:
    return get_gateway_client(test_settings, http_client)


@pytest.fixture
def requery_client(
    test_settings: Settings,
    http_client: httpx.Client,
) -> HttpInflowRequeryClient:
    return get_requery_client(test_settings, http_client)


@pytest.fixture
def service(test_settings: Settings, http_client: httpx.Client) -> SpayService:
    return get_spay_service(test_settings, http_client)

"""HTTP implementation of PaymentGatewayClient."""

import json
from typing import Any, Callable, Dict, Mapping, Tuple, TypeVar

import httpx
import structlog

from spay.core.config import Settings, get_settings
from spay.core.metrics import (
    track_gateway_latency,
    record_gateway_success,
    record_gateway_failure,
    record_business_error,
    record_self_check_failure,
)
from spay.domain.entities import GatewayCall, SharedSecret, Success
from spay.domain.exceptions import (
    BusinessError,
    DecodeError,
    GatewayConnectionError,
    LengthError,
    SpayException,
    TransportError,
)
from spay.domain.interfaces import PaymentGatewayClient
from spay.service.crypto import decrypt, encrypt, load_shared_secret
from spay.service.outcome import classify, decode_json_payload, is_success_status

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def serialize_request(request: Mapping[str, Any]) -> bytes:
    """Compact JSON, keys in insertion order."""
    return json.dumps(dict(request), separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class HttpSpayGatewayClient(PaymentGatewayClient):
    """
    HTTP client for the SPay gateway.

    Each call is a single blocking exchange: the request is serialised,
    optionally encrypted with the shared secret, posted with the AppId
    header, classified, optionally decrypted and finally checked against
    the endpoint's success sentinel. Nothing is retried.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        secret: SharedSecret | None = None,
        http_client: httpx.Client | None = None,
    ):
        self._settings = settings or get_settings()
        self._secret = secret or load_shared_secret(
            self._settings.shared_key,
            self._settings.shared_vector,
        )
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self._settings.request_timeout)

    def __enter__(self) -> "HttpSpayGatewayClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    @property
    def settings(self) -> Settings:
        return self._settings

    def execute(
        self,
        call: GatewayCall,
        request: Mapping[str, Any],
        decoder: Callable[[Dict[str, Any]], T],
    ) -> T:
        """
        Run one gateway operation end to end.

        Raises:
            TransportError: On network failure or a non-2xx status without
                an error envelope
            BusinessError: On a structured error response or a success
                sentinel mismatch
            DecodeError: If the response body cannot be decoded
            CipherInitError: If the shared secret is unusable
        """
        log = logger.bind(operation=call.operation, path=call.path)
        body = serialize_request(request)
        log.debug("request_body", body=body.decode("utf-8"))

        encrypt_request = (
            self._settings.encrypt_requests
            if call.encrypt_request is None
            else call.encrypt_request
        )
        if encrypt_request:
            body = self._encrypt(body).encode("ascii")

        try:
            with track_gateway_latency(call.operation):
                status_code, reason, raw = self._exchange(call, body)

            outcome = classify(status_code, raw, reason)
            if not isinstance(outcome, Success):
                raise outcome

            payload_bytes = outcome.payload
            decrypt_response = (
                self._settings.decrypt_response
                if call.decrypt_response is None
                else call.decrypt_response
            )
            if decrypt_response:
                payload_bytes = decrypt(payload_bytes, self._secret.key, self._secret.iv)

            if call.log_raw_response:
                log.info("raw_response", body=payload_bytes.decode("utf-8", errors="replace"))

            payload = decode_json_payload(payload_bytes)

            failure = call.sentinel.check(payload)
            if failure is not None:
                log.error(
                    "gateway_operation_unsuccessful",
                    response_code=failure.response_code,
                    status=failure.status,
                    message=failure.response_text,
                )
                raise failure

            try:
                result = decoder(payload)
            except (KeyError, ValueError, TypeError) as e:
                raise DecodeError(f"json decoding: {e}") from e

        except BusinessError as e:
            record_gateway_failure(call.operation, "business_error")
            record_business_error(e.response_code)
            raise
        except TransportError:
            record_gateway_failure(call.operation, "transport_error")
            raise
        except (DecodeError, LengthError):
            record_gateway_failure(call.operation, "decode_error")
            raise

        record_gateway_success(call.operation)
        return result

    def _exchange(self, call: GatewayCall, body: bytes) -> Tuple[int, str, bytes]:
        """Perform the HTTP request, returning status, reason and body."""
        url = f"{self._settings.base_url}{call.path}"
        log = logger.bind(url=url, method=call.method, app_id=self._settings.app_id)
        log.info("gateway_request_sent", body=body.decode("utf-8", errors="replace"))

        try:
            response = self._http.request(
                call.method,
                url,
                content=body or None,
                headers={"AppId": str(self._settings.app_id)},
            )
        except httpx.HTTPError as e:
            log.error("gateway_request_failed", error=str(e), error_type=type(e).__name__)
            raise GatewayConnectionError(f"spay response: {e}") from e

        raw = response.content
        log.info(
            "gateway_response_received",
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=raw.decode("utf-8", errors="replace"),
        )
        if not is_success_status(response.status_code):
            log.error(
                "gateway_error_response",
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=raw.decode("utf-8", errors="replace"),
            )

        return response.status_code, f"{response.status_code} {response.reason_phrase}", raw

    def _encrypt(self, body: bytes) -> str:
        """Encrypt an outbound body, logging a decrypt-after-encrypt check."""
        encrypted = encrypt(body, self._secret.key, self._secret.iv)

        if self._settings.verify_encryption:
            try:
                decrypted = decrypt(encrypted, self._secret.key, self._secret.iv)
            except SpayException as e:
                record_self_check_failure()
                logger.warning("encryption_self_check", ok=False, error=e.message)
            else:
                ok = decrypted[: len(body)] == body
                if not ok:
                    record_self_check_failure()
                logger.info(
                    "encryption_self_check",
                    ok=ok,
                    decrypted=decrypted.decode("utf-8", errors="replace"),
                )

        return encrypted

"""HTTP implementation of InflowRequeryClient."""

import json
from datetime import date
from typing import Any, Callable, Dict, TypeVar

import httpx
import structlog

from spay.core.config import Settings, get_settings
from spay.core.metrics import (
    track_gateway_latency,
    record_gateway_success,
    record_gateway_failure,
)
from spay.domain.entities import AccountInflowListing, InflowListing, Success
from spay.domain.exceptions import (
    BusinessError,
    DecodeError,
    GatewayConnectionError,
    TransportError,
)
from spay.domain.interfaces import InflowRequeryClient
from spay.service.outcome import classify, decode_json_payload

logger = structlog.get_logger(__name__)

T = TypeVar("T")

TRANSACTIONS_BY_ACCOUNT_PATH = "/NIPRequery/api/GetTransactionController/GetTransactionByAccount"
TRANSACTION_STATUS_PATH = "/NIPrequeryV2/api/v1.0/NIP/FetchTransactionStatus"
PREVIOUS_TRANSACTIONS_PATH = "/NIPrequeryV2/api/v1.0/NIP/FetchPreviousTransactionsStatus"


class HttpInflowRequeryClient(InflowRequeryClient):
    """
    HTTP client for the NIP inflow requery service.

    Requests are plain JSON; the service is not behind the SPay envelope.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ):
        self._settings = settings or get_settings()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self._settings.request_timeout)

    def __enter__(self) -> "HttpInflowRequeryClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def get_transactions_by_account(
        self,
        account_number: str,
        start_date: date,
        end_date: date,
    ) -> InflowListing:
        # The service expects a JSON body on a GET.
        payload = {
            "accountNumber": account_number,
            "startDate": start_date.isoformat(),
            "endDate": end_date.isoformat(),
        }
        return self._send(
            "transactions_by_account",
            "GET",
            TRANSACTIONS_BY_ACCOUNT_PATH,
            payload,
            InflowListing.from_payload,
        )

    def fetch_transaction_status(self, account_number: str) -> AccountInflowListing:
        payload = {
            "AccountNumber": account_number,
            "SessionID": "",
        }
        return self._send(
            "transaction_status",
            "POST",
            TRANSACTION_STATUS_PATH,
            payload,
            AccountInflowListing.from_payload,
        )

    def fetch_previous_transactions(
        self,
        session_id: str,
        start_date: date,
    ) -> AccountInflowListing:
        payload = {
            "SessionID": session_id,
            "StartDate": start_date.isoformat(),
            "pageNumber": 1,
        }
        return self._send(
            "previous_transactions",
            "POST",
            PREVIOUS_TRANSACTIONS_PATH,
            payload,
            AccountInflowListing.from_payload,
        )

    def _send(
        self,
        operation: str,
        method: str,
        path: str,
        payload: Dict[str, Any],
        decoder: Callable[[Dict[str, Any]], T],
    ) -> T:
        url = f"{self._settings.requery_base_url}{path}"
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        log = logger.bind(url=url, method=method, operation=operation)
        log.info("inflow_requery_sent", body=body.decode("utf-8"))

        try:
            with track_gateway_latency(operation):
                try:
                    response = self._http.request(
                        method,
                        url,
                        content=body,
                        headers={"Content-Type": "application/json"},
                    )
                except httpx.HTTPError as e:
                    log.error("inflow_requery_failed", error=str(e))
                    raise GatewayConnectionError(f"inflow re-query response: {e}") from e

            log.info(
                "inflow_requery_response",
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )

            outcome = classify(
                response.status_code,
                response.content,
                f"{response.status_code} {response.reason_phrase}",
            )
            if not isinstance(outcome, Success):
                raise outcome

            try:
                result = decoder(decode_json_payload(outcome.payload))
            except (KeyError, ValueError, TypeError) as e:
                raise DecodeError(
                    f"could not decode inflow result: {e}",
                    status_code=response.status_code,
                    body=response.content,
                ) from e

        except BusinessError:
            record_gateway_failure(operation, "business_error")
            raise
        except TransportError:
            record_gateway_failure(operation, "transport_error")
            raise
        except DecodeError:
            record_gateway_failure(operation, "decode_error")
            raise

        record_gateway_success(operation)
        return result

"""SPay service - endpoint operations on top of the gateway client."""

import json
import time
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List
from uuid import uuid4

import structlog

from spay.core.config import Settings, get_settings
from spay.domain.entities import (
    ENQUIRY_SUCCESS_CODE,
    OPERATION_SUCCESSFUL,
    TRANSFER_SUCCESS,
    AccountInflowListing,
    Bank,
    GatewayCall,
    InflowListing,
    NameEnquiryResult,
    RequestType,
    TransferResult,
)
from spay.domain.exceptions import InvalidRequestException
from spay.domain.interfaces import InflowRequeryClient, PaymentGatewayClient
from spay.application.dto import InterBankTransferRequest, IntraBankTransferRequest

logger = structlog.get_logger(__name__)

REFERENCE_LENGTH = 15
UNKNOWN_LOCATION = "N/A"

INTERBANK_TRANSFER = GatewayCall(
    operation="interbank_transfer",
    path="/api/Spay/InterbankTransferReq",
    sentinel=TRANSFER_SUCCESS,
)
INTRABANK_TRANSFER = GatewayCall(
    operation="intrabank_transfer",
    path="/api/Spay/SBPT24txnRequest",
    sentinel=TRANSFER_SUCCESS,
)
INTRABANK_NAME_ENQUIRY = GatewayCall(
    operation="intrabank_name_enquiry",
    path="/api/Spay/SBPNameEnquiry",
    sentinel=ENQUIRY_SUCCESS_CODE,
)
INTERBANK_NAME_ENQUIRY = GatewayCall(
    operation="interbank_name_enquiry",
    path="/api/Spay/InterbankNameEnquiry",
    sentinel=ENQUIRY_SUCCESS_CODE,
    log_raw_response=True,
)
BANK_LIST = GatewayCall(
    operation="bank_list",
    path="/api/Spay/GetBankListReq",
    sentinel=OPERATION_SUCCESSFUL,
)
BALANCE_ENQUIRY = GatewayCall(
    operation="balance_enquiry",
    path="/api/Spay/BalanceEnquiry",
    sentinel=OPERATION_SUCCESSFUL,
)
STATEMENT = GatewayCall(
    operation="statement",
    path="/api/Spay/GetStatement",
    sentinel=OPERATION_SUCCESSFUL,
)


def generate_reference() -> str:
    """Random alphanumeric transaction reference."""
    return uuid4().hex[:REFERENCE_LENGTH]


def timestamp_reference() -> str:
    """Reference made of the current epoch time in milliseconds."""
    return str(time.time_ns() // 1_000_000)


def _decode_nested_response(payload: Dict[str, Any]) -> Any:
    """Decode the JSON document the gateway nests as a string in data.response."""
    data = payload.get("data")
    nested = data.get("response") if isinstance(data, dict) else None
    if not isinstance(nested, str):
        raise ValueError("data.response is not a JSON string")
    return json.loads(nested)


def _decode_banks(payload: Dict[str, Any]) -> List[Bank]:
    items = _decode_nested_response(payload)
    if not isinstance(items, list):
        raise ValueError("bank list is not an array")
    return [Bank.from_payload(item) for item in items]


class SpayService:
    """
    Application service for SPay gateway use cases.

    Builds the wire request for each endpoint, delegates the exchange to
    the gateway client and returns typed results. Inflow requeries go to
    the separate requery service.
    """

    def __init__(
        self,
        gateway: PaymentGatewayClient,
        requery: InflowRequeryClient,
        settings: Settings | None = None,
    ):
        self._gateway = gateway
        self._requery = requery
        self._settings = settings or get_settings()

    @property
    def transfer_cost(self) -> float:
        return self._settings.transfer_cost

    @property
    def origin_account(self) -> str:
        return self._settings.from_account

    @property
    def bank_code(self) -> str:
        return self._settings.bank_code

    def _base_request(
        self,
        reference: str,
        request_type: RequestType,
        translocation: str,
    ) -> Dict[str, Any]:
        return {
            "Referenceid": reference,
            "RequestType": int(request_type),
            "Translocation": translocation or self._settings.default_location,
        }

    def interbank_transfer(self, request: InterBankTransferRequest) -> TransferResult:
        """
        Transfer funds from the origin account to another bank.

        Raises:
            InvalidRequestException: If the request fails validation
            InsufficientFundsError: If the origin account cannot cover it
            BusinessError: If the gateway rejects the transfer
        """
        if request is None:
            raise InvalidRequestException("invalid argument provided")
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        payload = self._base_request(
            request.reference or generate_reference(),
            RequestType.INTERBANK_TRANSFER,
            request.translocation,
        )
        payload.update(
            {
                "SessionID": request.name_enquiry_session_id,
                "FromAccount": self._settings.from_account,
                "ToAccount": request.to_account,
                "Amount": request.amount,
                "DestinationBankCode": request.destination_bank_code,
                "NEResponse": request.name_enquiry_response,
                "BenefiName": request.beneficiary_name,
                "PaymentReference": request.payment_reference,
                "tellerid": request.teller_id or self._settings.teller_id,
                "remarks": request.remarks,
            }
        )

        log = logger.bind(reference=payload["Referenceid"], to_account=request.to_account)
        log.info("interbank_transfer_requested")
        result = self._gateway.execute(INTERBANK_TRANSFER, payload, TransferResult.from_payload)
        log.info("interbank_transfer_completed", response=result.response)
        return result

    def intrabank_transfer(self, request: IntraBankTransferRequest) -> TransferResult:
        """
        Transfer funds from the origin account to another account in the bank.

        Raises:
            InvalidRequestException: If the request fails validation
            InsufficientFundsError: If the origin account cannot cover it
            AccountNotAllowedError: If the destination account is not allowed
            BusinessError: If the gateway rejects the transfer
        """
        if request is None:
            raise InvalidRequestException("invalid argument provided")
        errors = request.validate()
        if errors:
            raise InvalidRequestException("; ".join(errors))

        payload = self._base_request(
            request.reference_id or generate_reference(),
            RequestType.INTRABANK_TRANSFER,
            request.translocation,
        )
        payload.update(
            {
                "amt": f"{Decimal(str(request.amount)):.2f}",
                "tellerid": request.teller_id or self._settings.teller_id,
                "frmacct": self._settings.from_account,
                "toacct": request.to_account,
                "paymentRef": request.payment_reference,
                "remarks": request.remarks,
            }
        )

        log = logger.bind(reference=payload["Referenceid"], to_account=request.to_account)
        log.info("intrabank_transfer_requested")
        result = self._gateway.execute(INTRABANK_TRANSFER, payload, TransferResult.from_payload)
        log.info("intrabank_transfer_completed", response=result.response)
        return result

    def intrabank_name_enquiry(self, account_number: str) -> NameEnquiryResult:
        """Look up the holder of an account in the bank."""
        if not account_number:
            raise InvalidRequestException("account_number is required")

        payload = self._base_request(
            timestamp_reference(),
            RequestType.INTRABANK_NAME_ENQUIRY,
            self._settings.default_location,
        )
        payload["NUBAN"] = account_number
        return self._gateway.execute(
            INTRABANK_NAME_ENQUIRY, payload, NameEnquiryResult.from_payload
        )

    def interbank_name_enquiry(
        self,
        account_number: str,
        bank_code: str,
    ) -> NameEnquiryResult:
        """
        Look up the holder of an account at another bank.

        The returned ``session_id`` is required by ``interbank_transfer``.
        """
        if not account_number or not bank_code:
            raise InvalidRequestException("account_number and bank_code are required")

        payload = self._base_request(
            generate_reference(),
            RequestType.INTERBANK_NAME_ENQUIRY,
            self._settings.default_location,
        )
        payload["ToAccount"] = account_number
        payload["DestinationBankCode"] = bank_code
        return self._gateway.execute(
            INTERBANK_NAME_ENQUIRY, payload, NameEnquiryResult.from_payload
        )

    def list_banks(self) -> List[Bank]:
        """List the destination banks the gateway can transfer to."""
        payload = self._base_request(
            timestamp_reference(), RequestType.BANK_LIST, UNKNOWN_LOCATION
        )
        return self._gateway.execute(BANK_LIST, payload, _decode_banks)

    def balance_enquiry(self) -> Any:
        """Balance of the origin account, as the gateway's nested document."""
        payload = self._base_request(
            timestamp_reference(),
            RequestType.BALANCE_ENQUIRY,
            self._settings.default_location,
        )
        return self._gateway.execute(BALANCE_ENQUIRY, payload, _decode_nested_response)

    def get_statement(self) -> Any:
        """Statement of the origin account, as the gateway's nested document."""
        payload = self._base_request(
            timestamp_reference(), RequestType.STATEMENT, UNKNOWN_LOCATION
        )
        return self._gateway.execute(STATEMENT, payload, _decode_nested_response)

    def list_inflows_for_today(self, today: date | None = None) -> InflowListing:
        """List today's inflows into the origin account."""
        today = today or date.today()
        return self._requery.get_transactions_by_account(
            self._settings.from_account, today, today
        )

    def list_inflows_for_account(self, account_number: str) -> AccountInflowListing:
        """NIP inflows for an account, excluding those credited to the origin account."""
        listing = self._requery.fetch_transaction_status(account_number)
        return listing.excluding_account(self._settings.from_account)

    def query_inflows_by_session(
        self,
        session_id: str,
        on_date: date,
    ) -> AccountInflowListing:
        """NIP inflows for a session, excluding those credited to the origin account."""
        if not session_id:
            raise InvalidRequestException("session_id is required")
        listing = self._requery.fetch_previous_transactions(session_id, on_date)
        return listing.excluding_account(self._settings.from_account)

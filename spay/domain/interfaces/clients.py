"""External client interfaces."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Callable, Dict, Mapping, TypeVar

from spay.domain.entities import AccountInflowListing, GatewayCall, InflowListing

T = TypeVar("T")


class PaymentGatewayClient(ABC):
    """
    Abstract client for the SPay gateway.

    Runs one request/response exchange per call through the secure
    envelope.
    """

    @abstractmethod
    def execute(
        self,
        call: GatewayCall,
        request: Mapping[str, Any],
        decoder: Callable[[Dict[str, Any]], T],
    ) -> T:
        """
        Send a request and decode the gateway's answer.

        Args:
            call: Endpoint description (path, method, success sentinel)
            request: JSON-serialisable request body
            decoder: Turns the decoded payload into the typed result

        Returns:
            Whatever ``decoder`` returns for a successful payload

        Raises:
            TransportError: If the gateway cannot be reached or answers
                without a usable error envelope
            BusinessError: If the gateway reports a business failure
            DecodeError: If the response cannot be decoded
        """
        ...


class InflowRequeryClient(ABC):
    """
    Abstract client for the NIP inflow requery service.
    """

    @abstractmethod
    def get_transactions_by_account(
        self,
        account_number: str,
        start_date: date,
        end_date: date,
    ) -> InflowListing:
        """Fetch inflows credited to an account between two dates."""
        ...

    @abstractmethod
    def fetch_transaction_status(self, account_number: str) -> AccountInflowListing:
        """Fetch the NIP transaction status entries for an account."""
        ...

    @abstractmethod
    def fetch_previous_transactions(
        self,
        session_id: str,
        start_date: date,
    ) -> AccountInflowListing:
        """Fetch earlier NIP transactions for a session."""
        ...

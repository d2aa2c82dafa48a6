"""Inflow requery entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class InflowNotification:
    """A credit into the account, as reported by the daily requery."""

    account_number: str
    response_code: str
    amount: str
    source_customer_name: str
    source_customer_account_number: str
    date_posted: str
    sender_bank: str
    payment_ref: str
    requery: str
    ft_reference: str
    session_id: str
    remark: str

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "InflowNotification":
        return cls(
            account_number=item.get("AccountNumber") or "",
            response_code=item.get("ResponseCode") or "",
            amount=item.get("Amount") or "",
            source_customer_name=item.get("SourceCustomerName") or "",
            source_customer_account_number=item.get("SourceCustomerAccountNumber") or "",
            date_posted=item.get("Dateposted") or "",
            sender_bank=item.get("SenderBank") or "",
            payment_ref=item.get("PaymentRef") or "",
            requery=item.get("Requery") or "",
            ft_reference=item.get("FTReference") or "",
            session_id=item.get("SessionID") or "",
            remark=item.get("Remark") or "",
        )


@dataclass(frozen=True)
class InflowListing:
    """Result of listing today's inflows."""

    success: bool
    message: str
    data: List[InflowNotification] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "InflowListing":
        return cls(
            success=bool(payload.get("Success")),
            message=payload.get("Message") or "",
            data=[InflowNotification.from_payload(i) for i in payload.get("Data") or []],
        )


@dataclass(frozen=True)
class AccountInflow:
    """A NIP transaction status entry for an account or session."""

    account_number: str
    response_code: str
    amount: str
    source_customer_name: str
    source_customer_account_number: str
    date_posted: str
    sender_bank: str
    payment_ref: str
    session_id: str
    remark: str
    requery: Optional[str] = None
    ft_reference: Optional[str] = None

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "AccountInflow":
        return cls(
            account_number=item.get("accountNumber") or "",
            response_code=item.get("responseCode") or "",
            amount=item.get("amount") or "",
            source_customer_name=item.get("sourceCustomerName") or "",
            source_customer_account_number=item.get("sourceCustomerAccountNumber") or "",
            date_posted=item.get("dateposted") or "",
            sender_bank=item.get("senderBank") or "",
            payment_ref=item.get("paymentRef") or "",
            session_id=item.get("sessionID") or "",
            remark=item.get("remark") or "",
            requery=item.get("requery"),
            ft_reference=item.get("ftReference"),
        )


@dataclass(frozen=True)
class AccountInflowListing:
    """Paged NIP transaction status response."""

    content: List[AccountInflow]
    has_error: bool = False
    is_success: bool = False
    error: Any = None
    error_message: str = ""
    message: str = ""
    request_id: str = ""
    request_time: Optional[datetime] = None
    response_time: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "AccountInflowListing":
        return cls(
            content=[AccountInflow.from_payload(i) for i in payload.get("content") or []],
            has_error=bool(payload.get("hasError")),
            is_success=bool(payload.get("isSuccess")),
            error=payload.get("error"),
            error_message=payload.get("errorMessage") or "",
            message=payload.get("message") or "",
            request_id=payload.get("requestId") or "",
            request_time=_parse_timestamp(payload.get("requestTime")),
            response_time=_parse_timestamp(payload.get("responseTime")),
        )

    def excluding_account(self, account_number: str) -> "AccountInflowListing":
        """Drop entries credited to ``account_number``."""
        return replace(
            self,
            content=[i for i in self.content if i.account_number != account_number],
        )

"""Name enquiry result entity."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class NameEnquiryResult:
    """
    Account holder details returned by a name enquiry.

    ``session_id`` is only populated by interbank enquiries and must be
    passed on to the interbank transfer that follows.
    """

    account_name: str
    account_number: str
    status: str
    bvn: str = ""
    session_id: str = ""
    response_text: Any = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "NameEnquiryResult":
        data = payload.get("data")
        if not isinstance(data, dict):
            data = {}
        return cls(
            account_name=data.get("AccountName") or "",
            account_number=data.get("AccountNumber") or "",
            status=data.get("status") or "",
            bvn=data.get("BVN") or "",
            session_id=data.get("sessionID") or "",
            response_text=data.get("ResponseText"),
        )

"""Transfer result entity."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class TransferResult:
    """
    Gateway acknowledgement of an interbank or intrabank transfer.

    Attributes:
        message: Gateway message for the transfer
        response: Gateway response code ("00" on success)
        status: Status reported inside ``data``
        response_text: Free-form response text, when the gateway sends one
        response_data: The untyped ``Responsedata`` field
    """

    message: str
    response: str
    status: str = ""
    response_text: Any = None
    response_data: Any = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TransferResult":
        data = payload.get("data")
        if not isinstance(data, dict):
            data = {}
        return cls(
            message=payload.get("message") or "",
            response=payload.get("response") or "",
            status=data.get("status") or "",
            response_text=data.get("ResponseText"),
            response_data=payload.get("Responsedata"),
        )

    @property
    def is_successful(self) -> bool:
        return self.response == "00"

"""Gateway call descriptions and success sentinels."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

from spay.domain.exceptions import BusinessError, business_error_for

FieldPath = Tuple[str, ...]

SUCCESS_RESPONSE_CODE = "00"


class RequestType(IntEnum):
    """Request type codes sent with every gateway request."""

    INTRABANK_TRANSFER = 110
    BALANCE_ENQUIRY = 151
    BANK_LIST = 152
    STATEMENT = 153
    INTERBANK_TRANSFER = 160
    INTERBANK_NAME_ENQUIRY = 161
    INTRABANK_NAME_ENQUIRY = 219


def lookup_path(payload: Dict[str, Any], path: FieldPath) -> Any:
    """Follow ``path`` through nested dicts, returning None when it breaks."""
    value: Any = payload
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


@dataclass(frozen=True)
class SuccessSentinel:
    """
    The gateway's own success marker embedded in a 2xx payload.

    Transfers report ``response == "00"`` at the top level; enquiries report
    ``data.status`` as either ``"Successful"`` or ``"00"``.
    """

    path: FieldPath
    expected: str
    message_paths: Tuple[FieldPath, ...] = (("message",),)

    def check(self, payload: Dict[str, Any]) -> Optional[BusinessError]:
        """Return the business failure for ``payload``, or None on success."""
        observed = lookup_path(payload, self.path)
        if observed == self.expected:
            return None

        message = ""
        for candidate in self.message_paths:
            value = lookup_path(payload, candidate)
            if value not in (None, ""):
                message = value if isinstance(value, str) else str(value)
                break

        # A top-level success code next to a failed data.status is not an error code.
        response_code = lookup_path(payload, ("response",))
        if response_code is None or str(response_code) == SUCCESS_RESPONSE_CODE:
            response_code = ""
        return business_error_for(
            response_code=str(response_code),
            response_text=message,
            message=message,
            status=observed,
        )


TRANSFER_SUCCESS = SuccessSentinel(
    path=("response",),
    expected=SUCCESS_RESPONSE_CODE,
    message_paths=(("message",), ("data", "ResponseText")),
)

ENQUIRY_SUCCESS_CODE = SuccessSentinel(
    path=("data", "status"),
    expected="00",
    message_paths=(("data", "ResponseText"), ("message",), ("response",)),
)

OPERATION_SUCCESSFUL = SuccessSentinel(
    path=("data", "status"),
    expected="Successful",
    message_paths=(("data", "response"), ("message",)),
)


@dataclass(frozen=True)
class GatewayCall:
    """
    Everything the orchestrator needs to know about one endpoint.

    ``encrypt_request`` and ``decrypt_response`` of None defer to the
    client configuration.
    """

    operation: str
    path: str
    sentinel: SuccessSentinel
    method: str = "POST"
    encrypt_request: Optional[bool] = None
    decrypt_response: Optional[bool] = None
    log_raw_response: bool = field(default=False, compare=False)

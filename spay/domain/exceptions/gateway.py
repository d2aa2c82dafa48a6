"""Gateway response exceptions and the recognised error-code registry."""

from enum import Enum
from typing import Any, Dict, Optional, Type

from .base import SpayException


class ErrorCode(str, Enum):
    """Business error codes the gateway reports in its ``response`` field."""

    INSUFFICIENT_FUNDS = "x51"
    ACCOUNT_NOT_ALLOWED = "03x"

    @property
    def default_text(self) -> str:
        return _DEFAULT_TEXT[self]

    @classmethod
    def lookup(cls, response_code: str) -> Optional["ErrorCode"]:
        """Exact-match a response code against the registry."""
        for member in cls:
            if member.value == response_code:
                return member
        return None


_DEFAULT_TEXT = {
    ErrorCode.INSUFFICIENT_FUNDS: "Insufficient Funds",
    ErrorCode.ACCOUNT_NOT_ALLOWED: "To Account is not Allowed for this Operation",
}


class TransportError(SpayException):
    """
    Raised when the gateway answers with a non-2xx status and no usable
    error envelope.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: bytes = b"",
    ):
        super().__init__(
            message=message,
            code="TRANSPORT_ERROR",
        )
        self.status_code = status_code
        self.body = body


class GatewayConnectionError(TransportError):
    """Raised when the HTTP exchange itself fails (DNS, connect, timeout)."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=None)
        self.code = "GATEWAY_CONNECTION_ERROR"


class BusinessError(SpayException):
    """
    A gateway-reported business failure.

    Two business errors are equal when their gateway response codes are
    equal, whatever their message text. Use ``matches`` to compare against
    an ``ErrorCode``.
    """

    def __init__(
        self,
        response_code: str,
        response_text: str = "",
        message: str = "",
        status: Any = None,
        status_code: int | None = None,
    ):
        self.response_code = response_code
        self.response_text = response_text
        self.gateway_message = message
        self.status = status
        self.status_code = status_code
        super().__init__(
            message=format_business_error(response_code, response_text or message),
            code="BUSINESS_ERROR",
        )

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return ErrorCode.lookup(self.response_code)

    def matches(self, code: ErrorCode | str) -> bool:
        return self.response_code == (code.value if isinstance(code, ErrorCode) else code)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BusinessError):
            return NotImplemented
        return self.response_code == other.response_code

    def __hash__(self) -> int:
        return hash(self.response_code)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(response_code={self.response_code!r})"


class InsufficientFundsError(BusinessError):
    """The debit account cannot cover the transfer."""

    def __init__(self, response_text: str = "", **kwargs: Any):
        super().__init__(
            response_code=ErrorCode.INSUFFICIENT_FUNDS.value,
            response_text=response_text or ErrorCode.INSUFFICIENT_FUNDS.default_text,
            **kwargs,
        )


class AccountNotAllowedError(BusinessError):
    """The destination account may not receive this operation."""

    def __init__(self, response_text: str = "", **kwargs: Any):
        super().__init__(
            response_code=ErrorCode.ACCOUNT_NOT_ALLOWED.value,
            response_text=response_text or ErrorCode.ACCOUNT_NOT_ALLOWED.default_text,
            **kwargs,
        )


RECOGNIZED_ERRORS: Dict[ErrorCode, Type[BusinessError]] = {
    ErrorCode.INSUFFICIENT_FUNDS: InsufficientFundsError,
    ErrorCode.ACCOUNT_NOT_ALLOWED: AccountNotAllowedError,
}


def format_business_error(response_code: str, text: str) -> str:
    """Render a business error the way the gateway's clients log it."""
    return f"message={text} code={response_code}"


def business_error_for(
    response_code: str,
    response_text: str = "",
    message: str = "",
    status: Any = None,
    status_code: int | None = None,
) -> BusinessError:
    """
    Build the business error for a gateway response code.

    Recognised codes produce their dedicated subclass so callers can catch
    them directly; anything else is a plain ``BusinessError``.
    """
    code = ErrorCode.lookup(response_code)
    if code is not None:
        return RECOGNIZED_ERRORS[code](
            response_text=response_text,
            message=message,
            status=status,
            status_code=status_code,
        )
    return BusinessError(
        response_code=response_code,
        response_text=response_text,
        message=message,
        status=status,
        status_code=status_code,
    )

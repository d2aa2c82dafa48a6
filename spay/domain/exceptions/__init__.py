"""SPay Exceptions - Envelope, transport and business errors."""

from .base import SpayException
from .codec import FormatError
from .cipher import CipherInitError, DecodeError, LengthError
from .gateway import (
    ErrorCode,
    TransportError,
    GatewayConnectionError,
    BusinessError,
    InsufficientFundsError,
    AccountNotAllowedError,
    RECOGNIZED_ERRORS,
    business_error_for,
    format_business_error,
)
from .request import InvalidRequestException

__all__ = [
    "SpayException",
    "FormatError",
    "CipherInitError",
    "DecodeError",
    "LengthError",
    "ErrorCode",
    "TransportError",
    "GatewayConnectionError",
    "BusinessError",
    "InsufficientFundsError",
    "AccountNotAllowedError",
    "RECOGNIZED_ERRORS",
    "business_error_for",
    "format_business_error",
    "InvalidRequestException",
]

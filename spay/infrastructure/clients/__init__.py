"""External API client implementations."""

from .gateway_client import HttpSpayGatewayClient
from .requery_client import HttpInflowRequeryClient

__all__ = [
    "HttpSpayGatewayClient",
    "HttpInflowRequeryClient",
]
